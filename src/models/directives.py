"""
Directive shorthand models

Defines the parsed form of a `///` shorthand line: an ordered class list
followed by ordered key/value directives.
"""

from dataclasses import dataclass, field
from typing import List


@dataclass
class MarpDirective:
    """
    A single key/value directive

    Attributes:
        key: Directive name without the spot prefix (e.g., "paginate")
        value: Value tokens rejoined with single spaces; quote characters
               of quoted values are kept (e.g., '"links : rechts"')
    """
    key: str
    value: str


@dataclass
class MarpDirectiveResult:
    """
    Parsed directive shorthand line

    Classification is positional: every token before the first token that is
    immediately followed by a colon is a class; everything from that token
    on is grouped into key/value directives.

    Attributes:
        classes: Class names in source order
        directives: Key/value directives in source order

    Example:
        For 'lead footer:"links : rechts" paginate:skip':
        MarpDirectiveResult(
            classes=["lead"],
            directives=[
                MarpDirective(key="footer", value='"links : rechts"'),
                MarpDirective(key="paginate", value="skip"),
            ]
        )
    """
    classes: List[str] = field(default_factory=list)
    directives: List[MarpDirective] = field(default_factory=list)

    def empty_is(self) -> bool:
        """True when neither classes nor directives were found"""
        return not self.classes and not self.directives
