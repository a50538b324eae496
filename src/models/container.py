"""
Container data models

Type-safe structures produced by the style shorthand compiler and the
container definition parser, and carried on container tokens for rendering.
"""

from dataclasses import dataclass, field
from typing import List, Optional


@dataclass
class StyleProperty:
    """
    One CSS property being accumulated by the style shorthand compiler

    Attributes:
        name: CSS property name (e.g., "border", "--font-scale")
        values: Whitespace-separated value tokens collected so far
                (e.g., ["1px", "solid", "red"])

    Example:
        StyleProperty(name="border", values=["1px", "solid", "red"]).css_render()
        → "border: 1px solid red"
    """
    name: str
    values: List[str] = field(default_factory=list)

    def css_render(self) -> str:
        """Render as a single `prop: value` declaration"""
        return f"{self.name}: {' '.join(self.values)}"


@dataclass(frozen=True)
class ContainerDefinition:
    """
    Parsed parameters of a container opening line

    Created once per opening marker line by containerDefinition_parse() and
    attached to the opening token's meta. At least one of class_name, id and
    style is set; a definition with none of them is never created.

    Attributes:
        tag: Element name (e.g., "div", "span", "aside")
        class_name: Space-joined class list, or None
        id: Element id, or None
        style: CSS text (shorthand-compiled or verbatim), or None

    Example:
        For "::: aside.note#sidebar small left:10px":
        ContainerDefinition(
            tag="aside",
            class_name="note small",
            id="sidebar",
            style="left: 10px"
        )
    """
    tag: str
    class_name: Optional[str] = None
    id: Optional[str] = None
    style: Optional[str] = None
