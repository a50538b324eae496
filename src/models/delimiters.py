"""
Delimiter stack model for inline resolve passes

markdown-it-py keeps pending delimiter descriptors in two places: the
top-level `state.delimiters` list and one list per opening token in
`state.tokens_meta`. DelimiterStack gathers both into one explicitly owned
tree so a resolve step receives everything it must walk as a single value.
"""

from dataclasses import dataclass, field
from typing import Iterator, List

from markdown_it.rules_inline import StateInline
from markdown_it.rules_inline.state_inline import Delimiter


@dataclass
class DelimiterStack:
    """
    Delimiter descriptors of one inline span, with nested sublists

    Attributes:
        delimiters: Descriptors at this level, in source order. Each
                    descriptor's `end` indexes into this same list once the
                    host's pairing pass has matched it.
        children: Stacks of nested tokens (e.g., the inside of a link),
                  in token order

    Example:
        For "==a== [==b==](url)":
        DelimiterStack(
            delimiters=[<== open>, <== close>],
            children=[DelimiterStack(delimiters=[<== open>, <== close>])]
        )
    """
    delimiters: List[Delimiter]
    children: List["DelimiterStack"] = field(default_factory=list)

    @classmethod
    def stack_fromState(cls, state: StateInline) -> "DelimiterStack":
        """
        Build the stack for a fully tokenized inline span.

        Args:
            state: Inline state after tokenization and pairing

        Returns:
            DelimiterStack whose children are the non-empty per-token lists
        """
        children = [
            cls(delimiters=meta["delimiters"])
            for meta in state.tokens_meta
            if meta and meta.get("delimiters")
        ]
        return cls(delimiters=state.delimiters, children=children)

    def stacks_walk(self) -> Iterator[List[Delimiter]]:
        """Yield this level's list, then every nested list, in original order"""
        yield self.delimiters
        for child in self.children:
            yield from child.stacks_walk()
