"""
Ordered rule lists and their installation into markdown-it-py

Every extension rule is described by a small record stating where in the
host's chain it belongs. The engine builds the lists from settings and
installs them in list order, so the position of each rule relative to the
host rules (container before `fence`, mark before `emphasis`) is fixed here
and nowhere else.
"""

from dataclasses import dataclass
from typing import Callable, List, Optional, Sequence, Tuple

from markdown_it import MarkdownIt
from markdown_it.rules_block import StateBlock
from markdown_it.rules_inline import StateInline

from ..config import AppSettings
from ..models.delimiters import DelimiterStack
from .container import containerRenderers_install, containerRule_make
from .mark import mark_resolve, mark_tokenize


@dataclass(frozen=True)
class BlockRule:
    """
    A block-level extension rule

    Attributes:
        name: Rule name in the host chain
        before: Host rule this one is inserted in front of
        handler: (state, startLine, endLine, silent) -> matched
        alt: Host rules whose termination checks also consult this rule
    """
    name: str
    before: str
    handler: Callable[[StateBlock, int, int, bool], bool]
    alt: Tuple[str, ...] = ()


@dataclass(frozen=True)
class InlineRule:
    """
    A two-phase inline extension rule

    Attributes:
        name: Rule name in both host inline chains
        before: Host rule this one is inserted in front of, in both chains
        tokenize: (state, silent) -> matched, run while scanning text
        resolve: (state, stack) -> None, run once per span after pairing
    """
    name: str
    before: str
    tokenize: Callable[[StateInline, bool], bool]
    resolve: Callable[[StateInline, DelimiterStack], None]


def containerRule_build(
    marker: str = ':', min_markers: int = 3, default_tag: str = 'div'
) -> BlockRule:
    """Container rule record: before `fence`, interrupting the usual block rules"""
    return BlockRule(
        name='container',
        before='fence',
        handler=containerRule_make(marker, min_markers, default_tag),
        alt=('paragraph', 'reference', 'blockquote', 'list'),
    )


def markRule_build() -> InlineRule:
    """Mark rule record: before `emphasis` in both inline chains"""
    return InlineRule(
        name='mark',
        before='emphasis',
        tokenize=mark_tokenize,
        resolve=mark_resolve,
    )


def blockRules_build(settings: AppSettings) -> List[BlockRule]:
    """Block rules enabled by settings, in installation order"""
    rules: List[BlockRule] = []
    if settings.enable_container_plugin:
        rules.append(containerRule_build(
            marker=settings.container_marker,
            min_markers=settings.container_min_markers,
            default_tag=settings.default_container_tag,
        ))
    return rules


def inlineRules_build(settings: AppSettings) -> List[InlineRule]:
    """Inline rules enabled by settings, in installation order"""
    rules: List[InlineRule] = []
    if settings.enable_mark_plugin:
        rules.append(markRule_build())
    return rules


def resolver_bind(
    resolve: Callable[[StateInline, DelimiterStack], None]
) -> Callable[[StateInline], None]:
    """
    Adapt a resolve step to the host's post-processing rule signature

    The DelimiterStack is built fresh from the span's state on every call,
    so nothing is shared between spans or documents.
    """

    def post_process(state: StateInline) -> None:
        resolve(state, DelimiterStack.stack_fromState(state))

    return post_process


def rules_install(
    md: MarkdownIt,
    block_rules: Optional[Sequence[BlockRule]] = None,
    inline_rules: Optional[Sequence[InlineRule]] = None,
) -> MarkdownIt:
    """
    Insert rules into the host chains, preserving list order

    Args:
        md: MarkdownIt instance to extend
        block_rules: Block rules, each inserted before its `before` rule
        inline_rules: Inline rules, tokenize and resolve inserted before
                      their `before` rule in the inline and post-processing
                      chains respectively

    Returns:
        The same MarkdownIt instance, for chaining
    """
    for block_rule in block_rules or ():
        md.block.ruler.before(
            block_rule.before,
            block_rule.name,
            block_rule.handler,
            {'alt': list(block_rule.alt)},
        )

    for inline_rule in inline_rules or ():
        md.inline.ruler.before(inline_rule.before, inline_rule.name, inline_rule.tokenize)
        md.inline.ruler2.before(
            inline_rule.before, inline_rule.name, resolver_bind(inline_rule.resolve)
        )

    return md


def container_plugin(
    md: MarkdownIt, marker: str = ':', min_markers: int = 3, default_tag: str = 'div'
) -> None:
    """
    markdown-it-py plugin entry point for containers

    Registers the container rule before `fence` so fence-like text inside a
    container is captured as nested content, and installs its renderers.

    Example:
        >>> md = MarkdownIt("commonmark").use(container_plugin)
        >>> md.render("::: note\\nHi\\n:::\\n")
        '<div class="note">\\n<p>Hi</p>\\n</div>\\n'
    """
    rules_install(md, block_rules=[containerRule_build(marker, min_markers, default_tag)])
    containerRenderers_install(md, default_tag)


def mark_plugin(md: MarkdownIt) -> None:
    """
    markdown-it-py plugin entry point for ==highlight==

    Example:
        >>> MarkdownIt("commonmark").use(mark_plugin).renderInline("==hi==")
        '<mark>hi</mark>'
    """
    rules_install(md, inline_rules=[markRule_build()])
