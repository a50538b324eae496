"""
Block container rule for markdown-it-py

Creates nestable block-level containers from marker-fenced regions:

    ::: [tag.]class[#id][ extra-classes][ style-declarations]
    content
    :::

A container opened with N markers is closed by the first following line that
holds at least N markers and nothing else. Nesting is done by lengthening the
outer marker run:

    :::: columns
    ::: column
    Left
    :::
    ::: column
    Right
    :::
    ::::

An unterminated container is closed at the end of the enclosing block. A
line whose parameters do not parse is declined and falls through to the
remaining block rules.

Tokens:
    container_open  (meta["definition"]: ContainerDefinition)
    container_close (meta["open"]: the matching container_open token)
"""

from typing import Callable, Sequence

from markdown_it import MarkdownIt
from markdown_it.common.utils import escapeHtml
from markdown_it.rules_block import StateBlock
from markdown_it.token import Token
from markdown_it.utils import EnvType, OptionsDict

from .log import LOG
from .styles import containerDefinition_parse

CONTAINER_OPEN = 'container_open'
CONTAINER_CLOSE = 'container_close'

BlockRuleHandler = Callable[[StateBlock, int, int, bool], bool]


def markerRun_measure(src: str, start: int, maximum: int, marker: str) -> int:
    """
    Measure the run of `marker` characters beginning at `start`

    Args:
        src: Full source text
        start: Position of the first character of the line content
        maximum: End-of-line position

    Returns:
        Number of consecutive marker characters (0 if none)
    """
    pos = start
    while pos < maximum and src[pos] == marker:
        pos += 1
    return pos - start


def containerRule_make(
    marker: str = ':', min_markers: int = 3, default_tag: str = 'div'
) -> BlockRuleHandler:
    """
    Build the container block rule for one marker character

    The returned function follows the markdown-it block rule contract
    (state, startLine, endLine, silent) -> matched. It keeps no state of its
    own, so nested containers simply re-enter it through the host's block
    tokenizer.

    Args:
        marker: Single character forming the marker run
        min_markers: Shortest run accepted on an opening line
        default_tag: Element used when the selector names no tag

    Returns:
        Block rule function
    """

    def container_block(
        state: StateBlock, startLine: int, endLine: int, silent: bool
    ) -> bool:
        start = state.bMarks[startLine] + state.tShift[startLine]
        maximum = state.eMarks[startLine]

        marker_count = markerRun_measure(state.src, start, maximum, marker)
        if marker_count < min_markers:
            return False

        pos = start + marker_count
        markup = state.src[start:pos]
        params = state.src[pos:maximum]

        definition = containerDefinition_parse(params, default_tag=default_tag)
        if definition is None:
            LOG(f"Container declined at line {startLine + 1}: {params.strip()!r}", level=3)
            return False

        if silent:
            return True

        # Scan for a closing line
        nextLine = startLine
        closed = False
        close_markup = ''
        while True:
            nextLine += 1
            if nextLine >= endLine:
                break

            start = state.bMarks[nextLine] + state.tShift[nextLine]
            maximum = state.eMarks[nextLine]

            if start < maximum and state.sCount[nextLine] < state.blkIndent:
                # Non-empty line with negative indent ends the enclosing block
                break

            run = markerRun_measure(state.src, start, maximum, marker)
            if run == 0:
                continue

            if state.sCount[nextLine] - state.blkIndent >= 4:
                continue

            if run < marker_count:
                continue

            pos = state.skipSpaces(start + run)
            if pos < maximum:
                continue

            closed = True
            close_markup = state.src[start:start + run]
            break

        if not closed:
            LOG(f"Container opened at line {startLine + 1} auto-closed at line {nextLine}", level=3)

        old_parent = state.parentType
        old_line_max = state.lineMax
        state.parentType = 'container'  # type: ignore[assignment]
        state.lineMax = nextLine

        token_o = state.push(CONTAINER_OPEN, definition.tag, 1)
        token_o.markup = markup
        token_o.block = True
        token_o.info = params
        token_o.map = [startLine, nextLine]
        token_o.meta = {'definition': definition}

        state.md.block.tokenize(state, startLine + 1, nextLine)

        token_c = state.push(CONTAINER_CLOSE, '', -1)
        token_c.markup = close_markup
        token_c.block = True
        token_c.meta = {'open': token_o}

        state.parentType = old_parent
        state.lineMax = old_line_max
        state.line = nextLine + (1 if closed else 0)

        return True

    return container_block


def containerOpen_render(
    self, tokens: Sequence[Token], idx: int, options: OptionsDict, env: EnvType
) -> str:
    """
    Render a container_open token

    Attributes are emitted in the fixed order class, id, style, each only
    when present.
    """
    definition = tokens[idx].meta['definition']

    attrs = ''
    if definition.class_name:
        attrs += f' class="{escapeHtml(definition.class_name)}"'
    if definition.id:
        attrs += f' id="{escapeHtml(definition.id)}"'
    if definition.style:
        attrs += f' style="{escapeHtml(definition.style)}"'

    return f'<{definition.tag}{attrs}>\n'


def containerClose_renderFactory(default_tag: str = 'div') -> Callable[..., str]:
    """
    Build the container_close renderer

    The close token carries a reference to its opening token, so the tag is
    read from there rather than by walking back through sibling tokens.

    Args:
        default_tag: Tag used if a close token lost its opening reference

    Returns:
        Render rule function
    """

    def containerClose_render(
        self, tokens: Sequence[Token], idx: int, options: OptionsDict, env: EnvType
    ) -> str:
        token_o = tokens[idx].meta.get('open')
        if token_o is None or 'definition' not in token_o.meta:
            return f'</{default_tag}>\n'
        return f"</{token_o.meta['definition'].tag}>\n"

    return containerClose_render


def containerRenderers_install(md: MarkdownIt, default_tag: str = 'div') -> None:
    """Install the container_open / container_close render rules"""
    md.add_render_rule(CONTAINER_OPEN, containerOpen_render)
    md.add_render_rule(CONTAINER_CLOSE, containerClose_renderFactory(default_tag))
