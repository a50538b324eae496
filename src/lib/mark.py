"""
Highlight (mark) inline rule for markdown-it-py

Adds <mark> support for ==highlighted text==, nestable:

    ==outer ==inner== outer==  →  <mark>outer <mark>inner</mark> outer</mark>

Works in two phases, like emphasis:
1. Tokenize: each `==` pair of a delimiter run becomes a placeholder text
   token plus one delimiter descriptor on the inline delimiter list.
2. Resolve: after the whole inline span is tokenized and the host's
   balance_pairs rule has matched descriptors, matched placeholders are
   turned into mark_open / mark_close tokens. Unmatched ones stay text.
"""

from typing import List

from markdown_it.rules_inline import StateInline
from markdown_it.rules_inline.state_inline import Delimiter

from ..models.delimiters import DelimiterStack

MARK_CHAR = '='
MARK_MARKUP = MARK_CHAR * 2


def mark_tokenize(state: StateInline, silent: bool) -> bool:
    """
    Insert each `==` of a run as a text token and record its delimiter

    A run shorter than two characters is declined. An odd run emits one
    leading literal `=` first. One descriptor is pushed per pair, not per
    run, so pairs resolve independently and can nest.
    """
    start = state.pos
    if silent:
        return False

    if state.src[start] != MARK_CHAR:
        return False

    scanned = state.scanDelims(state.pos, True)
    length = scanned.length

    if length < 2:
        return False

    if length % 2:
        token = state.push('text', '', 0)
        token.content = MARK_CHAR
        length -= 1

    for _ in range(0, length, 2):
        token = state.push('text', '', 0)
        token.content = MARK_MARKUP

        if not scanned.can_open and not scanned.can_close:
            continue

        state.delimiters.append(
            Delimiter(
                marker=ord(MARK_CHAR),
                length=0,  # no "rule of 3" for marks
                token=len(state.tokens) - 1,
                end=-1,
                open=scanned.can_open,
                close=scanned.can_close,
            )
        )

    state.pos += scanned.length
    return True


def markPairs_resolve(state: StateInline, delimiters: List[Delimiter]) -> None:
    """
    Turn matched `==` placeholders in one delimiter list into mark tags

    A lone `=` text token directly before a closing tag (left over from an
    odd run) is moved past the whole run of adjacent closing tags, so
    `===a===` renders as `=<mark>a</mark>=` and nested closes stay ordered.

    Args:
        state: Inline state owning the tokens
        delimiters: One level of descriptors, in source order
    """
    lone_markers: List[int] = []

    for start_delim in delimiters:
        if start_delim.marker != ord(MARK_CHAR):
            continue

        if start_delim.end == -1:
            continue

        end_delim = delimiters[start_delim.end]

        token_o = state.tokens[start_delim.token]
        token_o.type = 'mark_open'
        token_o.tag = 'mark'
        token_o.nesting = 1
        token_o.markup = MARK_MARKUP
        token_o.content = ''

        token_c = state.tokens[end_delim.token]
        token_c.type = 'mark_close'
        token_c.tag = 'mark'
        token_c.nesting = -1
        token_c.markup = MARK_MARKUP
        token_c.content = ''

        before = state.tokens[end_delim.token - 1]
        if before.type == 'text' and before.content == MARK_CHAR:
            lone_markers.append(end_delim.token - 1)

    while lone_markers:
        i = lone_markers.pop()
        j = i + 1

        while j < len(state.tokens) and state.tokens[j].type == 'mark_close':
            j += 1

        j -= 1

        if i != j:
            state.tokens[i], state.tokens[j] = state.tokens[j], state.tokens[i]


def mark_resolve(state: StateInline, stack: DelimiterStack) -> None:
    """Resolve every delimiter list of the span: top level first, then nested"""
    for delimiters in stack.stacks_walk():
        markPairs_resolve(state, delimiters)
