"""
Directive shorthand for Marp

Expands one-line shorthand into Marp spot-directive comments before the
markdown reaches the tokenizer (Marp reads directives from raw markdown):

    /// lead gaia paginate:skip footer:"links : rechts"

becomes

    <!-- _class: lead gaia -->
    <!-- _paginate: skip -->
    <!-- _footer: "links : rechts" -->

Tokens before the first `key:` are classes; everything after is grouped into
key/value pairs. Quote a value to keep spaces or colons in it. A line that
yields nothing is left exactly as written.
"""

import re
from typing import List, Optional

from ..models.directives import MarpDirective, MarpDirectiveResult

QUOTE_CHARS = ('"', "'")
COLON = ':'


def tokens_splitPreservingQuotes(text: str) -> List[str]:
    """
    Tokenize on whitespace and colons, keeping quoted spans intact

    A quoted span (single or double quotes) is kept verbatim, quote
    characters included, so colons and spaces inside it never split. A colon
    outside quotes is emitted as its own ":" token.

    Args:
        text: Shorthand parameters

    Returns:
        Token list; empty for blank input

    Example:
        >>> tokens_splitPreservingQuotes('footer:"links : rechts"')
        ['footer', ':', '"links : rechts"']
        >>> tokens_splitPreservingQuotes("paginate:skip footer:'Text'")
        ['paginate', ':', 'skip', 'footer', ':', "'Text'"]
    """
    tokens: List[str] = []
    current = ''
    in_quote: Optional[str] = None

    def current_flush() -> None:
        nonlocal current
        if current.strip():
            tokens.append(current.strip())
        current = ''

    for char in text:
        if char in QUOTE_CHARS and in_quote is None:
            in_quote = char
            current += char
        elif char == in_quote:
            in_quote = None
            current += char
        elif char == COLON and in_quote is None:
            current_flush()
            tokens.append(COLON)
        elif char.isspace() and in_quote is None:
            current_flush()
        else:
            current += char

    current_flush()
    return tokens


def marpDirective_parse(text: str) -> Optional[MarpDirectiveResult]:
    """
    Classify shorthand tokens into classes and key/value directives

    Uses one-token lookahead: tokens not followed by ":" are classes until
    the first token that is; from there on each `key : value...` group
    becomes a directive, its value tokens running up to the next token
    followed by ":" and rejoined with single spaces. A key without a colon,
    or with no value tokens, is dropped.

    The lookahead is purely positional, so in `a b: c` the word `a` is a
    class and `b` the key, however unrelated they look.

    Args:
        text: Shorthand parameters (text after the marker run)

    Returns:
        MarpDirectiveResult, or None when no class and no directive was found

    Example:
        >>> marpDirective_parse('lead paginate:skip')
        MarpDirectiveResult(classes=['lead'], directives=[MarpDirective(key='paginate', value='skip')])
    """
    tokens = tokens_splitPreservingQuotes(text.strip())
    if not tokens:
        return None

    def key_is(index: int) -> bool:
        return index + 1 < len(tokens) and tokens[index + 1] == COLON

    result = MarpDirectiveResult()
    i = 0

    # Classes: everything before the first key
    while i < len(tokens) and not key_is(i):
        if tokens[i] != COLON:
            result.classes.append(tokens[i])
        i += 1

    # Directives: key ':' value...
    while i < len(tokens):
        key = tokens[i]
        if not key_is(i):
            i += 1
            continue

        i += 2

        values: List[str] = []
        while i < len(tokens) and not key_is(i):
            if tokens[i] != COLON:
                values.append(tokens[i])
            i += 1

        if values:
            result.directives.append(MarpDirective(key=key, value=' '.join(values)))

    if result.empty_is():
        return None

    return result


def marpComments_generate(result: MarpDirectiveResult) -> str:
    """
    Render a parsed shorthand line as Marp spot-directive comments

    One `_class` comment when there are classes, then one comment per
    directive in source order. Values are printed verbatim.

    Args:
        result: Parsed shorthand

    Returns:
        Newline-joined comment lines, no trailing newline

    Example:
        >>> marpComments_generate(MarpDirectiveResult(
        ...     classes=['lead'], directives=[MarpDirective('paginate', 'skip')]))
        '<!-- _class: lead -->\\n<!-- _paginate: skip -->'
    """
    comments: List[str] = []

    if result.classes:
        comments.append(f"<!-- _class: {' '.join(result.classes)} -->")

    for directive in result.directives:
        comments.append(f"<!-- _{directive.key}: {directive.value} -->")

    return '\n'.join(comments)


def shorthandPattern_make(marker: str = '/') -> re.Pattern[str]:
    """Line pattern: 3+ markers, horizontal whitespace, then the parameters"""
    return re.compile(rf'^{re.escape(marker)}{{3,}}[ \t]+(.+)$', re.MULTILINE)


def directives_preprocess(markdown: str, marker: str = '/') -> str:
    """
    Expand every directive shorthand line in a document

    Lines that parse are replaced by their generated comment block; lines
    that do not are left byte-for-byte unchanged. Generated comments never
    start with the marker, so running this twice is the same as once.

    Args:
        markdown: Document text
        marker: Shorthand marker character

    Returns:
        Document with shorthand expanded
    """

    def shorthand_expand(match: re.Match[str]) -> str:
        result = marpDirective_parse(match.group(1))
        if result is None:
            return match.group(0)
        return marpComments_generate(result)

    return shorthandPattern_make(marker).sub(shorthand_expand, markdown)
