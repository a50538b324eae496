"""
Custom Pygments lexer for marpext syntax highlighting

Provides syntax highlighting for the markdown extensions when displaying
marpext source inside a presentation (```marpext fences).

Token types:
- Keyword.Declaration: Container marker runs (e.g., :::, ::::)
- Keyword.Namespace: Directive shorthand marker runs (e.g., ///)
- Name.Tag / Name.Class / Name.Variable: Container tag, classes and #id
- Name.Attribute: Style properties and directive keys
- Literal / String: Style values, directive values, quoted values
- Generic.Emph: ==highlighted== text
- Comment.Multiline: HTML comments (including generated directives)

The registered lexer knows the default markers (`:` and `/`). Documents
written with other markers are highlighted by lexer_forMarkers(), which the
engine picks from its settings.
"""

import re
from functools import lru_cache
from typing import Any, Dict, List, Type

from pygments.lexer import RegexLexer, bygroups
from pygments.token import (
    Text,
    Punctuation,
    Name,
    String,
    Keyword,
    Literal,
    Comment,
    Generic,
)


def tokens_build(container_marker: str = ':', directive_marker: str = '/') -> Dict[str, List[Any]]:
    """
    Build the RegexLexer state table for a pair of marker characters

    Only the line-start rules and the plain-text rule depend on the markers;
    colons inside selectors, styles and directives are always CSS/key colons.

    Args:
        container_marker: Character forming container marker runs
        directive_marker: Character forming directive shorthand marker runs

    Returns:
        Pygments `tokens` mapping
    """
    cm = re.escape(container_marker)
    dm = re.escape(directive_marker)

    return {
        'root': [
            # HTML comments (generated directives look like these)
            (r'<!--', Comment.Multiline, 'comment'),

            # Bare container closer
            (rf'^({cm}{{3,}})([ \t]*)$', bygroups(Keyword.Declaration, Text)),

            # Container opener
            (rf'^({cm}{{3,}})([ \t]+)', bygroups(Keyword.Declaration, Text), 'selector'),

            # Directive shorthand line
            (rf'^({dm}{{3,}})([ \t]+)', bygroups(Keyword.Namespace, Text), 'directive'),

            # ==highlight==
            (r'(==)([^=\n]+?)(==)', bygroups(Punctuation, Generic.Emph, Punctuation)),

            # Everything else is text
            (rf'[^<{cm}{dm}=\n]+', Text),
            (r'\n', Text),
            (r'.', Text),
        ],

        'comment': [
            (r'-->', Comment.Multiline, '#pop'),
            (r'[^-]+', Comment.Multiline),
            (r'-', Comment.Multiline),
        ],

        'selector': [
            (r'\n', Text, '#pop'),

            # First style declaration switches to the style region
            (r'([\w-]+)(:)', bygroups(Name.Attribute, Punctuation), 'style'),

            (r'([\w-]+)(\.)', bygroups(Name.Tag, Punctuation)),
            (r'#[\w-]+', Name.Variable),
            (r'[\w-]+', Name.Class),
            (r'[ \t]+', Text),
            (r'\S', Text),
        ],

        'style': [
            (r'\n', Text, '#pop:2'),
            (r'([\w-]+)(:)', bygroups(Name.Attribute, Punctuation)),
            (r';', Punctuation),
            (r'[ \t]+', Text),
            (r'[^\s;]+', Literal),
        ],

        'directive': [
            (r'\n', Text, '#pop'),
            (r'([\w-]+)([ \t]*)(:)', bygroups(Name.Attribute, Text, Punctuation), 'directive-values'),
            (r'"[^"\n]*"|\'[^\'\n]*\'', String),
            (r'[ \t]+', Text),
            (r'[^\s:]+', Name.Class),
            (r':', Punctuation),
        ],

        'directive-values': [
            (r'\n', Text, '#pop:2'),
            (r'([\w-]+)([ \t]*)(:)', bygroups(Name.Attribute, Text, Punctuation)),
            (r'"[^"\n]*"|\'[^\'\n]*\'', String),
            (r'[ \t]+', Text),
            (r'[^\s:"\']+', Literal),
            (r'\S', Literal),
        ],
    }


class MarpExtendedLexer(RegexLexer):
    """
    Lexer for marpext markdown extensions

    Example:
        ::: aside.note#sidebar small left:10px

    Tokens:
        ::: → Keyword.Declaration
        aside → Name.Tag
        note, small → Name.Class
        #sidebar → Name.Variable
        left → Name.Attribute
        10px → Literal
    """

    name = 'Marp Extended'
    aliases = ['marpext', 'marp-extended']
    filenames = ['*.marp.md']

    tokens = tokens_build()


@lru_cache(maxsize=None)
def lexer_forMarkers(container_marker: str = ':', directive_marker: str = '/') -> Type[MarpExtendedLexer]:
    """
    Get the lexer class for a pair of marker characters

    The default pair returns MarpExtendedLexer itself; any other pair gets a
    subclass with its own state table. Classes are cached, so Pygments
    compiles each table once.

    Example:
        >>> lexer_forMarkers(':', '/') is MarpExtendedLexer
        True
    """
    if (container_marker, directive_marker) == (':', '/'):
        return MarpExtendedLexer

    return type(
        'MarpExtendedLexer',
        (MarpExtendedLexer,),
        {'tokens': tokens_build(container_marker, directive_marker)},
    )


def get_lexer(container_marker: str = ':', directive_marker: str = '/') -> MarpExtendedLexer:
    """
    Get a MarpExtendedLexer instance

    Args:
        container_marker: Character forming container marker runs
        directive_marker: Character forming directive shorthand marker runs

    Returns:
        Lexer instance ready for use with Pygments
    """
    return lexer_forMarkers(container_marker, directive_marker)()
