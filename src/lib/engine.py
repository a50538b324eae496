"""
markdown-it-py engine with the marpext extensions

Builds a MarkdownIt instance carrying the container and mark rules, Pygments
highlighting for code fences, and link validation that accepts embedded
data:image URLs.

Example:
    >>> md = engine_create()
    >>> md.render("::: note\\n==Hi==\\n:::\\n")
    '<div class="note">\\n<p><mark>Hi</mark></p>\\n</div>\\n'
"""

import re
from typing import Callable, Optional

from markdown_it import MarkdownIt
from pygments import highlight
from pygments.formatters import HtmlFormatter
from pygments.lexer import Lexer
from pygments.lexers import get_lexer_by_name, TextLexer
from pygments.util import ClassNotFound

from ..config import AppSettings, appsettings
from ..models.state import DocumentState
from .container import containerRenderers_install
from .lexer import get_lexer
from .log import LOG
from .rules import blockRules_build, inlineRules_build, rules_install

DATA_IMAGE_PATTERN = re.compile(r'^data:image/.*?;')


def codeHighlighter_make(
    style: str = 'monokai', container_marker: str = ':', directive_marker: str = '/'
) -> Callable[[str, str, str], str]:
    """
    Build a markdown-it `highlight` option backed by Pygments

    Output uses inline styles (noclasses) and no wrapper, so markdown-it
    wraps it in its own <pre><code class="language-x">.

    Args:
        style: Pygments style name
        container_marker: Container marker the marpext lexer highlights
        directive_marker: Directive marker the marpext lexer highlights

    Returns:
        highlight(code, lang, attrs) -> HTML, or "" to fall back to the
        host's plain escaping (fences without a language)
    """
    formatter = HtmlFormatter(style=style, noclasses=True, nowrap=True)

    def code_highlight(code: str, lang: str, attrs: str) -> str:
        if not lang:
            return ''

        lexer: Lexer
        try:
            if lang.lower() in ['marpext', 'marp-extended']:
                lexer = get_lexer(container_marker, directive_marker)
            else:
                lexer = get_lexer_by_name(lang)
        except ClassNotFound:
            lexer = TextLexer()

        return highlight(code, lexer, formatter)

    return code_highlight


def linkValidator_widen(md: MarkdownIt) -> None:
    """
    Accept any data:image/<type>; URL as a link target

    The host's default validator only allows a few raster image types; SVG
    and other embedded images need this. Everything else still goes through
    the default validator.
    """
    default_validate = md.validateLink

    def link_validate(url: str) -> bool:
        return bool(DATA_IMAGE_PATTERN.match(url)) or default_validate(url)

    md.validateLink = link_validate  # type: ignore[method-assign]


def engine_create(settings: Optional[AppSettings] = None) -> MarkdownIt:
    """
    Create a MarkdownIt instance with the enabled extensions

    Args:
        settings: AppSettings to build from (defaults to the global settings)

    Returns:
        Configured MarkdownIt instance. Instances hold no per-document state
        and may be reused across documents.
    """
    settings = settings or appsettings

    md = MarkdownIt(
        'commonmark',
        {
            'html': settings.enable_html,
            'highlight': codeHighlighter_make(
                settings.code_style, settings.container_marker, settings.directive_marker
            ),
        },
    )

    block_rules = blockRules_build(settings)
    inline_rules = inlineRules_build(settings)
    rules_install(md, block_rules=block_rules, inline_rules=inline_rules)

    if block_rules:
        containerRenderers_install(md, settings.default_container_tag)

    linkValidator_widen(md)

    LOG(
        f"Engine created with rules: "
        f"{[rule.name for rule in block_rules] + [rule.name for rule in inline_rules]}",
        level=3,
    )
    return md


def html_render(inputstate: DocumentState) -> DocumentState:
    """
    Render the state's markdown to HTML.

    Args:
        inputstate: Document state with preprocessed markdown

    Returns:
        DocumentState with added field:
            - html: Rendered HTML
    """
    state = inputstate.copy()

    LOG("Rendering markdown to HTML...", level=2)
    md = engine_create(state.settings)
    state.html = md.render(state.markdown)
    LOG(f"Rendered {len(state.html)} characters of HTML", level=2)

    return state
