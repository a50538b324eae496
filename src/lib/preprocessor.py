"""
Markdown preprocessing pipeline

Text-level transforms that run BEFORE the markdown-it tokenizer. Directive
shorthand has to be expanded here because Marp reads its directives from the
raw markdown, not from tokens.

Stages (each DocumentState -> DocumentState):
    wikilinks_convert   ![[image.png|alt]] → ![alt](resolved-url)
    directives_expand   /// shorthand → <!-- _directive: value --> lines
    mermaid_expand      ```mermaid fences → <img> data URIs
    plantuml_expand     ```plantuml fences → <img> data URIs

Composed pipelines:
    preprocess()            export path; diagrams only in unsafe mode
    preprocess_forRender()  preview path; no mode gate
    document_render()       preview path plus html_render()
"""

import re
from typing import Callable, List, Optional

from ..config import AppSettings, appsettings
from ..models.diagrams import DiagramRenderer
from ..models.state import DocumentState, pipeline
from .diagrams import mermaid_preprocess, plantuml_preprocess
from .directives import directives_preprocess
from .engine import html_render
from .log import LOG, state_connectToLogger, state_disconnectFromLogger

WIKILINK_IMAGE_PATTERN = re.compile(r'!\[\[([^\]|]+)(?:\|([^\]]*))?\]\]')

Stage = Callable[[DocumentState], DocumentState]


def wikilinks_preprocess(markdown: str, resolver: Callable[[str], str]) -> str:
    """
    Convert Obsidian-style wikilink images to standard markdown images

    Args:
        markdown: Document text
        resolver: Maps a wikilink target (e.g., "image.png") to a URL

    Returns:
        Document with ![[name]] / ![[name|alt]] replaced by ![alt](url);
        alt defaults to the name

    Example:
        >>> wikilinks_preprocess("![[cat.png|A cat]]", lambda name: f"assets/{name}")
        '![A cat](assets/cat.png)'
    """

    def wikilink_replace(match: re.Match[str]) -> str:
        name = match.group(1)
        alt = match.group(2) or name
        return f"![{alt}]({resolver(name)})"

    return WIKILINK_IMAGE_PATTERN.sub(wikilink_replace, markdown)


def wikilinks_convert(inputstate: DocumentState) -> DocumentState:
    """Stage: resolve wikilink images (no-op without a resolver)"""
    state = inputstate.copy()
    if state.wikilinkResolver is None:
        return state

    LOG("Converting wikilink images...", level=2)
    state.markdown = wikilinks_preprocess(state.markdown, state.wikilinkResolver)
    return state


def directives_expand(inputstate: DocumentState) -> DocumentState:
    """Stage: expand directive shorthand lines"""
    state = inputstate.copy()

    LOG("Expanding directive shorthand...", level=2)
    state.markdown = directives_preprocess(
        state.markdown, marker=state.settings.directive_marker
    )
    return state


def mermaid_expand(inputstate: DocumentState) -> DocumentState:
    """Stage: render mermaid fences (no-op without a renderer)"""
    state = inputstate.copy()
    if state.mermaidRenderer is None:
        return state

    LOG("Rendering mermaid diagrams...", level=2)
    state.markdown = mermaid_preprocess(state.markdown, state.mermaidRenderer)
    return state


def plantuml_expand(inputstate: DocumentState) -> DocumentState:
    """Stage: render plantuml fences (no-op without a renderer)"""
    state = inputstate.copy()
    if state.plantumlRenderer is None:
        return state

    LOG("Rendering plantuml diagrams...", level=2)
    state.markdown = plantuml_preprocess(state.markdown, state.plantumlRenderer)
    return state


def preprocess(inputstate: DocumentState) -> DocumentState:
    """
    Export-path preprocessing.

    Order:
        1. Directive shorthand (always safe; when enabled)
        2. Mermaid diagrams (enabled, renderer supplied, unsafe mode)
        3. PlantUML diagrams (enabled, renderer supplied, unsafe mode)

    Args:
        inputstate: Document state with raw markdown

    Returns:
        DocumentState with preprocessed markdown

    Raises:
        DiagramRenderError: If a diagram backend fails
    """
    settings = inputstate.settings

    stages: List[Stage] = []
    if settings.enable_directive_shorthand:
        stages.append(directives_expand)
    if settings.mermaid_enabled and settings.unsafe_is():
        stages.append(mermaid_expand)
    if settings.plantuml_enabled and settings.unsafe_is():
        stages.append(plantuml_expand)

    token = state_connectToLogger(inputstate)
    try:
        LOG(f"Preprocessing with {len(stages)} stage(s)", level=1)
        return pipeline(inputstate, *stages)
    finally:
        state_disconnectFromLogger(token)


def preprocess_forRender(inputstate: DocumentState) -> DocumentState:
    """
    Preview-path preprocessing.

    Order:
        1. Wikilink images (when a resolver is supplied)
        2. Directive shorthand (when enabled)
        3. Mermaid diagrams (when enabled and a renderer is supplied)

    Args:
        inputstate: Document state with raw markdown

    Returns:
        DocumentState with preprocessed markdown

    Raises:
        DiagramRenderError: If a diagram backend fails
    """
    settings = inputstate.settings

    stages: List[Stage] = [wikilinks_convert]
    if settings.enable_directive_shorthand:
        stages.append(directives_expand)
    if settings.mermaid_enabled:
        stages.append(mermaid_expand)

    token = state_connectToLogger(inputstate)
    try:
        LOG(f"Preprocessing for render with {len(stages)} stage(s)", level=1)
        return pipeline(inputstate, *stages)
    finally:
        state_disconnectFromLogger(token)


def document_render(
    markdown: str,
    settings: Optional[AppSettings] = None,
    verbosity: int = 1,
    wikilinkResolver: Optional[Callable[[str], str]] = None,
    mermaidRenderer: Optional[DiagramRenderer] = None,
) -> str:
    """
    Preprocess and render a document to HTML in one call.

    Args:
        markdown: Raw document text
        settings: AppSettings (defaults to the global settings)
        verbosity: Logging verbosity level (0-3)
        wikilinkResolver: Optional wikilink target → URL mapping
        mermaidRenderer: Optional mermaid backend

    Returns:
        Rendered HTML

    Example:
        >>> document_render("/// lead\\n\\n==Hi==\\n")
        '<!-- _class: lead -->\\n<p><mark>Hi</mark></p>\\n'
    """
    state = DocumentState(
        markdown=markdown,
        settings=settings or appsettings,
        verbosity=verbosity,
        wikilinkResolver=wikilinkResolver,
        mermaidRenderer=mermaidRenderer,
    )
    token = state_connectToLogger(state)
    try:
        final_state = pipeline(state, preprocess_forRender, html_render)
    finally:
        state_disconnectFromLogger(token)
    return final_state.html or ''
