"""
Diagram fence preprocessors

Replaces fenced diagram source with inline <img> tags whose src is a base64
SVG data URI, so the rendered deck needs no diagram runtime.

    ```mermaid w:400
    graph LR; A-->B
    ```

becomes

    <img src="data:image/svg+xml;base64,..." alt="Mermaid diagram" style="width: 400px; height: auto;">

Rendering itself is delegated to a DiagramRenderer supplied by the caller.
"""

import base64
import re
from typing import Callable, List, Optional

from ..models.diagrams import DiagramRenderer, DiagramRenderError
from .log import LOG

MERMAID_PATTERN = re.compile(r'```mermaid(?:\s+(w|h):(\S+))?\n(.*?)```', re.DOTALL)
PLANTUML_PATTERN = re.compile(r'```(?:plantuml|puml)\n(.*?)```', re.DOTALL)


def sizeValue_normalize(value: str) -> str:
    """
    Add a px unit to bare integers

    Example:
        >>> sizeValue_normalize("400")
        '400px'
        >>> sizeValue_normalize("50%")
        '50%'
    """
    if re.fullmatch(r'\d+', value):
        return f"{value}px"
    return value


def imgStyle_generate(size_type: Optional[str], size_value: Optional[str]) -> str:
    """
    Build the style attribute for a sized diagram image

    Args:
        size_type: "w" (width) or "h" (height), or None
        size_value: Size as written in the fence info, or None

    Returns:
        Attribute text with a leading space, or "" when unsized
    """
    if not size_type or not size_value:
        return ''

    value = sizeValue_normalize(size_value)
    if size_type == 'w':
        return f' style="width: {value}; height: auto;"'
    return f' style="height: {value}; width: auto;"'


def svg_toDataUri(svg: str) -> str:
    """Encode SVG text as a base64 data URI"""
    encoded = base64.b64encode(svg.encode('utf-8')).decode('ascii')
    return f"data:image/svg+xml;base64,{encoded}"


def diagram_render(renderer: DiagramRenderer, code: str, kind: str) -> str:
    """
    Render one diagram, wrapping backend failures

    Raises:
        DiagramRenderError: If the renderer raises
    """
    try:
        return renderer.render(code)
    except Exception as e:
        raise DiagramRenderError(f"Failed to render {kind} diagram: {e}") from e


def fences_replace(
    markdown: str,
    pattern: re.Pattern[str],
    replacement_make: Callable[[re.Match[str]], str],
) -> str:
    """
    Replace every match of a fence pattern, last match first

    Replacements are built in source order (so renderers see diagrams in
    document order) and spliced back from the end to keep offsets valid.
    """
    matches = list(pattern.finditer(markdown))
    if not matches:
        return markdown

    replacements: List[str] = [replacement_make(match) for match in matches]

    result = markdown
    for match, replacement in zip(reversed(matches), reversed(replacements)):
        result = result[:match.start()] + replacement + result[match.end():]
    return result


def mermaid_preprocess(markdown: str, renderer: DiagramRenderer) -> str:
    """
    Render ```mermaid fences (optionally sized with w:<v> or h:<v>) to <img>

    Args:
        markdown: Document text
        renderer: Mermaid backend

    Returns:
        Document with every mermaid fence replaced

    Raises:
        DiagramRenderError: If the renderer fails on any diagram
    """

    def mermaid_replace(match: re.Match[str]) -> str:
        svg = diagram_render(renderer, match.group(3), 'mermaid')
        style = imgStyle_generate(match.group(1), match.group(2))
        return f'<img src="{svg_toDataUri(svg)}" alt="Mermaid diagram"{style}>'

    result = fences_replace(markdown, MERMAID_PATTERN, mermaid_replace)
    if result is not markdown:
        LOG("Mermaid diagrams rendered", level=2)
    return result


def plantuml_preprocess(markdown: str, renderer: DiagramRenderer) -> str:
    """
    Render ```plantuml / ```puml fences to <img>

    Raises:
        DiagramRenderError: If the renderer fails on any diagram
    """

    def plantuml_replace(match: re.Match[str]) -> str:
        svg = diagram_render(renderer, match.group(1), 'plantuml')
        return f'<img src="{svg_toDataUri(svg)}" alt="PlantUML diagram">'

    result = fences_replace(markdown, PLANTUML_PATTERN, plantuml_replace)
    if result is not markdown:
        LOG("PlantUML diagrams rendered", level=2)
    return result
