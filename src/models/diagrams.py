"""
Diagram renderer boundary

Diagram backends (mermaid-cli, plantuml.jar, a browser bridge, ...) live
outside this package. The preprocessors only need something that turns
diagram source into SVG text.
"""

from typing import Protocol, runtime_checkable


@runtime_checkable
class DiagramRenderer(Protocol):
    """
    Opaque diagram rendering capability

    Implementations may shell out, call a service, or drive a browser; the
    preprocessors only call render() and treat any exception it raises as a
    rendering failure.
    """

    def render(self, code: str) -> str:
        """Render diagram source code to an SVG document string"""
        ...


class DiagramRenderError(Exception):
    """Raised when a diagram backend fails to render a fenced block"""
    pass
