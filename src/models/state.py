"""
Document state model and pipeline helper

Defines DocumentState dataclass for the functional pipeline pattern and
the pipeline() helper for composing transformation stages.
"""

from typing import Callable, Optional, TypeVar
from dataclasses import dataclass, field

from ..config import AppSettings, appsettings
from .diagrams import DiagramRenderer


DS = TypeVar("DS", bound="DocumentState")


@dataclass
class DocumentState:
    """
    Central state container for the preprocessing pipeline (state bus pattern).

    This dataclass carries the markdown text and its collaborators through the
    functional pipeline, with each stage returning a copy whose markdown (or
    html) has been transformed.

    Pipeline stages and their state changes:
        - wikilinks_convert: markdown (![[img]] → ![alt](url))
        - directives_expand: markdown (/// lines → comment directives)
        - mermaid_expand: markdown (```mermaid fences → <img> data URIs)
        - plantuml_expand: markdown (```plantuml fences → <img> data URIs)
        - html_render: html

    Attributes:
        markdown: Current markdown text
        settings: AppSettings controlling which stages and rules apply
        verbosity: Logging verbosity level (0-3)
        wikilinkResolver: Maps a wikilink target to a URL, or None
        mermaidRenderer: Renderer for ```mermaid fences, or None
        plantumlRenderer: Renderer for ```plantuml fences, or None
        html: Rendered HTML once html_render has run
    """

    markdown: str = field(default="")
    settings: AppSettings = field(default_factory=lambda: appsettings)
    verbosity: int = field(default=1)

    # Collaborators
    wikilinkResolver: Optional[Callable[[str], str]] = field(default=None)
    mermaidRenderer: Optional[DiagramRenderer] = field(default=None)
    plantumlRenderer: Optional[DiagramRenderer] = field(default=None)

    # Pipeline output
    html: Optional[str] = field(default=None)

    def copy(self: DS) -> DS:
        """
        Creates a shallow copy of the DocumentState instance.

        Returns:
            A new DocumentState instance.
        """
        return type(self)(**self.__dict__)


def pipeline(
    initial_state: DocumentState, *stages: Callable[[DocumentState], DocumentState]
) -> DocumentState:
    """
    Execute a functional pipeline of state transformations.

    Each stage is a function (DocumentState) -> DocumentState that receives
    the output of the previous stage and returns a new state.

    Args:
        initial_state: Starting DocumentState
        *stages: Variable number of stage functions to execute in order

    Returns:
        Final DocumentState after all transformations

    Example:
        final_state = pipeline(
            initial_state,
            wikilinks_convert,
            directives_expand,
            html_render
        )

    This is equivalent to:
        html_render(directives_expand(wikilinks_convert(initial_state)))

    But reads left-to-right instead of inside-out.
    """
    from functools import reduce
    return reduce(lambda state, stage: stage(state), stages, initial_state)
