"""
Models package for marpext

Contains data structures and type definitions for the extension rules and
the preprocessing pipeline.
"""

from .state import DocumentState, pipeline
from .container import ContainerDefinition, StyleProperty
from .directives import MarpDirective, MarpDirectiveResult
from .delimiters import DelimiterStack
from .diagrams import DiagramRenderer, DiagramRenderError

__all__ = [
    "DocumentState",
    "pipeline",
    "ContainerDefinition",
    "StyleProperty",
    "MarpDirective",
    "MarpDirectiveResult",
    "DelimiterStack",
    "DiagramRenderer",
    "DiagramRenderError",
]
