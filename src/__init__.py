"""
marpext - Markdown extensions for Marp presentations

Nestable ::: containers, ==highlight== marks and /// directive shorthand,
layered on markdown-it-py.
"""

__version__ = "1.0.0"

from .lib import (
    engine_create,
    document_render,
    preprocess,
    preprocess_forRender,
    directives_preprocess,
    container_plugin,
    mark_plugin,
    LOG,
    state_connectToLogger,
    state_disconnectFromLogger,
    logger_configure,
    logger_unconfigure,
)
from .models import DocumentState, ContainerDefinition, MarpDirectiveResult, DiagramRenderError

__all__ = [
    "engine_create",
    "document_render",
    "preprocess",
    "preprocess_forRender",
    "directives_preprocess",
    "container_plugin",
    "mark_plugin",
    "LOG",
    "state_connectToLogger",
    "state_disconnectFromLogger",
    "logger_configure",
    "logger_unconfigure",
    "DocumentState",
    "ContainerDefinition",
    "MarpDirectiveResult",
    "DiagramRenderError",
    "__version__",
]
