"""
marpext - Markdown extensions for Marp presentations

Nestable ::: containers, ==highlight== marks and /// directive shorthand,
layered on markdown-it-py.
"""

__version__ = "1.0.0"

from .styles import styles_parseSpaceSeparated, containerDefinition_parse
from .rules import container_plugin, mark_plugin
from .directives import (
    tokens_splitPreservingQuotes,
    marpDirective_parse,
    marpComments_generate,
    directives_preprocess,
)
from .engine import engine_create
from .preprocessor import preprocess, preprocess_forRender, document_render
from .log import (
    LOG,
    logger_configure,
    logger_unconfigure,
    state_connectToLogger,
    state_disconnectFromLogger,
)

__all__ = [
    "styles_parseSpaceSeparated",
    "containerDefinition_parse",
    "container_plugin",
    "mark_plugin",
    "tokens_splitPreservingQuotes",
    "marpDirective_parse",
    "marpComments_generate",
    "directives_preprocess",
    "engine_create",
    "preprocess",
    "preprocess_forRender",
    "document_render",
    "LOG",
    "state_connectToLogger",
    "state_disconnectFromLogger",
    "logger_configure",
    "logger_unconfigure",
    "__version__",
]
