"""
Centralized logging using Loguru with context-aware verbosity.

This module provides a LOG() function that respects the current
DocumentState's verbosity level without requiring explicit state passing.
The markdown-it rules run deep inside the host tokenizer, where no state of
ours is in reach, so this is the only way they can report declined parses.

Importing marpext leaves the host's loguru handlers alone. Messages go to
whatever sinks the application configured; call logger_configure() to add
the marpext console format instead.

Usage:
    from marpext.lib.log import LOG, state_connectToLogger, state_disconnectFromLogger

    # At start of pipeline function:
    token = state_connectToLogger(state)
    try:
        # Anywhere in that context:
        LOG("This message appears if verbosity >= 1", level=1)
        LOG("Debug details appear if verbosity >= 2", level=2)
        LOG("Rule-level trace appears if verbosity >= 3", level=3)
    finally:
        state_disconnectFromLogger(token)
"""

from loguru import logger
from typing import Any, Optional
from contextvars import ContextVar, Token
import sys

# Context variable to hold current DocumentState
_document_state: ContextVar[Optional[Any]] = ContextVar('document_state', default=None)

# Handler added by logger_configure(), if any
_handler_id: Optional[int] = None

# marpext-specific console format
logger_format = (
    "<green>{time:HH:mm:ss}</green> │ "
    "<level>{level: <5}</level> │ "
    "<cyan>{function: <20}</cyan> @ "
    "<cyan>{line: <4}</cyan> ║ "
    "<level>{message}</level>"
)


def logger_configure(sink: Any = sys.stderr, level: str = "DEBUG") -> int:
    """
    Route marpext messages to a sink using the marpext format.

    Only the handler added by a previous call is replaced; handlers the
    application registered itself are kept.

    Args:
        sink: Any loguru sink (stream, path, callable)
        level: Minimum loguru level for the sink

    Returns:
        The loguru handler id
    """
    global _handler_id

    if _handler_id is not None:
        logger.remove(_handler_id)
    _handler_id = logger.add(sink, format=logger_format, level=level)
    return _handler_id


def logger_unconfigure() -> None:
    """Remove the handler added by logger_configure(), if any"""
    global _handler_id

    if _handler_id is not None:
        logger.remove(_handler_id)
        _handler_id = None


def state_connectToLogger(state: Any) -> Token:
    """
    Connect a DocumentState to the logging context.

    Call this at the start of each pipeline entry point to make the state's
    verbosity setting available to LOG() calls throughout that context, and
    hand the returned token to state_disconnectFromLogger() when done.

    Args:
        state: DocumentState instance with verbosity attribute

    Returns:
        ContextVar token restoring the previous state
    """
    return _document_state.set(state)


def state_disconnectFromLogger(token: Token) -> None:
    """Restore the state that was connected before the matching connect call"""
    _document_state.reset(token)


def LOG(message: str, level: int = 1, **kwargs: Any) -> None:
    """
    Log message if current state's verbosity allows.

    Args:
        message: Log message to display
        level: Minimum verbosity level required (1=normal, 2=verbose, 3=debug)
        **kwargs: Additional loguru metadata

    Verbosity levels:
        1 = Normal output (default)
        2 = Verbose (stage details)
        3 = Debug (rule-level decisions)
    """
    state = _document_state.get()

    if state and hasattr(state, 'verbosity') and state.verbosity >= level:
        logger.opt(depth=1).debug(message, **kwargs)
