"""
Logging tests

Tests verbosity gating, handler ownership and the lifetime of the state
connected to the logging context.
"""

import pytest
from loguru import logger

from marpext.config import AppSettings
from marpext.lib.engine import engine_create
from marpext.lib.log import (
    LOG,
    logger_configure,
    logger_unconfigure,
    state_connectToLogger,
    state_disconnectFromLogger,
)
from marpext.lib.preprocessor import document_render, preprocess
from marpext.models import DiagramRenderError, DocumentState


@pytest.fixture
def messages():
    """Capture loguru output the way a host application would"""
    captured = []
    handler_id = logger.add(lambda message: captured.append(message.strip()), format="{message}")
    yield captured
    logger.remove(handler_id)


class TestVerbosity:
    """Test LOG gating on the connected state"""

    def test_message_at_or_below_verbosity(self, messages):
        """Messages above the connected verbosity are dropped"""
        token = state_connectToLogger(DocumentState(verbosity=2))
        try:
            LOG("shown", level=2)
            LOG("hidden", level=3)
        finally:
            state_disconnectFromLogger(token)
        assert messages == ["shown"]

    def test_no_connected_state_is_silent(self, messages):
        """LOG outside any pipeline emits nothing"""
        LOG("nobody listening", level=0)
        assert messages == []

    def test_disconnect_restores_previous_state(self, messages):
        """Nested connects unwind in order"""
        outer = state_connectToLogger(DocumentState(verbosity=3))
        inner = state_connectToLogger(DocumentState(verbosity=0))
        LOG("inner", level=1)
        state_disconnectFromLogger(inner)
        LOG("outer", level=1)
        state_disconnectFromLogger(outer)
        assert messages == ["outer"]


class TestHandlers:
    """Test that marpext leaves application handlers alone"""

    def test_host_handler_receives_messages(self, messages):
        """Without logger_configure() output goes to the host's sinks"""
        document_render("/// lead\n", settings=AppSettings(), verbosity=2)
        assert any("Expanding directive shorthand" in message for message in messages)

    def test_configure_keeps_host_handlers(self, messages):
        """The marpext handler is added next to the application's"""
        own = []
        logger_configure(lambda message: own.append(message), level="DEBUG")
        try:
            document_render("/// lead\n", settings=AppSettings(), verbosity=2)
        finally:
            logger_unconfigure()
        assert messages
        assert own

    def test_configure_replaces_only_its_own_handler(self, messages):
        """Reconfiguring swaps the marpext handler and nothing else"""
        first, second = [], []
        logger_configure(lambda message: first.append(message))
        logger_configure(lambda message: second.append(message))
        try:
            document_render("/// lead\n", settings=AppSettings(), verbosity=2)
        finally:
            logger_unconfigure()
        assert first == []
        assert second
        assert messages


class TestStateLifetime:
    """Test that entry points release the connected state"""

    def test_document_render_disconnects(self, messages):
        """A later direct engine render does not log with the old verbosity"""
        document_render("::: note\nx\n:::\n", settings=AppSettings(), verbosity=3)
        messages.clear()

        engine_create(AppSettings()).render("::: left:1px\n")
        assert messages == []

    def test_preprocess_disconnects(self, messages):
        """LOG after preprocess() returns sees no state"""
        preprocess(DocumentState(markdown="/// lead\n", settings=AppSettings(), verbosity=3))
        messages.clear()

        LOG("after preprocess", level=1)
        assert messages == []

    def test_disconnects_on_error(self, messages):
        """The state is released even when a stage raises"""

        class FailingRenderer:
            def render(self, code):
                raise RuntimeError("down")

        state = DocumentState(
            markdown="```mermaid\ngraph LR\n```\n",
            settings=AppSettings(mode="unsafe"),
            mermaidRenderer=FailingRenderer(),
            verbosity=3,
        )
        with pytest.raises(DiagramRenderError):
            preprocess(state)
        messages.clear()

        LOG("after failure", level=1)
        assert messages == []
