"""Tests for the terminal chat session and renderer."""

from __future__ import annotations

import io

import pytest
from rich.console import Console

from vacdiag.chat.renderer import ChatRenderer
from vacdiag.chat.repl import ChatSession, resolve_input
from vacdiag.core.prompts import GUIDED_OPTIONS


@pytest.fixture
def renderer() -> ChatRenderer:
    return ChatRenderer(console=Console(file=io.StringIO(), width=100, force_terminal=False))


def _output(renderer: ChatRenderer) -> str:
    return renderer.console.file.getvalue()


class TestResolveInput:
    def test_option_number(self):
        assert resolve_input("2") == GUIDED_OPTIONS[1]

    def test_out_of_range_number_passes_through(self):
        assert resolve_input("0") == "0"
        assert resolve_input(str(len(GUIDED_OPTIONS) + 1)) == str(len(GUIDED_OPTIONS) + 1)

    def test_free_text_stripped(self):
        assert resolve_input("  pump is hot \n") == "pump is hot"


class TestChatSession:
    def test_send_records_history(self, assistant, renderer, fake_provider):
        session = ChatSession(assistant, renderer)
        session.send("pump overheating")
        session.send("still hot")
        assert session.history == [
            {"role": "user", "content": "pump overheating"},
            {"role": "assistant", "content": fake_provider.reply},
            {"role": "user", "content": "still hot"},
            {"role": "assistant", "content": fake_provider.reply},
        ]
        assert len(fake_provider.calls[1]) == 4
        assert "Possible Causes" in _output(renderer)

    def test_context_toggle(self, assistant, renderer):
        session = ChatSession(assistant, renderer)
        assert session.handle_command("/context")
        session.send("pump overheating")
        assert "Knowledge" in _output(renderer)
        assert "blocked filter" in _output(renderer)

    def test_clear(self, assistant, renderer):
        session = ChatSession(assistant, renderer)
        session.send("oil")
        assert session.handle_command("/clear")
        assert session.history == []

    def test_options_command(self, assistant, renderer):
        ChatSession(assistant, renderer).handle_command("/options")
        for option in GUIDED_OPTIONS:
            assert option in _output(renderer)

    @pytest.mark.parametrize("command", ["/exit", "/quit", "/EXIT now"])
    def test_exit(self, assistant, renderer, command):
        assert ChatSession(assistant, renderer).handle_command(command) is False

    def test_unknown_command(self, assistant, renderer):
        assert ChatSession(assistant, renderer).handle_command("/bogus")
        assert "Unknown command: /bogus" in _output(renderer)


class TestRenderer:
    def test_welcome_shows_model(self, renderer):
        renderer.render_welcome("llama-test")
        assert "llama-test" in _output(renderer)

    def test_no_options_renders_nothing(self, renderer):
        renderer.render_options([])
        assert _output(renderer) == ""

    def test_error(self, renderer):
        renderer.render_error("boom")
        assert "Error: boom" in _output(renderer)
