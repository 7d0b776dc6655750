"""Tests for the diagnostic assistant orchestration."""

from __future__ import annotations

import logging
from pathlib import Path

import pytest

from vacdiag.config import VacDiagSettings, load_settings
from vacdiag.core.assistant import DiagnosticAssistant, create_assistant
from vacdiag.core.prompts import FALLBACK_REPLY, SYSTEM_PROMPT
from vacdiag.knowledge.schema import CorpusLoadError
from vacdiag.rag.index import IndexHolder
from vacdiag.rag.retriever import CONTEXT_HEADER


class TestAsk:
    def test_reply_with_context(self, assistant, fake_provider, sample_items):
        result = assistant.ask("pump is overheating")
        assert result.reply == fake_provider.reply
        assert not result.fallback
        assert result.context[0] == sample_items[0].to_chunk()

        system = fake_provider.calls[0][0]
        assert system["role"] == "system"
        assert system["content"].startswith(SYSTEM_PROMPT)
        assert CONTEXT_HEADER in system["content"]
        assert sample_items[0].to_chunk() in system["content"]

    def test_uses_top_k_from_settings(self, assistant):
        assistant.settings.top_k = 1
        assert len(assistant.ask("oil").context) == 1

    def test_history_forwarded(self, assistant, fake_provider):
        history = [{"role": "user", "content": "hi"}, {"role": "assistant", "content": "hello"}]
        assistant.ask("low oil", history)
        messages = fake_provider.calls[0]
        assert [m["role"] for m in messages] == ["system", "user", "assistant", "user"]
        assert messages[-1]["content"] == "low oil"

    def test_blank_message_falls_back(self, assistant, fake_provider):
        result = assistant.ask("   ")
        assert result.reply == FALLBACK_REPLY
        assert result.fallback
        assert fake_provider.calls == []

    def test_completion_error_falls_back(self, sample_items, provider_factory, caplog):
        provider = provider_factory(error="timed out")
        assistant = DiagnosticAssistant(
            IndexHolder(lambda: sample_items), provider, VacDiagSettings()
        )
        with caplog.at_level(logging.ERROR):
            result = assistant.ask("pump overheating")
        assert result.reply == FALLBACK_REPLY
        assert result.fallback
        assert result.context
        assert "timed out" in caplog.text

    def test_retrieval_failure_degrades(self, provider_factory, caplog):
        def broken_loader():
            raise CorpusLoadError("record 0: missing required field 'issue'")

        provider = provider_factory()
        assistant = DiagnosticAssistant(IndexHolder(broken_loader), provider, VacDiagSettings())
        with caplog.at_level(logging.WARNING):
            result = assistant.ask("pump overheating")
        assert result.reply == provider.reply
        assert result.context == []
        assert provider.calls[0][0]["content"] == SYSTEM_PROMPT
        assert "proceeding without context" in caplog.text

    def test_index_built_once_across_turns(self, assistant):
        for _ in range(4):
            assistant.reply("oil leak")
        assert assistant.index_holder.build_count == 1


class TestCreateAssistant:
    def test_uses_configured_corpus(self, tmp_project: Path, provider_factory):
        settings = load_settings(tmp_project)
        assistant = create_assistant(settings, provider=provider_factory())
        assert len(assistant.index_holder.get()) == 2

    def test_default_corpus(self, provider_factory):
        assistant = create_assistant(VacDiagSettings(), provider=provider_factory())
        assert len(assistant.index_holder.get()) >= 5

    def test_rejects_invalid_settings(self, provider_factory):
        with pytest.raises(ValueError, match="top_k"):
            create_assistant(VacDiagSettings(top_k=0), provider=provider_factory())
