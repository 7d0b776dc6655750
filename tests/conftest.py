"""Shared test fixtures for vacdiag."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from vacdiag.config import VacDiagSettings
from vacdiag.core.assistant import DiagnosticAssistant
from vacdiag.core.llm import CompletionError
from vacdiag.knowledge.schema import KnowledgeItem
from vacdiag.rag.index import IndexHolder


SAMPLE_RECORDS = [
    {"issue": "Pump overheating", "causes": ["blocked filter"], "actions": ["clean filter"]},
    {"issue": "Low oil", "causes": ["oil leak"], "actions": ["refill oil"]},
]


class FakeProvider:
    """Completion provider that records calls and returns a canned reply."""

    def __init__(self, reply: str = "### Possible Causes\n- Blocked filter", error: str | None = None):
        self.reply = reply
        self.error = error
        self.calls: list[list[dict[str, str]]] = []

    def complete(self, messages: list[dict[str, str]], settings: VacDiagSettings) -> str:
        self.calls.append(messages)
        if self.error:
            raise CompletionError(self.error)
        return self.reply


@pytest.fixture(autouse=True)
def isolated_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep user-level settings and API keys out of tests."""
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.delenv("GROQ_API_KEY", raising=False)
    monkeypatch.delenv("VACDIAG_CORS_ORIGINS", raising=False)


@pytest.fixture
def sample_items() -> list[KnowledgeItem]:
    return [KnowledgeItem(**r) for r in SAMPLE_RECORDS]


@pytest.fixture
def corpus_file(tmp_path: Path) -> Path:
    path = tmp_path / "knowledge.json"
    path.write_text(json.dumps(SAMPLE_RECORDS), encoding="utf-8")
    return path


@pytest.fixture
def tmp_project(tmp_path: Path, corpus_file: Path) -> Path:
    """Create a temporary project whose settings point at the sample corpus."""
    project = tmp_path / "project"
    settings_dir = project / ".vacdiag"
    settings_dir.mkdir(parents=True)
    (settings_dir / "settings.json").write_text(json.dumps({
        "model": "test-model",
        "corpus_path": str(corpus_file),
    }))
    return project


@pytest.fixture
def fake_provider() -> FakeProvider:
    return FakeProvider()


@pytest.fixture
def assistant(sample_items: list[KnowledgeItem], fake_provider: FakeProvider) -> DiagnosticAssistant:
    settings = VacDiagSettings(model="test-model", api_key="test-key")
    return DiagnosticAssistant(
        index_holder=IndexHolder(lambda: sample_items),
        provider=fake_provider,
        settings=settings,
    )



@pytest.fixture
def provider_factory() -> type[FakeProvider]:
    return FakeProvider
