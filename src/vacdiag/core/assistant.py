"""Diagnostic assistant: retrieval-augmented completion for one chat turn.

Retrieval failures degrade to answering without knowledge context;
completion failures degrade to the fixed fallback reply.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from vacdiag.config import VacDiagSettings, validate_settings
from vacdiag.core.llm import CompletionError, CompletionProvider, build_messages, create_provider
from vacdiag.core.prompts import FALLBACK_REPLY, build_system_prompt
from vacdiag.knowledge.loader import load_corpus
from vacdiag.rag.index import IndexHolder
from vacdiag.rag.retriever import format_context, retrieve

logger = logging.getLogger(__name__)


@dataclass
class ChatReply:
    """Outcome of one assistant turn."""
    reply: str
    context: list[str] = field(default_factory=list)
    fallback: bool = False


class DiagnosticAssistant:
    """Answers vacuum pump questions using the knowledge index and a hosted model."""

    def __init__(
        self,
        index_holder: IndexHolder,
        provider: CompletionProvider,
        settings: VacDiagSettings,
    ):
        self.index_holder = index_holder
        self.provider = provider
        self.settings = settings

    def retrieve_context(self, message: str) -> list[str]:
        """Top-K knowledge chunks for the message, or [] if retrieval fails."""
        try:
            return retrieve(self.index_holder.get(), message, self.settings.top_k)
        except Exception as e:
            logger.warning("Retrieval failed, proceeding without context: %s", e)
            return []

    def ask(self, message: str, history: list[dict[str, Any]] | None = None) -> ChatReply:
        if not message or not message.strip():
            logger.warning("Empty message received")
            return ChatReply(reply=FALLBACK_REPLY, fallback=True)

        logger.debug("Incoming message: %s", message)
        context = self.retrieve_context(message)
        system_prompt = build_system_prompt(format_context(context))
        messages = build_messages(system_prompt, history, message)

        try:
            reply = self.provider.complete(messages, self.settings)
        except CompletionError as e:
            logger.error("Completion service error: %s", e)
            return ChatReply(reply=FALLBACK_REPLY, context=context, fallback=True)

        return ChatReply(reply=reply, context=context)

    def reply(self, message: str, history: list[dict[str, Any]] | None = None) -> str:
        return self.ask(message, history).reply


def create_assistant(
    settings: VacDiagSettings,
    provider: CompletionProvider | None = None,
) -> DiagnosticAssistant:
    """Wire an assistant from settings, using the configured corpus path."""
    errors = validate_settings(settings)
    if errors:
        raise ValueError("invalid settings: " + "; ".join(errors))

    corpus_path = Path(settings.corpus_path) if settings.corpus_path else None
    holder = IndexHolder(lambda: load_corpus(corpus_path))
    return DiagnosticAssistant(
        index_holder=holder,
        provider=provider or create_provider(settings),
        settings=settings,
    )
