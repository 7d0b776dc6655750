"""Completion service client for vacdiag.

The hosted model is reached through Groq's OpenAI-compatible endpoint
using the openai SDK with a custom base_url. Every failure surfaces as
CompletionError so the caller can apply its fallback policy.
"""

from __future__ import annotations

import logging
from typing import Any, Protocol

from vacdiag.config import API_KEY_ENV, VacDiagSettings

logger = logging.getLogger(__name__)

EMPTY_REPLY = "No response generated."


class CompletionError(RuntimeError):
    """The completion service call failed, timed out, or is not configured."""


class CompletionProvider(Protocol):
    """Protocol for completion providers."""

    def complete(self, messages: list[dict[str, str]], settings: VacDiagSettings) -> str:
        """Send OpenAI-style messages and return the reply text."""
        ...


def build_messages(
    system_prompt: str,
    history: list[dict[str, Any]] | None,
    message: str,
) -> list[dict[str, str]]:
    """Assemble system prompt, prior turns and the current user message.

    Any history role other than "user" is sent as "assistant".
    """
    messages = [{"role": "system", "content": system_prompt}]
    for turn in history or []:
        messages.append({
            "role": "user" if turn.get("role") == "user" else "assistant",
            "content": str(turn.get("content", "")),
        })
    messages.append({"role": "user", "content": message})
    return messages


class GroqProvider:
    """Groq chat completions via the OpenAI-compatible API."""

    def __init__(
        self,
        api_key: str | None = None,
        base_url: str | None = None,
        timeout: float = 10.0,
    ):
        self._api_key = api_key
        self._base_url = base_url
        self._timeout = timeout
        self._client: Any = None

    def _get_client(self) -> Any:
        """Lazy-create the OpenAI client on first use."""
        if self._client is not None:
            return self._client

        if not self._api_key:
            raise CompletionError(f"{API_KEY_ENV} is not defined in environment variables")

        from openai import OpenAI

        self._client = OpenAI(
            api_key=self._api_key,
            base_url=self._base_url,
            timeout=self._timeout,
            max_retries=0,
        )
        return self._client

    def complete(self, messages: list[dict[str, str]], settings: VacDiagSettings) -> str:
        client = self._get_client()

        import openai

        try:
            response = client.chat.completions.create(
                model=settings.model,
                messages=messages,
                temperature=settings.temperature,
                max_tokens=settings.max_tokens,
                top_p=settings.top_p,
            )
        except openai.APITimeoutError as e:
            raise CompletionError(f"completion request timed out after {self._timeout}s") from e
        except openai.OpenAIError as e:
            raise CompletionError(f"completion request failed: {e}") from e

        choice = response.choices[0] if response.choices else None
        reply = choice.message.content if choice is not None else None
        if not reply:
            return EMPTY_REPLY

        logger.info("Completion received, length: %d", len(reply))
        return reply


def create_provider(settings: VacDiagSettings) -> CompletionProvider:
    """Factory function to create the completion provider."""
    return GroqProvider(
        api_key=settings.api_key,
        base_url=settings.base_url,
        timeout=settings.timeout,
    )
