"""Request-scoped access to the assistant held in application state."""

from __future__ import annotations

from fastapi import Request

from vacdiag.core.assistant import DiagnosticAssistant


def get_assistant(request: Request) -> DiagnosticAssistant:
    return request.app.state.assistant
