"""Health check endpoint."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from vacdiag import __version__
from vacdiag.core.assistant import DiagnosticAssistant
from vacdiag.engine.dependencies import get_assistant
from vacdiag.engine.models.responses import HealthResponse

router = APIRouter()


@router.get("/health", response_model=HealthResponse)
async def health_check(assistant: DiagnosticAssistant = Depends(get_assistant)) -> HealthResponse:
    """Return engine health and knowledge index size."""
    index = assistant.index_holder.get()
    return HealthResponse(
        status="ok",
        version=__version__,
        knowledge_entries=len(index),
        vocabulary_size=index.dimension,
    )
