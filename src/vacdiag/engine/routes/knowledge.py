"""Knowledge retrieval and guided option endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from vacdiag.core.assistant import DiagnosticAssistant
from vacdiag.core.prompts import GUIDED_OPTIONS
from vacdiag.engine.dependencies import get_assistant
from vacdiag.engine.models.requests import RetrieveRequest
from vacdiag.engine.models.responses import OptionsResponse, RetrieveResponse, RetrieveResult
from vacdiag.rag.retriever import retrieve_scored

router = APIRouter(prefix="/api")


@router.post("/retrieve", response_model=RetrieveResponse)
async def retrieve_endpoint(
    req: RetrieveRequest,
    assistant: DiagnosticAssistant = Depends(get_assistant),
) -> RetrieveResponse:
    """Return the knowledge chunks most similar to the query, with scores."""
    results = retrieve_scored(assistant.index_holder.get(), req.query, req.top_k)
    return RetrieveResponse(
        query=req.query,
        results=[RetrieveResult(text=r.text, score=r.score) for r in results],
    )


@router.get("/options", response_model=OptionsResponse)
async def options_endpoint() -> OptionsResponse:
    """List the guided symptom options."""
    return OptionsResponse(options=list(GUIDED_OPTIONS))
