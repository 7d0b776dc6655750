"""Chat endpoint.

Always answers 200 with a reply so the client never sees a failed fetch,
including for bodies that are not JSON or do not match ChatRequest.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, Request
from fastapi.concurrency import run_in_threadpool
from pydantic import ValidationError

from vacdiag.core.assistant import DiagnosticAssistant
from vacdiag.core.prompts import FALLBACK_REPLY
from vacdiag.engine.dependencies import get_assistant
from vacdiag.engine.models.requests import ChatRequest
from vacdiag.engine.models.responses import ChatResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api")


async def _parse_chat_request(request: Request) -> ChatRequest | None:
    try:
        return ChatRequest.model_validate(await request.json())
    except (ValueError, ValidationError) as e:
        logger.warning("Malformed chat request: %s", e)
        return None


@router.post("/chat", response_model=ChatResponse)
async def chat_endpoint(
    request: Request,
    assistant: DiagnosticAssistant = Depends(get_assistant),
) -> ChatResponse:
    """Answer one user message with retrieved knowledge context."""
    logger.info("/api/chat hit")
    req = await _parse_chat_request(request)
    if req is None:
        return ChatResponse(reply=FALLBACK_REPLY)

    history = [m.model_dump() for m in req.history]
    try:
        reply = await run_in_threadpool(assistant.reply, req.message or "", history)
    except Exception as e:
        logger.error("Chat request failed: %s", e)
        reply = FALLBACK_REPLY
    return ChatResponse(reply=reply)
