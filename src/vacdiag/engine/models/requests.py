"""Pydantic request models for the vacdiag engine API."""

from __future__ import annotations

from pydantic import BaseModel, Field


class HistoryMessage(BaseModel):
    """A prior conversation turn."""
    role: str = "user"
    content: str = ""


class ChatRequest(BaseModel):
    """Request for one assistant turn."""
    message: str | None = Field(default=None, description="Current user message")
    history: list[HistoryMessage] = Field(default_factory=list, description="Prior turns, oldest first")


class RetrieveRequest(BaseModel):
    """Request to retrieve knowledge chunks for a query."""
    query: str = Field(..., description="Free-text symptom description")
    top_k: int = Field(default=2, ge=1, le=20, description="Maximum chunks to return")
