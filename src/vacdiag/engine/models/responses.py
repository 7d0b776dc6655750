"""Pydantic response models for the vacdiag engine API."""

from __future__ import annotations

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    """Health check response."""
    status: str = "ok"
    version: str
    knowledge_entries: int = 0
    vocabulary_size: int = 0


class ChatResponse(BaseModel):
    """Assistant reply."""
    reply: str


class RetrieveResult(BaseModel):
    """A single retrieved knowledge chunk."""
    text: str
    score: float


class RetrieveResponse(BaseModel):
    """Response from knowledge retrieval."""
    query: str
    results: list[RetrieveResult] = Field(default_factory=list)


class OptionsResponse(BaseModel):
    """Guided symptom options."""
    options: list[str] = Field(default_factory=list)
