"""Top-K retrieval of knowledge chunks for a free-text query.

Both query and corpus vectors are unit-normalized, so the dot product
is the cosine similarity. A query with no known tokens scores 0 against
every entry.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

import numpy as np

from vacdiag.rag.index import VectorIndex

logger = logging.getLogger(__name__)

DEFAULT_TOP_K = 2
CONTEXT_HEADER = "\n\nRelevant Knowledge from Database:\n"


@dataclass(frozen=True)
class ScoredChunk:
    """A retrieved chunk with its similarity score."""
    text: str
    score: float


def score(index: VectorIndex, query: str) -> list[ScoredChunk]:
    """Score every entry against the query, most similar first.

    Ties keep corpus order.
    """
    if len(index) == 0:
        return []

    query_embedding = index.embed(query)
    similarities = index.matrix @ query_embedding
    order = np.argsort(-similarities, kind="stable")
    return [
        ScoredChunk(text=index.entries[i].text, score=float(similarities[i]))
        for i in order
    ]


def retrieve_scored(
    index: VectorIndex,
    query: str,
    top_k: int = DEFAULT_TOP_K,
) -> list[ScoredChunk]:
    """Return the top_k scored chunks for a query."""
    if top_k < 1:
        raise ValueError(f"top_k must be a positive integer, got {top_k}")

    results = score(index, query)[:top_k]
    if logger.isEnabledFor(logging.DEBUG):
        logger.debug(
            "Retrieved: %s",
            " | ".join(f"[{r.score:.3f}] {r.text[:50]}..." for r in results),
        )
    return results


def retrieve(index: VectorIndex, query: str, top_k: int = DEFAULT_TOP_K) -> list[str]:
    """Return the texts of the top_k chunks most similar to the query.

    Returns fewer than top_k results only when the corpus is smaller.
    """
    return [r.text for r in retrieve_scored(index, query, top_k)]


def format_context(chunks: list[str]) -> str:
    """Render retrieved chunks as a block appended to the system prompt."""
    if not chunks:
        return ""
    return CONTEXT_HEADER + "\n\n".join(chunks)
