"""Vector space builder: converts the knowledge corpus into TF vectors.

The vocabulary is derived in a single pass over every chunk before any
vector is built, so all corpus vectors share the final dimensionality.
The resulting VectorIndex is immutable; IndexHolder owns the one lazily
built instance for a long-lived service.
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, field
from typing import Callable, Iterable, Sequence

import numpy as np

from vacdiag.knowledge.schema import KnowledgeItem
from vacdiag.rag.tokenizer import tokenize

logger = logging.getLogger(__name__)


class Vocabulary:
    """Frozen mapping from token to vector position."""

    def __init__(self, positions: dict[str, int] | None = None):
        self._positions = dict(positions or {})

    @classmethod
    def build(cls, texts: Iterable[str]) -> Vocabulary:
        """Assign positions in first-seen order across all texts."""
        positions: dict[str, int] = {}
        for text in texts:
            for token in tokenize(text):
                if token not in positions:
                    positions[token] = len(positions)
        return cls(positions)

    def position(self, token: str) -> int | None:
        return self._positions.get(token)

    def __contains__(self, token: object) -> bool:
        return token in self._positions

    def __len__(self) -> int:
        return len(self._positions)

    def to_dict(self) -> dict[str, int]:
        return dict(self._positions)


def normalize(vector: np.ndarray) -> np.ndarray:
    """L2-normalize in place; an all-zero vector is returned unchanged."""
    magnitude = np.linalg.norm(vector)
    if magnitude > 0:
        vector /= magnitude
    return vector


def embed(text: str, vocabulary: Vocabulary) -> np.ndarray:
    """Embed text as a normalized term-frequency vector.

    Tokens absent from the vocabulary contribute nothing.
    """
    vector = np.zeros(len(vocabulary), dtype=np.float64)
    for token in tokenize(text):
        if token in vocabulary:
            vector[vocabulary.position(token)] += 1.0
    return normalize(vector)


@dataclass(frozen=True, eq=False)
class VectorStoreEntry:
    """A chunk's text paired with its embedding."""
    text: str
    embedding: np.ndarray = field(repr=False)


@dataclass(frozen=True, eq=False)
class VectorIndex:
    """Immutable vocabulary plus vector store built from one corpus."""
    vocabulary: Vocabulary
    entries: tuple[VectorStoreEntry, ...]
    matrix: np.ndarray = field(repr=False)

    @property
    def dimension(self) -> int:
        return len(self.vocabulary)

    def __len__(self) -> int:
        return len(self.entries)

    def embed(self, text: str) -> np.ndarray:
        return embed(text, self.vocabulary)


def build_index(items: Sequence[KnowledgeItem]) -> VectorIndex:
    """Build a VectorIndex from an ordered corpus.

    An empty corpus yields an empty index.
    """
    chunks = [item.to_chunk() for item in items]
    vocabulary = Vocabulary.build(chunks)

    embeddings = [embed(chunk, vocabulary) for chunk in chunks]
    if embeddings:
        matrix = np.vstack(embeddings)
    else:
        matrix = np.zeros((0, len(vocabulary)), dtype=np.float64)
    matrix.setflags(write=False)

    # entries hold read-only row views of the matrix
    entries = tuple(
        VectorStoreEntry(text=chunk, embedding=matrix[i])
        for i, chunk in enumerate(chunks)
    )

    logger.info(
        "Vector index built with %d knowledge entries (%d terms)",
        len(entries), len(vocabulary),
    )
    return VectorIndex(vocabulary=vocabulary, entries=entries, matrix=matrix)


class IndexHolder:
    """Owns a lazily built VectorIndex shared across requests.

    The corpus is loaded and indexed on the first get(); later calls
    return the same instance. Safe to call from multiple threads.
    """

    def __init__(self, corpus_loader: Callable[[], Sequence[KnowledgeItem]]):
        self._corpus_loader = corpus_loader
        self._index: VectorIndex | None = None
        self._lock = threading.Lock()
        self.build_count = 0

    @property
    def is_initialized(self) -> bool:
        return self._index is not None

    def initialize(self) -> VectorIndex:
        """Build the index now if it has not been built yet."""
        return self.get()

    def get(self) -> VectorIndex:
        index = self._index
        if index is not None:
            return index
        with self._lock:
            if self._index is None:
                self._index = build_index(self._corpus_loader())
                self.build_count += 1
            return self._index
