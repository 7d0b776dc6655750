"""Tokenization shared by corpus indexing and query embedding.

Corpus chunks and queries must go through the same rule, otherwise
their vectors live in different spaces.
"""

from __future__ import annotations

import re


_NON_ALNUM = re.compile(r"[^a-z0-9\s]")
MIN_TOKEN_LENGTH = 2


def tokenize(text: str) -> list[str]:
    """Lowercase, strip non-alphanumerics and split into tokens.

    Tokens shorter than two characters are discarded.
    """
    cleaned = _NON_ALNUM.sub(" ", text.lower())
    return [t for t in cleaned.split() if len(t) >= MIN_TOKEN_LENGTH]
