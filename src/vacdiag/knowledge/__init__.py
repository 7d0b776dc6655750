"""Curated vacuum pump fault knowledge base."""

from vacdiag.knowledge.schema import CorpusLoadError, KnowledgeItem
from vacdiag.knowledge.loader import load_corpus, parse_corpus

__all__ = ["CorpusLoadError", "KnowledgeItem", "load_corpus", "parse_corpus"]
