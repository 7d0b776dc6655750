"""Loading and validation of the static knowledge dataset.

Malformed records fail fast: a silently skipped record would be an
undetectable gap in diagnostic coverage.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from vacdiag.knowledge.schema import CorpusLoadError, KnowledgeItem

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = ("issue", "causes", "actions")


def get_default_corpus_path() -> Path:
    """Path to the bundled vacuum pump knowledge dataset."""
    return Path(__file__).parent / "data" / "vacuum-knowledge.json"


def _parse_string_list(value: Any, index: int, field_name: str) -> tuple[str, ...]:
    if not isinstance(value, list):
        raise CorpusLoadError(f"record {index}: '{field_name}' must be a list of strings")
    for entry in value:
        if not isinstance(entry, str):
            raise CorpusLoadError(f"record {index}: '{field_name}' must contain only strings")
    return tuple(value)


def parse_record(record: Any, index: int) -> KnowledgeItem:
    """Validate one decoded record and convert it to a KnowledgeItem."""
    if not isinstance(record, dict):
        raise CorpusLoadError(f"record {index}: expected an object, got {type(record).__name__}")

    for name in REQUIRED_FIELDS:
        if name not in record:
            raise CorpusLoadError(f"record {index}: missing required field '{name}'")

    issue = record["issue"]
    if not isinstance(issue, str) or not issue.strip():
        raise CorpusLoadError(f"record {index}: 'issue' must be a non-empty string")

    return KnowledgeItem(
        issue=issue,
        causes=_parse_string_list(record["causes"], index, "causes"),
        actions=_parse_string_list(record["actions"], index, "actions"),
    )


def parse_corpus(records: Any) -> list[KnowledgeItem]:
    """Validate a decoded JSON array of records, preserving order."""
    if not isinstance(records, list):
        raise CorpusLoadError("knowledge dataset must be a JSON array of records")
    return [parse_record(record, i) for i, record in enumerate(records)]


def load_corpus(path: Path | None = None) -> list[KnowledgeItem]:
    """Load and validate the knowledge dataset.

    Args:
        path: JSON file to read; defaults to the bundled dataset

    Raises:
        CorpusLoadError: if the file cannot be read or decoded, or any
            record is malformed
    """
    corpus_path = path or get_default_corpus_path()
    try:
        records = json.loads(corpus_path.read_text(encoding="utf-8"))
    except OSError as e:
        raise CorpusLoadError(f"cannot read knowledge dataset {corpus_path}: {e}") from e
    except json.JSONDecodeError as e:
        raise CorpusLoadError(f"invalid JSON in knowledge dataset {corpus_path}: {e}") from e

    items = parse_corpus(records)
    logger.info("Loaded %d knowledge entries from %s", len(items), corpus_path)
    return items
