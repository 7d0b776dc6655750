"""Knowledge base record types."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


CHUNK_DELIMITER = ", "


class CorpusLoadError(ValueError):
    """Raised when the knowledge dataset is unreadable or a record is malformed."""


@dataclass(frozen=True)
class KnowledgeItem:
    """One fault scenario: an issue with its known causes and corrective actions."""
    issue: str
    causes: tuple[str, ...] = ()
    actions: tuple[str, ...] = ()

    def __post_init__(self):
        object.__setattr__(self, "causes", tuple(self.causes))
        object.__setattr__(self, "actions", tuple(self.actions))

    def to_chunk(self) -> str:
        """Flatten the item into the text form used for indexing and prompting."""
        return (
            f"Issue: {self.issue}\n"
            f"Causes: {CHUNK_DELIMITER.join(self.causes)}\n"
            f"Actions: {CHUNK_DELIMITER.join(self.actions)}\n"
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "issue": self.issue,
            "causes": list(self.causes),
            "actions": list(self.actions),
        }
