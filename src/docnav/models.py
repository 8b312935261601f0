"""Core docnav data models."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List


@dataclass(slots=True)
class DocumentMetadata:
    """Normalized frontmatter for a document.

    Keys the indexer does not understand are preserved untouched in ``extra``.
    """

    title: str
    category: str
    summary: str
    tags: List[str] = field(default_factory=list)
    related: List[str] = field(default_factory=list)
    extra: Dict[str, Any] = field(default_factory=dict)

    def unique_tags(self) -> set[str]:
        return set(self.tags)


@dataclass(slots=True)
class Document:
    """A markdown document keyed by its path relative to the corpus root."""

    path: str
    content: str
    metadata: DocumentMetadata
    last_modified: float = 0.0

    @property
    def indexable_text(self) -> str:
        return f"{self.metadata.title} {self.metadata.summary} {self.content}"
