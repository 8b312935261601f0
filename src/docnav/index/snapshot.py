"""Immutable index snapshot."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from types import MappingProxyType
from typing import Dict, FrozenSet, Mapping, Sequence

from docnav.index.graph import DEFAULT_SHARED_TAG_THRESHOLD, build_relationships
from docnav.index.keywords import build_category_index, build_keyword_index, build_tag_index
from docnav.index.tfidf import compute_tfidf
from docnav.models import Document

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class IndexSnapshot:
    """One complete build of the index. Never modified after construction."""

    root: Path
    documents: Mapping[str, Document]
    keywords: Mapping[str, FrozenSet[str]]
    categories: Mapping[str, FrozenSet[str]]
    tags: Mapping[str, FrozenSet[str]]
    tfidf: Mapping[str, Mapping[str, float]]
    relationships: Mapping[str, FrozenSet[str]]

    def get_document(self, path: str) -> Document | None:
        return self.documents.get(path)

    def category_names(self) -> list[str]:
        return sorted(self.categories)

    def tag_names(self) -> list[str]:
        return sorted(self.tags)


def build_snapshot(
    root: Path,
    documents: Sequence[Document],
    *,
    shared_tag_threshold: int = DEFAULT_SHARED_TAG_THRESHOLD,
    extension: str = ".md",
) -> IndexSnapshot:
    """Populate every index from fully loaded ``documents``.

    Documents keep their given order, which is the tie-break order for
    rankings. A later duplicate path replaces an earlier one.
    """
    by_path: Dict[str, Document] = {}
    for document in documents:
        by_path[document.path] = document
    ordered = list(by_path.values())

    LOGGER.debug("Building inverted indexes for %d documents", len(ordered))
    keywords = build_keyword_index(ordered)
    tfidf = compute_tfidf(ordered)
    relationships = build_relationships(
        by_path, root, shared_tag_threshold=shared_tag_threshold, extension=extension
    )

    return IndexSnapshot(
        root=root,
        documents=MappingProxyType(by_path),
        keywords=MappingProxyType(keywords),
        categories=MappingProxyType(build_category_index(ordered)),
        tags=MappingProxyType(build_tag_index(ordered)),
        tfidf=MappingProxyType(tfidf),
        relationships=MappingProxyType(relationships),
    )
