"""Ranking of a document's precomputed neighbours."""

from __future__ import annotations

from typing import List, Tuple

from docnav.index.graph import explicit_targets
from docnav.index.snapshot import IndexSnapshot

BASE_SCORE = 1
CATEGORY_BONUS = 2
EXPLICIT_BONUS = 5


def score_related(snapshot: IndexSnapshot, path: str) -> List[Tuple[str, int]]:
    """Score every neighbour of ``path``, strongest first.

    Unknown paths and documents without neighbours give an empty list.
    """
    source = snapshot.documents.get(path)
    neighbours = snapshot.relationships.get(path)
    if source is None or not neighbours:
        return []

    explicit = explicit_targets(source, snapshot.root)
    source_tags = source.metadata.unique_tags()

    scored: List[Tuple[str, int]] = []
    # Iterate in corpus order so equal scores keep a stable order.
    for other_path, other in snapshot.documents.items():
        if other_path not in neighbours or other_path == path:
            continue
        score = BASE_SCORE
        if other.metadata.category == source.metadata.category:
            score += CATEGORY_BONUS
        score += len(source_tags & other.metadata.unique_tags())
        if other_path in explicit:
            score += EXPLICIT_BONUS
        scored.append((other_path, score))

    scored.sort(key=lambda item: item[1], reverse=True)
    return scored


def related_documents(snapshot: IndexSnapshot, path: str, limit: int = 10) -> List[str]:
    return [other for other, _ in score_related(snapshot, path)[: max(limit, 0)]]
