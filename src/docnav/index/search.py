"""Relevance search over an index snapshot."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, List, Optional, Sequence, Tuple

from docnav.config import AppConfig
from docnav.errors import DocumentNotFoundError
from docnav.index.keywords import contains
from docnav.index.related import score_related
from docnav.index.snapshot import IndexSnapshot
from docnav.models import Document
from docnav.utils.text import extract_excerpt, tokenize

if TYPE_CHECKING:
    from docnav.index.indexer import DocumentIndexer

KEYWORD_WEIGHT = 1.0
TITLE_WEIGHT = 5.0
TAG_WEIGHT = 3.0


def _passes_filters(
    document: Document, category: Optional[str], tags: Optional[Sequence[str]]
) -> bool:
    if category and document.metadata.category != category:
        return False
    if tags and not all(tag in document.metadata.tags for tag in tags):
        return False
    return True


def score_document(snapshot: IndexSnapshot, document: Document, tokens: Sequence[str]) -> float:
    """Sum of the keyword, TF-IDF, title and tag signals for ``tokens``."""
    weights = snapshot.tfidf.get(document.path, {})
    title = document.metadata.title.lower()
    tags = [tag.lower() for tag in document.metadata.tags]

    score = 0.0
    for token in tokens:
        if contains(snapshot.keywords, token, document.path):
            score += KEYWORD_WEIGHT
        score += weights.get(token, 0.0)
        if token in title:
            score += TITLE_WEIGHT
        if any(token in tag for tag in tags):
            score += TAG_WEIGHT
    return score


def score_documents(
    snapshot: IndexSnapshot,
    query: str,
    category: Optional[str] = None,
    tags: Optional[Sequence[str]] = None,
) -> List[Tuple[str, float]]:
    """Rank matching documents as ``(path, score)``, best first.

    Ties keep corpus order because the sort is stable.
    """
    tokens = tokenize(query)
    if not tokens:
        return []

    scored: List[Tuple[str, float]] = []
    for path, document in snapshot.documents.items():
        if not _passes_filters(document, category, tags):
            continue
        score = score_document(snapshot, document, tokens)
        if score > 0:
            scored.append((path, score))

    scored.sort(key=lambda item: item[1], reverse=True)
    return scored


def search_documents(
    snapshot: IndexSnapshot,
    query: str,
    category: Optional[str] = None,
    tags: Optional[Sequence[str]] = None,
) -> List[str]:
    return [path for path, _ in score_documents(snapshot, query, category, tags)]


@dataclass(slots=True)
class SearchResult:
    path: str
    title: str
    summary: str
    category: str
    tags: List[str] = field(default_factory=list)
    relevance: float = 0.0
    excerpt: Optional[str] = None

    @classmethod
    def from_document(
        cls, document: Document, relevance: float, excerpt: Optional[str] = None
    ) -> "SearchResult":
        return cls(
            path=document.path,
            title=document.metadata.title,
            summary=document.metadata.summary,
            category=document.metadata.category,
            tags=list(document.metadata.tags),
            relevance=relevance,
            excerpt=excerpt,
        )


class Searcher:
    """High-level API turning ranked paths into result records."""

    def __init__(self, indexer: "DocumentIndexer", config: AppConfig | None = None) -> None:
        self.indexer = indexer
        self.config = config or indexer.config

    def search(
        self,
        query: str,
        *,
        category: Optional[str] = None,
        tags: Optional[Sequence[str]] = None,
        limit: Optional[int] = None,
    ) -> List[SearchResult]:
        snapshot = self.indexer.require_snapshot()
        top_k = self.config.clamp_limit(limit)
        results: List[SearchResult] = []
        for path, score in score_documents(snapshot, query, category, tags)[:top_k]:
            document = snapshot.documents[path]
            results.append(
                SearchResult.from_document(
                    document, score, excerpt=extract_excerpt(document.content, query)
                )
            )
        return results

    def related(self, path: str, *, limit: Optional[int] = None) -> List[SearchResult]:
        snapshot = self.indexer.require_snapshot()
        if path not in snapshot.documents:
            raise DocumentNotFoundError(path)
        top_k = self.config.clamp_limit(limit)
        return [
            SearchResult.from_document(snapshot.documents[other], float(score))
            for other, score in score_related(snapshot, path)[:top_k]
        ]
