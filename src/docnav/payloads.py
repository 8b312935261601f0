"""JSON-ready response shapes shared by the web API and the MCP server."""

from __future__ import annotations

from dataclasses import asdict
from typing import Any, Dict, List, Optional, Sequence

from docnav.index.search import SearchResult
from docnav.models import Document


def document_payload(document: Document) -> Dict[str, Any]:
    return {
        "path": document.path,
        "title": document.metadata.title,
        "category": document.metadata.category,
        "tags": list(document.metadata.tags),
        "summary": document.metadata.summary,
        "related": list(document.metadata.related),
        "content": document.content,
    }


def search_payload(
    query: str,
    category: Optional[str],
    tags: Optional[Sequence[str]],
    results: List[SearchResult],
) -> Dict[str, Any]:
    return {
        "query": query,
        "filters": {"category": category, "tags": list(tags) if tags else None},
        "total_results": len(results),
        "results": [asdict(result) for result in results],
    }


def related_payload(source: str, results: List[SearchResult]) -> Dict[str, Any]:
    related = []
    for result in results:
        item = asdict(result)
        item.pop("excerpt", None)
        related.append(item)
    return {"source": source, "total_related": len(related), "related": related}


def listing_payload(key: str, values: List[str]) -> Dict[str, Any]:
    return {"total": len(values), key: values}
