"""FastAPI application exposing the documentation index over HTTP."""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path
from typing import Any, List

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel

from docnav.config import AppConfig
from docnav.errors import DocumentNotFoundError, IndexBuildError
from docnav.index.indexer import DocumentIndexer
from docnav.index.search import Searcher
from docnav.payloads import document_payload, listing_payload, related_payload, search_payload

LOGGER = logging.getLogger(__name__)

app = FastAPI(title="docnav", version="0.1.0")
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)

_indexer: DocumentIndexer | None = None


class SearchPayload(BaseModel):
    query: str
    category: str | None = None
    tags: List[str] | None = None
    limit: int = 10


def _resolve_docs_path(docs: Path | None) -> Path:
    config = AppConfig(docs_path=docs)
    return config.resolve_docs_path(Path.cwd())


def configure(docs_path: Path | None = None) -> DocumentIndexer:
    """Point the app at a documentation root. The index is built on first use."""
    global _indexer
    resolved = _resolve_docs_path(docs_path)
    _indexer = DocumentIndexer(resolved, AppConfig(docs_path=resolved))
    return _indexer


async def _get_indexer() -> DocumentIndexer:
    indexer = _indexer if _indexer is not None else configure()
    if not indexer.is_built:
        await _build(indexer)
    return indexer


async def _build(indexer: DocumentIndexer) -> dict[str, Any]:
    try:
        stats = await asyncio.to_thread(indexer.build_index)
    except IndexBuildError as exc:
        LOGGER.error("Indexing failed: %s", exc)
        raise HTTPException(status_code=500, detail=str(exc)) from exc
    return {
        "loaded": stats.loaded,
        "failed": stats.failed,
        "processed_files": [str(path) for path in stats.processed_files],
    }


@app.on_event("startup")
async def startup_event() -> None:
    logging.basicConfig(level=logging.INFO, format="[%(levelname)s] %(message)s")


@app.post("/search")
async def search_documents(payload: SearchPayload) -> dict[str, Any]:
    query = payload.query.strip()
    if not query:
        raise HTTPException(status_code=400, detail="Empty query")

    indexer = await _get_indexer()
    results = Searcher(indexer).search(
        query, category=payload.category, tags=payload.tags, limit=payload.limit
    )
    return search_payload(query, payload.category, payload.tags, results)


@app.get("/documents/{path:path}")
async def get_document(path: str) -> dict[str, Any]:
    indexer = await _get_indexer()
    document = indexer.get_document(path)
    if document is None:
        raise HTTPException(status_code=404, detail=f"Document not found: {path}")
    return document_payload(document)


@app.get("/related/{path:path}")
async def get_related(path: str, limit: int = 10) -> dict[str, Any]:
    indexer = await _get_indexer()
    try:
        results = Searcher(indexer).related(path, limit=limit)
    except DocumentNotFoundError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    return related_payload(path, results)


@app.get("/categories")
async def list_categories() -> dict[str, Any]:
    indexer = await _get_indexer()
    return listing_payload("categories", indexer.get_categories())


@app.get("/tags")
async def list_tags() -> dict[str, Any]:
    indexer = await _get_indexer()
    return listing_payload("tags", indexer.get_tags())


@app.post("/reindex")
async def reindex() -> dict[str, Any]:
    indexer = _indexer if _indexer is not None else configure()
    stats = await _build(indexer)
    return {"status": "ok", "docs": str(indexer.docs_path), "stats": stats}
