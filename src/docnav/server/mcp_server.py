"""FastMCP server exposing the documentation index as agent tools."""

from __future__ import annotations

import json
import logging
import sys
from pathlib import Path
from typing import Any, List, Optional

from mcp.server.fastmcp import FastMCP

from docnav.errors import DocNavError, IndexBuildError
from docnav.index.indexer import DocumentIndexer
from docnav.index.search import Searcher
from docnav.payloads import document_payload, listing_payload, related_payload, search_payload

LOGGER = logging.getLogger(__name__)


def _dump(payload: Any) -> str:
    return json.dumps(payload, indent=2, default=str)


class DocsTools:
    """Tool implementations returning JSON text, or ``Error: ...`` on failure."""

    def __init__(self, indexer: DocumentIndexer) -> None:
        self.indexer = indexer
        self.searcher = Searcher(indexer)

    def search_docs(
        self,
        query: str,
        category: Optional[str] = None,
        tags: Optional[List[str]] = None,
        limit: int = 10,
    ) -> str:
        if not query or not query.strip():
            return "Error: Query parameter is required"
        try:
            results = self.searcher.search(query, category=category, tags=tags, limit=limit)
        except DocNavError as exc:
            return f"Error: {exc}"
        return _dump(search_payload(query, category, tags, results))

    def get_document(self, path: str) -> str:
        if not path:
            return "Error: Path parameter is required"
        try:
            document = self.indexer.get_document(path)
        except DocNavError as exc:
            return f"Error: {exc}"
        if document is None:
            return f"Error: Document not found: {path}"
        return _dump(document_payload(document))

    def get_related_docs(self, path: str, limit: int = 10) -> str:
        if not path:
            return "Error: Path parameter is required"
        try:
            results = self.searcher.related(path, limit=limit)
        except DocNavError as exc:
            return f"Error: {exc}"
        return _dump(related_payload(path, results))

    def list_categories(self) -> str:
        try:
            return _dump(listing_payload("categories", self.indexer.get_categories()))
        except DocNavError as exc:
            return f"Error: {exc}"

    def list_tags(self) -> str:
        try:
            return _dump(listing_payload("tags", self.indexer.get_tags()))
        except DocNavError as exc:
            return f"Error: {exc}"


def create_mcp_server(docs_path: Path) -> FastMCP:
    """Create an MCP server over the markdown tree at ``docs_path``.

    The index is built once, up front. Tools read whichever snapshot is
    current when they are called.
    """
    mcp = FastMCP(name="docnav")

    indexer = DocumentIndexer(docs_path)
    try:
        indexer.build_index()
    except IndexBuildError as exc:
        LOGGER.error("Initial index build failed: %s", exc)
    tools = DocsTools(indexer)

    @mcp.tool()
    def search_docs(
        query: str,
        category: Optional[str] = None,
        tags: Optional[List[str]] = None,
        limit: int = 10,
    ) -> str:
        """Search documentation by keywords with optional category and tag filters.

        Results are ranked by keyword, TF-IDF, title and tag matches.

        Args:
            query: Search query (keywords to search for)
            category: Optional category filter (e.g. "features", "api", "troubleshooting")
            tags: Optional tags; documents must carry ALL of them
            limit: Maximum number of results to return (default: 10)
        """
        return tools.search_docs(query, category, tags, limit)

    @mcp.tool()
    def get_document(path: str) -> str:
        """Retrieve the full content of a document by its path.

        Args:
            path: Relative path to the document (as returned by search_docs)
        """
        return tools.get_document(path)

    @mcp.tool()
    def get_related_docs(path: str, limit: int = 10) -> str:
        """Find documents related by category, tags, links and explicit frontmatter.

        Args:
            path: Relative path to the document
            limit: Maximum number of related documents to return (default: 10)
        """
        return tools.get_related_docs(path, limit)

    @mcp.tool()
    def list_categories() -> str:
        """List all available documentation categories."""
        return tools.list_categories()

    @mcp.tool()
    def list_tags() -> str:
        """List all tags used in the documentation."""
        return tools.list_tags()

    return mcp


def run_stdio(docs_path: Path, *, verbose: bool = False) -> None:
    # stdout carries the protocol, so diagnostics go to stderr.
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="[%(levelname)s] %(message)s",
        stream=sys.stderr,
    )
    LOGGER.info("Starting docnav MCP server, documentation path: %s", docs_path)
    if not docs_path.is_dir():
        LOGGER.warning("Documentation directory not found: %s", docs_path)
        LOGGER.warning("Set the DOCS_PATH environment variable to the docs root")
    mcp = create_mcp_server(docs_path)
    mcp.run()
