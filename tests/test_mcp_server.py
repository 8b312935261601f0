"""Tests for the MCP tool server."""

from __future__ import annotations

import asyncio
import json
from pathlib import Path

import pytest
from mcp.server.fastmcp import FastMCP

from docnav.index.indexer import DocumentIndexer
from docnav.server.mcp_server import DocsTools, create_mcp_server


@pytest.fixture
def tools(docs_root: Path) -> DocsTools:
    indexer = DocumentIndexer(docs_root)
    indexer.build_index()
    return DocsTools(indexer)


class TestDocsTools:
    """Tool implementations return JSON text."""

    def test_search_docs(self, tools: DocsTools) -> None:
        payload = json.loads(tools.search_docs("voice", limit=5))
        assert payload["query"] == "voice"
        assert payload["results"][0]["path"] == "features/voice-cloning.md"
        assert payload["total_results"] == len(payload["results"])

    def test_search_docs_requires_query(self, tools: DocsTools) -> None:
        assert tools.search_docs("") == "Error: Query parameter is required"

    def test_get_document(self, tools: DocsTools) -> None:
        payload = json.loads(tools.get_document("api/authentication.md"))
        assert payload["summary"] == "How API authentication works."

    def test_get_document_not_found(self, tools: DocsTools) -> None:
        assert tools.get_document("missing.md") == "Error: Document not found: missing.md"

    def test_get_related_docs(self, tools: DocsTools) -> None:
        payload = json.loads(tools.get_related_docs("api/authentication.md"))
        assert payload["source"] == "api/authentication.md"
        assert [item["path"] for item in payload["related"]] == ["troubleshooting/login-errors.md"]

    def test_get_related_docs_not_found(self, tools: DocsTools) -> None:
        assert tools.get_related_docs("missing.md").startswith("Error: Document not found")

    def test_listings(self, tools: DocsTools) -> None:
        assert json.loads(tools.list_categories())["total"] == 4
        assert json.loads(tools.list_tags())["tags"][0] == "audio"

    def test_unbuilt_index(self, tmp_path: Path) -> None:
        tools = DocsTools(DocumentIndexer(tmp_path))
        assert tools.list_tags().startswith("Error: Index has not been built")


class TestCreateMcpServer:
    def test_registers_tools(self, docs_root: Path) -> None:
        server = create_mcp_server(docs_root)
        names = {tool.name for tool in asyncio.run(server.list_tools())}
        assert names == {
            "search_docs",
            "get_document",
            "get_related_docs",
            "list_categories",
            "list_tags",
        }

    def test_missing_root_still_starts(self, tmp_path: Path) -> None:
        server = create_mcp_server(tmp_path / "missing")
        assert isinstance(server, FastMCP)
