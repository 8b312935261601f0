"""Tests for the immutable index snapshot."""

from __future__ import annotations

import dataclasses
from pathlib import Path

import pytest

from docnav.index.snapshot import build_snapshot

ROOT = Path("/docs")


class TestBuildSnapshot:
    """Test snapshot assembly."""

    def test_all_indexes_populated(self, make_doc) -> None:
        docs = [
            make_doc("a.md", "alpha words", category="one", tags=["x", "y"]),
            make_doc("b.md", "beta words", category="two", tags=["x", "y"]),
        ]
        snapshot = build_snapshot(ROOT, docs)

        assert list(snapshot.documents) == ["a.md", "b.md"]
        assert snapshot.keywords["words"] == frozenset({"a.md", "b.md"})
        assert snapshot.category_names() == ["one", "two"]
        assert snapshot.tag_names() == ["x", "y"]
        assert set(snapshot.tfidf) == {"a.md", "b.md"}
        assert snapshot.relationships["a.md"] == frozenset({"b.md"})

    def test_empty_corpus(self) -> None:
        snapshot = build_snapshot(ROOT, [])
        assert dict(snapshot.documents) == {}
        assert snapshot.category_names() == []

    def test_immutable(self, make_doc) -> None:
        snapshot = build_snapshot(ROOT, [make_doc("a.md", "alpha")])

        with pytest.raises(dataclasses.FrozenInstanceError):
            snapshot.documents = {}
        with pytest.raises(TypeError):
            snapshot.documents["b.md"] = snapshot.documents["a.md"]

    def test_no_self_loops(self, make_doc) -> None:
        docs = [make_doc(f"{name}.md", category="same", related=[f"{name}.md"]) for name in "abc"]
        snapshot = build_snapshot(ROOT, docs)
        for path, neighbours in snapshot.relationships.items():
            assert path not in neighbours

    def test_short_tokens_never_indexed(self, make_doc) -> None:
        snapshot = build_snapshot(ROOT, [make_doc("a.md", "a an the data")])
        assert all(len(token) > 2 for token in snapshot.keywords)
        assert all(len(term) > 2 for term in snapshot.tfidf["a.md"])
