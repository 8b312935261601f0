"""Shared fixtures: a small documentation tree and in-memory documents."""

from __future__ import annotations

from pathlib import Path
from typing import Sequence

import pytest

from docnav.models import Document, DocumentMetadata

CORPUS = {
    "index.md": "# Welcome\n\nWelcome to the documentation for the dubbing pipeline.\n",
    "features/voice-cloning.md": (
        "---\n"
        "title: Voice Cloning\n"
        "tags: [audio, voice, ml]\n"
        "related:\n"
        "  - ../api/authentication.md\n"
        "owner: audio-team\n"
        "---\n"
        "# Voice Cloning\n\n"
        "Clone a speaker voice from a short reference recording.\n"
    ),
    "features/subtitles.md": (
        "---\n"
        "title: Subtitles\n"
        "tags: [audio, text]\n"
        "---\n"
        "Generate subtitles from the transcript of every track.\n"
    ),
    "features/lip-sync.md": (
        "---\n"
        "tags: [video, ml, voice]\n"
        "---\n"
        "Lip sync aligns mouth movement with the dubbed voice track.\n"
    ),
    "api/authentication.md": (
        "---\n"
        "title: Authentication\n"
        "tags: [security, auth]\n"
        "summary: How API authentication works.\n"
        "---\n"
        "Every request needs an authentication token in the header.\n"
    ),
    "troubleshooting/login-errors.md": (
        "---\n"
        "tags: [auth, security]\n"
        "---\n"
        "Authentication failures usually mean the token expired.\n\n"
        "See [the API guide](../api/authentication.md) for details.\n"
    ),
}


def write_corpus(root: Path, files: dict[str, str]) -> Path:
    for relative, text in files.items():
        target = root / relative
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(text, encoding="utf-8")
    return root


@pytest.fixture
def docs_root(tmp_path: Path) -> Path:
    """A documentation tree with features, api and troubleshooting sections."""
    return write_corpus(tmp_path / "docs", CORPUS)


def make_document(
    path: str,
    content: str = "",
    *,
    title: str = "",
    category: str = "",
    tags: Sequence[str] = (),
    related: Sequence[str] = (),
    summary: str = "",
) -> Document:
    return Document(
        path=path,
        content=content,
        metadata=DocumentMetadata(
            title=title,
            category=category,
            summary=summary,
            tags=list(tags),
            related=list(related),
        ),
    )


@pytest.fixture
def make_doc():
    """Factory for in-memory documents that skip the loader."""
    return make_document
