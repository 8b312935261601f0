"""Relationship graph between documents.

Four rules contribute edges: explicit ``related`` declarations, a shared
category, enough shared tags, and markdown links in the body. Explicit and
link edges are one-way; category and tag edges come out symmetric because
every ordered pair is visited. Comparing all pairs is quadratic in corpus
size, which is fine for a few thousand documents.
"""

from __future__ import annotations

import posixpath
import re
from pathlib import Path
from typing import Container, Dict, FrozenSet, Mapping, Set

from docnav.models import Document
from docnav.utils.files import normalize_reference

DEFAULT_SHARED_TAG_THRESHOLD = 2


def _link_pattern(extension: str) -> re.Pattern[str]:
    return re.compile(
        r"\[[^\]]+\]\((?P<target>[^)\s#]+" + re.escape(extension) + r")(?:#[^)]*)?\)"
    )


def explicit_targets(document: Document, root: Path) -> Set[str]:
    """Normalized paths named in the document's ``related`` frontmatter."""
    targets = {normalize_reference(entry, root) for entry in document.metadata.related}
    targets.discard("")
    return targets


def _resolve_link(raw: str, base: str, root: Path, known: Container[str]) -> str | None:
    target = normalize_reference(raw, root)
    if target in known:
        return target
    if base and not raw.startswith("/"):
        resolved = posixpath.normpath(posixpath.join(base, raw.split("#", 1)[0]))
        if resolved in known:
            return resolved
    return None


def link_targets(
    document: Document, root: Path, known: Container[str], *, extension: str = ".md"
) -> Set[str]:
    """Corpus keys of the markdown links in the body, one per link.

    A target is resolved against the root first; only when that key is not in
    ``known`` is it resolved against the linking document's directory.
    """
    base = posixpath.dirname(document.path)
    targets: Set[str] = set()
    for match in _link_pattern(extension).finditer(document.content):
        target = _resolve_link(match.group("target"), base, root, known)
        if target is not None:
            targets.add(target)
    return targets


def build_relationships(
    documents: Mapping[str, Document],
    root: Path,
    *,
    shared_tag_threshold: int = DEFAULT_SHARED_TAG_THRESHOLD,
    extension: str = ".md",
) -> Dict[str, FrozenSet[str]]:
    """Compute ``{path: neighbour paths}`` for every document."""
    tag_sets = {path: doc.metadata.unique_tags() for path, doc in documents.items()}
    relationships: Dict[str, FrozenSet[str]] = {}

    for path, document in documents.items():
        related: Set[str] = set()

        for target in explicit_targets(document, root):
            if target in documents:
                related.add(target)

        category = document.metadata.category
        tags = tag_sets[path]
        for other_path, other in documents.items():
            if other_path == path:
                continue
            if category and category == other.metadata.category:
                related.add(other_path)
            elif len(tags & tag_sets[other_path]) >= shared_tag_threshold:
                related.add(other_path)

        related.update(link_targets(document, root, documents, extension=extension))

        related.discard(path)
        relationships[path] = frozenset(related)
    return relationships
