"""Inverted indexes over the loaded documents."""

from __future__ import annotations

from collections import defaultdict
from typing import Dict, FrozenSet, Iterable, Mapping, Set

from docnav.models import Document
from docnav.utils.text import index_tokens


def _freeze(index: Mapping[str, Set[str]]) -> Dict[str, FrozenSet[str]]:
    return {key: frozenset(paths) for key, paths in index.items()}


def build_keyword_index(documents: Iterable[Document]) -> Dict[str, FrozenSet[str]]:
    """Map every indexable token to the paths of the documents containing it."""
    index: Dict[str, Set[str]] = defaultdict(set)
    for document in documents:
        for token in index_tokens(document.indexable_text):
            index[token].add(document.path)
    return _freeze(index)


def build_category_index(documents: Iterable[Document]) -> Dict[str, FrozenSet[str]]:
    index: Dict[str, Set[str]] = defaultdict(set)
    for document in documents:
        if document.metadata.category:
            index[document.metadata.category].add(document.path)
    return _freeze(index)


def build_tag_index(documents: Iterable[Document]) -> Dict[str, FrozenSet[str]]:
    index: Dict[str, Set[str]] = defaultdict(set)
    for document in documents:
        for tag in document.metadata.tags:
            index[tag].add(document.path)
    return _freeze(index)


def contains(keywords: Mapping[str, FrozenSet[str]], token: str, path: str) -> bool:
    """Whether document ``path`` contains ``token``."""
    paths = keywords.get(token)
    return paths is not None and path in paths
