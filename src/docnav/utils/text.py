"""Text helpers shared by the loader, the indexes and the query layer."""

from __future__ import annotations

import re
from typing import List

_TOKEN = re.compile(r"[^\W_]+")
_HEADING = re.compile(r"^#+\s+")
_WORD_SEPARATORS = re.compile(r"[-_]")

MIN_TOKEN_LENGTH = 3
SUMMARY_MIN_CHARS = 20
SUMMARY_MAX_CHARS = 200


def tokenize(text: str) -> List[str]:
    """Lowercase ``text`` and split it into runs of letters and digits."""
    return _TOKEN.findall(text.lower())


def index_tokens(text: str) -> List[str]:
    """Tokens long enough to be stored in the keyword and TF-IDF indexes."""
    return [token for token in tokenize(text) if len(token) >= MIN_TOKEN_LENGTH]


def title_from_stem(stem: str) -> str:
    """``getting-started`` -> ``Getting Started``."""
    words = _WORD_SEPARATORS.split(stem)
    return " ".join(word[:1].upper() + word[1:] for word in words)


def first_paragraph(content: str) -> str:
    """Return the first meaningful paragraph of a markdown body.

    Paragraphs are separated by blank lines. Leading heading markers are
    stripped, and a paragraph only qualifies when it is longer than
    ``SUMMARY_MIN_CHARS``. The result is capped at ``SUMMARY_MAX_CHARS``.
    """
    for paragraph in content.split("\n\n"):
        cleaned = _HEADING.sub("", paragraph.strip())
        if len(cleaned) > SUMMARY_MIN_CHARS:
            return cleaned[:SUMMARY_MAX_CHARS]
    return ""


def extract_excerpt(content: str, query: str, context_length: int = 150) -> str:
    """Snippet of ``content`` around the first case-insensitive hit of ``query``."""
    index = content.lower().find(query.lower())
    if index == -1:
        return content[:context_length] + "..."

    half = context_length // 2
    start = max(0, index - half)
    end = min(len(content), index + len(query) + half)

    excerpt = content[start:end]
    if start > 0:
        excerpt = "..." + excerpt
    if end < len(content):
        excerpt = excerpt + "..."
    return excerpt
