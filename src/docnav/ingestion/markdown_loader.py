"""Markdown loading and frontmatter normalization.

Uses PyYAML for the frontmatter block. Every document gets a complete
``DocumentMetadata``: missing fields are inferred from the file location and
the body text.
"""

from __future__ import annotations

import logging
import re
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import Any, Dict, List, Sequence, Tuple

import yaml

from docnav.models import Document, DocumentMetadata
from docnav.utils.files import relative_document_path
from docnav.utils.text import first_paragraph, title_from_stem

LOGGER = logging.getLogger(__name__)

DEFAULT_CATEGORY = "general"
KNOWN_KEYS = frozenset({"title", "tags", "category", "related", "summary"})

_FRONTMATTER = re.compile(
    r"\A---[ \t]*\r?\n(?P<block>.*?)^---[ \t]*(?:\r?\n|\Z)",
    re.DOTALL | re.MULTILINE,
)


def parse_frontmatter(text: str, *, source: str = "<string>") -> Tuple[Dict[str, Any], str]:
    """Split ``text`` into a frontmatter mapping and the remaining body.

    A block that is not valid YAML, or not a mapping, yields an empty mapping;
    the body is still the text after the closing fence.
    """
    match = _FRONTMATTER.match(text)
    if match is None:
        return {}, text

    body = text[match.end() :]
    try:
        data = yaml.safe_load(match.group("block"))
    except (yaml.YAMLError, RecursionError) as exc:
        LOGGER.warning("Malformed frontmatter in %s: %s", source, exc)
        return {}, body

    if data is None:
        return {}, body
    if not isinstance(data, dict):
        LOGGER.warning("Frontmatter in %s is not a mapping, ignoring it", source)
        return {}, body
    return {str(key): value for key, value in data.items()}, body


def _string_list(value: Any) -> List[str]:
    if isinstance(value, str):
        return [value]
    if isinstance(value, (list, tuple)):
        return [str(item) for item in value if item is not None and not isinstance(item, (dict, list))]
    return []


def _scalar_text(value: Any) -> str:
    if not value or isinstance(value, (dict, list, tuple, set)):
        return ""
    return str(value)


def _category_from_path(relative_path: str) -> str:
    parts = relative_path.split("/")
    if len(parts) > 1:
        return parts[-2]
    return DEFAULT_CATEGORY


def build_metadata(data: Dict[str, Any], body: str, relative_path: str) -> DocumentMetadata:
    """Apply default-inference rules on top of parsed frontmatter."""
    stem = Path(relative_path).stem
    title = _scalar_text(data.get("title"))
    category = _scalar_text(data.get("category"))
    summary = _scalar_text(data.get("summary"))
    return DocumentMetadata(
        title=title or title_from_stem(stem),
        category=category or _category_from_path(relative_path),
        summary=summary or first_paragraph(body),
        tags=_string_list(data.get("tags")),
        related=_string_list(data.get("related")),
        extra={key: value for key, value in data.items() if key not in KNOWN_KEYS},
    )


def build_document(root: Path, path: Path, text: str, mtime: float = 0.0) -> Document:
    relative_path = relative_document_path(root, path)
    data, body = parse_frontmatter(text, source=relative_path)
    return Document(
        path=relative_path,
        content=body,
        metadata=build_metadata(data, body, relative_path),
        last_modified=mtime,
    )


def load_document(root: Path, path: Path) -> Document:
    """Read and parse a single markdown file. I/O errors propagate."""
    text = path.read_text(encoding="utf-8")
    mtime = path.stat().st_mtime
    return build_document(root, path, text, mtime)


def _try_load(root: Path, path: Path) -> Document | None:
    try:
        return load_document(root, path)
    except Exception as exc:
        LOGGER.error("Failed to load %s: %s", path, exc)
        return None


def load_documents(
    root: Path, paths: Sequence[Path], *, max_workers: int = 8
) -> Tuple[List[Document], List[Path]]:
    """Load ``paths`` concurrently, keeping their order.

    Returns the loaded documents and the paths that could not be read.
    """
    if not paths:
        return [], []

    with ThreadPoolExecutor(max_workers=max(1, max_workers)) as pool:
        results = list(pool.map(lambda path: _try_load(root, path), paths))

    documents: List[Document] = []
    failed: List[Path] = []
    for path, document in zip(paths, results):
        if document is None:
            failed.append(path)
        else:
            documents.append(document)
    return documents, failed
