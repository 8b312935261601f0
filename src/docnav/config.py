"""Application configuration defaults."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

DOCS_PATH_ENV = "DOCS_PATH"
DEFAULT_DOCS_PATH = "docs"


def _get_default_docs_path() -> Path:
    """Documentation root from the environment, falling back to ./docs."""
    return Path(os.environ.get(DOCS_PATH_ENV) or DEFAULT_DOCS_PATH)


@dataclass(slots=True)
class AppConfig:
    docs_path: Path | None = None
    extension: str = ".md"
    default_limit: int = 10
    max_limit: int = 50
    shared_tag_threshold: int = 2
    max_workers: int = 8

    def __post_init__(self) -> None:
        if self.docs_path is None:
            self.docs_path = _get_default_docs_path()

    def resolve_docs_path(self, base_dir: Path | None = None) -> Path:
        if self.docs_path is None:
            self.docs_path = _get_default_docs_path()
        if Path(self.docs_path).is_absolute() or base_dir is None:
            return Path(self.docs_path)
        return base_dir / self.docs_path

    def clamp_limit(self, limit: int | None) -> int:
        if limit is None:
            return self.default_limit
        return max(1, min(limit, self.max_limit))
