"""Document indexing pipeline and owner of the active snapshot."""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Sequence

from docnav.config import AppConfig
from docnav.errors import DocumentNotFoundError, IndexBuildError, IndexNotBuiltError
from docnav.index.related import related_documents
from docnav.index.search import search_documents
from docnav.index.snapshot import IndexSnapshot, build_snapshot
from docnav.ingestion.markdown_loader import load_documents
from docnav.models import Document
from docnav.utils.files import iter_document_paths

LOGGER = logging.getLogger(__name__)


def find_documents(root: Path, extension: str = ".md") -> list[Path]:
    """Find all document files under ``root``.

    Raises ``IndexBuildError`` when the root cannot be listed.
    """
    if not root.is_dir():
        raise IndexBuildError(f"Documentation directory not found: {root}")
    try:
        return list(iter_document_paths(root, extension=extension))
    except OSError as exc:
        raise IndexBuildError(f"Could not read documentation directory {root}: {exc}") from exc


@dataclass(slots=True)
class IndexStats:
    loaded: int = 0
    failed: int = 0
    processed_files: list[Path] = field(default_factory=list)

    def increment(self, status: str, path: Path) -> None:
        if status == "loaded":
            self.loaded += 1
        else:
            self.failed += 1
        self.processed_files.append(path)


class DocumentIndexer:
    """Builds index snapshots for one documentation root and answers queries.

    A build assembles a complete ``IndexSnapshot`` and then publishes it with a
    single reference swap. Readers take the current reference once per call and
    never see a half-built index.
    """

    def __init__(self, docs_path: Path, config: AppConfig | None = None) -> None:
        self.docs_path = Path(docs_path)
        self.config = config or AppConfig(docs_path=self.docs_path)
        self._snapshot: Optional[IndexSnapshot] = None
        self._build_lock = threading.Lock()

    @property
    def snapshot(self) -> Optional[IndexSnapshot]:
        return self._snapshot

    @property
    def is_built(self) -> bool:
        return self._snapshot is not None

    def require_snapshot(self) -> IndexSnapshot:
        snapshot = self._snapshot
        if snapshot is None:
            raise IndexNotBuiltError()
        return snapshot

    def build_index(self) -> IndexStats:
        """Rebuild the index from disk and swap it in.

        On ``IndexBuildError`` the previous snapshot stays active.
        """
        with self._build_lock:
            root = self.docs_path.resolve()
            LOGGER.info("Building documentation index for %s", root)
            paths = find_documents(root, self.config.extension)
            LOGGER.info("Found %d markdown files", len(paths))

            documents, failed = load_documents(root, paths, max_workers=self.config.max_workers)
            snapshot = build_snapshot(
                root,
                documents,
                shared_tag_threshold=self.config.shared_tag_threshold,
                extension=self.config.extension,
            )
            self._snapshot = snapshot

            stats = IndexStats()
            failed_set = set(failed)
            for path in paths:
                stats.increment("failed" if path in failed_set else "loaded", path)
            LOGGER.info(
                "Index built: %d documents, %d failed, %d keywords",
                stats.loaded,
                stats.failed,
                len(snapshot.keywords),
            )
            return stats

    def get_document(self, path: str) -> Document | None:
        return self.require_snapshot().get_document(path)

    def search(
        self, query: str, category: Optional[str] = None, tags: Optional[Sequence[str]] = None
    ) -> List[str]:
        return search_documents(self.require_snapshot(), query, category, tags)

    def get_related_documents(self, path: str, limit: int = 10) -> List[str]:
        snapshot = self.require_snapshot()
        if path not in snapshot.documents:
            raise DocumentNotFoundError(path)
        return related_documents(snapshot, path, limit)

    def get_categories(self) -> List[str]:
        return self.require_snapshot().category_names()

    def get_tags(self) -> List[str]:
        return self.require_snapshot().tag_names()
