"""Exceptions raised by the docnav core."""

from __future__ import annotations


class DocNavError(Exception):
    """Base class for docnav errors."""


class IndexBuildError(DocNavError):
    """The documentation root could not be read at all."""


class IndexNotBuiltError(DocNavError):
    """A query was issued before any index snapshot was published."""

    def __init__(self) -> None:
        super().__init__("Index has not been built yet")


class DocumentNotFoundError(DocNavError):
    """Lookup of a path that is not part of the corpus."""

    def __init__(self, path: str) -> None:
        super().__init__(f"Document not found: {path}")
        self.path = path
