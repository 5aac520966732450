"""Exceptions raised by the indexing pipeline."""

from __future__ import annotations


class PageIndexError(Exception):
    """Base class for pageindex errors."""


class ConfigError(PageIndexError):
    """The run cannot start: the url map is unreadable or malformed."""


class BackendWriteError(PageIndexError):
    """The index backend rejected or failed a document write."""

    def __init__(self, target: str, message: str, *, status_code: int | None = None) -> None:
        super().__init__(f"{target}: {message}")
        self.target = target
        self.status_code = status_code
