"""Exceptions raised by changelens."""

from __future__ import annotations


class ChangeLensError(Exception):
    """Base class for all changelens errors."""


class BackendError(ChangeLensError):
    """The page backend failed or returned an unusable response."""

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class PageNotFoundError(BackendError):
    """The backend has no page with the requested id."""

    def __init__(self, page_id: str) -> None:
        super().__init__(f"Page {page_id!r} not found", status_code=404)
        self.page_id = page_id
