"""Abstract page backend."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

from changelens.core.types import Page


class PageBackend(ABC):
    """Where pages, their version histories and annotations live."""

    @abstractmethod
    async def get_page(self, page_id: str) -> Page:
        """Load one page with its full version history, most recent first."""

    @abstractmethod
    async def get_pages(self) -> list[Page]:
        """List pages. Entries may come without their version history."""

    @abstractmethod
    async def annotate_change(
        self,
        page_uuid: str,
        from_version_uuid: str,
        to_version_uuid: str,
        annotation: dict[str, Any],
    ) -> dict[str, Any]: ...
