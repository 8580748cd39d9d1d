"""Previous/next links among sibling pages."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from changelens.codec.change_url import page_url
from changelens.core.types import Page

# Link target that goes nowhere
PLACEHOLDER_URL = "#"


@dataclass(frozen=True)
class PagerLink:
    url: str = PLACEHOLDER_URL
    page: Page | None = None

    @property
    def is_placeholder(self) -> bool:
        return self.page is None


@dataclass(frozen=True)
class Pager:
    previous: PagerLink
    next: PagerLink


def build_pager(pages: Sequence[Page], current_uuid: str) -> Pager:
    """
    Link to the pages on either side of ``current_uuid`` in ``pages``.

    A page missing from the list, or sitting at either end of it, gets a
    placeholder link on the affected side instead of an error.
    """
    index = next((i for i, p in enumerate(pages) if p.uuid == current_uuid), -1)
    if index < 0:
        return Pager(previous=PagerLink(), next=PagerLink())

    previous = _link(pages[index - 1]) if index > 0 else PagerLink()
    following = _link(pages[index + 1]) if index + 1 < len(pages) else PagerLink()
    return Pager(previous=previous, next=following)


def _link(page: Page) -> PagerLink:
    return PagerLink(url=page_url(page.uuid), page=page)
