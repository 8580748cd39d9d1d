"""Route parsing for ``/page/{pageId}/{changeToken}`` locations."""

from __future__ import annotations

import re
from dataclasses import dataclass

ROOT_PATH = "/"

# /page/<id> or /page/<id>/<token>, optional trailing slash
_PAGE_ROUTE = re.compile(r"^/page/(?P<page_id>[^/]+)(?:/(?P<change>[^/]*))?/?$")


@dataclass(frozen=True)
class Route:
    page_id: str
    change_token: str = ""

    @property
    def path(self) -> str:
        return f"/page/{self.page_id}/{self.change_token}"


def parse_route(path: str) -> Route | None:
    """Return the page route for ``path``, or None for any other location."""
    path = path.split("?", 1)[0].split("#", 1)[0]
    match = _PAGE_ROUTE.match(path)
    if match is None:
        return None
    return Route(page_id=match["page_id"], change_token=match["change"] or "")
