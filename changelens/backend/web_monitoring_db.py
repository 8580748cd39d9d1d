"""HTTP client for the web-monitoring-db API."""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any

import httpx

from changelens.backend.base import PageBackend
from changelens.core.types import Page, Version
from changelens.errors import BackendError, PageNotFoundError

logger = logging.getLogger(__name__)

_API_PREFIX = "/api/v0"


class WebMonitoringDb(PageBackend):
    """
    Reads pages and versions from a web-monitoring-db server.

    Usage:
        async with WebMonitoringDb("https://api.example.org") as db:
            page = await db.get_page(page_id)

    Pass ``client`` to share an ``httpx.AsyncClient``; the caller then owns it
    and ``aclose()`` leaves it open.
    """

    def __init__(
        self,
        base_url: str,
        *,
        api_token: str | None = None,
        timeout: float = 10.0,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        headers = {"Accept": "application/json"}
        if api_token:
            headers["Authorization"] = f"Bearer {api_token}"
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(timeout=timeout)
        self._headers = headers

    async def __aenter__(self) -> WebMonitoringDb:
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    # ------------------------------------------------------------------
    # PageBackend
    # ------------------------------------------------------------------

    async def get_page(self, page_id: str) -> Page:
        payload = await self._request("GET", f"/pages/{page_id}", page_id=page_id)
        return parse_page(payload.get("data") or {}, with_versions=True)

    async def get_pages(self) -> list[Page]:
        payload = await self._request("GET", "/pages")
        return [parse_page(raw) for raw in payload.get("data") or []]

    async def annotate_change(
        self,
        page_uuid: str,
        from_version_uuid: str,
        to_version_uuid: str,
        annotation: dict[str, Any],
    ) -> dict[str, Any]:
        path = (
            f"/pages/{page_uuid}/changes/"
            f"{from_version_uuid}..{to_version_uuid}/annotations"
        )
        payload = await self._request("POST", path, json=annotation)
        return payload.get("data") or {}

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    async def _request(
        self,
        method: str,
        path: str,
        *,
        page_id: str | None = None,
        json: Any = None,
    ) -> dict[str, Any]:
        url = f"{self.base_url}{_API_PREFIX}{path}"
        logger.debug("%s %s", method, url)
        try:
            response = await self._client.request(
                method, url, headers=self._headers, json=json
            )
        except httpx.HTTPError as exc:
            raise BackendError(f"{method} {url} failed: {exc}") from exc

        if response.status_code == 404 and page_id is not None:
            raise PageNotFoundError(page_id)
        if response.is_error:
            raise BackendError(
                f"{method} {url} returned HTTP {response.status_code}",
                status_code=response.status_code,
            )
        try:
            return response.json()
        except ValueError as exc:
            raise BackendError(
                f"{method} {url} returned invalid JSON",
                status_code=response.status_code,
            ) from exc


def parse_page(raw: dict[str, Any], *, with_versions: bool = False) -> Page:
    """
    Build a Page from an API record.

    Versions are sorted most recent first whatever order the server used.
    A record without a ``versions`` member yields ``versions=None`` unless
    ``with_versions`` is set, in which case it is an empty history.
    """
    page_uuid = raw.get("uuid", "")
    raw_versions = raw.get("versions")
    if raw_versions is None and not with_versions:
        versions = None
    else:
        parsed = [parse_version(v, page_uuid=page_uuid) for v in raw_versions or []]
        parsed.sort(key=lambda v: v.capture_time, reverse=True)
        versions = tuple(parsed)
    return Page(
        uuid=page_uuid,
        title=raw.get("title") or "",
        url=raw.get("url") or "",
        versions=versions,
    )


def parse_version(raw: dict[str, Any], *, page_uuid: str = "") -> Version:
    return Version(
        uuid=raw.get("uuid", ""),
        capture_time=parse_timestamp(raw.get("capture_time", "")),
        page_uuid=raw.get("page_uuid") or page_uuid,
        uri=raw.get("uri") or "",
        version_hash=raw.get("version_hash") or "",
        source_type=raw.get("source_type") or "",
    )


def parse_timestamp(value: str) -> datetime:
    """Parse an ISO-8601 timestamp; naive values are taken as UTC."""
    try:
        parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    except (AttributeError, ValueError) as exc:
        raise BackendError(f"Invalid capture_time {value!r}") from exc
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed
