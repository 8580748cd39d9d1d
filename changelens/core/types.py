"""Shared types and dataclasses for changelens."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any, Awaitable, Callable, Union


@dataclass(frozen=True)
class Version:
    """One captured snapshot of a page."""

    uuid: str
    capture_time: datetime
    page_uuid: str = ""  # owning page; lookup only, never dereferenced here
    uri: str = ""  # where the raw snapshot body is stored
    version_hash: str = ""
    source_type: str = ""  # "versionista", "internet_archive", ...


@dataclass(frozen=True)
class Page:
    """A monitored web page and its snapshot history."""

    uuid: str
    title: str
    url: str
    # Most recent first. None when the page came from a listing that
    # did not include its history.
    versions: tuple[Version, ...] | None = None

    @property
    def has_versions(self) -> bool:
        return self.versions is not None


@dataclass(frozen=True)
class ChangeIds:
    """A decoded change token: the two version ids, either possibly empty."""

    from_id: str = ""
    to_id: str = ""


@dataclass(frozen=True)
class ResolvedPair:
    """
    A valid pair of versions to display.

    ``from_version`` is None when the change token named only ``to``; the
    renderer treats that as the initial capture with nothing to diff against.
    """

    from_version: Version | None
    to_version: Version


@dataclass(frozen=True)
class Redirect:
    """The token was missing or invalid; navigate (replacing) to this pair."""

    from_version: Version
    to_version: Version

    @property
    def token(self) -> str:
        from changelens.codec.change_url import encode

        return encode(self.from_version, self.to_version)


@dataclass(frozen=True)
class NoVersions:
    """The page has no recorded versions at all."""


Resolution = Union[ResolvedPair, Redirect, NoVersions]


class ViewState(str, Enum):
    IDLE = "idle"
    LOADING = "loading"
    DISPLAYING = "displaying"
    REDIRECTING = "redirecting"
    NO_VERSIONS = "no_versions"
    LOAD_FAILED = "load_failed"


AnnotateCallback = Callable[[str, str, dict], Awaitable[Any]]
SelectVersionsCallback = Callable[..., Awaitable[None]]


@dataclass
class ChangeView:
    """What the controller hands to the rendering collaborator."""

    from_version: Version | None
    to_version: Version
    page: Page
    annotate_change: AnnotateCallback
    on_change_selected_versions: SelectVersionsCallback
    user: Any = None
