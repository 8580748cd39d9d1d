import logging

from changelens.backend.base import PageBackend
from changelens.backend.web_monitoring_db import WebMonitoringDb
from changelens.codec.change_url import change_url, decode, encode, page_url
from changelens.config import ViewerConfig, setup_logging
from changelens.core.controller import NO_VERSIONS_MESSAGE, NavigationController
from changelens.core.types import (
    ChangeIds,
    ChangeView,
    NoVersions,
    Page,
    Redirect,
    Resolution,
    ResolvedPair,
    Version,
    ViewState,
)
from changelens.errors import BackendError, ChangeLensError, PageNotFoundError
from changelens.input.keys import InMemoryKeySource, KeySource
from changelens.input.playwright_keys import PlaywrightKeySource
from changelens.navigation.history import NavigationHistory
from changelens.navigation.pager import Pager, PagerLink, build_pager
from changelens.navigation.routes import Route, parse_route
from changelens.resolver.resolver import resolve, resolve_token

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "NavigationController",
    "NO_VERSIONS_MESSAGE",
    "ChangeIds",
    "ChangeView",
    "NoVersions",
    "Page",
    "Redirect",
    "Resolution",
    "ResolvedPair",
    "Version",
    "ViewState",
    # Codec / resolver
    "change_url",
    "decode",
    "encode",
    "page_url",
    "resolve",
    "resolve_token",
    # Navigation
    "NavigationHistory",
    "Pager",
    "PagerLink",
    "Route",
    "build_pager",
    "parse_route",
    # Collaborators
    "InMemoryKeySource",
    "KeySource",
    "PageBackend",
    "PlaywrightKeySource",
    "WebMonitoringDb",
    # Config / errors
    "ViewerConfig",
    "setup_logging",
    "BackendError",
    "ChangeLensError",
    "PageNotFoundError",
]
