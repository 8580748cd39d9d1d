"""NavigationController — loads a page, resolves the requested change, navigates."""

from __future__ import annotations

import logging
import time
from contextlib import AsyncExitStack
from typing import Any, Iterable

from changelens.backend.base import PageBackend
from changelens.codec.change_url import change_url, encode
from changelens.core.types import (
    ChangeView,
    Page,
    Redirect,
    ResolvedPair,
    Version,
    ViewState,
)
from changelens.errors import ChangeLensError
from changelens.input.keys import KeySource
from changelens.navigation.history import NavigationHistory
from changelens.navigation.pager import Pager, build_pager
from changelens.navigation.routes import ROOT_PATH, Route
from changelens.resolver.resolver import resolve_token

logger = logging.getLogger(__name__)

NO_VERSIONS_MESSAGE = "No saved versions of this page"


class NavigationController:
    """
    Drives the change view for one page at a time.

    Usage:
        controller = NavigationController(backend, history, key_source=keys)
        async with controller:
            await controller.set_route(page_id, change_token)
            if controller.state is ViewState.DISPLAYING:
                render(controller.view)

    ``set_route`` is the single input: it is called whenever the location
    changes, and the controller calls it itself after every navigation it
    issues. Only the most recent load is ever committed; a result that
    arrives after a newer load started is dropped.
    """

    def __init__(
        self,
        backend: PageBackend,
        history: NavigationHistory,
        *,
        pages: Iterable[Page] | None = None,
        key_source: KeySource | None = None,
        cancel_key: str = "Escape",
        user: Any = None,
    ) -> None:
        self._backend = backend
        self._history = history
        self._pages: list[Page] | None = list(pages) if pages is not None else None
        self._key_source = key_source
        self.cancel_key = cancel_key
        self.user = user

        self._state = ViewState.IDLE
        self._route: Route | None = None
        self._page: Page | None = None
        self._view: ChangeView | None = None
        self._error: ChangeLensError | None = None
        self._generation = 0
        self._load_ms = 0.0
        self._listeners: AsyncExitStack | None = None

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------

    @property
    def state(self) -> ViewState:
        return self._state

    @property
    def route(self) -> Route | None:
        return self._route

    @property
    def page(self) -> Page | None:
        return self._page

    @property
    def view(self) -> ChangeView | None:
        """The pair to render; only set while DISPLAYING."""
        return self._view

    @property
    def error(self) -> ChangeLensError | None:
        return self._error

    @property
    def load_ms(self) -> float:
        """Wall-clock ms of the last committed load."""
        return self._load_ms

    @property
    def message(self) -> str | None:
        if self._state is ViewState.NO_VERSIONS:
            return NO_VERSIONS_MESSAGE
        if self._state is ViewState.LOAD_FAILED and self._error is not None:
            return str(self._error)
        return None

    @property
    def pager(self) -> Pager | None:
        if self._pages is None or self._page is None:
            return None
        return build_pager(self._pages, self._page.uuid)

    @property
    def is_mounted(self) -> bool:
        return self._listeners is not None

    def set_pages(self, pages: Iterable[Page] | None) -> None:
        """Replace the sibling page list."""
        self._pages = list(pages) if pages is not None else None

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    async def mount(self) -> None:
        """Start listening for the cancel key. Mounting twice is a no-op."""
        if self._listeners is not None:
            return
        stack = AsyncExitStack()
        if self._key_source is not None:
            await stack.enter_async_context(
                self._key_source.listen(self.cancel_key, self._on_cancel_key)
            )
        self._listeners = stack

    async def unmount(self) -> None:
        """Release the cancel key listener and drop any in-flight load."""
        self._generation += 1
        if self._state is ViewState.LOADING:
            self._state = ViewState.IDLE
        listeners, self._listeners = self._listeners, None
        if listeners is not None:
            await listeners.aclose()

    async def __aenter__(self) -> NavigationController:
        await self.mount()
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.unmount()

    # ------------------------------------------------------------------
    # Navigation
    # ------------------------------------------------------------------

    async def set_route(self, page_id: str, change_token: str = "") -> None:
        """
        Point the controller at a new location.

        A new page id triggers a load. The same page id with a different
        token is resolved against the page already loaded, or picked up by
        the load still in flight.
        """
        previous = self._route
        self._route = Route(page_id=page_id, change_token=change_token or "")

        if previous is not None and previous.page_id == page_id:
            if self._state is ViewState.LOADING:
                return
            if self._page is not None:
                await self._show_change()
                return

        await self.load_page(page_id)

    async def load_page(self, page_id: str) -> None:
        """
        Load ``page_id`` and show the change named by the current route.

        A page from the known ``pages`` list is used as-is when it already
        carries its version history; otherwise the backend is asked.
        """
        self._generation += 1
        generation = self._generation
        if self._route is None or self._route.page_id != page_id:
            self._route = Route(page_id=page_id)

        self._state = ViewState.LOADING
        self._page = None
        self._view = None
        self._error = None
        t0 = time.monotonic()

        page = self._find_known_page(page_id)
        if page is None:
            try:
                page = await self._backend.get_page(page_id)
            except ChangeLensError as exc:
                if not self._is_current(generation, page_id):
                    logger.debug("Discarding failed stale load of page %s", page_id)
                    return
                logger.warning("Failed to load page %s: %s", page_id, exc)
                self._state = ViewState.LOAD_FAILED
                self._error = exc
                return
            except BaseException:
                # Cancelled or crashed: leave LOADING so the page can be routed to again
                if self._is_current(generation, page_id):
                    self._state = ViewState.IDLE
                raise

        if not self._is_current(generation, page_id):
            logger.debug("Discarding stale load of page %s", page_id)
            return

        self._page = page
        self._load_ms = (time.monotonic() - t0) * 1000
        await self._show_change()

    async def navigate_to_change(
        self,
        from_version: Version | None,
        to_version: Version | None,
        page: Page | None = None,
        replace: bool = False,
    ) -> None:
        """
        Navigate to the change ``from_version..to_version``.

        ``page`` defaults to the page currently routed to. ``replace`` is for
        corrective redirects only; user navigation pushes a new entry.
        """
        if page is not None:
            page_id = page.uuid
        elif self._route is not None:
            page_id = self._route.page_id
        else:
            raise ChangeLensError("No page to navigate within")

        url = change_url(page_id, from_version, to_version)
        if replace:
            self._history.replace(url)
        else:
            self._history.push(url)
        logger.debug("%s %s", "Replaced with" if replace else "Pushed", url)

        await self.set_route(page_id, encode(from_version, to_version))

    async def annotate_change(
        self,
        from_version_id: str,
        to_version_id: str,
        annotation: dict[str, Any],
    ) -> Any:
        """Save an annotation on a change of the loaded page."""
        if self._page is None:
            raise ChangeLensError("No page loaded to annotate")
        return await self._backend.annotate_change(
            self._page.uuid, from_version_id, to_version_id, annotation
        )

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    async def _show_change(self) -> None:
        page = self._page
        route = self._route
        if page is None or route is None:
            return

        result = resolve_token(page.versions or (), route.change_token)
        if isinstance(result, ResolvedPair):
            self._state = ViewState.DISPLAYING
            self._view = ChangeView(
                from_version=result.from_version,
                to_version=result.to_version,
                page=page,
                annotate_change=self.annotate_change,
                on_change_selected_versions=self.navigate_to_change,
                user=self.user,
            )
        elif isinstance(result, Redirect):
            self._view = None
            # Version ids containing the separator never decode back to themselves
            if not isinstance(resolve_token(page.versions or (), result.token), ResolvedPair):
                logger.warning(
                    "Change %r on page %s cannot be expressed as a token, not redirecting",
                    result.token, route.page_id,
                )
                self._state = ViewState.LOAD_FAILED
                self._error = ChangeLensError(
                    f"Cannot link to change {result.token!r} on page {route.page_id}"
                )
                return
            self._state = ViewState.REDIRECTING
            logger.info(
                "Change %r on page %s is not valid, redirecting to %s",
                route.change_token, route.page_id, result.token,
            )
            await self.navigate_to_change(
                result.from_version, result.to_version, replace=True
            )
        else:
            self._state = ViewState.NO_VERSIONS
            self._view = None

    def _find_known_page(self, page_id: str) -> Page | None:
        for page in self._pages or ():
            if page.uuid == page_id and page.has_versions:
                return page
        return None

    def _is_current(self, generation: int, page_id: str) -> bool:
        return (
            generation == self._generation
            and self._route is not None
            and self._route.page_id == page_id
        )

    def _on_cancel_key(self, key: str) -> None:
        logger.debug("Cancel key %r pressed, leaving page view", key)
        self._generation += 1
        self._history.push(ROOT_PATH)
        self._route = None
        self._page = None
        self._view = None
        self._error = None
        self._state = ViewState.IDLE
