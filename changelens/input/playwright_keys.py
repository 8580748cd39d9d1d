"""Key source backed by keydown events in a live Playwright page."""

from __future__ import annotations

import itertools
import logging
from typing import Any

from playwright.async_api import Page

from changelens.input.keys import KeyCallback, KeySource

logger = logging.getLogger(__name__)

_BINDING_NAME = "__changelensKeydown"

# Registers a window keydown listener under ``id`` so it can be removed later.
_ADD_LISTENER_JS = """({binding, id, key}) => {
    window.__changelensListeners = window.__changelensListeners || {};
    const handler = (event) => {
        if (event.key === key) {
            window[binding](id, event.key);
        }
    };
    window.__changelensListeners[id] = handler;
    window.addEventListener('keydown', handler);
}"""

_REMOVE_LISTENER_JS = """(id) => {
    const listeners = window.__changelensListeners || {};
    const handler = listeners[id];
    if (handler) {
        window.removeEventListener('keydown', handler);
        delete listeners[id];
    }
}"""


class PlaywrightKeySource(KeySource):
    """
    Listens for key presses in a browser page.

    One binding is exposed per page, the first time anything subscribes.
    Each subscription adds its own DOM listener and removes it on release;
    a press that races with a release is dropped on the Python side.
    """

    def __init__(self, page: Page, *, binding_name: str = _BINDING_NAME) -> None:
        self._page = page
        self._binding_name = binding_name
        self._binding_exposed = False
        self._ids = itertools.count(1)
        self._subscriptions: dict[int, tuple[str, KeyCallback]] = {}

    @property
    def active_count(self) -> int:
        return len(self._subscriptions)

    async def _subscribe(self, key: str, callback: KeyCallback) -> int:
        if not self._binding_exposed:
            await self._page.expose_binding(self._binding_name, self._on_keydown)
            self._binding_exposed = True

        subscription_id = next(self._ids)
        await self._page.evaluate(
            _ADD_LISTENER_JS,
            {"binding": self._binding_name, "id": subscription_id, "key": key},
        )
        # Registered once the DOM listener exists
        self._subscriptions[subscription_id] = (key, callback)
        return subscription_id

    async def _unsubscribe(self, subscription_id: int) -> None:
        if self._subscriptions.pop(subscription_id, None) is None:
            return
        if self._page.is_closed():
            return
        await self._page.evaluate(_REMOVE_LISTENER_JS, subscription_id)

    def _on_keydown(self, source: Any, subscription_id: int, key: str) -> None:
        entry = self._subscriptions.get(subscription_id)
        if entry is None:
            logger.debug("Dropping %r for released subscription %d", key, subscription_id)
            return
        sub_key, callback = entry
        if sub_key == key:
            callback(key)
