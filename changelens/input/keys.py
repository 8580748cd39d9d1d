"""Key event sources with scoped subscriptions."""

from __future__ import annotations

import itertools
from abc import ABC, abstractmethod
from contextlib import asynccontextmanager
from typing import AsyncIterator, Callable


KeyCallback = Callable[[str], None]


class KeySource(ABC):
    """
    A global source of key presses.

    Subscriptions only exist inside ``listen()``; leaving the context, by any
    path, releases the underlying listener.
    """

    @asynccontextmanager
    async def listen(self, key: str, callback: KeyCallback) -> AsyncIterator[int]:
        subscription_id = await self._subscribe(key, callback)
        try:
            yield subscription_id
        finally:
            await self._unsubscribe(subscription_id)

    @abstractmethod
    async def _subscribe(self, key: str, callback: KeyCallback) -> int: ...

    @abstractmethod
    async def _unsubscribe(self, subscription_id: int) -> None: ...


class InMemoryKeySource(KeySource):
    """Key source driven by ``press()``, for headless use and tests."""

    def __init__(self) -> None:
        self._ids = itertools.count(1)
        self._subscriptions: dict[int, tuple[str, KeyCallback]] = {}

    @property
    def active_count(self) -> int:
        return len(self._subscriptions)

    def press(self, key: str) -> int:
        """Dispatch ``key`` to every live subscription for it; returns how many fired."""
        fired = 0
        for sub_key, callback in list(self._subscriptions.values()):
            if sub_key == key:
                callback(key)
                fired += 1
        return fired

    async def _subscribe(self, key: str, callback: KeyCallback) -> int:
        subscription_id = next(self._ids)
        self._subscriptions[subscription_id] = (key, callback)
        return subscription_id

    async def _unsubscribe(self, subscription_id: int) -> None:
        self._subscriptions.pop(subscription_id, None)
