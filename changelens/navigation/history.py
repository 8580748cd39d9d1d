"""In-process navigation history with push/replace semantics."""

from __future__ import annotations

from changelens.navigation.routes import ROOT_PATH


class NavigationHistory:
    """
    A browser-style session history.

    ``push`` drops any forward entries and appends a new one; ``replace``
    overwrites the current entry so the old location is no longer reachable
    by going back.
    """

    def __init__(self, initial: str = ROOT_PATH) -> None:
        self._entries: list[str] = [initial]
        self._index = 0

    @property
    def location(self) -> str:
        return self._entries[self._index]

    @property
    def entries(self) -> list[str]:
        return list(self._entries)

    def push(self, url: str) -> None:
        del self._entries[self._index + 1:]
        self._entries.append(url)
        self._index += 1

    def replace(self, url: str) -> None:
        self._entries[self._index] = url

    def back(self) -> str:
        if self._index > 0:
            self._index -= 1
        return self.location

    def forward(self) -> str:
        if self._index < len(self._entries) - 1:
            self._index += 1
        return self.location

    def __len__(self) -> int:
        return len(self._entries)
