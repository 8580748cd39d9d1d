from changelens.input.keys import InMemoryKeySource, KeyCallback, KeySource
from changelens.input.playwright_keys import PlaywrightKeySource

__all__ = ["InMemoryKeySource", "KeyCallback", "KeySource", "PlaywrightKeySource"]
