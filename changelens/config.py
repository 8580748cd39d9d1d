"""Runtime configuration and logging setup."""

from __future__ import annotations

import logging
import os
import sys
from dataclasses import dataclass

DEFAULT_DB_URL = "https://api.monitoring.envirodatagov.org"

_LOG_FORMAT = "[ %(asctime)s ] : %(levelname)s : %(name)s : %(message)s"


@dataclass
class ViewerConfig:
    db_url: str = DEFAULT_DB_URL
    api_token: str | None = None
    request_timeout: float = 10.0  # seconds
    cancel_key: str = "Escape"
    log_level: str = "WARNING"

    @classmethod
    def from_env(cls) -> ViewerConfig:
        """Read settings from ``CHANGELENS_*`` environment variables."""
        raw_timeout = os.getenv("CHANGELENS_TIMEOUT", "10")
        try:
            timeout = float(raw_timeout)
        except ValueError:
            raise ValueError(f"CHANGELENS_TIMEOUT must be a number, got {raw_timeout!r}") from None
        if timeout <= 0:
            raise ValueError(f"CHANGELENS_TIMEOUT must be positive, got {timeout}")

        return cls(
            db_url=os.getenv("CHANGELENS_DB_URL", DEFAULT_DB_URL),
            api_token=os.getenv("CHANGELENS_API_TOKEN") or None,
            request_timeout=timeout,
            cancel_key=os.getenv("CHANGELENS_CANCEL_KEY", "Escape"),
            log_level=os.getenv("CHANGELENS_LOG_LEVEL", "WARNING").upper(),
        )


def setup_logging(level: str | int = logging.WARNING) -> logging.Logger:
    """Attach a console handler to the ``changelens`` logger (once)."""
    logger = logging.getLogger("changelens")
    logger.setLevel(level)

    # Called again from the CLI or tests: keep the existing handler
    if any(isinstance(h, logging.StreamHandler) for h in logger.handlers):
        return logger

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(_LOG_FORMAT))
    logger.addHandler(handler)
    return logger
