"""Version pair resolution — pick the two snapshots a change token refers to."""

from __future__ import annotations

import logging
from typing import Sequence

from changelens.codec.change_url import decode
from changelens.core.types import NoVersions, Redirect, Resolution, ResolvedPair, Version

logger = logging.getLogger(__name__)


def resolve(versions: Sequence[Version], from_id: str, to_id: str) -> Resolution:
    """
    Resolve a pair of version ids against a page history.

    ``versions`` must be ordered by capture time, most recent first.

    Returns
    -------
    ResolvedPair
        Both ids were found, or ``from_id`` was empty and ``to_id`` was found.
        In the latter case ``from_version`` is None.
    Redirect
        The ids were missing or did not match. Points at the requested ``to``
        (or the latest version) and the nearest strictly older version.
    NoVersions
        The ids were not usable and there is nothing to fall back on.
    """
    to_version = _find(versions, to_id)
    from_version = _find(versions, from_id)

    # A missing `from` id is fine (the change is relative to `to`), but an
    # unknown one is not.
    if to_version is not None and (not from_id or from_version is not None):
        return ResolvedPair(from_version=from_version, to_version=to_version)

    default_to = to_version or (versions[0] if versions else None)
    if default_to is None:
        logger.debug("No versions to fall back on for %r..%r", from_id, to_id)
        return NoVersions()

    default_from = next(
        (v for v in versions if v.capture_time < default_to.capture_time),
        default_to,
    )
    logger.debug(
        "Change %r..%r is not valid, redirecting to %s..%s",
        from_id, to_id, default_from.uuid, default_to.uuid,
    )
    return Redirect(from_version=default_from, to_version=default_to)


def resolve_token(versions: Sequence[Version], token: str | None) -> Resolution:
    """Decode a change token and resolve it against ``versions``."""
    ids = decode(token)
    return resolve(versions, ids.from_id, ids.to_id)


def _find(versions: Sequence[Version], version_id: str) -> Version | None:
    if not version_id:
        return None
    return next((v for v in versions if v.uuid == version_id), None)
