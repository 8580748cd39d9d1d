"""Change token codec — ``"<fromUuid>..<toUuid>"`` to and from version ids."""

from __future__ import annotations

from changelens.core.types import ChangeIds, Version

SEPARATOR = ".."


def encode(from_version: Version | None, to_version: Version | None) -> str:
    """
    Encode a version pair as a change token.

    Only a complete pair is encoded; if either side is missing the result is
    the empty token, never a half-filled one.
    """
    if from_version is None or to_version is None:
        return ""
    return f"{from_version.uuid}{SEPARATOR}{to_version.uuid}"


def decode(token: str | None) -> ChangeIds:
    """
    Split a change token into its version ids.

    ``"a..b"`` -> ("a", "b"), ``"..b"`` -> ("", "b") and a token without a
    separator is taken as the ``to`` id alone. Segments past the second
    separator are ignored.
    """
    if not token:
        return ChangeIds()
    if SEPARATOR not in token:
        return ChangeIds(from_id="", to_id=token)
    parts = token.split(SEPARATOR)
    return ChangeIds(from_id=parts[0], to_id=parts[1])


def page_url(page_id: str) -> str:
    return f"/page/{page_id}"


def change_url(
    page_id: str,
    from_version: Version | None,
    to_version: Version | None,
) -> str:
    """Canonical route for a change; the token part may be empty."""
    return f"{page_url(page_id)}/{encode(from_version, to_version)}"
