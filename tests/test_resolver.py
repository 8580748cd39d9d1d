"""Tests for version pair resolution."""

from datetime import datetime, timezone

import pytest

from changelens.codec.change_url import decode, encode
from changelens.core.types import ChangeIds, NoVersions, Redirect, ResolvedPair, Version
from changelens.resolver.resolver import resolve, resolve_token


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def make_version(uuid: str, ts: int) -> Version:
    return Version(
        uuid=uuid,
        capture_time=datetime.fromtimestamp(ts, tz=timezone.utc),
        page_uuid="page-1",
    )


V1 = make_version("v1", 10)
V2 = make_version("v2", 20)
V3 = make_version("v3", 30)
HISTORY = [V3, V2, V1]


# ---------------------------------------------------------------------------
# Valid tokens
# ---------------------------------------------------------------------------

class TestValidPairs:
    def test_both_ids_found(self):
        result = resolve([V2, V1], "v1", "v2")
        assert result == ResolvedPair(from_version=V1, to_version=V2)

    def test_empty_from_is_valid_with_no_from_version(self):
        result = resolve(HISTORY, "", "v2")
        assert isinstance(result, ResolvedPair)
        assert result.from_version is None
        assert result.to_version is V2

    def test_oldest_version_alone_is_valid(self):
        result = resolve(HISTORY, "", "v1")
        assert result == ResolvedPair(from_version=None, to_version=V1)

    def test_reversed_pair_is_not_corrected(self):
        # Order is the renderer's business; both ids exist so the pair stands.
        result = resolve(HISTORY, "v3", "v1")
        assert result == ResolvedPair(from_version=V3, to_version=V1)

    def test_same_version_both_sides(self):
        assert resolve([V1], "v1", "v1") == ResolvedPair(from_version=V1, to_version=V1)


# ---------------------------------------------------------------------------
# Invalid tokens
# ---------------------------------------------------------------------------

class TestRedirects:
    def test_empty_token_redirects_to_latest_change(self):
        result = resolve(HISTORY, "", "")
        assert result == Redirect(from_version=V2, to_version=V3)
        assert result.token == "v2..v3"

    def test_single_version_redirects_to_itself(self):
        result = resolve([V1], "", "")
        assert result == Redirect(from_version=V1, to_version=V1)
        assert result.token == "v1..v1"

    def test_token_matches_change_url_codec(self):
        result = resolve(HISTORY, "", "")
        assert result.token == encode(result.from_version, result.to_version)
        assert decode(result.token) == ChangeIds(from_id="v2", to_id="v3")

    def test_unknown_to_falls_back_to_latest(self):
        result = resolve(HISTORY, "v1", "nope")
        assert result == Redirect(from_version=V2, to_version=V3)

    def test_unknown_from_keeps_requested_to(self):
        result = resolve(HISTORY, "nope", "v2")
        assert result == Redirect(from_version=V1, to_version=V2)

    def test_unknown_from_on_oldest_version_is_degenerate(self):
        result = resolve(HISTORY, "nope", "v1")
        assert result == Redirect(from_version=V1, to_version=V1)

    def test_from_without_to_redirects(self):
        result = resolve(HISTORY, "v1", "")
        assert isinstance(result, Redirect)
        assert result.to_version is V3

    def test_default_from_is_nearest_older_not_oldest(self):
        history = [make_version(f"v{i}", i * 10) for i in range(5, 0, -1)]
        result = resolve(history, "bad", "v4")
        assert result.from_version.uuid == "v3"

    def test_equal_capture_times_are_skipped(self):
        a = make_version("a", 20)
        b = make_version("b", 20)
        c = make_version("c", 10)
        result = resolve([a, b, c], "", "")
        assert result == Redirect(from_version=c, to_version=a)

    @pytest.mark.parametrize("from_id", ["", "v1", "unknown"])
    def test_unknown_to_never_resolves(self, from_id):
        result = resolve(HISTORY, from_id, "unknown")
        assert isinstance(result, (Redirect, NoVersions))


class TestNoVersions:
    @pytest.mark.parametrize("from_id,to_id", [("", ""), ("a", "b"), ("", "b")])
    def test_empty_history(self, from_id, to_id):
        assert isinstance(resolve([], from_id, to_id), NoVersions)


class TestResolveToken:
    def test_full_token(self):
        assert resolve_token([V2, V1], "v1..v2") == ResolvedPair(from_version=V1, to_version=V2)

    def test_empty_token(self):
        assert resolve_token(HISTORY, "").token == "v2..v3"

    def test_bare_to_id(self):
        assert resolve_token(HISTORY, "v3") == ResolvedPair(from_version=None, to_version=V3)

    def test_none_token(self):
        assert isinstance(resolve_token(HISTORY, None), Redirect)

    def test_every_version_as_sole_to_resolves(self):
        for version in HISTORY:
            result = resolve_token(HISTORY, version.uuid)
            assert result == ResolvedPair(from_version=None, to_version=version)

    def test_every_empty_token_redirect_targets_latest(self):
        for n in range(1, 6):
            history = [make_version(f"v{i}", i) for i in range(n, 0, -1)]
            result = resolve_token(history, "")
            assert result.to_version is history[0]
            expected_from = history[1] if n > 1 else history[0]
            assert result.from_version is expected_from
