"""Tests for the change token codec."""

from datetime import datetime, timezone

import pytest

from changelens.codec.change_url import change_url, decode, encode, page_url
from changelens.core.types import ChangeIds, Version


def make_version(uuid: str, ts: int = 0) -> Version:
    return Version(uuid=uuid, capture_time=datetime.fromtimestamp(ts, tz=timezone.utc))


class TestEncode:
    def test_full_pair(self):
        assert encode(make_version("a"), make_version("b")) == "a..b"

    def test_missing_from_gives_empty_token(self):
        assert encode(None, make_version("b")) == ""

    def test_missing_to_gives_empty_token(self):
        assert encode(make_version("a"), None) == ""

    def test_same_version_both_sides(self):
        v = make_version("v1")
        assert encode(v, v) == "v1..v1"


class TestDecode:
    def test_full_token(self):
        assert decode("a..b") == ChangeIds(from_id="a", to_id="b")

    def test_empty_from(self):
        assert decode("..b") == ChangeIds(from_id="", to_id="b")

    def test_empty_to(self):
        assert decode("a..") == ChangeIds(from_id="a", to_id="")

    def test_no_separator_is_to_only(self):
        assert decode("b") == ChangeIds(from_id="", to_id="b")

    def test_single_dot_is_not_a_separator(self):
        assert decode("a.b") == ChangeIds(from_id="", to_id="a.b")

    @pytest.mark.parametrize("token", ["", None])
    def test_empty_token(self, token):
        assert decode(token) == ChangeIds(from_id="", to_id="")

    def test_extra_segments_ignored(self):
        assert decode("a..b..c") == ChangeIds(from_id="a", to_id="b")

    def test_round_trip_with_uuids(self):
        a = make_version("6a2c3f3e-7d5f-4c1e-9d1a-0f1e2d3c4b5a")
        b = make_version("d0c1b2a3-9e8f-4a7b-8c6d-5e4f3a2b1c0d")
        assert decode(encode(a, b)) == ChangeIds(from_id=a.uuid, to_id=b.uuid)


class TestUrls:
    def test_page_url(self):
        assert page_url("p1") == "/page/p1"

    def test_change_url_with_pair(self):
        assert change_url("p1", make_version("a"), make_version("b")) == "/page/p1/a..b"

    def test_change_url_without_pair_keeps_trailing_slash(self):
        assert change_url("p1", None, make_version("b")) == "/page/p1/"
