"""Tests for snapstatic.http.headers — immutable, case-insensitive Headers."""

import pytest

from snapstatic.http.headers import Headers


def _h(*pairs: tuple[str, str]) -> Headers:
    """Shorthand: build Headers from string pairs."""
    raw = tuple((k.encode("latin-1"), v.encode("latin-1")) for k, v in pairs)
    return Headers(raw)


class TestHeaders:
    def test_case_insensitive(self) -> None:
        h = _h(("Accept-Encoding", "gzip"))
        assert h["accept-encoding"] == "gzip"
        assert h.get("ACCEPT-ENCODING") == "gzip"

    def test_missing_key(self) -> None:
        h = _h(("Accept", "*/*"))
        with pytest.raises(KeyError):
            h["If-None-Match"]
        assert h.get("if-none-match") is None

    def test_repeated_header_answers_first_value(self) -> None:
        h = _h(("If-None-Match", "a"), ("if-none-match", "b"))
        assert h["If-None-Match"] == "a"
        assert list(h) == ["if-none-match"]
        assert len(h) == 1

    def test_from_mapping(self) -> None:
        h = Headers.from_mapping({"Host": "example.com:8080"})
        assert h["host"] == "example.com:8080"
