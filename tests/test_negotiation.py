"""Tests for snapstatic.negotiation — target normalization and Accept-Encoding."""

import pytest

from snapstatic.negotiation import best_encoding, uri_path


class TestUriPath:
    @pytest.mark.parametrize(
        ("target", "expected"),
        [
            ("/a.css", "/a.css"),
            ("/a.css?v=1", "/a.css"),
            ("/a.css#top", "/a.css"),
            ("/a.css?v=1#top", "/a.css"),
            ("/a.css#top?v=1", "/a.css"),
            ("/?", "/"),
            ("", ""),
        ],
    )
    def test_truncates_at_first_marker(self, target: str, expected: str) -> None:
        assert uri_path(target) == expected


class TestBestEncoding:
    @pytest.mark.parametrize(
        ("header", "expected"),
        [
            (None, "identity"),
            ("", "identity"),
            ("   ", "identity"),
            ("identity", "identity"),
            ("gzip", "gzip"),
            ("br", "br"),
            ("*", "br"),
            ("gzip, deflate, br", "br"),
            ("gzip;q=1.0, br;q=0.1", "br"),
            ("deflate", "identity"),
            ("GZIP", "gzip"),
            (" gzip ;q=0.5 ", "gzip"),
        ],
    )
    def test_preference(self, header: str | None, expected: str) -> None:
        assert best_encoding(header, has_br=True, has_gzip=True) == expected

    def test_star_without_brotli(self) -> None:
        assert best_encoding("*", has_br=False, has_gzip=True) == "identity"

    def test_br_falls_back_to_gzip(self) -> None:
        assert best_encoding("br, gzip", has_br=False, has_gzip=True) == "gzip"

    def test_nothing_available(self) -> None:
        assert best_encoding("br, gzip", has_br=False, has_gzip=False) == "identity"
