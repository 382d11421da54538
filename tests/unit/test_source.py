"""Tests for listing source loading."""

from __future__ import annotations

from pathlib import Path

import httpx
import pytest

from xbview.core.errors import SourceError
from xbview.core.source import is_remote, load_source


def _client(handler) -> httpx.Client:
    return httpx.Client(transport=httpx.MockTransport(handler))


class TestLocalFiles:
    """Local paths are read from disk."""

    def test_reads_file(self, listing_file: Path, sample_text: str) -> None:
        assert load_source(listing_file) == sample_text

    def test_accepts_str_path(self, listing_file: Path) -> None:
        assert load_source(str(listing_file)).startswith("100 CALL CLEAR")

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(SourceError, match="File not found"):
            load_source(tmp_path / "missing.xb")

    def test_encoding(self, tmp_path: Path) -> None:
        path = tmp_path / "latin.xb"
        path.write_bytes('10 PRINT "café"\n'.encode("latin-1"))
        with pytest.raises(SourceError, match="Cannot decode"):
            load_source(path)
        assert "café" in load_source(path, encoding="latin-1")


class TestRemoteSources:
    """http(s) locations are fetched with httpx."""

    def test_is_remote(self) -> None:
        assert is_remote("https://example.org/game.xb")
        assert is_remote("HTTP://example.org/game.xb")
        assert not is_remote("game.xb")

    def test_fetch(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            assert request.url.path == "/game.xb"
            return httpx.Response(200, text="10 GOTO 10\n")

        with _client(handler) as client:
            text = load_source("https://example.org/game.xb", client=client)
        assert text == "10 GOTO 10\n"

    def test_http_error(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(404)

        with _client(handler) as client:
            with pytest.raises(SourceError, match="HTTP 404") as excinfo:
                load_source("https://example.org/missing.xb", client=client)
        assert "https://example.org/missing.xb" in str(excinfo.value)

    def test_transport_error(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("refused", request=request)

        with _client(handler) as client:
            with pytest.raises(SourceError, match="Cannot fetch"):
                load_source("http://localhost:1/game.xb", client=client)
