"""Unit tests for ghtoc.fetcher."""

from __future__ import annotations

from pathlib import Path

import httpx
import pytest
import respx

from ghtoc.config import Settings
from ghtoc.errors import ErrorCode, GhTocError
from ghtoc.fetcher import Fetcher, build_http_client, is_remote, read_local

# ---------------------------------------------------------------------------
# is_remote
# ---------------------------------------------------------------------------


class TestIsRemote:
    def test_https_url(self) -> None:
        assert is_remote("https://github.com/owner/repo/blob/main/README.md")

    def test_http_url(self) -> None:
        assert is_remote("http://example.com/README.md")

    def test_uppercase_scheme(self) -> None:
        assert is_remote("HTTPS://example.com/README.md")

    def test_relative_path(self) -> None:
        assert not is_remote("docs/README.md")

    def test_absolute_path(self) -> None:
        assert not is_remote("/tmp/README.md")

    def test_other_scheme(self) -> None:
        assert not is_remote("ftp://example.com/README.md")


# ---------------------------------------------------------------------------
# read_local
# ---------------------------------------------------------------------------


class TestReadLocal:
    def test_reads_utf8(self, tmp_path) -> None:
        path = tmp_path / "README.md"
        path.write_text("# Café\n", encoding="utf-8")
        assert read_local(str(path)) == "# Café\n"

    def test_missing_file(self, tmp_path) -> None:
        with pytest.raises(GhTocError) as exc_info:
            read_local(str(tmp_path / "missing.md"))
        assert exc_info.value.code == ErrorCode.DOCUMENT_NOT_FOUND
        assert exc_info.value.recoverable is False

    def test_non_utf8_file(self, tmp_path) -> None:
        path = tmp_path / "README.md"
        path.write_bytes(b"# caf\xe9\n")
        with pytest.raises(GhTocError) as exc_info:
            read_local(str(path))
        assert exc_info.value.code == ErrorCode.INVALID_INPUT
        assert isinstance(exc_info.value.__cause__, UnicodeDecodeError)

    def test_unreadable_file(self, tmp_path, monkeypatch: pytest.MonkeyPatch) -> None:
        path = tmp_path / "README.md"
        path.write_text("# x", encoding="utf-8")

        def _deny(*_args, **_kwargs) -> str:
            raise PermissionError(13, "Permission denied")

        monkeypatch.setattr(Path, "read_text", _deny)
        with pytest.raises(GhTocError) as exc_info:
            read_local(str(path))
        assert exc_info.value.code == ErrorCode.INVALID_INPUT
        assert "Permission denied" in exc_info.value.message

    def test_directory_is_not_a_document(self, tmp_path) -> None:
        with pytest.raises(GhTocError) as exc_info:
            read_local(str(tmp_path))
        assert exc_info.value.code == ErrorCode.DOCUMENT_NOT_FOUND


# ---------------------------------------------------------------------------
# build_http_client
# ---------------------------------------------------------------------------


class TestBuildHttpClient:
    def test_client_configuration(self, settings: Settings) -> None:
        client = build_http_client(settings)
        assert isinstance(client, httpx.AsyncClient)
        # follow_redirects is False (we handle redirects manually)
        assert client.follow_redirects is False
        assert client.headers["User-Agent"] == settings.fetcher.user_agent


# ---------------------------------------------------------------------------
# Fetcher
# ---------------------------------------------------------------------------


class TestFetcher:
    async def test_successful_fetch(self) -> None:
        with respx.mock:
            respx.get("https://example.com/README.md").mock(
                return_value=httpx.Response(
                    200,
                    text="# Docs\nHello world",
                    headers={"content-type": "text/plain; charset=utf-8"},
                )
            )
            async with httpx.AsyncClient() as client:
                fetcher = Fetcher(client)
                result = await fetcher.fetch("https://example.com/README.md")
                assert result.content == "# Docs\nHello world"
                assert result.media_type == "text/plain"
                assert result.url == "https://example.com/README.md"

    async def test_missing_content_type(self) -> None:
        with respx.mock:
            respx.get("https://example.com/page").mock(
                return_value=httpx.Response(200, content=b"<h1>x</h1>")
            )
            async with httpx.AsyncClient() as client:
                result = await Fetcher(client).fetch("https://example.com/page")
                assert result.media_type == ""

    async def test_404_raises_error(self) -> None:
        with respx.mock:
            respx.get("https://example.com/missing").mock(return_value=httpx.Response(404))
            async with httpx.AsyncClient() as client:
                fetcher = Fetcher(client)
                with pytest.raises(GhTocError) as exc_info:
                    await fetcher.fetch("https://example.com/missing")
                assert exc_info.value.code == ErrorCode.DOCUMENT_NOT_FOUND
                assert exc_info.value.recoverable is False

    async def test_500_raises_error(self) -> None:
        with respx.mock:
            respx.get("https://example.com/error").mock(return_value=httpx.Response(500))
            async with httpx.AsyncClient() as client:
                fetcher = Fetcher(client)
                with pytest.raises(GhTocError) as exc_info:
                    await fetcher.fetch("https://example.com/error")
                assert exc_info.value.code == ErrorCode.FETCH_FAILED
                assert exc_info.value.recoverable is True

    async def test_network_error_raises_error(self) -> None:
        with respx.mock:
            respx.get("https://example.com/timeout").mock(
                side_effect=httpx.ConnectError("Connection refused")
            )
            async with httpx.AsyncClient() as client:
                fetcher = Fetcher(client)
                with pytest.raises(GhTocError) as exc_info:
                    await fetcher.fetch("https://example.com/timeout")
                assert exc_info.value.code == ErrorCode.FETCH_FAILED
                assert exc_info.value.recoverable is True

    async def test_redirect_followed(self) -> None:
        with respx.mock:
            respx.get("https://example.com/old").mock(
                return_value=httpx.Response(301, headers={"location": "https://example.com/new"})
            )
            respx.get("https://example.com/new").mock(
                return_value=httpx.Response(200, text="Redirected content")
            )
            async with httpx.AsyncClient() as client:
                fetcher = Fetcher(client)
                result = await fetcher.fetch("https://example.com/old")
                assert result.content == "Redirected content"
                assert result.url == "https://example.com/new"

    async def test_too_many_redirects(self) -> None:
        with respx.mock:
            # 4 redirects (max is 3)
            for i in range(4):
                respx.get(f"https://example.com/r{i}").mock(
                    return_value=httpx.Response(
                        301, headers={"location": f"https://example.com/r{i + 1}"}
                    )
                )
            respx.get("https://example.com/r4").mock(return_value=httpx.Response(200, text="Final"))
            async with httpx.AsyncClient() as client:
                fetcher = Fetcher(client)
                with pytest.raises(GhTocError) as exc_info:
                    await fetcher.fetch("https://example.com/r0")
                assert exc_info.value.code == ErrorCode.FETCH_FAILED

    async def test_max_redirects_configurable(self) -> None:
        with respx.mock:
            respx.get("https://example.com/old").mock(
                return_value=httpx.Response(302, headers={"location": "https://example.com/new"})
            )
            async with httpx.AsyncClient() as client:
                fetcher = Fetcher(client, max_redirects=0)
                with pytest.raises(GhTocError) as exc_info:
                    await fetcher.fetch("https://example.com/old")
                assert exc_info.value.code == ErrorCode.FETCH_FAILED

    async def test_relative_redirect_resolved(self) -> None:
        with respx.mock:
            respx.get("https://example.com/old").mock(
                return_value=httpx.Response(301, headers={"location": "/new-path"})
            )
            respx.get("https://example.com/new-path").mock(
                return_value=httpx.Response(200, text="Relative redirect content")
            )
            async with httpx.AsyncClient() as client:
                fetcher = Fetcher(client)
                result = await fetcher.fetch("https://example.com/old")
                assert result.content == "Relative redirect content"
