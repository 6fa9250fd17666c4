"""Document source: local files and remote URLs.

All network I/O for fetching documents goes through a single Fetcher
instance shared across documents. The Fetcher receives an httpx.AsyncClient
via constructor injection; cli.py owns the client lifecycle.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING
from urllib.parse import urljoin, urlparse

import httpx
import structlog

from ghtoc.errors import ErrorCode, GhTocError
from ghtoc.models import FetchedDocument

if TYPE_CHECKING:
    from ghtoc.config import Settings

log = structlog.get_logger()

REMOTE_SCHEMES: frozenset[str] = frozenset({"http", "https"})


def build_http_client(settings: Settings) -> httpx.AsyncClient:
    """Create the shared httpx client. Called once per CLI run."""
    return httpx.AsyncClient(
        follow_redirects=False,
        timeout=httpx.Timeout(settings.fetcher.timeout_seconds),
        headers={"User-Agent": settings.fetcher.user_agent},
        limits=httpx.Limits(
            max_connections=10,
            max_keepalive_connections=5,
        ),
    )


def is_remote(path: str) -> bool:
    """Return True if ``path`` is an http(s) URL rather than a local file."""
    return urlparse(path).scheme.lower() in REMOTE_SCHEMES


def read_local(path: str) -> str:
    """Read a local Markdown file as UTF-8."""
    file_path = Path(path)
    if not file_path.is_file():
        raise GhTocError(
            code=ErrorCode.DOCUMENT_NOT_FOUND,
            message=f"File not found: {path}",
            suggestion="Check the path, or pass an http(s) URL for remote documents.",
            recoverable=False,
        )
    log.debug("read_local", path=path)
    try:
        return file_path.read_text(encoding="utf-8")
    except UnicodeDecodeError as exc:
        raise GhTocError(
            code=ErrorCode.INVALID_INPUT,
            message=f"{path} is not valid UTF-8: {exc}",
            suggestion="Re-encode the document as UTF-8.",
            recoverable=False,
        ) from exc
    except OSError as exc:
        raise GhTocError(
            code=ErrorCode.INVALID_INPUT,
            message=f"Cannot read {path}: {exc}",
            suggestion="Check the file permissions.",
            recoverable=False,
        ) from exc


class Fetcher:
    """HTTP document fetcher with bounded redirect handling."""

    def __init__(self, client: httpx.AsyncClient, max_redirects: int = 3) -> None:
        self._client = client
        self._max_redirects = max_redirects

    async def fetch(self, url: str) -> FetchedDocument:
        """Fetch a URL, following at most ``max_redirects`` redirects.

        Returns the body and its Content-Type header on success. Raises
        GhTocError on network errors, redirect chains that are too long,
        and non-2xx responses.
        """
        current_url = url

        try:
            for hop in range(self._max_redirects + 1):
                response = await self._client.get(current_url)

                if response.is_redirect and "location" in response.headers:
                    if hop == self._max_redirects:
                        raise GhTocError(
                            code=ErrorCode.FETCH_FAILED,
                            message=f"Too many redirects fetching {url}",
                            suggestion="Pass the final URL of the document directly.",
                            recoverable=False,
                        )
                    location = response.headers["location"]
                    current_url = urljoin(current_url, location)
                    log.debug("fetch_redirect", url=url, location=current_url)
                    continue

                if not response.is_success:
                    if response.status_code == 404:
                        raise GhTocError(
                            code=ErrorCode.DOCUMENT_NOT_FOUND,
                            message=f"HTTP 404 fetching {url}",
                            suggestion="The requested document does not exist at this URL.",
                            recoverable=False,
                        )
                    raise GhTocError(
                        code=ErrorCode.FETCH_FAILED,
                        message=f"HTTP {response.status_code} fetching {url}",
                        suggestion="The document host may be temporarily unavailable.",
                        recoverable=True,
                    )

                content_type = response.headers.get("content-type", "")
                log.info(
                    "fetch_complete",
                    url=url,
                    status_code=response.status_code,
                    content_type=content_type,
                    content_length=len(response.text),
                )
                return FetchedDocument(
                    url=current_url,
                    content=response.text,
                    content_type=content_type,
                )

        except GhTocError:
            raise
        except httpx.HTTPError as exc:
            raise GhTocError(
                code=ErrorCode.FETCH_FAILED,
                message=f"Network error fetching {url}: {exc}",
                suggestion="Check your network connection and the document URL.",
                recoverable=True,
            ) from exc

        # Unreachable but satisfies the type checker
        raise GhTocError(
            code=ErrorCode.FETCH_FAILED,
            message="Redirect loop",
            suggestion="",
            recoverable=False,
        )
