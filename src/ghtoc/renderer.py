"""Markdown renderer backed by the GitHub Markdown API.

``POST /markdown/raw`` takes the document as ``text/plain`` and returns the
same HTML github.com shows, including the ``user-content-`` heading anchors
the TOC extractor relies on. Anonymous requests are rate limited; set
``GHTOC__GITHUB__TOKEN`` (or ``--token``) to lift the limit.
"""

from __future__ import annotations

import httpx
import structlog

from ghtoc.errors import ErrorCode, GhTocError

log = structlog.get_logger()


class GitHubRenderer:
    """Render Markdown to HTML through the GitHub API."""

    def __init__(
        self,
        client: httpx.AsyncClient,
        api_url: str = "https://api.github.com",
        token: str | None = None,
    ) -> None:
        self._client = client
        self._endpoint = api_url.rstrip("/") + "/markdown/raw"
        self._token = token

    def _headers(self) -> dict[str, str]:
        headers = {"Content-Type": "text/plain"}
        if self._token:
            headers["Authorization"] = f"token {self._token}"
        return headers

    async def render(self, markdown: str) -> str:
        """Return the rendered HTML for ``markdown``.

        Raises GhTocError on network errors and non-2xx responses.
        """
        try:
            response = await self._client.post(
                self._endpoint,
                content=markdown.encode("utf-8"),
                headers=self._headers(),
            )
        except httpx.HTTPError as exc:
            raise GhTocError(
                code=ErrorCode.RENDER_FAILED,
                message=f"Network error rendering Markdown: {exc}",
                suggestion="Check your network connection to the GitHub API.",
                recoverable=True,
            ) from exc

        if not response.is_success:
            if response.status_code in (401, 403, 429):
                raise GhTocError(
                    code=ErrorCode.RENDER_FAILED,
                    message=f"HTTP {response.status_code} from the GitHub Markdown API",
                    suggestion=(
                        "The request was rejected or rate limited. Provide a GitHub token "
                        "with --token or GHTOC__GITHUB__TOKEN."
                    ),
                    recoverable=response.status_code != 401,
                )
            raise GhTocError(
                code=ErrorCode.RENDER_FAILED,
                message=f"HTTP {response.status_code} from the GitHub Markdown API",
                suggestion="The GitHub API may be temporarily unavailable.",
                recoverable=True,
            )

        log.info("render_complete", markdown_size=len(markdown), html_size=len(response.text))
        return response.text
