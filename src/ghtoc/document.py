"""Document pipeline: path or URL in, TOC lines out.

Resolves a document into rendered HTML using the fetcher and renderer
collaborators, then hands the HTML to the synchronous TOC core. No
argument parsing or printing here: cli.py handles that.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import structlog

from ghtoc.fetcher import is_remote, read_local
from ghtoc.models import OutlineConfig
from ghtoc.outline import grab_toc

if TYPE_CHECKING:
    from ghtoc.config import Settings
    from ghtoc.protocols import FetcherProtocol, RendererProtocol


def outline_config(settings: Settings, *, absolute_prefix: str | None = None) -> OutlineConfig:
    """Translate user-facing TOC settings into the core's OutlineConfig."""
    return OutlineConfig(
        start_depth=settings.toc.start_depth,
        max_depth=settings.toc.depth,
        absolute_prefix=absolute_prefix,
        escape_text=settings.toc.escape,
        indent_unit=" " * settings.toc.indent,
        debug=settings.debug,
    )


async def load_html(
    path: str,
    *,
    fetcher: FetcherProtocol,
    renderer: RendererProtocol,
    debug: bool = False,
) -> str:
    """Return rendered HTML for a local Markdown file or a remote document.

    Remote documents served as ``text/plain`` are raw Markdown and get
    rendered; any other content type is assumed to be HTML already.
    """
    log = structlog.get_logger().bind(path=path)

    if is_remote(path):
        document = await fetcher.fetch(path)
        log.debug("remote_document", content_type=document.content_type)
        if document.media_type != "text/plain":
            return document.content
        return await renderer.render(document.content)

    html = await renderer.render(read_local(path))
    log.debug("converted_to_html", html_size=len(html))

    if debug:
        debug_file = Path(path + ".debug.html")
        debug_file.write_text(html, encoding="utf-8")
        log.debug("debug_html_written", file=str(debug_file))

    return html


async def get_toc(
    path: str,
    settings: Settings,
    *,
    fetcher: FetcherProtocol,
    renderer: RendererProtocol,
    absolute_paths: bool = False,
) -> list[str]:
    """Build the TOC lines for one document.

    With ``absolute_paths`` every link is prefixed with ``path`` so entries
    stay valid outside the document itself.
    """
    log = structlog.get_logger().bind(path=path)
    html = await load_html(path, fetcher=fetcher, renderer=renderer, debug=settings.debug)

    prefix = path if absolute_paths or settings.toc.absolute_paths else None
    return grab_toc(html, outline_config(settings, absolute_prefix=prefix), log=log)


async def toc_from_markdown(
    markdown: str,
    settings: Settings,
    *,
    renderer: RendererProtocol,
) -> list[str]:
    """Build the TOC lines for Markdown that did not come from a path (stdin)."""
    html = await renderer.render(markdown)
    return grab_toc(html, outline_config(settings))
