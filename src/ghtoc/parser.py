"""Heading extractor for rendered Markdown.

Single regex pass over the HTML produced by the GitHub Markdown renderer.
Only headings carrying the renderer's navigable anchor
(``<a id="user-content-…" class="anchor" href="#…">``) are reported; plain
``<hN>`` tags without it are invisible to the TOC.
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

import structlog

from ghtoc.models import HeadingRecord

if TYPE_CHECKING:
    from collections.abc import Iterator

    from structlog.types import FilteringBoundLogger

_HEADING_RE = re.compile(
    r"<h(?P<level>[1-6])>\s*"
    r'<a\s*id="user-content-[^"]*"\s*class="anchor"\s*'
    r'href="(?P<href>[^"]*)"[^>]*>\s*'
    r".*?</a>(?P<text>.*?)</h",
    re.IGNORECASE | re.DOTALL,
)


def extract_headings(
    html: str,
    *,
    debug: bool = False,
    log: FilteringBoundLogger | None = None,
) -> Iterator[HeadingRecord]:
    """Yield a ``HeadingRecord`` for every anchored heading, in document order.

    The display text is everything between the anchor's closing tag and the
    first closing heading tag; it is returned raw and cleaned up later by the
    outline builder. Markup without any anchored heading yields nothing.
    """
    if log is None:
        log = structlog.get_logger()

    for idx, match in enumerate(_HEADING_RE.finditer(html)):
        try:
            level = int(match.group("level"))
        except ValueError:
            # Skip rather than count as level 0, which would skew indentation.
            log.warning("heading_level_unparsable", match=idx, raw=match.group("level"))
            continue

        if debug:
            log.debug(
                "grab_toc_match",
                match=idx,
                level=level,
                href=match.group("href"),
                text=match.group("text"),
            )

        yield HeadingRecord(level=level, fragment=match.group("href"), text=match.group("text"))
