"""Outline builder: heading records in, indented Markdown list lines out."""

from __future__ import annotations

from typing import TYPE_CHECKING

import structlog

from ghtoc.models import OutlineEntry
from ghtoc.parser import extract_headings
from ghtoc.text import clean_text, escape_markdown, unescape_fragment

if TYPE_CHECKING:
    from collections.abc import Iterable

    from structlog.types import FilteringBoundLogger

    from ghtoc.models import HeadingRecord, OutlineConfig

# Deepest heading level HTML allows; used as the minimum when nothing matched.
MAX_HEADING_LEVEL = 6


def in_depth_window(level: int, config: OutlineConfig) -> bool:
    """Return True if a heading at ``level`` belongs in the outline."""
    if level <= config.start_depth:
        return False
    return not (config.max_depth > 0 and level > config.max_depth)


def build_entries(
    records: Iterable[HeadingRecord],
    config: OutlineConfig,
    *,
    log: FilteringBoundLogger | None = None,
) -> list[OutlineEntry]:
    """Filter, resolve and indent heading records.

    Indentation is relative to the shallowest heading in the whole document,
    measured before the depth window is applied, so a README that starts at
    ``<h2>`` still renders its top headings flush left.
    """
    if log is None:
        log = structlog.get_logger()

    records = list(records)
    min_level = min((record.level for record in records), default=MAX_HEADING_LEVEL)

    if config.debug:
        log.debug(
            "grab_toc_processing",
            headings=len(records),
            min_level=min_level,
            start_depth=config.start_depth,
            max_depth=config.max_depth,
        )

    entries: list[OutlineEntry] = []
    for record in records:
        if not in_depth_window(record.level, config):
            continue

        link = unescape_fragment(record.fragment)
        if config.absolute_prefix:
            link = config.absolute_prefix + link

        text = clean_text(record.text)
        if config.escape_text:
            text = escape_markdown(text)

        entries.append(
            OutlineEntry(
                indent_level=max(0, record.level - min_level - config.start_depth),
                text=text,
                link=link,
            )
        )

    return entries


def build_outline(
    records: Iterable[HeadingRecord],
    config: OutlineConfig,
    *,
    log: FilteringBoundLogger | None = None,
) -> list[str]:
    """Render heading records as ``* [text](link)`` lines in document order."""
    return [entry.render(config.indent_unit) for entry in build_entries(records, config, log=log)]


def grab_toc(
    html: str,
    config: OutlineConfig,
    *,
    log: FilteringBoundLogger | None = None,
) -> list[str]:
    """Extract anchored headings from rendered HTML and render the TOC lines."""
    if log is None:
        log = structlog.get_logger()

    if config.debug:
        log.debug("grab_toc_start", html_size=len(html))
    toc = build_outline(extract_headings(html, debug=config.debug, log=log), config, log=log)
    if config.debug:
        log.debug("grab_toc_done", entries=len(toc))
    return toc
