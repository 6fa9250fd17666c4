"""Command-line entrypoint.

Responsibilities (and nothing more):
- Parse arguments and merge them into Settings
- Configure structlog
- Own the shared httpx client
- Run the document pipeline for each path and print the TOC
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from typing import TYPE_CHECKING, Any

import structlog
from pydantic import ValidationError

from ghtoc import __version__
from ghtoc.config import Settings
from ghtoc.document import get_toc, toc_from_markdown
from ghtoc.errors import GhTocError
from ghtoc.fetcher import Fetcher, build_http_client
from ghtoc.renderer import GitHubRenderer

if TYPE_CHECKING:
    from collections.abc import Sequence

    from ghtoc.protocols import FetcherProtocol, RendererProtocol

log = structlog.get_logger()

TOC_HEADER = ("", "Table of Contents", "=================", "")
TOC_FOOTER = "Created by ghtoc"


# ---------------------------------------------------------------------------
# Logging setup
# ---------------------------------------------------------------------------


def _setup_logging(settings: Settings) -> None:
    """Configure structlog. Called once at startup before any log statements."""
    level_name = "DEBUG" if settings.debug else settings.logging.level
    log_level = logging.getLevelNamesMapping()[level_name]

    shared_processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.StackInfoRenderer(),
        structlog.processors.TimeStamper(fmt="iso"),
    ]

    if settings.logging.format == "json":
        processors = [*shared_processors, structlog.processors.JSONRenderer()]
    else:
        processors = [*shared_processors, structlog.dev.ConsoleRenderer()]

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        context_class=dict,
        # Logs go to stderr; stdout is reserved for the TOC itself
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=False,
    )


# ---------------------------------------------------------------------------
# Arguments
# ---------------------------------------------------------------------------


def _non_negative_int(value: str) -> int:
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid int value: {value!r}") from None
    if number < 0:
        raise argparse.ArgumentTypeError(f"must be 0 or greater, got {number}")
    return number


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="ghtoc",
        description="Generate a table of contents for Markdown documents.",
    )
    parser.add_argument(
        "paths",
        nargs="*",
        metavar="PATH",
        help="local Markdown file or http(s) URL; reads Markdown from stdin when omitted",
    )
    parser.add_argument(
        "--start-depth",
        type=_non_negative_int,
        default=None,
        help="skip headings at or above this level",
    )
    parser.add_argument(
        "--depth",
        type=_non_negative_int,
        default=None,
        help="skip headings below this level (0 = no limit)",
    )
    parser.add_argument(
        "--indent",
        type=_non_negative_int,
        default=None,
        help="spaces per nesting level",
    )
    parser.add_argument(
        "--no-escape",
        dest="escape",
        action="store_false",
        default=None,
        help="do not escape Markdown characters in heading text",
    )
    parser.add_argument("--token", default=None, help="GitHub token for the Markdown API")
    parser.add_argument(
        "--serial",
        action="store_true",
        help="process documents one after another instead of concurrently",
    )
    parser.add_argument("--hide-header", action="store_true", help="do not print the TOC header")
    parser.add_argument("--hide-footer", action="store_true", help="do not print the TOC footer")
    parser.add_argument("--debug", action="store_true", default=None, help="verbose diagnostics")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def _settings_overrides(args: argparse.Namespace) -> dict[str, Any]:
    """Keep only the flags the user actually passed so env/YAML values survive."""
    toc = {
        key: value
        for key, value in (
            ("start_depth", args.start_depth),
            ("depth", args.depth),
            ("indent", args.indent),
            ("escape", args.escape),
        )
        if value is not None
    }
    overrides: dict[str, Any] = {}
    if toc:
        overrides["toc"] = toc
    if args.token is not None:
        overrides["github"] = {"token": args.token}
    if args.debug is not None:
        overrides["debug"] = args.debug
    return overrides


# ---------------------------------------------------------------------------
# Pipeline
# ---------------------------------------------------------------------------


async def collect_tocs(
    paths: Sequence[str],
    settings: Settings,
    *,
    fetcher: FetcherProtocol,
    renderer: RendererProtocol,
    serial: bool = False,
) -> list[list[str]]:
    """Build one TOC per path, returned in the order the paths were given.

    Several documents always get absolute links so entries from different
    files can be told apart.
    """
    absolute_paths = len(paths) > 1

    def _one(path: str):
        return get_toc(
            path,
            settings,
            fetcher=fetcher,
            renderer=renderer,
            absolute_paths=absolute_paths,
        )

    if serial:
        return [await _one(path) for path in paths]

    # Let every document finish before the shared client is closed.
    results = await asyncio.gather(*(_one(path) for path in paths), return_exceptions=True)
    for result in results:
        if isinstance(result, BaseException):
            raise result
    return results


async def _run(args: argparse.Namespace, settings: Settings) -> list[list[str]]:
    async with build_http_client(settings) as client:
        fetcher = Fetcher(client, max_redirects=settings.fetcher.max_redirects)
        renderer = GitHubRenderer(
            client,
            api_url=settings.github.api_url,
            token=settings.github.token,
        )
        if not args.paths:
            markdown = sys.stdin.read()
            return [await toc_from_markdown(markdown, settings, renderer=renderer)]
        return await collect_tocs(
            args.paths,
            settings,
            fetcher=fetcher,
            renderer=renderer,
            serial=args.serial,
        )


def _print_tocs(tocs: list[list[str]], *, header: bool, footer: bool) -> None:
    if header:
        print("\n".join(TOC_HEADER))
    for toc in tocs:
        for line in toc:
            print(line)
        print()
    if footer:
        print(TOC_FOOTER)


# ---------------------------------------------------------------------------
# Entrypoint
# ---------------------------------------------------------------------------


def main(argv: Sequence[str] | None = None) -> int:
    args = _build_parser().parse_args(argv)
    try:
        settings = Settings(**_settings_overrides(args))
    except ValidationError as exc:
        # Bad values from ghtoc.yaml or GHTOC__ environment variables
        print(f"error: invalid configuration: {exc}", file=sys.stderr)
        return 1
    _setup_logging(settings)

    try:
        tocs = asyncio.run(_run(args, settings))
    except GhTocError as exc:
        log.debug("toc_failed", **exc.log_fields())
        print(f"error: {exc.message}", file=sys.stderr)
        if exc.suggestion:
            print(exc.suggestion, file=sys.stderr)
        return 1

    _print_tocs(
        tocs,
        header=not args.hide_header and len(args.paths) <= 1,
        footer=not args.hide_footer,
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())
