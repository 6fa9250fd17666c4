"""ghtoc: table of contents generator for rendered Markdown documents."""

from __future__ import annotations

import importlib.metadata
import warnings

UNKNOWN_VERSION = "0.0.0+unknown"


def _resolve_version(distribution: str = "ghtoc") -> str:
    """Installed distribution version, or a placeholder when run from a bare checkout."""
    try:
        return importlib.metadata.version(distribution)
    except importlib.metadata.PackageNotFoundError:
        warnings.warn(
            f"No installed metadata for {distribution!r}; reporting version {UNKNOWN_VERSION}.",
            RuntimeWarning,
            stacklevel=2,
        )
        return UNKNOWN_VERSION


__version__ = _resolve_version()
