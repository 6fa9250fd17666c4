from __future__ import annotations

from ghtoc.models.document import FetchedDocument
from ghtoc.models.outline import HeadingRecord, OutlineConfig, OutlineEntry

__all__ = [
    # outline
    "HeadingRecord",
    "OutlineConfig",
    "OutlineEntry",
    # document
    "FetchedDocument",
]
