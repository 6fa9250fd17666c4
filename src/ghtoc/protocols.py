"""Protocol interfaces for swappable components.

The document pipeline references these protocols, not the concrete
implementations. This allows:
- Tests to use lightweight in-memory implementations
- Other renderers (e.g. a local Markdown library) to be swapped in without
  touching the pipeline
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from ghtoc.models import FetchedDocument


class FetcherProtocol(Protocol):
    """Interface for the remote document fetcher."""

    async def fetch(self, url: str) -> FetchedDocument: ...


class RendererProtocol(Protocol):
    """Interface for the Markdown → HTML renderer."""

    async def render(self, markdown: str) -> str: ...
