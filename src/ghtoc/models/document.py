from __future__ import annotations

from pydantic import BaseModel


class FetchedDocument(BaseModel):
    """Body of a remote document together with its content-type hint."""

    url: str  # Final URL after redirects
    content: str
    content_type: str = ""  # Raw Content-Type header, parameters included

    @property
    def media_type(self) -> str:
        """Content type without parameters: ``'text/plain; charset=utf-8'`` → ``'text/plain'``."""
        return self.content_type.split(";")[0].strip().lower()
