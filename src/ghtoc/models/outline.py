from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class HeadingRecord(BaseModel):
    """One navigable heading found in rendered markup, in document order."""

    model_config = ConfigDict(frozen=True)

    level: int = Field(ge=1, le=6)
    fragment: str  # Anchor href exactly as rendered (percent-encoded)
    text: str  # Display text, may still contain inline markup


class OutlineConfig(BaseModel):
    """Read-only formatting options for a single outline build."""

    model_config = ConfigDict(frozen=True)

    start_depth: int = Field(default=0, ge=0)
    max_depth: int = Field(default=0, ge=0)  # 0 means unbounded
    absolute_prefix: str | None = None
    escape_text: bool = True
    indent_unit: str = "  "
    debug: bool = False


class OutlineEntry(BaseModel):
    model_config = ConfigDict(frozen=True)

    indent_level: int = Field(ge=0)
    text: str
    link: str

    def render(self, indent_unit: str) -> str:
        return f"{indent_unit * self.indent_level}* [{self.text}]({self.link})"
