"""Configuration loading.

Settings are loaded in priority order (highest first):
  1. Command-line flags     (passed to Settings(...) by cli.py)
  2. Environment variables  (GHTOC__TOC__DEPTH=3, GHTOC__GITHUB__TOKEN=...)
  3. ghtoc.yaml             (searched in cwd, then platform config dir)
  4. Hardcoded defaults

The config file is optional; all fields have sensible defaults.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Literal

import platformdirs
from pydantic import BaseModel, Field
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
    YamlConfigSettingsSource,
)


def _find_config_file() -> str | None:
    """Return the path of the first ghtoc.yaml found, or None."""
    candidates = [
        Path("ghtoc.yaml"),
        Path(platformdirs.user_config_dir("ghtoc")) / "ghtoc.yaml",
    ]
    for path in candidates:
        if path.exists():
            return str(path)
    return None


class TocSettings(BaseModel):
    start_depth: int = Field(default=0, ge=0)
    depth: int = Field(default=0, ge=0)  # 0 means no lower bound
    indent: int = Field(default=2, ge=0)  # spaces per nesting level
    escape: bool = True
    absolute_paths: bool = False


class GitHubSettings(BaseModel):
    api_url: str = "https://api.github.com"
    token: str | None = None


class FetcherSettings(BaseModel):
    timeout_seconds: float = 30.0
    max_redirects: int = Field(default=3, ge=0)
    user_agent: str = "ghtoc/1.0"


class LoggingSettings(BaseModel):
    level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "WARNING"
    format: Literal["json", "text"] = "text"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        # Double-underscore separates nesting: GHTOC__TOC__START_DEPTH=1
        env_prefix="GHTOC__",
        env_nested_delimiter="__",
        yaml_file=_find_config_file(),
        yaml_file_encoding="utf-8",
    )

    toc: TocSettings = TocSettings()
    github: GitHubSettings = GitHubSettings()
    fetcher: FetcherSettings = FetcherSettings()
    logging: LoggingSettings = LoggingSettings()
    debug: bool = False

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
        **kwargs: Any,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        return (
            init_settings,  # Command-line flags (highest priority)
            env_settings,  # Environment variables
            YamlConfigSettingsSource(settings_cls),  # YAML file
            # dotenv and file secrets intentionally excluded
        )
