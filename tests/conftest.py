"""Shared test fixtures for the ghtoc test suite."""

from __future__ import annotations

import os
from collections.abc import Callable

import pytest
import structlog

from ghtoc.config import Settings


def _heading_html(level: int, anchor: str, text: str) -> str:
    """Render one heading the way the GitHub Markdown API does."""
    return (
        f"<h{level}>\n"
        f'<a id="user-content-{anchor}" class="anchor" href="#{anchor}" aria-hidden="true">'
        '<span aria-hidden="true" class="octicon octicon-link"></span></a>'
        f"{text}</h{level}>\n"
    )


@pytest.fixture(autouse=True)
def _reset_structlog():
    """Undo the CLI's structlog configuration so its stderr handle does not leak."""
    yield
    structlog.reset_defaults()


@pytest.fixture()
def heading_html() -> Callable[[int, str, str], str]:
    """Factory for a single anchored heading."""
    return _heading_html


@pytest.fixture()
def sample_html() -> str:
    """Three anchored headings at levels 2, 3, 2 with a paragraph in between."""
    return (
        _heading_html(2, "a", "Intro")
        + "<p>Some text.</p>\n"
        + _heading_html(3, "b", "Sub")
        + _heading_html(2, "c", "Next")
    )


@pytest.fixture()
def settings(monkeypatch: pytest.MonkeyPatch) -> Settings:
    """Default settings, isolated from any GHTOC__ variables in the environment."""
    for name in list(os.environ):
        if name.startswith("GHTOC__"):
            monkeypatch.delenv(name)
    return Settings()
