"""String helpers for turning rendered heading fragments into Markdown list items."""

from __future__ import annotations

import html
import re
from urllib.parse import unquote

_TAG_RE = re.compile(r"<[^>]*>")
_NOISE_RE = re.compile(r"[\n\r\t]")

# Backslash must come first so the escapes added for the others are not doubled.
_MARKDOWN_SPECIAL_CHARS = (
    "\\", "`", "*", "_", "{", "}", "[", "]", "(", ")", "#", "+", "-", ".", "!",
)


def remove_noise(value: str) -> str:
    """Drop the newline, carriage-return and tab characters the renderer leaves behind."""
    return _NOISE_RE.sub("", value)


def strip_tags(value: str) -> str:
    """Remove inline markup such as ``<code>`` or ``<em>`` and keep the text inside."""
    return _TAG_RE.sub("", value)


def clean_text(value: str) -> str:
    """Reduce a heading's inner HTML to plain display text.

    Tags are removed before entities are decoded, so an escaped ``&lt;b&gt;``
    in the heading survives as the literal text ``<b>``.
    """
    return html.unescape(strip_tags(remove_noise(value))).strip()


def escape_markdown(value: str) -> str:
    """Backslash-escape characters that would break ``* [text](link)`` rendering."""
    for char in _MARKDOWN_SPECIAL_CHARS:
        value = value.replace(char, "\\" + char)
    return value


def unescape_fragment(fragment: str) -> str:
    """Percent-decode a link fragment, returning it untouched if it is not valid UTF-8."""
    try:
        return unquote(remove_noise(fragment), errors="strict")
    except UnicodeDecodeError:
        return remove_noise(fragment)
