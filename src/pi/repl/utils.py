"""Text utilities: viewport windowing, line splitting and display widths."""

from __future__ import annotations

import re
import unicodedata

import grapheme
import wcwidth as _wcwidth

# CSI sequences such as SGR colours emitted by executors
_ANSI_RE = re.compile(r"\x1b\[[0-9;?]*[A-Za-z]")


# ---------------------------------------------------------------------------
# Viewport windowing
# ---------------------------------------------------------------------------


def get_visible_text(text: str, max_height: int) -> str:
    """Return the trailing part of *text* that fits a viewport.

    The result starts just after the ``max_height + 1``-th line break counted
    from the end, so it holds at most ``max_height + 1`` lines. Text with
    fewer line breaks is returned whole. Only the tail of *text* is scanned.
    """
    end = len(text)
    for _ in range(max(0, max_height) + 1):
        idx = text.rfind("\n", 0, end)
        if idx == -1:
            return text
        end = idx
    return text[end + 1 :]


def text_lines(text: str) -> list[str]:
    """Split *text* into lines.

    A trailing line break does not start a new line and empty text has no
    lines at all. A ``\\r`` before a line break is dropped.
    """
    if not text:
        return []
    lines = text.split("\n")
    if text.endswith("\n"):
        lines.pop()
    return [line[:-1] if line.endswith("\r") else line for line in lines]


# ---------------------------------------------------------------------------
# Display widths
# ---------------------------------------------------------------------------


def graphemes(text: str) -> list[str]:
    """Split *text* into grapheme clusters."""
    return list(grapheme.graphemes(text))


def grapheme_width(g: str) -> int:
    """Terminal column width of a single grapheme cluster."""
    if not g:
        return 0

    first = ord(g[0])
    if len(g) == 1:
        if first < 0x20 or 0x7F <= first <= 0x9F:
            return 0
        return max(_wcwidth.wcwidth(g), 0)

    # Emoji presentation, ZWJ sequences, skin tones and flags
    for ch in g:
        cp = ord(ch)
        if cp in (0xFE0F, 0x200D) or 0x1F3FB <= cp <= 0x1F3FF or 0x1F1E6 <= cp <= 0x1F1FF:
            return 2
    if first >= 0x1F000 or 0x2600 <= first <= 0x27BF:
        return 2

    category = unicodedata.category(g[0])
    if category.startswith("M") or category == "Cf":
        return 0
    return max(_wcwidth.wcwidth(g[0]), 0)


def visible_width(text: str) -> int:
    """Visible terminal width of *text*, ignoring CSI escape sequences."""
    stripped = _ANSI_RE.sub("", text)
    if stripped.isascii() and stripped.isprintable():
        return len(stripped)
    return sum(grapheme_width(g) for g in grapheme.graphemes(stripped))


def strip_ansi(text: str) -> str:
    return _ANSI_RE.sub("", text)
