"""Mutable text log shared between the repl and its command executor."""

from __future__ import annotations


class Transcript:
    """Append-only text buffer holding everything shown so far.

    Executors receive the live instance and may append output to it or
    explicitly truncate it (for a ``clear`` command, say).
    """

    def __init__(self, text: str = "") -> None:
        self._text = text

    @property
    def text(self) -> str:
        return self._text

    def append(self, text: str) -> None:
        self._text += text

    def truncate(self, length: int) -> None:
        """Keep only the first *length* characters."""
        self._text = self._text[: max(0, length)]

    def clear(self) -> None:
        self._text = ""

    def endswith(self, suffix: str) -> bool:
        return self._text.endswith(suffix)

    def __len__(self) -> int:
        return len(self._text)

    def __str__(self) -> str:
        return self._text

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Transcript):
            return self._text == other._text
        if isinstance(other, str):
            return self._text == other
        return NotImplemented

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"Transcript({self._text!r})"
