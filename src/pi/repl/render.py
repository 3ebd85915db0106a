"""Frame composition and differential drawing.

``Rect`` describes an area of the screen, ``Canvas`` is a grid of cells that
panes draw their lines into, and ``Screen`` writes finished frames to a
``Terminal``, rewriting only the rows that changed since the previous frame.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Sequence

from pi.repl.utils import grapheme_width, graphemes, strip_ansi

if TYPE_CHECKING:
    from pi.repl.terminal import Terminal

# Filler for the second cell of a double-width grapheme
_CONTINUATION = ""


# ---------------------------------------------------------------------------
# Rect
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Rect:
    x: int
    y: int
    width: int
    height: int

    @property
    def left(self) -> int:
        return self.x

    @property
    def top(self) -> int:
        return self.y

    @property
    def right(self) -> int:
        return self.x + self.width

    @property
    def bottom(self) -> int:
        return self.y + self.height

    def split_horizontal(self, percentages: Sequence[int]) -> list[Rect]:
        """Split into side-by-side columns sized by *percentages*.

        The last column absorbs rounding so the columns cover the rect.
        """
        rects: list[Rect] = []
        x = self.x
        for i, pct in enumerate(percentages):
            if i == len(percentages) - 1:
                width = max(0, self.right - x)
            else:
                width = min(self.right - x, self.width * pct // 100)
            rects.append(Rect(x, self.y, width, self.height))
            x += width
        return rects


# ---------------------------------------------------------------------------
# Canvas
# ---------------------------------------------------------------------------


class Canvas:
    """Grid of cells, one grapheme (or continuation) per cell."""

    def __init__(self, width: int, height: int) -> None:
        self.width = max(0, width)
        self.height = max(0, height)
        self._cells: list[list[str]] = [[" "] * self.width for _ in range(self.height)]

    @property
    def area(self) -> Rect:
        return Rect(0, 0, self.width, self.height)

    def draw_lines(self, rect: Rect, lines: Sequence[str]) -> None:
        """Draw *lines* top-down into *rect*, clipping at its edges.

        Escape sequences are dropped; a wide grapheme that does not fit the
        remaining width is not drawn.
        """
        for offset, line in enumerate(lines[: rect.height]):
            row = rect.y + offset
            if not 0 <= row < self.height:
                continue
            col = rect.x
            for g in graphemes(strip_ansi(line)):
                w = grapheme_width(g)
                if w == 0:
                    continue
                if col + w > min(rect.right, self.width):
                    break
                self._cells[row][col] = g
                for extra in range(1, w):
                    self._cells[row][col + extra] = _CONTINUATION
                col += w

    def draw_vertical_border(self, x: int, rect: Rect, char: str = "│") -> None:
        if not 0 <= x < self.width:
            return
        for row in range(max(0, rect.y), min(rect.bottom, self.height)):
            self._cells[row][x] = char

    def lines(self) -> list[str]:
        return ["".join(row) for row in self._cells]


# ---------------------------------------------------------------------------
# Screen
# ---------------------------------------------------------------------------


class Screen:
    """Writes frames to a terminal, redrawing only rows that changed."""

    def __init__(self, terminal: Terminal) -> None:
        self.terminal = terminal
        self._previous_lines: list[str] = []
        self._previous_size: tuple[int, int] = (0, 0)
        self._full_redraw_count = 0

    @property
    def full_redraws(self) -> int:
        return self._full_redraw_count

    def size(self) -> Rect:
        return Rect(0, 0, self.terminal.columns, self.terminal.rows)

    def invalidate(self) -> None:
        """Force the next frame to be drawn in full."""
        self._previous_lines = []
        self._previous_size = (0, 0)

    def draw(self, canvas: Canvas, cursor: tuple[int, int] | None = None) -> None:
        """Write *canvas* and place the hardware cursor at *cursor*.

        *cursor* is an absolute ``(column, row)``; it is clamped onto the
        canvas. ``None`` hides the cursor.
        """
        lines = canvas.lines()
        size = (canvas.width, canvas.height)
        self.terminal.hide_cursor()

        if size != self._previous_size:
            self.terminal.clear_screen()
            self._previous_lines = []
            self._full_redraw_count += 1

        for row, line in enumerate(lines):
            if row < len(self._previous_lines) and self._previous_lines[row] == line:
                continue
            self.terminal.move_to(0, row)
            self.terminal.write(line)

        self._previous_lines = lines
        self._previous_size = size

        if cursor is not None and canvas.width > 0 and canvas.height > 0:
            column = min(max(cursor[0], 0), canvas.width - 1)
            row = min(max(cursor[1], 0), canvas.height - 1)
            self.terminal.move_to(column, row)
            self.terminal.show_cursor()
