"""In-memory stand-in for ``pi.repl.terminal.ProcessTerminal``.

``VirtualTerminal`` records everything the repl writes and serves
``read_sequence`` from a queue of raw input sequences, so run loops can be
driven start to finish without a tty.
"""

from __future__ import annotations

from typing import Iterable


class VirtualTerminal:
    """Scripted terminal with a fixed size.

    The size can be changed between frames through the ``rows`` and
    ``columns`` setters to exercise resize handling.
    """

    def __init__(self, rows: int = 24, columns: int = 80) -> None:
        self._rows = rows
        self._columns = columns
        self._buffer: list[str] = []
        self._input: list[str] = []
        self._started = False
        self._cursor_visible = True
        self.cursor: tuple[int, int] = (0, 0)

    # -- size and state --------------------------------------------------------

    @property
    def rows(self) -> int:
        return self._rows

    @rows.setter
    def rows(self, value: int) -> None:
        self._rows = value

    @property
    def columns(self) -> int:
        return self._columns

    @columns.setter
    def columns(self, value: int) -> None:
        self._columns = value

    @property
    def started(self) -> bool:
        return self._started

    @property
    def cursor_visible(self) -> bool:
        return self._cursor_visible

    # -- lifecycle -------------------------------------------------------------

    def start(self) -> None:
        self._started = True

    def stop(self) -> None:
        self._started = False

    # -- input -----------------------------------------------------------------

    def read_sequence(self) -> str:
        """Pop the next scripted sequence.

        Raises ``EOFError`` once the script is exhausted, like a closed stdin.
        """
        if not self._input:
            raise EOFError("no more scripted input")
        return self._input.pop(0)

    # -- output ----------------------------------------------------------------

    def write(self, data: str) -> None:
        """Record *data* as written."""
        self._buffer.append(data)

    def move_to(self, column: int, row: int) -> None:
        self.cursor = (column, row)
        self.write(f"\x1b[{row + 1};{column + 1}H")

    def hide_cursor(self) -> None:
        self._cursor_visible = False
        self.write("\x1b[?25l")

    def show_cursor(self) -> None:
        self._cursor_visible = True
        self.write("\x1b[?25h")

    def clear_screen(self) -> None:
        self.write("\x1b[2J\x1b[H")

    # -- scripting and inspection ----------------------------------------------

    def script(self, sequences: Iterable[str]) -> None:
        """Queue raw input sequences for ``read_sequence``."""
        self._input.extend(sequences)

    def type_text(self, text: str) -> None:
        """Queue every character of *text* as its own sequence."""
        self._input.extend(text)

    @property
    def output(self) -> str:
        """All recorded output, concatenated."""
        return "".join(self._buffer)

    def clear_buffer(self) -> None:
        """Forget recorded output, typically between frames."""
        self._buffer.clear()
