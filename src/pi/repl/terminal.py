"""Terminal abstraction for raw-mode stdin/stdout interaction.

Provides a ``Terminal`` protocol and a concrete ``ProcessTerminal``
implementation that manages raw mode, the alternate screen, mouse capture
and cursor placement via ANSI escape sequences, and reads input one
complete sequence at a time.
"""

from __future__ import annotations

import codecs
import logging
import os
import select
import sys
import termios
import tty
from typing import Protocol

from pi.repl.stdin_buffer import StdinBuffer

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# ANSI escape constants
# ---------------------------------------------------------------------------

_ALT_SCREEN_ENTER = "\x1b[?1049h"
_ALT_SCREEN_LEAVE = "\x1b[?1049l"

# Normal + button-event tracking, urxvt and SGR extended coordinates
_MOUSE_CAPTURE_ENABLE = "\x1b[?1000h\x1b[?1002h\x1b[?1015h\x1b[?1006h"
_MOUSE_CAPTURE_DISABLE = "\x1b[?1006l\x1b[?1015l\x1b[?1002l\x1b[?1000l"

_HIDE_CURSOR = "\x1b[?25l"
_SHOW_CURSOR = "\x1b[?25h"
_CLEAR_SCREEN = "\x1b[2J\x1b[H"
_MOVE_TO_FMT = "\x1b[{};{}H"

# Seconds to wait for the rest of an escape sequence before treating the
# pending input as a lone ESC
_ESC_TIMEOUT = 0.01


# ---------------------------------------------------------------------------
# Terminal protocol
# ---------------------------------------------------------------------------


class Terminal(Protocol):
    """Interface for terminal I/O operations used by the repl."""

    def start(self) -> None: ...

    def stop(self) -> None: ...

    def read_sequence(self) -> str: ...

    def write(self, data: str) -> None: ...

    @property
    def columns(self) -> int: ...

    @property
    def rows(self) -> int: ...

    def move_to(self, column: int, row: int) -> None: ...

    def hide_cursor(self) -> None: ...

    def show_cursor(self) -> None: ...

    def clear_screen(self) -> None: ...


# ---------------------------------------------------------------------------
# ProcessTerminal implementation
# ---------------------------------------------------------------------------


class ProcessTerminal:
    """Terminal backed by ``sys.stdin``/``sys.stdout``.

    ``start`` saves the terminal attributes and switches to raw mode, the
    alternate screen and mouse capture; ``stop`` restores all of it. The
    instance is a context manager that calls them on entry and exit, so the
    terminal is restored even when the run loop raises.
    """

    def __init__(
        self,
        *,
        alternate_screen: bool = True,
        mouse_capture: bool = True,
        write_log: str | None = None,
    ) -> None:
        self._alternate_screen = alternate_screen
        self._mouse_capture = mouse_capture
        self._write_log_path: str = (
            write_log if write_log is not None else os.environ.get("PI_REPL_WRITE_LOG", "")
        )
        self._original_termios: list | None = None
        self._stdin_buffer = StdinBuffer()
        self._pending: list[str] = []
        self._decoder = codecs.getincrementaldecoder("utf-8")(errors="replace")

    # -- properties ---------------------------------------------------------

    @property
    def columns(self) -> int:
        try:
            return os.get_terminal_size(sys.stdout.fileno()).columns
        except (ValueError, OSError):
            return 80

    @property
    def rows(self) -> int:
        try:
            return os.get_terminal_size(sys.stdout.fileno()).lines
        except (ValueError, OSError):
            return 24

    @property
    def started(self) -> bool:
        return self._original_termios is not None

    # -- start / stop -------------------------------------------------------

    def start(self) -> None:
        """Enable raw mode, the alternate screen and mouse capture."""
        fd = sys.stdin.fileno()
        self._original_termios = termios.tcgetattr(fd)
        tty.setraw(fd)

        if self._alternate_screen:
            self._raw_write(_ALT_SCREEN_ENTER)
        if self._mouse_capture:
            self._raw_write(_MOUSE_CAPTURE_ENABLE)
        logger.debug(
            "terminal started (alternate_screen=%s, mouse_capture=%s)",
            self._alternate_screen,
            self._mouse_capture,
        )

    def stop(self) -> None:
        """Restore the terminal state saved by :meth:`start`."""
        if self._original_termios is None:
            return

        if self._mouse_capture:
            self._raw_write(_MOUSE_CAPTURE_DISABLE)
        if self._alternate_screen:
            self._raw_write(_ALT_SCREEN_LEAVE)
        self._raw_write(_SHOW_CURSOR)

        termios.tcsetattr(sys.stdin.fileno(), termios.TCSADRAIN, self._original_termios)
        self._original_termios = None
        self._stdin_buffer.clear()
        self._pending.clear()
        logger.debug("terminal stopped")

    def __enter__(self) -> ProcessTerminal:
        self.start()
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.stop()

    # -- input --------------------------------------------------------------

    def read_sequence(self) -> str:
        """Block until one complete input sequence is available.

        Raises ``EOFError`` when stdin is closed.
        """
        fd = sys.stdin.fileno()
        while not self._pending:
            if self._stdin_buffer.pending:
                readable, _, _ = select.select([fd], [], [], _ESC_TIMEOUT)
                if not readable:
                    self._pending.extend(self._stdin_buffer.flush())
                    continue

            raw = os.read(fd, 4096)
            if not raw:
                raise EOFError("stdin closed")
            data = self._decoder.decode(raw)
            self._pending.extend(self._stdin_buffer.process(data))

        return self._pending.pop(0)

    # -- output -------------------------------------------------------------

    def write(self, data: str) -> None:
        """Write data to stdout and optionally to the write log."""
        self._raw_write(data)

        if self._write_log_path:
            with open(self._write_log_path, "a") as f:
                f.write(data)

    def move_to(self, column: int, row: int) -> None:
        """Place the cursor at zero-based *column*, *row*."""
        self._raw_write(_MOVE_TO_FMT.format(row + 1, column + 1))

    def hide_cursor(self) -> None:
        self._raw_write(_HIDE_CURSOR)

    def show_cursor(self) -> None:
        self._raw_write(_SHOW_CURSOR)

    def clear_screen(self) -> None:
        self._raw_write(_CLEAR_SCREEN)

    def _raw_write(self, data: str) -> None:
        sys.stdout.write(data)
        sys.stdout.flush()
