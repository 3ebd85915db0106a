"""Line-editing repl: input line, cursor, history and transcript.

``Repl`` is a single-threaded state machine. The surrounding loop feeds it
one :class:`~pi.repl.keys.KeyEvent` at a time through
:meth:`Repl.feed_key_event`; submitted lines go to a
:class:`~pi.repl.executor.CommandExecutor` together with the transcript.
:meth:`Repl.render` and :meth:`Repl.cursor_pos_in` are the pure pair a
renderer needs to draw a frame.

The edit cursor is stored as a distance from the *end* of the input line:
0 means the cursor sits after the last character.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Literal

from pi.repl.config import ReplConfig
from pi.repl.executor import ExecutorLike, as_executor
from pi.repl.history import History
from pi.repl.keys import KeyCode, KeyEvent, KeyModifiers, parse_key_event
from pi.repl.render import Canvas, Rect, Screen
from pi.repl.transcript import Transcript
from pi.repl.utils import get_visible_text, text_lines, visible_width

if TYPE_CHECKING:
    from pi.repl.terminal import Terminal

logger = logging.getLogger(__name__)

ControlFlow = Literal["continue", "break"]

CANCEL_MARKER = "^C"

_NONE = KeyModifiers.NONE
_SHIFT = KeyModifiers.SHIFT
_CONTROL = KeyModifiers.CONTROL

_QUIT_KEYS = frozenset({"d", "q", "x"})


class Repl:
    """Editable input line with history and a transcript of past output."""

    def __init__(self, history: History | None = None) -> None:
        self._history = history if history is not None else History()
        self._current_input: str = ""
        self._cursor_pos: int = 0
        self._transcript = Transcript()

    @classmethod
    def from_config(cls, config: ReplConfig) -> Repl:
        config.validate()
        return cls(History(config.history_size))

    # -- accessors ----------------------------------------------------------

    @property
    def history(self) -> History:
        return self._history

    @property
    def current_input(self) -> str:
        return self._current_input

    @current_input.setter
    def current_input(self, value: str) -> None:
        self._current_input = value

    @property
    def cursor_pos(self) -> int:
        """Distance of the edit cursor from the end of the input line."""
        return self._cursor_pos

    def set_cursor_pos(self, pos: int) -> None:
        self._cursor_pos = min(max(pos, 0), len(self._current_input))

    @property
    def transcript(self) -> Transcript:
        return self._transcript

    @property
    def text(self) -> str:
        return self._transcript.text

    # -- key handling -------------------------------------------------------

    def feed_key_event(  # noqa: C901
        self, executor: ExecutorLike, key: KeyEvent
    ) -> ControlFlow:
        """Apply one key press.

        Returns ``"break"`` when the user asked to end the session. Executor
        exceptions propagate unchanged.
        """
        executor = as_executor(executor)
        code, mods = key.code, key.modifiers

        if mods == _CONTROL and code in _QUIT_KEYS:
            logger.info("session terminated by %s", key)
            return "break"

        if mods == _CONTROL and code == "c":
            self._transcript.append(self._current_input)
            self._current_input = ""
            self._transcript.append(CANCEL_MARKER)
            self._cursor_pos = 0
            executor.execute("", self._transcript)
        elif code == KeyCode.up and mods == _NONE:
            self._current_input = self._history.prev() or ""
        elif code == KeyCode.down and mods == _NONE:
            self._current_input = self._history.next() or ""
        elif code == KeyCode.right and mods == _NONE:
            self.set_cursor_pos(self._cursor_pos - 1)
        elif code == KeyCode.left and mods == _NONE:
            self.set_cursor_pos(self._cursor_pos + 1)
        elif code == KeyCode.home:
            self.set_cursor_pos(len(self._current_input))
        elif code == KeyCode.end:
            self.set_cursor_pos(0)
        elif key.is_char and mods == _NONE:
            self._insert(self._insert_index(), code)
        elif key.is_char and mods == _SHIFT:
            # Shifted characters are placed counting from the start of the line,
            # each character of a multi-character uppercase form at the same index
            idx = min(self._cursor_pos, len(self._current_input))
            for ch in code.upper():
                self._insert(idx, ch)
        elif code == KeyCode.backspace and mods in (_NONE, _SHIFT):
            self.set_cursor_pos(self._cursor_pos)
            idx = self._insert_index()
            if idx != 0:
                self._remove(idx - 1)
        elif code == KeyCode.delete and mods == _NONE:
            self.set_cursor_pos(self._cursor_pos)
            if self._cursor_pos != 0:
                self._remove(self._insert_index())
                self._cursor_pos -= 1
        elif code == KeyCode.enter and mods in (_NONE, _SHIFT):
            self.submit(executor)
        else:
            logger.debug("ignored key %s", key)

        return "continue"

    def submit(self, executor: ExecutorLike) -> None:
        """Commit the input line and hand it to *executor*."""
        executor = as_executor(executor)
        self.set_cursor_pos(0)
        command = self._current_input
        self._history.push(command)
        self._transcript.append(command)
        self._current_input = ""
        logger.debug("submitting %r", command)
        executor.execute(command, self._transcript)

    def _insert_index(self) -> int:
        """Start-relative position of the edit cursor."""
        return max(0, len(self._current_input) - self._cursor_pos)

    def _insert(self, idx: int, text: str) -> None:
        self._current_input = self._current_input[:idx] + text + self._current_input[idx:]

    def _remove(self, idx: int) -> None:
        self._current_input = self._current_input[:idx] + self._current_input[idx + 1 :]

    # -- rendering ----------------------------------------------------------

    def cursor_pos_in(self, rect: Rect) -> tuple[int, int]:
        """Cursor ``(column, row)`` relative to *rect*.

        The row is clamped to ``rect.height``; the column is not clamped.
        """
        lines = text_lines(self._transcript.text)
        max_height = max(0, rect.height)
        if self._transcript.endswith("\n"):
            column = len(self._current_input) - self._cursor_pos
            row = len(lines)
        else:
            last_line_len = len(lines[-1]) if lines else 0
            column = last_line_len + len(self._current_input) - self._cursor_pos
            row = len(lines) - 1
        return max(0, column), min(max(0, row), max_height)

    def render(self, rect: Rect) -> list[str]:
        """Lines of transcript plus input that are visible in *rect*.

        The window can hold one line more than the rect; the bottom
        ``rect.height`` lines are returned so the input line stays visible.
        """
        text = self._transcript.text + self._current_input
        lines = text_lines(get_visible_text(text, max(0, rect.height)))
        if text.endswith("\n"):
            lines.append("")
        if rect.height <= 0:
            return []
        return lines[-rect.height :]

    def draw(self, canvas: Canvas, rect: Rect) -> tuple[int, int]:
        """Draw into *rect* of *canvas* and return the absolute cursor.

        The row comes from :meth:`cursor_pos_in`; the column is measured in
        terminal cells so the cursor lines up with wide characters.
        """
        canvas.draw_lines(rect, self.render(rect))
        _, row = self.cursor_pos_in(rect)
        column = min(self._cursor_cells(), max(0, rect.width - 1))
        row = min(row, max(0, rect.height - 1))
        return rect.x + column, rect.y + row

    def _cursor_cells(self) -> int:
        """Display width of the text left of the edit cursor on its line."""
        prefix = self._current_input[: self._insert_index()]
        if not self._transcript.endswith("\n"):
            lines = text_lines(self._transcript.text)
            if lines:
                prefix = lines[-1] + prefix
        return visible_width(prefix)

    # -- run loop -----------------------------------------------------------

    def run_on_terminal(self, terminal: Terminal, executor: ExecutorLike = None) -> None:
        """Draw and process key presses until the user quits.

        *terminal* must already be started. Non-key input (mouse reports and
        the like) is skipped.
        """
        command_executor = as_executor(executor)
        screen = Screen(terminal)
        while True:
            area = screen.size()
            canvas = Canvas(area.width, area.height)
            cursor = self.draw(canvas, canvas.area)
            screen.draw(canvas, cursor)

            key = parse_key_event(terminal.read_sequence())
            if key is None:
                continue
            try:
                flow = self.feed_key_event(command_executor, key)
            except Exception:
                logger.exception("executor failed, stopping repl")
                raise
            if flow == "break":
                return

    def run_fullscreen(
        self, executor: ExecutorLike = None, config: ReplConfig | None = None
    ) -> None:
        """Run on the process terminal, restoring it afterwards."""
        from pi.repl.terminal import ProcessTerminal

        config = config or ReplConfig()
        with ProcessTerminal(
            alternate_screen=config.alternate_screen,
            mouse_capture=config.mouse_capture,
            write_log=config.write_log,
        ) as terminal:
            self.run_on_terminal(terminal, executor)

    @classmethod
    def new_run_fullscreen(
        cls, executor: ExecutorLike = None, config: ReplConfig | None = None
    ) -> None:
        """Create a repl from *config* and run it on the process terminal."""
        config = config or ReplConfig()
        cls.from_config(config).run_fullscreen(executor, config)

    # -- diagnostics --------------------------------------------------------

    def debug_state(self) -> dict[str, Any]:
        return {
            "current_input": self._current_input,
            "cursor_pos": self._cursor_pos,
            "history": list(self._history),
            "history_cursor": self._history.cursor,
            "text": self._transcript.text,
        }

    def __repr__(self) -> str:
        return (
            f"Repl(current_input={self._current_input!r}, cursor_pos={self._cursor_pos}, "
            f"history={self._history!r}, text={self._transcript.text!r})"
        )
