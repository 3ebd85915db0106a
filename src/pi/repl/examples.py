"""Sample command executors and a two-pane demo.

These are small collaborators showing how a host application plugs into
:class:`~pi.repl.repl.Repl`; none of them is needed by the repl itself.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from pi.repl.executor import ExecutorLike
from pi.repl.keys import parse_key_event
from pi.repl.render import Canvas, Rect, Screen
from pi.repl.repl import Repl
from pi.repl.transcript import Transcript
from pi.repl.utils import get_visible_text, text_lines

if TYPE_CHECKING:
    from pi.repl.terminal import Terminal

PROMPT = ">"


def echo(command: str, transcript: Transcript) -> None:
    """Print every command back on its own line."""
    transcript.append("\n" + command + "\n")


def pretty_echo(command: str, transcript: Transcript) -> None:
    """Echo with a ``>>`` marker, then show a fresh prompt."""
    transcript.append("\n>>" + command + "\n" + PROMPT)


def simple(command: str, transcript: Transcript) -> None:
    """Tiny shell: ``echo <word>`` and ``clear``."""
    parts = command.split()
    name = parts[0] if parts else None
    if name == "echo":
        transcript.append("\n>>" + (parts[1] if len(parts) > 1 else "") + "\n")
    elif name == "clear":
        transcript.truncate(0)
    else:
        transcript.append("\n")
    transcript.append(PROMPT)


class TextListExecutor:
    """Manages a list of texts through ``add`` and ``rm``/``remove``."""

    def __init__(self) -> None:
        self.texts: list[str] = []

    def run_command(self, command: str) -> str:
        parts = command.split()
        name = parts[0] if parts else None
        if name == "add":
            self.texts.append(" ".join(parts[1:]))
            return "\n>> Added text"
        if name in ("rm", "remove"):
            if len(parts) > 1 and parts[1].isdecimal():
                index = int(parts[1])
                if index < len(self.texts):
                    del self.texts[index]
                    return "\n>> Removed text"
            return "\n>> Failed to remove text"
        return ""

    def execute(self, command: str, transcript: Transcript) -> None:
        transcript.append(self.run_command(command))
        transcript.append("\n" + PROMPT)


def draw_widgets(canvas: Canvas, repl: Repl, texts: list[str]) -> tuple[int, int]:
    """Repl on the left, the text list on the right, split 90/10."""
    left, right = canvas.area.split_horizontal([90, 10])
    canvas.draw_vertical_border(left.right - 1, left)

    visible = text_lines(get_visible_text("\n".join(texts), right.height))
    canvas.draw_lines(right, visible[-right.height :] if right.height else [])

    repl_rect = Rect(left.x, left.y, max(0, left.width - 1), left.height)
    return repl.draw(canvas, repl_rect)


def run_widgets(terminal: Terminal, repl: Repl | None = None) -> Repl:
    """Run the two-pane demo on a started *terminal*."""
    if repl is None:
        repl = Repl()
    if not repl.text:
        repl.transcript.append(PROMPT)
    executor = TextListExecutor()
    screen = Screen(terminal)

    while True:
        area = screen.size()
        canvas = Canvas(area.width, area.height)
        cursor = draw_widgets(canvas, repl, executor.texts)
        screen.draw(canvas, cursor)

        key = parse_key_event(terminal.read_sequence())
        if key is None:
            continue
        if repl.feed_key_event(executor, key) == "break":
            return repl


EXECUTORS: dict[str, ExecutorLike] = {
    "echo": echo,
    "pretty": pretty_echo,
    "simple": simple,
}
