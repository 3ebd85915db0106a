"""Command executor interface.

The repl hands every submitted line to an executor together with the live
transcript. Executors are plain objects with an ``execute`` method, or bare
callables adapted by :func:`as_executor`.
"""

from __future__ import annotations

from typing import Callable, Protocol, Union, runtime_checkable

from pi.repl.transcript import Transcript


@runtime_checkable
class CommandExecutor(Protocol):
    """Runs a submitted command.

    *command* is the submitted line, or ``""`` when the user cancelled the
    line with Ctrl+C. Output goes straight into *transcript*. Any exception
    raised here stops the run loop and propagates to its caller.
    """

    def execute(self, command: str, transcript: Transcript) -> None: ...


ExecutorFunc = Callable[[str, Transcript], None]
ExecutorLike = Union[CommandExecutor, ExecutorFunc, None]


class NoopExecutor:
    """Executor that ignores every command."""

    def execute(self, command: str, transcript: Transcript) -> None:
        pass


class FunctionExecutor:
    """Adapts a ``fn(command, transcript)`` callable to :class:`CommandExecutor`."""

    def __init__(self, fn: ExecutorFunc) -> None:
        self._fn = fn

    def execute(self, command: str, transcript: Transcript) -> None:
        self._fn(command, transcript)


def as_executor(executor: ExecutorLike) -> CommandExecutor:
    """Return *executor* as a :class:`CommandExecutor`.

    ``None`` becomes a :class:`NoopExecutor` and callables are wrapped in a
    :class:`FunctionExecutor`.
    """
    if executor is None:
        return NoopExecutor()
    if isinstance(executor, CommandExecutor):
        return executor
    if callable(executor):
        return FunctionExecutor(executor)
    raise TypeError(f"Not a command executor: {executor!r}")
