"""Configuration for a repl session.

Values come from the ``ReplConfig`` defaults, overridden by ``PI_REPL_*``
environment variables, overridden in turn by command-line flags.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping

from pi.repl.history import DEFAULT_CAPACITY


@dataclass
class ReplConfig:
    """Session configuration."""

    history_size: int = DEFAULT_CAPACITY
    alternate_screen: bool = True
    mouse_capture: bool = True
    # Path that receives a copy of every terminal write, empty to disable
    write_log: str = ""

    def validate(self) -> None:
        if self.history_size < 1:
            raise ValueError(f"history_size must be positive, got {self.history_size}")


def _env_flag(value: str | None, default: bool) -> bool:
    if value is None or value == "":
        return default
    return value != "0"


def load_config(env: Mapping[str, str] | None = None) -> ReplConfig:
    """Build a :class:`ReplConfig` from environment overrides."""
    env = os.environ if env is None else env
    config = ReplConfig()

    raw_size = env.get("PI_REPL_HISTORY_SIZE")
    if raw_size:
        try:
            config.history_size = int(raw_size)
        except ValueError:
            raise ValueError(f"PI_REPL_HISTORY_SIZE must be an integer, got {raw_size!r}") from None

    config.alternate_screen = _env_flag(env.get("PI_REPL_ALT_SCREEN"), config.alternate_screen)
    config.mouse_capture = _env_flag(env.get("PI_REPL_MOUSE"), config.mouse_capture)
    config.write_log = env.get("PI_REPL_WRITE_LOG", config.write_log)

    config.validate()
    return config
