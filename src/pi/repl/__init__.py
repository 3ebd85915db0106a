"""pi-repl: embeddable line editor with history for terminal applications."""

# Configuration
from pi.repl.config import ReplConfig, load_config

# Command executors
from pi.repl.executor import (
    CommandExecutor,
    FunctionExecutor,
    NoopExecutor,
    as_executor,
)

# History
from pi.repl.history import History

# Keyboard input decoding
from pi.repl.keys import KeyCode, KeyEvent, KeyModifiers, parse_key_event

# Rendering
from pi.repl.render import Canvas, Rect, Screen

# Core repl
from pi.repl.repl import CANCEL_MARKER, ControlFlow, Repl

# Input buffering
from pi.repl.stdin_buffer import StdinBuffer

# Terminal interface and implementations
from pi.repl.terminal import ProcessTerminal, Terminal

# Transcript
from pi.repl.transcript import Transcript

# Utilities
from pi.repl.utils import get_visible_text, text_lines, visible_width

__all__ = [
    # Config
    "ReplConfig",
    "load_config",
    # Executors
    "CommandExecutor",
    "FunctionExecutor",
    "NoopExecutor",
    "as_executor",
    # History
    "History",
    # Keys
    "KeyCode",
    "KeyEvent",
    "KeyModifiers",
    "parse_key_event",
    # Rendering
    "Canvas",
    "Rect",
    "Screen",
    # Repl
    "CANCEL_MARKER",
    "ControlFlow",
    "Repl",
    # Stdin buffer
    "StdinBuffer",
    # Terminal
    "ProcessTerminal",
    "Terminal",
    # Transcript
    "Transcript",
    # Utilities
    "get_visible_text",
    "text_lines",
    "visible_width",
]
