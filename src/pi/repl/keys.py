"""Decoding of raw terminal input into discrete key events.

Understands legacy CSI/SS3 escape sequences (including xterm modifier
parameters), the kitty keyboard protocol's ``CSI u`` form, xterm's
``modifyOtherKeys`` form, control bytes and ESC-prefixed alt keys.
Anything that is not a key press (mouse reports, focus events, key
releases) decodes to ``None``.
"""

from __future__ import annotations

import enum
import re
from dataclasses import dataclass

# ---------------------------------------------------------------------------
# Key codes and modifiers
# ---------------------------------------------------------------------------


class KeyCode:
    """Named key codes. Character keys use the character itself."""

    backspace = "backspace"
    enter = "enter"
    left = "left"
    right = "right"
    up = "up"
    down = "down"
    home = "home"
    end = "end"
    page_up = "pageUp"
    page_down = "pageDown"
    tab = "tab"
    back_tab = "backTab"
    delete = "delete"
    insert = "insert"
    escape = "escape"

    f1 = "f1"
    f2 = "f2"
    f3 = "f3"
    f4 = "f4"
    f5 = "f5"
    f6 = "f6"
    f7 = "f7"
    f8 = "f8"
    f9 = "f9"
    f10 = "f10"
    f11 = "f11"
    f12 = "f12"


class KeyModifiers(enum.IntFlag):
    """Modifier bits, laid out like the xterm modifier parameter minus one."""

    NONE = 0
    SHIFT = 1
    ALT = 2
    CONTROL = 4


# Caps lock and num lock bits reported by the kitty protocol
LOCK_MASK = 64 + 128

_MAX_CODEPOINT = 0x10FFFF


@dataclass(frozen=True)
class KeyEvent:
    """A single key press: a key code plus the modifiers held with it."""

    code: str
    modifiers: KeyModifiers = KeyModifiers.NONE

    @property
    def is_char(self) -> bool:
        return len(self.code) == 1

    def __str__(self) -> str:
        """Key id in the ``ctrl+shift+alt+<key>`` form."""
        prefix = ""
        if KeyModifiers.CONTROL in self.modifiers:
            prefix += "ctrl+"
        if KeyModifiers.SHIFT in self.modifiers:
            prefix += "shift+"
        if KeyModifiers.ALT in self.modifiers:
            prefix += "alt+"
        return prefix + self.code


# ---------------------------------------------------------------------------
# Sequence tables
# ---------------------------------------------------------------------------

# Unmodified legacy sequences
LEGACY_KEY_SEQUENCES: dict[str, str] = {
    "\x1b[A": KeyCode.up,
    "\x1b[B": KeyCode.down,
    "\x1b[C": KeyCode.right,
    "\x1b[D": KeyCode.left,
    "\x1b[H": KeyCode.home,
    "\x1b[F": KeyCode.end,
    "\x1bOA": KeyCode.up,
    "\x1bOB": KeyCode.down,
    "\x1bOC": KeyCode.right,
    "\x1bOD": KeyCode.left,
    "\x1bOH": KeyCode.home,
    "\x1bOF": KeyCode.end,
    "\x1bOP": KeyCode.f1,
    "\x1bOQ": KeyCode.f2,
    "\x1bOR": KeyCode.f3,
    "\x1bOS": KeyCode.f4,
    "\x1b[Z": KeyCode.back_tab,
}

# Final byte of ``CSI 1;<mod> X`` sequences
CSI_LETTER_KEYS: dict[str, str] = {
    "A": KeyCode.up,
    "B": KeyCode.down,
    "C": KeyCode.right,
    "D": KeyCode.left,
    "H": KeyCode.home,
    "F": KeyCode.end,
    "P": KeyCode.f1,
    "Q": KeyCode.f2,
    "R": KeyCode.f3,
    "S": KeyCode.f4,
}

# Number of ``CSI <n>;<mod> ~`` sequences
CSI_TILDE_KEYS: dict[int, str] = {
    1: KeyCode.home,
    2: KeyCode.insert,
    3: KeyCode.delete,
    4: KeyCode.end,
    5: KeyCode.page_up,
    6: KeyCode.page_down,
    7: KeyCode.home,
    8: KeyCode.end,
    11: KeyCode.f1,
    12: KeyCode.f2,
    13: KeyCode.f3,
    14: KeyCode.f4,
    15: KeyCode.f5,
    17: KeyCode.f6,
    18: KeyCode.f7,
    19: KeyCode.f8,
    20: KeyCode.f9,
    21: KeyCode.f10,
    23: KeyCode.f11,
    24: KeyCode.f12,
}

# Kitty protocol codepoints for non-character keys
KITTY_CODEPOINTS: dict[int, str] = {
    27: KeyCode.escape,
    13: KeyCode.enter,
    9: KeyCode.tab,
    127: KeyCode.backspace,
    57414: KeyCode.enter,  # keypad enter
    57417: KeyCode.left,
    57418: KeyCode.right,
    57419: KeyCode.up,
    57420: KeyCode.down,
    57423: KeyCode.home,
    57424: KeyCode.end,
    57425: KeyCode.insert,
    57426: KeyCode.delete,
}

_CSI_LETTER_RE = re.compile(r"^\x1b\[(?:1)?;(\d+)([ABCDHFPQRS])$")
_SS3_MOD_RE = re.compile(r"^\x1bO(\d+)([ABCDHFPQRS])$")
_CSI_TILDE_RE = re.compile(r"^\x1b\[(\d+)(?:;(\d+))?~$")
_KITTY_RE = re.compile(r"^\x1b\[(\d+)(?::\d*)*(?:;(\d+)(?::(\d+))?)?(?:;[\d:]*)?u$")
_MODIFY_OTHER_KEYS_RE = re.compile(r"^\x1b\[27;(\d+);(\d+)~$")
_MOUSE_RE = re.compile(r"^\x1b\[(?:<\d+;\d+;\d+[Mm]|M...|\d+;\d+;\d+M)$", re.DOTALL)


def _modifiers_from_param(param: int) -> KeyModifiers:
    """Convert an xterm/kitty modifier parameter (1 + bits) to flags."""
    bits = (max(param, 1) - 1) & ~LOCK_MASK
    return KeyModifiers(bits & (KeyModifiers.SHIFT | KeyModifiers.ALT | KeyModifiers.CONTROL))


def _char_event(ch: str, modifiers: KeyModifiers = KeyModifiers.NONE) -> KeyEvent:
    """Event for a printable character; uppercase letters imply SHIFT."""
    if ch.isupper():
        modifiers |= KeyModifiers.SHIFT
    return KeyEvent(ch, modifiers)


def _control_byte(ch: str) -> KeyEvent | None:
    cp = ord(ch)
    if ch in ("\r", "\n"):
        return KeyEvent(KeyCode.enter)
    if ch == "\t":
        return KeyEvent(KeyCode.tab)
    if ch in ("\x7f", "\x08"):
        return KeyEvent(KeyCode.backspace)
    if ch == "\x1b":
        return KeyEvent(KeyCode.escape)
    if ch == "\x00":
        return KeyEvent(" ", KeyModifiers.CONTROL)
    if 1 <= cp <= 26:
        return KeyEvent(chr(cp + ord("a") - 1), KeyModifiers.CONTROL)
    if 28 <= cp <= 31:
        return KeyEvent(chr(cp + ord("4") - 28), KeyModifiers.CONTROL)
    return None


# ---------------------------------------------------------------------------
# parse_key_event
# ---------------------------------------------------------------------------


def parse_key_event(data: str) -> KeyEvent | None:  # noqa: C901
    """Decode one complete input sequence into a :class:`KeyEvent`.

    Returns ``None`` for empty input, mouse reports, key releases and
    sequences that do not describe a key press.
    """
    if not data:
        return None

    if _MOUSE_RE.match(data):
        return None

    # --- Plain legacy sequences ---
    named = LEGACY_KEY_SEQUENCES.get(data)
    if named is not None:
        if named == KeyCode.back_tab:
            return KeyEvent(KeyCode.back_tab, KeyModifiers.SHIFT)
        return KeyEvent(named)

    # --- CSI 1;<mod> X and SS3 <mod> X ---
    match = _CSI_LETTER_RE.match(data) or _SS3_MOD_RE.match(data)
    if match:
        modifiers = _modifiers_from_param(int(match.group(1)))
        return KeyEvent(CSI_LETTER_KEYS[match.group(2)], modifiers)

    # --- modifyOtherKeys: CSI 27;<mod>;<keycode> ~ ---
    match = _MODIFY_OTHER_KEYS_RE.match(data)
    if match:
        modifiers = _modifiers_from_param(int(match.group(1)))
        keycode = int(match.group(2))
        named = KITTY_CODEPOINTS.get(keycode)
        if named is not None:
            return KeyEvent(named, modifiers)
        if keycode > _MAX_CODEPOINT:
            return None
        ch = chr(keycode)
        return KeyEvent(ch, modifiers) if ch.isprintable() else None

    # --- CSI <n>[;<mod>] ~ ---
    match = _CSI_TILDE_RE.match(data)
    if match:
        named = CSI_TILDE_KEYS.get(int(match.group(1)))
        if named is None:
            return None
        modifiers = KeyModifiers.NONE
        if match.group(2):
            modifiers = _modifiers_from_param(int(match.group(2)))
        return KeyEvent(named, modifiers)

    # --- Kitty: CSI <codepoint>[;<mod>[:<event>]] u ---
    match = _KITTY_RE.match(data)
    if match:
        event_type = int(match.group(3)) if match.group(3) else 1
        if event_type == 3:
            return None
        modifiers = KeyModifiers.NONE
        if match.group(2):
            modifiers = _modifiers_from_param(int(match.group(2)))
        cp = int(match.group(1))
        named = KITTY_CODEPOINTS.get(cp)
        if named is not None:
            return KeyEvent(named, modifiers)
        if cp > _MAX_CODEPOINT:
            return None
        ch = chr(cp)
        if not ch.isprintable():
            return None
        if modifiers == KeyModifiers.SHIFT:
            return KeyEvent(ch.upper(), modifiers)
        return KeyEvent(ch, modifiers)

    # --- Single characters ---
    if len(data) == 1:
        if data.isprintable():
            return _char_event(data)
        return _control_byte(data)

    # --- Alt + key (ESC prefix) ---
    if len(data) == 2 and data[0] == "\x1b":
        ch = data[1]
        if ch.isprintable():
            return _char_event(ch, KeyModifiers.ALT)
        inner = _control_byte(ch)
        if inner is not None:
            return KeyEvent(inner.code, inner.modifiers | KeyModifiers.ALT)
        return None

    return None
