"""StdinBuffer splits raw input chunks into complete sequences.

Input read from the terminal can arrive in partial chunks, so an escape
sequence may be split across reads. Without buffering, the halves would be
misread as separate key presses.
"""

from __future__ import annotations

import re

ESC = "\x1b"

_SGR_MOUSE_RE = re.compile(r"^<\d+;\d+;\d+[Mm]$")


def _is_complete_sequence(data: str) -> str:
    """Classify *data* as 'complete', 'incomplete' or 'not-escape'."""
    if not data.startswith(ESC):
        return "not-escape"

    if len(data) == 1:
        return "incomplete"

    introducer = data[1]

    if introducer == "[":
        # X10 mouse report: ESC [ M <button> <x> <y>
        if data.startswith(f"{ESC}[M"):
            return "complete" if len(data) >= 6 else "incomplete"
        return _is_complete_csi_sequence(data)

    # OSC, DCS and APC end with ST (ESC \); OSC may also end with BEL
    if introducer == "]":
        if data.endswith(f"{ESC}\\") or data.endswith("\x07"):
            return "complete"
        return "incomplete"
    if introducer in ("P", "_"):
        return "complete" if data.endswith(f"{ESC}\\") else "incomplete"

    # SS3: ESC O <final>, optionally with a modifier digit in between
    if introducer == "O":
        if len(data) < 3:
            return "incomplete"
        return "incomplete" if data[-1].isdigit() else "complete"

    # Meta key: ESC followed by a single character
    return "complete"


def _is_complete_csi_sequence(data: str) -> str:
    if len(data) < 3:
        return "incomplete"

    payload = data[2:]
    final = payload[-1]
    if not 0x40 <= ord(final) <= 0x7E:
        return "incomplete"

    if payload.startswith("<"):
        return "complete" if _SGR_MOUSE_RE.match(payload) else "incomplete"
    return "complete"


def _extract_complete_sequences(buffer: str) -> tuple[list[str], str]:
    """Split *buffer* into complete sequences.

    Returns ``(sequences, remainder)`` where *remainder* is a trailing
    escape sequence that still needs more input.
    """
    sequences: list[str] = []
    pos = 0

    while pos < len(buffer):
        if buffer[pos] != ESC:
            sequences.append(buffer[pos])
            pos += 1
            continue

        end = pos + 1
        while True:
            if end > len(buffer):
                return sequences, buffer[pos:]
            candidate = buffer[pos:end]
            if _is_complete_sequence(candidate) == "complete":
                sequences.append(candidate)
                pos = end
                break
            end += 1

    return sequences, ""


class StdinBuffer:
    """Accumulates raw input and hands back complete sequences.

    ``process`` returns every sequence completed by the new chunk. A partial
    escape sequence is kept until more input arrives or ``flush`` is called
    (the terminal calls it after an idle timeout, which is how a lone ESC
    key press is told apart from the start of a sequence).
    """

    def __init__(self) -> None:
        self._buffer: str = ""

    def process(self, data: str) -> list[str]:
        """Feed *data* and return the sequences it completes."""
        self._buffer += data
        sequences, self._buffer = _extract_complete_sequences(self._buffer)
        return sequences

    def flush(self) -> list[str]:
        """Release whatever is pending as a single sequence."""
        if not self._buffer:
            return []
        sequences = [self._buffer]
        self._buffer = ""
        return sequences

    def clear(self) -> None:
        self._buffer = ""

    @property
    def pending(self) -> bool:
        return bool(self._buffer)
