"""Tests for pi.repl.stdin_buffer.StdinBuffer."""

from __future__ import annotations

import pytest

from pi.repl.stdin_buffer import StdinBuffer


@pytest.fixture()
def buffer() -> StdinBuffer:
    return StdinBuffer()


class TestPlainInput:
    """Text without escape sequences is split per character."""

    def test_single_char(self, buffer: StdinBuffer) -> None:
        assert buffer.process("a") == ["a"]
        assert not buffer.pending

    def test_multiple_chars(self, buffer: StdinBuffer) -> None:
        assert buffer.process("héllo") == ["h", "é", "l", "l", "o"]

    def test_control_bytes(self, buffer: StdinBuffer) -> None:
        assert buffer.process("\x03\r") == ["\x03", "\r"]

    def test_empty_chunk(self, buffer: StdinBuffer) -> None:
        assert buffer.process("") == []


class TestEscapeSequences:
    """Complete sequences come out whole."""

    @pytest.mark.parametrize(
        "seq",
        [
            "\x1b[A",
            "\x1b[1;5C",
            "\x1b[3~",
            "\x1bOA",
            "\x1bO5A",
            "\x1b[97;5u",
            "\x1b[<0;10;5M",
            "\x1b[M !!",
        ],
    )
    def test_complete_sequence(self, buffer: StdinBuffer, seq: str) -> None:
        assert buffer.process(seq) == [seq]
        assert not buffer.pending

    def test_sequences_mixed_with_text(self, buffer: StdinBuffer) -> None:
        assert buffer.process("a\x1b[Ab\x1b[B") == ["a", "\x1b[A", "b", "\x1b[B"]

    def test_meta_key(self, buffer: StdinBuffer) -> None:
        assert buffer.process("\x1bx") == ["\x1bx"]

    def test_osc_terminated_by_bel(self, buffer: StdinBuffer) -> None:
        assert buffer.process("\x1b]0;title\x07") == ["\x1b]0;title\x07"]

    def test_osc_terminated_by_st(self, buffer: StdinBuffer) -> None:
        assert buffer.process("\x1b]0;title\x1b\\") == ["\x1b]0;title\x1b\\"]

    def test_bracketed_paste_markers(self, buffer: StdinBuffer) -> None:
        assert buffer.process("\x1b[200~hi\x1b[201~") == ["\x1b[200~", "h", "i", "\x1b[201~"]


class TestPartialSequences:
    """Split escape sequences are held until complete."""

    def test_split_csi(self, buffer: StdinBuffer) -> None:
        assert buffer.process("\x1b[") == []
        assert buffer.pending
        assert buffer.process("A") == ["\x1b[A"]
        assert not buffer.pending

    def test_text_before_partial_is_released(self, buffer: StdinBuffer) -> None:
        assert buffer.process("ab\x1b[1;") == ["a", "b"]
        assert buffer.process("5D") == ["\x1b[1;5D"]

    def test_split_sgr_mouse(self, buffer: StdinBuffer) -> None:
        assert buffer.process("\x1b[<35;2") == []
        assert buffer.process("0;5m") == ["\x1b[<35;20;5m"]

    def test_split_x10_mouse(self, buffer: StdinBuffer) -> None:
        assert buffer.process("\x1b[M ") == []
        assert buffer.process("!!") == ["\x1b[M !!"]

    def test_lone_escape_waits_for_flush(self, buffer: StdinBuffer) -> None:
        assert buffer.process("\x1b") == []
        assert buffer.pending
        assert buffer.flush() == ["\x1b"]
        assert not buffer.pending

    def test_flush_empty(self, buffer: StdinBuffer) -> None:
        assert buffer.flush() == []

    def test_clear_discards_pending(self, buffer: StdinBuffer) -> None:
        buffer.process("\x1b[")
        buffer.clear()
        assert not buffer.pending
        assert buffer.process("A") == ["A"]
