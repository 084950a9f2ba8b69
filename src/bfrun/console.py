from __future__ import annotations

import os
import select
import sys

from typing import Optional, TextIO

_ESC = 0x1B
_CTRL_C = 0x03
_CTRL_D = 0x04


def write_stdout(ch: str) -> None:
    sys.stdout.write(ch)
    sys.stdout.flush()


def read_stdin() -> str:
    ch = sys.stdin.read(1)
    if not ch:
        raise EOFError("end of input")
    return ch


class RawKeyReader:
    """Read one key press at a time with the terminal in raw mode (POSIX only).

    Only printable ASCII keys and Enter (delivered as ``'\\n'``) are returned.
    Escape sequences from arrow, function and Alt- keys are consumed whole,
    and other control or non-ASCII bytes are skipped. Ctrl-C raises
    ``KeyboardInterrupt`` and Ctrl-D raises ``EOFError``, since raw mode no
    longer turns them into signals. The previous terminal settings are
    restored after every key.
    """

    def __init__(self, stream: Optional[TextIO] = None, escape_timeout: float = 0.05):
        self.stream = stream if stream is not None else sys.stdin
        self.escape_timeout = escape_timeout

    def __call__(self) -> str:
        import termios
        import tty

        fd = self.stream.fileno()
        old_settings = termios.tcgetattr(fd)
        try:
            tty.setraw(fd)
            while True:
                b = self._read_byte(fd)
                if b == _ESC:
                    self._skip_escape_sequence(fd)
                elif b == _CTRL_C:
                    raise KeyboardInterrupt
                elif b == _CTRL_D:
                    raise EOFError("end of input")
                elif b in (0x0D, 0x0A):
                    return '\n'
                elif 0x20 <= b < 0x7F:
                    return chr(b)
        finally:
            termios.tcsetattr(fd, termios.TCSADRAIN, old_settings)

    @staticmethod
    def _read_byte(fd: int) -> int:
        data = os.read(fd, 1)
        if not data:
            raise EOFError("end of input")
        return data[0]

    def _pending(self, fd: int) -> bool:
        return bool(select.select([fd], [], [], self.escape_timeout)[0])

    def _skip_escape_sequence(self, fd: int) -> None:
        # a lone ESC (the Escape key itself) has nothing following it
        if not self._pending(fd):
            return
        intro = self._read_byte(fd)
        if intro == ord('['):
            # CSI: parameters up to a final byte in 0x40..0x7E
            while self._pending(fd):
                if 0x40 <= self._read_byte(fd) <= 0x7E:
                    return
        elif intro == ord('O'):
            # SS3: exactly one more byte (F1-F4, keypad)
            if self._pending(fd):
                self._read_byte(fd)
