from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, List, Optional

import numpy as np

from .errors import BFRuntimeError, ErrorKind, make_runtime_error
from .nodes import Decrement, Increment, Input, Loop, MoveLeft, MoveRight, Node, Output

TAPE_LENGTH = 30000

WriteChar = Callable[[str], None]
ReadChar = Callable[[], Optional[str]]


@dataclass
class TapeState:
    length: int = TAPE_LENGTH
    tape: np.ndarray = field(init=False, repr=False)
    pointer: int = 0
    steps: int = 0

    def __post_init__(self) -> None:
        if self.length < 1:
            raise ValueError(f"tape length must be positive, got {self.length}")
        self.tape = np.zeros(self.length, dtype=np.uint8)

    def reset(self) -> None:
        """Zero the tape and pointer so the same state can back another run."""
        self.tape[:] = 0
        self.pointer = 0
        self.steps = 0

    @property
    def cell(self) -> int:
        return int(self.tape[self.pointer])


@dataclass
class _Frame:
    body: List[Node]
    is_loop: bool = False
    index: int = 0


class Interpreter:
    """Tree-walking interpreter over a fixed, bounds-checked byte tape.

    ``write_char`` is called once per executed ``.``; ``read_char`` is called
    for ``,`` until it returns a single 7-bit ASCII character. Anything else it
    returns (``None``, ``''``, longer strings, non-ASCII) is discarded and the
    call is repeated.
    """

    def __init__(self, write_char: WriteChar, read_char: ReadChar, tape_length: int = TAPE_LENGTH):
        self.write_char = write_char
        self.read_char = read_char
        self.state = TapeState(tape_length)
        self.commands = {
            MoveRight: self.increment_pointer,
            MoveLeft: self.decrement_pointer,
            Increment: self.increment_cell,
            Decrement: self.decrement_cell,
            Output: self.add_output,
            Input: self.accept_input,
        }

    def run(self, nodes: List[Node]) -> None:
        """Walk the tree with an explicit frame stack, so nesting depth is not
        limited by the Python call stack."""
        s = self.state
        frames: List[_Frame] = [_Frame(nodes)]
        while frames:
            top = frames[-1]
            if top.index >= len(top.body):
                # end of a loop body: the condition is re-read from the tape
                if top.is_loop and s.cell != 0:
                    top.index = 0
                    s.steps += 1
                    continue
                frames.pop()
                if frames:
                    frames[-1].index += 1
                continue

            node = top.body[top.index]
            if isinstance(node, Loop):
                if s.cell != 0:
                    s.steps += 1
                    frames.append(_Frame(node.body, is_loop=True))
                else:
                    top.index += 1
                continue

            try:
                self.commands[type(node)](node)
            except BFRuntimeError as e:
                e.index = top.index
                e.path = [f.index for f in frames]
                raise
            top.index += 1

    def increment_pointer(self, node: Node) -> None:
        s = self.state
        if s.pointer + 1 >= s.length:
            raise make_runtime_error(kind=ErrorKind.POINTER_OVERFLOW, node=node)
        s.pointer += 1
        s.steps += 1

    def decrement_pointer(self, node: Node) -> None:
        s = self.state
        if s.pointer == 0:
            raise make_runtime_error(kind=ErrorKind.POINTER_OVERFLOW, node=node)
        s.pointer -= 1
        s.steps += 1

    def increment_cell(self, node: Node) -> None:
        s = self.state
        s.tape[s.pointer] = (s.cell + 1) & 0xFF
        s.steps += 1

    def decrement_cell(self, node: Node) -> None:
        s = self.state
        s.tape[s.pointer] = (s.cell - 1) & 0xFF
        s.steps += 1

    def add_output(self, node: Node) -> None:
        value = self.state.cell
        if value > 0x7F:
            raise make_runtime_error(kind=ErrorKind.NON_ASCII_OUTPUT, node=node)
        self.write_char(chr(value))
        self.state.steps += 1

    def accept_input(self, node: Node) -> None:
        while True:
            ch = self.read_char()
            if ch and len(ch) == 1 and ch.isascii():
                break
        self.state.tape[self.state.pointer] = ord(ch)
        self.state.steps += 1
