from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Iterator, List, Optional

from .errors import BFParseError, make_parse_error
from .interpreter import TAPE_LENGTH, Interpreter, ReadChar, WriteChar
from .lexer import tokenize
from .nodes import Node
from .parser import parse


@dataclass(frozen=True)
class RunOptions:
    tape_length: int = TAPE_LENGTH


@dataclass(frozen=True)
class RunResult:
    output: str
    tape: bytes
    pointer: int
    steps: int


def parse_string(source: str) -> List[Node]:
    try:
        return parse(tokenize(source))
    except BFParseError as e:
        raise make_parse_error(kind=e.kind, token_index=e.token_index, source=source) from None


def _reader_for(input_data: str) -> ReadChar:
    chars: Iterator[str] = iter(input_data)

    def read_char() -> str:
        try:
            return next(chars)
        except StopIteration:
            raise EOFError("program requested more input than was supplied") from None

    return read_char


def run_string(
    source: str,
    *,
    options: Optional[RunOptions] = None,
    input_data: str = "",
    write_char: Optional[WriteChar] = None,
    read_char: Optional[ReadChar] = None,
) -> RunResult:
    tape_length = TAPE_LENGTH if options is None else options.tape_length
    nodes = parse_string(source)

    out: List[str] = []

    def collect(ch: str) -> None:
        out.append(ch)
        if write_char is not None:
            write_char(ch)

    reader = read_char if read_char is not None else _reader_for(input_data)
    interp = Interpreter(collect, reader, tape_length=tape_length)
    interp.run(nodes)

    s = interp.state
    return RunResult(output="".join(out), tape=s.tape.tobytes(), pointer=s.pointer, steps=s.steps)


def run_file(path: str | Path, *, options: Optional[RunOptions] = None, encoding: str = "utf-8", **kwargs) -> RunResult:
    p = Path(path)
    return run_string(p.read_text(encoding=encoding), options=options, **kwargs)
