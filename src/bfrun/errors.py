from __future__ import annotations

import enum

from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from .lexer import token_offsets
from .nodes import Node


class ErrorKind(enum.Enum):
    MISSING_LOOP_OPENING = "Parser Error: Missing Loop Opening"
    MISSING_LOOP_DELIMITER = "Parser Error: Missing Loop Delimiter"
    POINTER_OVERFLOW = "Runtime Error: Memory Pointer Overflow"
    NON_ASCII_OUTPUT = "Runtime Error: Tried To Output Non-Ascii Value"

    @property
    def message(self) -> str:
        return self.value


_HINTS = {
    ErrorKind.MISSING_LOOP_OPENING: 'This "]" has no matching "[" before it.',
    ErrorKind.MISSING_LOOP_DELIMITER: 'This "[" is never closed. Add the missing "]".',
}


def _locate(source: str, token_index: int) -> Tuple[int, int]:
    """1-based (line, column) of the token_index-th instruction symbol."""
    offsets = token_offsets(source)
    if not offsets:
        return 1, 1
    off = offsets[min(token_index, len(offsets) - 1)]
    line_start = source.rfind('\n', 0, off) + 1
    return source.count('\n', 0, off) + 1, off - line_start + 1


def _excerpt(source: str, line: int, column: int, *, context: int = 2) -> str:
    # numbered lines around the error, a caret under the offending bracket
    lines = source.split('\n')
    first = max(1, line - context)
    last = min(len(lines), line + context)

    out: List[str] = []
    for n in range(first, last + 1):
        marker = '>' if n == line else ' '
        out.append(f"{marker} {n:4d} | {lines[n - 1]}")
        if n == line:
            out.append(f"{'':6} | {' ' * (column - 1)}^")
    return "\n".join(out)


@dataclass
class BFError(Exception):
    message: str
    kind: ErrorKind

    def __str__(self) -> str:
        return self.message


@dataclass
class BFParseError(BFError):
    token_index: int
    line: Optional[int] = None
    column: Optional[int] = None
    context: Optional[str] = None


@dataclass
class BFRuntimeError(BFError):
    node: Node
    index: Optional[int] = None
    # indices from the root sequence down to the failing node
    path: List[int] = field(default_factory=list)


def make_parse_error(*, kind: ErrorKind, token_index: int, source: Optional[str] = None) -> BFParseError:
    if source is None:
        return BFParseError(
            message=f"{kind.message} (token {token_index})",
            kind=kind,
            token_index=token_index,
        )
    line, column = _locate(source, token_index)
    ctx = _excerpt(source, line, column)
    hint = _HINTS.get(kind)
    hint_block = f"\nHint: {hint}" if hint else ""
    return BFParseError(
        message=f"{kind.message} (line {line}, column {column})\n{ctx}{hint_block}",
        kind=kind,
        token_index=token_index,
        line=line,
        column=column,
        context=ctx,
    )


def make_runtime_error(*, kind: ErrorKind, node: Node) -> BFRuntimeError:
    return BFRuntimeError(message=kind.message, kind=kind, node=node)
