from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar, Iterator, List, Union


# ---------------- Instruction nodes ----------------
@dataclass(frozen=True)
class MoveRight:
    symbol: ClassVar[str] = '>'

@dataclass(frozen=True)
class MoveLeft:
    symbol: ClassVar[str] = '<'

@dataclass(frozen=True)
class Increment:
    symbol: ClassVar[str] = '+'

@dataclass(frozen=True)
class Decrement:
    symbol: ClassVar[str] = '-'

@dataclass(frozen=True)
class Output:
    symbol: ClassVar[str] = '.'

@dataclass(frozen=True)
class Input:
    symbol: ClassVar[str] = ','

@dataclass(frozen=True)
class Loop:
    body: List["Node"]
    symbol: ClassVar[str] = '['

Node = Union[MoveRight, MoveLeft, Increment, Decrement, Output, Input, Loop]


# ---------------- Emit + inspection ----------------
def emit(nodes: List[Node]) -> str:
    """Render a tree back to canonical source (comments dropped)."""
    out: List[str] = []
    pending: List[Iterator[Node]] = [iter(nodes)]
    while pending:
        for n in pending[-1]:
            if isinstance(n, Loop):
                out.append("[")
                pending.append(iter(n.body))
                break
            out.append(n.symbol)
        else:
            pending.pop()
            if pending:
                out.append("]")
    return "".join(out)


def describe(node: Node) -> str:
    """Short label used in runtime diagnostics, e.g. 'Increment (+)'."""
    if isinstance(node, Loop):
        size = len(node.body)
        return f"Loop [{size} node{'' if size == 1 else 's'}]"
    return f"{type(node).__name__} ({node.symbol})"


def count_loops(nodes: List[Node]) -> int:
    c = 0
    pending = [nodes]
    while pending:
        for n in pending.pop():
            if isinstance(n, Loop):
                c += 1
                pending.append(n.body)
    return c
