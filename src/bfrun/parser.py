from __future__ import annotations

from typing import Dict, List, Type

from .errors import ErrorKind, make_parse_error
from .lexer import Token
from .nodes import Decrement, Increment, Input, Loop, MoveLeft, MoveRight, Node, Output

_DIRECT: Dict[Token, Type[Node]] = {
    Token.MOVE_RIGHT: MoveRight,
    Token.MOVE_LEFT: MoveLeft,
    Token.INCREMENT: Increment,
    Token.DECREMENT: Decrement,
    Token.OUTPUT: Output,
    Token.INPUT: Input,
}


def parse(tokens: List[Token]) -> List[Node]:
    """Build the instruction tree from a token stream.

    Brackets are matched last-opened, first-closed. A stray ``]`` fails as soon
    as it is seen; an unclosed ``[`` fails once the stream is exhausted, and the
    error points at the innermost one still open. No partial tree is returned.
    """
    stack: List[List[Node]] = [[]]
    opened: List[int] = []  # token index of each open '['

    for i, tok in enumerate(tokens):
        if tok is Token.LOOP_START:
            body: List[Node] = []
            stack[-1].append(Loop(body))
            stack.append(body)
            opened.append(i)
        elif tok is Token.LOOP_END:
            if len(stack) == 1:
                raise make_parse_error(kind=ErrorKind.MISSING_LOOP_OPENING, token_index=i)
            stack.pop()
            opened.pop()
        else:
            stack[-1].append(_DIRECT[tok]())

    if len(stack) != 1:
        raise make_parse_error(kind=ErrorKind.MISSING_LOOP_DELIMITER, token_index=opened[-1])
    return stack[0]
