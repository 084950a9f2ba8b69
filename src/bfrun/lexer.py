from __future__ import annotations

import enum

from typing import Dict, List


class Token(enum.Enum):
    MOVE_RIGHT = '>'
    MOVE_LEFT = '<'
    INCREMENT = '+'
    DECREMENT = '-'
    OUTPUT = '.'
    INPUT = ','
    LOOP_START = '['
    LOOP_END = ']'


SYMBOLS: Dict[str, Token] = {t.value: t for t in Token}


def tokenize(source: str) -> List[Token]:
    """Scan source text into tokens. Anything that is not one of the eight
    instruction symbols is a comment and is dropped."""
    return [SYMBOLS[ch] for ch in source if ch in SYMBOLS]


def token_offsets(source: str) -> List[int]:
    # index-aligned with tokenize(source)
    return [i for i, ch in enumerate(source) if ch in SYMBOLS]
