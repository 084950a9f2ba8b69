#!/usr/bin/env python3
"""
Parser: tree shape and bracket validation.
"""

import sys
import os
sys.path.append(os.path.join(os.path.dirname(__file__), '..', 'src'))

import pytest

from bfrun.errors import BFParseError, ErrorKind
from bfrun.lexer import tokenize
from bfrun.nodes import Decrement, Increment, Input, Loop, MoveLeft, MoveRight, Output, count_loops, describe, emit
from bfrun.parser import parse


def _parse(source):
    return parse(tokenize(source))


def test_direct_instructions():
    assert _parse("><+-.,") == [MoveRight(), MoveLeft(), Increment(), Decrement(), Output(), Input()]


def test_loop_owns_its_body():
    tree = _parse("+[->+<]")
    assert len(tree) == 2
    assert isinstance(tree[1], Loop)
    assert tree[1].body == [Decrement(), MoveRight(), Increment(), MoveLeft()]


def test_nested_loop_depths():
    tree = _parse("[[]][]")
    assert len(tree) == 2
    outer, second = tree
    assert isinstance(outer, Loop) and isinstance(second, Loop)
    assert len(outer.body) == 1 and isinstance(outer.body[0], Loop)
    assert outer.body[0].body == []
    assert second.body == []
    assert count_loops(tree) == 3


def test_loop_count_matches_bracket_pairs():
    source = "+[>[-]<-]>[.]"
    assert count_loops(_parse(source)) == source.count("[")


def test_emit_reproduces_filtered_source():
    source = "cell0 ++ [ > +++ < - ] print it: ."
    assert emit(_parse(source)) == "++[>+++<-]."


def test_unmatched_close():
    with pytest.raises(BFParseError) as exc:
        _parse("]")
    assert exc.value.kind is ErrorKind.MISSING_LOOP_OPENING
    assert exc.value.token_index == 0


def test_unmatched_close_after_balanced_loop():
    with pytest.raises(BFParseError) as exc:
        _parse("[]]")
    assert exc.value.kind is ErrorKind.MISSING_LOOP_OPENING
    assert exc.value.token_index == 2


def test_unterminated_loop():
    with pytest.raises(BFParseError) as exc:
        _parse("+[+")
    assert exc.value.kind is ErrorKind.MISSING_LOOP_DELIMITER
    assert exc.value.token_index == 1


def test_unterminated_reports_innermost_open_bracket():
    with pytest.raises(BFParseError) as exc:
        _parse("[[]+[")
    assert exc.value.kind is ErrorKind.MISSING_LOOP_DELIMITER
    assert exc.value.token_index == 4


def test_close_fails_before_later_open_is_seen():
    with pytest.raises(BFParseError) as exc:
        _parse("][")
    assert exc.value.kind is ErrorKind.MISSING_LOOP_OPENING


def test_describe():
    assert describe(Increment()) == "Increment (+)"
    assert describe(Loop([Increment()])) == "Loop [1 node]"
    assert describe(Loop([])) == "Loop [0 nodes]"


def test_deep_tree_helpers():
    depth = 3000
    source = "[" * depth + "+" + "]" * depth
    tree = _parse(source)
    assert count_loops(tree) == depth
    assert emit(tree) == source
