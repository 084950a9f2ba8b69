#!/usr/bin/env python3
"""
Public API: parse_string / run_string / run_file.
"""

import sys
import os
sys.path.append(os.path.join(os.path.dirname(__file__), '..', 'src'))

import pytest

from bfrun import (
    BFParseError,
    BFRuntimeError,
    ErrorKind,
    Loop,
    RunOptions,
    parse_string,
    run_file,
    run_string,
)

ADD_TWO_DIGITS = ",>,[<+>-]<------------------------------------------------."


def test_parse_string_builds_tree():
    tree = parse_string("+[-]")
    assert isinstance(tree[1], Loop)


def test_parse_error_has_line_and_context():
    source = "+ first line\n+ second line\n[ never closed\n"
    with pytest.raises(BFParseError) as exc:
        parse_string(source)
    err = exc.value
    assert err.kind is ErrorKind.MISSING_LOOP_DELIMITER
    assert err.line == 3
    assert ">    3 | [ never closed" in err.context
    assert "Parser Error: Missing Loop Delimiter (line 3, column 1)" in str(err)
    assert "Hint:" in str(err)


def test_parse_error_missing_opening_line():
    with pytest.raises(BFParseError) as exc:
        parse_string("+\n+\n+]")
    assert exc.value.kind is ErrorKind.MISSING_LOOP_OPENING
    assert exc.value.line == 3


def test_parse_error_caret_points_at_bracket():
    with pytest.raises(BFParseError) as exc:
        parse_string("+ ok\n  ] stray\n+")
    err = exc.value
    assert (err.line, err.column) == (2, 3)
    assert ">    2 |   ] stray\n       |   ^" in err.context


def test_run_string_copy_pattern():
    result = run_string("++>+++++[<+>-]")
    assert result.output == ""
    assert result.tape[0] == 7
    assert result.pointer == 1
    assert len(result.tape) == 30000


def test_run_string_with_input_data():
    result = run_string(ADD_TWO_DIGITS, input_data="34")
    assert result.output == "7"


def test_run_string_forwards_output():
    seen = []
    result = run_string("++++++++[>++++++++<-]>+.+.", write_char=seen.append)
    assert result.output == "AB"
    assert seen == ["A", "B"]


def test_run_string_custom_reader():
    result = run_string(",.", read_char=lambda: "q")
    assert result.output == "q"


def test_input_exhausted():
    with pytest.raises(EOFError):
        run_string(",,", input_data="x")


def test_tape_length_option():
    result = run_string(">>>", options=RunOptions(tape_length=4))
    assert result.pointer == 3
    assert len(result.tape) == 4
    with pytest.raises(BFRuntimeError) as exc:
        run_string(">>>>", options=RunOptions(tape_length=4))
    assert exc.value.kind is ErrorKind.POINTER_OVERFLOW


def test_parse_failure_runs_nothing():
    seen = []
    with pytest.raises(BFParseError):
        run_string("+.[", write_char=seen.append)
    assert seen == []


def test_run_file(tmp_path):
    p = tmp_path / "a.bf"
    p.write_text("load 65 then print\n++++++++[>++++++++<-]>+.\n", encoding="utf-8")
    result = run_file(p)
    assert result.output == "A"
    assert result.steps > 0


def test_run_string_deep_nesting():
    depth = 2000
    result = run_string("+" + "[" * depth + "-" + "]" * depth)
    assert result.tape[0] == 0
