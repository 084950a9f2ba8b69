from __future__ import annotations

import argparse
import sys
import time

from typing import List, Optional

from .api import parse_string
from .console import RawKeyReader, read_stdin, write_stdout
from .errors import BFParseError, BFRuntimeError
from .interpreter import TAPE_LENGTH, Interpreter, TapeState
from .nodes import count_loops, describe, emit


def _dump_tape(state: TapeState, cells: int = 32) -> str:
    head = [int(b) for b in state.tape[:cells]]
    rows = [" ".join(f"{v:3d}" for v in head[i:i + 8]) for i in range(0, len(head), 8)]
    return "\n".join(rows)


def _read_source(args: argparse.Namespace) -> Optional[str]:
    if args.eval is not None:
        return args.eval
    try:
        with open(args.file, 'r', encoding=args.encoding) as f:
            return f.read()
    except OSError as e:
        print(f"Couldn't open file: {e}", file=sys.stderr)
        return None


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(
        prog="bfrun",
        description="Run a Brainfuck program on a fixed 8-bit tape.",
    )
    parser.add_argument("file", nargs="?", help="path to the program source")
    parser.add_argument("-e", "--eval", metavar="CODE", help="run CODE instead of reading a file")
    parser.add_argument("--tape-length", type=int, default=TAPE_LENGTH, help=f"number of cells (default {TAPE_LENGTH})")
    parser.add_argument("--encoding", default="utf-8", help="source file encoding (default utf-8)")
    parser.add_argument("--raw", action="store_true", help="read input one key at a time (terminal raw mode)")
    parser.add_argument("-v", "--verbose", action="store_true", help="print timings and a tape dump to stderr")
    args = parser.parse_args(argv)

    if (args.file is None) == (args.eval is None):
        parser.error("provide exactly one of FILE or -e/--eval")
    if args.tape_length < 1:
        parser.error("--tape-length must be positive")

    source = _read_source(args)
    if source is None:
        return 2

    start = time.time()
    try:
        nodes = parse_string(source)
    except BFParseError as e:
        print(e, file=sys.stderr)
        return 1
    parse_ms = (time.time() - start) * 1000

    reader = RawKeyReader() if args.raw and sys.stdin.isatty() else read_stdin
    interp = Interpreter(write_stdout, reader, tape_length=args.tape_length)

    status = 0
    start = time.time()
    try:
        interp.run(nodes)
    except BFRuntimeError as e:
        print(f"\nError at node: {describe(e.node)}, index: {e.index}", file=sys.stderr)
        if len(e.path) > 1:
            print(f"Path: {' > '.join(map(str, e.path))}", file=sys.stderr)
        print(e, file=sys.stderr)
        status = 1
    except EOFError:
        print("\nError: program requested input but none is left", file=sys.stderr)
        status = 1
    run_ms = (time.time() - start) * 1000

    if args.verbose:
        canonical = emit(nodes)
        print(f"\nProgram: {len(canonical)} symbols, {count_loops(nodes)} loops", file=sys.stderr)
        if len(canonical) < 1024:
            print(canonical, file=sys.stderr)
        print(f"Parsing took {parse_ms:.2f} ms", file=sys.stderr)
        print(f"Execution took {run_ms:.2f} ms ({interp.state.steps} steps)", file=sys.stderr)
        print(f"Pointer: {interp.state.pointer}", file=sys.stderr)
        print(_dump_tape(interp.state), file=sys.stderr)

    return status
