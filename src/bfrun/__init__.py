
from .api import RunOptions, RunResult, parse_string, run_file, run_string
from .errors import BFError, BFParseError, BFRuntimeError, ErrorKind
from .interpreter import TAPE_LENGTH, Interpreter, TapeState
from .lexer import Token, tokenize
from .nodes import Decrement, Increment, Input, Loop, MoveLeft, MoveRight, Node, Output
from .parser import parse

__all__ = [
    'Token',
    'tokenize',
    'parse',
    'Node',
    'MoveRight',
    'MoveLeft',
    'Increment',
    'Decrement',
    'Output',
    'Input',
    'Loop',
    'Interpreter',
    'TapeState',
    'TAPE_LENGTH',
    'ErrorKind',
    'BFError',
    'BFParseError',
    'BFRuntimeError',
    'RunOptions',
    'RunResult',
    'parse_string',
    'run_string',
    'run_file',
]
