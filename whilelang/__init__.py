# While language package
# This package provides a lexer, parsers and an interpreter for While.
from .errors import WhileError, LexError, ParseError, InterpretError
from .interpreter import run_program, run_file, Interpreter
from .context import State

__all__ = [
    'run_program',
    'run_file',
    'Interpreter',
    'State',
    'WhileError',
    'LexError',
    'ParseError',
    'InterpretError',
]
