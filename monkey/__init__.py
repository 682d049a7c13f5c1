# Monkey language package
# This package provides a lexer, a Pratt parser and a tree-walking
# interpreter for the Monkey language.
from .environment import Environment
from .errors import MonkeyError, ParseError
from .interpreter import Interpreter, run_program
from .parser import parse_program

__all__ = [
    'Environment',
    'Interpreter',
    'MonkeyError',
    'ParseError',
    'parse_program',
    'run_program',
]
