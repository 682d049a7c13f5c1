"""Interactive read-evaluate-print loop.

Each line is parsed and evaluated against one Environment that lives for
the whole session, so bindings from earlier lines stay visible.
"""

import builtins
from typing import Optional

from .environment import Environment
from .errors import ParseError
from .interpreter import Interpreter, run_program

PROMPT = '>> '

MONKEY_FACE = r'''            __,__
   .--.  .-"     "-.  .--.
  / .. \/  .-. .-.  \/ .. \
 | |  '|  /   Y   \  |'  | |
 | \   \  \ 0 | 0 /  /   / |
  \ '- ,\.-"""""""-./, -' /
   ''-' /_   ^ ^   _\ '-''
       |  \._   _./  |
       \   \ '~' /   /
        '._ '-=-' _.'
           '-----'
'''


def start(interpreter: Optional[Interpreter] = None, env: Optional[Environment] = None):
    """Run the loop until end of input."""
    interpreter = interpreter if interpreter is not None else Interpreter()
    env = env if env is not None else Environment()
    io = interpreter.io
    while True:
        try:
            line = builtins.input(PROMPT)
        except EOFError:
            return
        if not line.strip():
            continue
        try:
            result = run_program(line, env, interpreter)
        except ParseError as e:
            print_parser_errors(io, e.errors)
            continue
        io.write_line(result.inspect())


def print_parser_errors(io, errors):
    io.write_line(MONKEY_FACE)
    io.write_line('Woops! We ran into some monkey business here!')
    io.write_line(' parser errors:')
    for msg in errors:
        io.write_line('\t' + msg)
