"""CLI entry point for the Monkey interpreter.

Usage:
    python -m monkey [-v|-vv|-vvv] [program_file]
    python -m monkey [-v...] --emit-ast <program_file>
    python -m monkey [-v...] --ast <ast_json_file>

Options:
  -v            Increase debug verbosity (can be repeated)
  --emit-ast    Parse the given .monkey file and emit an AST JSON file
  --ast         Execute a previously emitted AST JSON file

Without a program file an interactive session is started. Debug
information is written to `debug.txt` in the current directory when
verbosity is greater than zero.
"""

import argparse
import json
import sys
from pathlib import Path

from . import repl
from .ast_json import ast_to_obj, ast_from_obj
from .errors import ParseError
from .interpreter import Interpreter
from .parser import parse_program
from .types import Error

RECURSION_LIMIT = 10000


def read_source(path: Path) -> str:
    if not path.exists():
        print(f"Error: file {path} not found", file=sys.stderr)
        sys.exit(1)
    with open(path, 'r', encoding='utf-8') as f:
        return f.read()


def parse_or_exit(source: str):
    try:
        return parse_program(source)
    except ParseError as e:
        for msg in e.errors:
            print(f"Parse error: {msg}", file=sys.stderr)
        sys.exit(1)


def execute(program, debug_level: int):
    interpreter = Interpreter(debug_level=debug_level, debug_file='debug.txt')
    try:
        result = interpreter.run(program)
    finally:
        interpreter.close()
    if isinstance(result, Error):
        print(f"Runtime error: {result.message}", file=sys.stderr)
        sys.exit(1)


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="Monkey language interpreter")
    parser.add_argument('-v', action='count', default=0, help='increase debug verbosity (can be repeated)')
    group = parser.add_mutually_exclusive_group()
    group.add_argument('--emit-ast', metavar='MONKEY_FILE', help='emit AST JSON for the given .monkey file')
    group.add_argument('--ast', metavar='AST_JSON_FILE', help='execute AST from a JSON file')
    parser.add_argument('program', nargs='?', help='Monkey program file (.monkey) to execute')
    args = parser.parse_args(argv)

    sys.setrecursionlimit(max(sys.getrecursionlimit(), RECURSION_LIMIT))

    # Emit AST mode
    if args.emit_ast:
        program_file = Path(args.emit_ast)
        ast_program = parse_or_exit(read_source(program_file))
        out_path = program_file.with_name(program_file.name + '.ast.json')
        with open(out_path, 'w', encoding='utf-8') as out:
            json.dump(ast_to_obj(ast_program), out, ensure_ascii=False, indent=2)
        print(str(out_path))
        return

    # Execute from AST JSON
    if args.ast:
        ast_path = Path(args.ast)
        data = json.loads(read_source(ast_path))
        execute(ast_from_obj(data), args.v)
        return

    if not args.program:
        print("This is the Monkey programming language!")
        print("Feel free to type in commands")
        interpreter = Interpreter(debug_level=args.v, debug_file='debug.txt')
        try:
            repl.start(interpreter)
        finally:
            interpreter.close()
        return

    execute(parse_or_exit(read_source(Path(args.program))), args.v)


if __name__ == '__main__':
    main()
