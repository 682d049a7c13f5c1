import json
from pathlib import Path

import pytest

from monkey.ast_json import ast_from_obj, ast_to_obj
from monkey.interpreter import Interpreter
from monkey.parser import parse_program
from monkey.std import BasicIO

EXAMPLES = Path(__file__).resolve().parent.parent / 'examples'


@pytest.mark.parametrize('source', [
    'let x = 5; return x;',
    'return;',
    '-a * !b',
    'if (a < b) { a } else { b }',
    'if (a) { b }',
    'fn(x, y) { x + y }(1, 2)',
    '[1, "two", true][0]',
    '{"a": 1, 2: false}',
])
def test_round_trip_preserves_tree(source):
    program = parse_program(source)
    restored = ast_from_obj(json.loads(json.dumps(ast_to_obj(program))))
    assert restored == program
    assert str(restored) == str(program)


def test_tokens_keep_positions():
    program = parse_program('let a = 1;\nlet b = 2;')
    restored = ast_from_obj(ast_to_obj(program))
    token = restored.statements[1].token
    assert (token.line, token.column) == (2, 1)


def test_node_objects_are_tagged():
    obj = ast_to_obj(parse_program('puts(1)'))
    assert obj['type'] == 'Program'
    call = obj['statements'][0]['expression']
    assert call['type'] == 'CallExpression'
    assert call['token']['type'] == 'LPAREN'
    assert call['arguments'][0] == {
        'type': 'IntegerLiteral',
        'token': {'type': 'INT', 'literal': '1', 'line': 1, 'column': 6},
        'value': 1,
    }


def test_restored_program_runs_the_same():
    program = parse_program((EXAMPLES / 'program_4.monkey').read_text(encoding='utf-8'))
    restored = ast_from_obj(json.loads(json.dumps(ast_to_obj(program))))
    out = []
    Interpreter(io=BasicIO(writer=out.append)).run(restored)
    assert out == ['0', '1', '55']


def test_unknown_node_type():
    with pytest.raises(ValueError):
        ast_from_obj({'type': 'WhileLoop', 'token': {'type': 'IDENT', 'literal': 'while'}})


def test_invalid_object():
    with pytest.raises(TypeError):
        ast_from_obj(['not', 'a', 'node'])
