import pytest

from monkey.interpreter import Interpreter, run_program
from monkey.std import BUILTINS, BasicIO, lookup_builtin
from monkey.types import NULL, Array, Error, Hash, Integer, String


def run(source):
    return run_program(source)


def run_capturing(source):
    out = []
    interpreter = Interpreter(io=BasicIO(writer=out.append))
    return run_program(source, interpreter=interpreter), out


def test_registry_names():
    assert sorted(BUILTINS) == sorted([
        'puts', 'len', 'first', 'last', 'rest', 'push',
        'map', 'reduce', 'sum', 'stringOf', 'arrayOf',
    ])
    assert lookup_builtin('len').arity == 1
    assert lookup_builtin('nope') is None


def test_registry_is_read_only():
    with pytest.raises(TypeError):
        BUILTINS['extra'] = BUILTINS['len']


@pytest.mark.parametrize('source,expected', [
    ('len("")', 0),
    ('len("four")', 4),
    ('len("hello world")', 11),
    ('len("hello")', 5),
    ('len([1, 2, 3])', 3),
    ('len([])', 0),
    ('len({"a": 1, "b": 2})', 2),
])
def test_len(source, expected):
    assert run(source) == Integer(expected)


@pytest.mark.parametrize('source,message', [
    ('len(1)', 'len argument must be STRING, ARRAY or HASH, got INTEGER'),
    ('len("one", "two")', 'len expects 1 argument, got 2'),
    ('first(1)', 'first argument must be STRING or ARRAY, got INTEGER'),
    ('last(true)', 'last argument must be STRING or ARRAY, got BOOLEAN'),
    ('rest({})', 'rest argument must be STRING or ARRAY, got HASH'),
    ('push(1, 1)', 'push argument must be ARRAY or HASH, got INTEGER'),
    ('push()', 'push expects 2 or 3 arguments, got 0'),
    ('push([1])', 'push(array, value) expects 2 arguments, got 1'),
    ('push({}, "a")', 'push(hash, key, value) expects 3 arguments, got 2'),
    ('push({}, [1], 2)', 'unusable as hash key: ARRAY'),
    ('map(1, fn(x) { x })', 'map can only map over ARRAY, got INTEGER'),
    ('map([1], 2)', 'map expects a FUNCTION, got INTEGER'),
    ('map([1], fn(a, b) { a })', 'function passed to map must take 1 parameter, got 2'),
    ('reduce(1, 0, fn(a, b) { a })', 'reduce can only reduce ARRAY, got INTEGER'),
    ('reduce([1], 0, fn(a) { a })', 'function passed to reduce must take 2 parameters, got 1'),
    ('reduce([1], 0)', 'reduce expects 3 arguments, got 2'),
    ('sum("abc")', 'sum can only sum ARRAY, got STRING'),
    ('sum([1, "2"])', 'sum element at index 1 must be INTEGER, got STRING'),
    ('arrayOf([1])', 'arrayOf argument must be INTEGER, BOOLEAN or STRING, got ARRAY'),
    ('stringOf()', 'stringOf expects 1 argument, got 0'),
])
def test_builtin_errors(source, message):
    result = run(source)
    assert isinstance(result, Error)
    assert result.message == message


def test_first_last_rest_on_arrays():
    assert run('first([1, 2, 3])') == Integer(1)
    assert run('last([1, 2, 3])') == Integer(3)
    assert run('rest([1, 2, 3])').inspect() == '[2, 3]'
    assert run('rest(rest(rest([1, 2, 3])))').inspect() == '[]'


@pytest.mark.parametrize('source', ['first([])', 'last([])', 'rest([])', 'first("")', 'rest("")'])
def test_empty_sequences_give_null(source):
    assert run(source) is NULL


def test_first_last_rest_on_strings():
    assert run('first("monkey")') == String('m')
    assert run('last("monkey")') == String('y')
    assert run('rest("monkey")') == String('onkey')


def test_push_returns_new_array():
    result = run('let a = [1, 2]; let b = push(a, 3); [a, b]')
    assert result.inspect() == '[[1, 2], [1, 2, 3]]'


def test_push_returns_new_hash():
    result = run('let h = {"a": 1}; let g = push(h, "b", 2); [len(h), g["b"], h["b"]]')
    assert result.inspect() == '[1, 2, null]'


def test_push_onto_hash_replaces_existing_key():
    assert run('push({"a": 1}, "a", 5)["a"]') == Integer(5)


def test_map():
    assert run('map([1, 2, 3], fn(x) { x * x })').inspect() == '[1, 4, 9]'
    assert run('map([], fn(x) { x })').inspect() == '[]'


def test_map_with_builtin():
    assert run('map(["a", "bb", ""], len)').inspect() == '[1, 2, 0]'


def test_map_stops_at_first_error():
    result = run('map([1, true, 3], fn(x) { -x })')
    assert isinstance(result, Error)
    assert result.message == 'unknown operator: -BOOLEAN'


def test_reduce():
    assert run('reduce([1, 2, 3, 4], 0, fn(acc, x) { acc + x })') == Integer(10)
    assert run('reduce([], 7, fn(acc, x) { acc + x })') == Integer(7)
    assert run('reduce(["a", "b"], "", fn(acc, x) { x + acc })') == String('ba')


def test_sum():
    assert run('sum([1, 2, 3])') == Integer(6)
    assert run('sum([])') == Integer(0)
    assert run('sum([9223372036854775807, 1])') == Integer(-9223372036854775808)


@pytest.mark.parametrize('source,expected', [
    ('stringOf(42)', '42'),
    ('stringOf(true)', 'true'),
    ('stringOf("x")', 'x'),
    ('stringOf([1, "a"])', '[1, a]'),
    ('stringOf({1: 2})', '{1: 2}'),
    ('stringOf(if (false) { 1 })', 'null'),
])
def test_string_of(source, expected):
    assert run(source) == String(expected)


def test_array_of():
    assert run('arrayOf(-12)').inspect() == '[-, 1, 2]'
    assert run('arrayOf(false)').inspect() == '[false]'
    assert run('arrayOf("abc")').inspect() == '[a, b, c]'
    assert run('arrayOf("")').inspect() == '[]'


def test_puts_writes_each_argument_on_its_own_line():
    result, out = run_capturing('puts("hello", 1, [1, 2], {"k": true})')
    assert result is NULL
    assert out == ['hello', '1', '[1, 2]', '{k: true}']


def test_puts_without_arguments_writes_nothing():
    result, out = run_capturing('puts()')
    assert result is NULL
    assert out == []


def test_basic_io_defaults_to_stdout(capsys):
    BasicIO().write_line('to stdout')
    assert capsys.readouterr().out == 'to stdout\n'


def test_collection_results_have_expected_types():
    assert isinstance(run('push([], 1)'), Array)
    assert isinstance(run('push({}, 1, 1)'), Hash)
