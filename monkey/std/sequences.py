"""Collection builtins: len, first, last, rest, push, map, reduce, sum, arrayOf.

None of these mutate their arguments. Functions that "change" a
collection build and return a new one.
"""

from typing import List

from monkey.builtin_function import BuiltinFunction
from monkey.types import (
    NULL, Array, Boolean, Error, Function, Hash, Hashable, HashPair, Integer,
    Object, String, is_error, to_int64,
)


def std_len(interp, args: List[Object]) -> Object:
    arg = args[0]
    if isinstance(arg, String):
        return Integer(len(arg.value))
    if isinstance(arg, Array):
        return Integer(len(arg.elements))
    if isinstance(arg, Hash):
        return Integer(len(arg.pairs))
    return Error(f"len argument must be STRING, ARRAY or HASH, got {arg.type}")


def std_first(interp, args: List[Object]) -> Object:
    arg = args[0]
    if isinstance(arg, Array):
        return arg.elements[0] if arg.elements else NULL
    if isinstance(arg, String):
        return String(arg.value[0]) if arg.value else NULL
    return Error(f"first argument must be STRING or ARRAY, got {arg.type}")


def std_last(interp, args: List[Object]) -> Object:
    arg = args[0]
    if isinstance(arg, Array):
        return arg.elements[-1] if arg.elements else NULL
    if isinstance(arg, String):
        return String(arg.value[-1]) if arg.value else NULL
    return Error(f"last argument must be STRING or ARRAY, got {arg.type}")


def std_rest(interp, args: List[Object]) -> Object:
    arg = args[0]
    if isinstance(arg, Array):
        return Array(arg.elements[1:]) if arg.elements else NULL
    if isinstance(arg, String):
        return String(arg.value[1:]) if arg.value else NULL
    return Error(f"rest argument must be STRING or ARRAY, got {arg.type}")


def std_push(interp, args: List[Object]) -> Object:
    if not args:
        return Error('push expects 2 or 3 arguments, got 0')
    target = args[0]
    if isinstance(target, Array):
        if len(args) != 2:
            return Error(f"push(array, value) expects 2 arguments, got {len(args)}")
        return Array(target.elements + (args[1],))
    if isinstance(target, Hash):
        if len(args) != 3:
            return Error(f"push(hash, key, value) expects 3 arguments, got {len(args)}")
        key, value = args[1], args[2]
        if not isinstance(key, Hashable):
            return Error(f"unusable as hash key: {key.type}")
        pairs = dict(target.pairs)
        pairs[key.hash_key()] = HashPair(key, value)
        return Hash(pairs)
    return Error(f"push argument must be ARRAY or HASH, got {target.type}")


def check_callable(name: str, fn: Object, n_params: int) -> Object:
    """Return an Error if `fn` cannot be applied to `n_params` arguments."""
    if isinstance(fn, Function):
        if len(fn.parameters) != n_params:
            return Error(f"function passed to {name} must take {n_params} parameter"
                         f"{'s' if n_params != 1 else ''}, got {len(fn.parameters)}")
        return NULL
    if isinstance(fn, BuiltinFunction):
        return NULL
    return Error(f"{name} expects a FUNCTION, got {fn.type}")


def std_map(interp, args: List[Object]) -> Object:
    array, fn = args
    if not isinstance(array, Array):
        return Error(f"map can only map over ARRAY, got {array.type}")
    err = check_callable('map', fn, 1)
    if is_error(err):
        return err
    results = []
    for element in array.elements:
        value = interp.apply_function(fn, [element])
        if is_error(value):
            return value
        results.append(value)
    return Array(tuple(results))


def std_reduce(interp, args: List[Object]) -> Object:
    array, accumulator, fn = args
    if not isinstance(array, Array):
        return Error(f"reduce can only reduce ARRAY, got {array.type}")
    err = check_callable('reduce', fn, 2)
    if is_error(err):
        return err
    for element in array.elements:
        accumulator = interp.apply_function(fn, [accumulator, element])
        if is_error(accumulator):
            return accumulator
    return accumulator


def std_sum(interp, args: List[Object]) -> Object:
    array = args[0]
    if not isinstance(array, Array):
        return Error(f"sum can only sum ARRAY, got {array.type}")
    total = 0
    for i, element in enumerate(array.elements):
        if not isinstance(element, Integer):
            return Error(f"sum element at index {i} must be INTEGER, got {element.type}")
        total += element.value
    return Integer(to_int64(total))


def std_array_of(interp, args: List[Object]) -> Object:
    arg = args[0]
    if isinstance(arg, Integer):
        return Array(tuple(String(ch) for ch in str(arg.value)))
    if isinstance(arg, Boolean):
        return Array((arg,))
    if isinstance(arg, String):
        return Array(tuple(String(ch) for ch in arg.value))
    return Error(f"arrayOf argument must be INTEGER, BOOLEAN or STRING, got {arg.type}")
