"""The builtin function registry.

Builtins are consulted only after an identifier has not been found in
any enclosing scope, so a program may shadow them with its own bindings.
The registry is built once at import time and never modified.
"""

from types import MappingProxyType
from typing import Mapping, Optional

from monkey.builtin_function import BuiltinFunction
from .basic_io import BasicIO, std_puts, std_string_of
from .sequences import (
    std_array_of, std_first, std_last, std_len, std_map, std_push,
    std_reduce, std_rest, std_sum,
)


def _registry(*builtins: BuiltinFunction) -> Mapping[str, BuiltinFunction]:
    return MappingProxyType({b.name: b for b in builtins})


BUILTINS = _registry(
    BuiltinFunction('puts', None, std_puts),
    BuiltinFunction('len', 1, std_len),
    BuiltinFunction('first', 1, std_first),
    BuiltinFunction('last', 1, std_last),
    BuiltinFunction('rest', 1, std_rest),
    BuiltinFunction('push', None, std_push),
    BuiltinFunction('map', 2, std_map),
    BuiltinFunction('reduce', 3, std_reduce),
    BuiltinFunction('sum', 1, std_sum),
    BuiltinFunction('stringOf', 1, std_string_of),
    BuiltinFunction('arrayOf', 1, std_array_of),
)


def lookup_builtin(name: str) -> Optional[BuiltinFunction]:
    return BUILTINS.get(name)


__all__ = ['BUILTINS', 'BasicIO', 'lookup_builtin']
