"""Runtime object model for the Monkey interpreter.

Every value a Monkey program can produce is an instance of one of the
`Object` subclasses defined here (plus `BuiltinFunction`, which lives in
its own module). Each object reports its `ObjectType` and can render
itself for display with `inspect()`.

Booleans and null are singletons (`TRUE`, `FALSE`, `NULL`); the
interpreter compares them by identity.

Integer, Boolean and String values can be used as hash keys. They derive
a `HashKey` that is equal for equal values, which is what `Hash` stores
its pairs under.
"""

from __future__ import annotations

import hashlib
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Dict, Tuple

from .ast import BlockStatement, Identifier

if TYPE_CHECKING:
    from .environment import Environment


INT64_MIN = -(1 << 63)
INT64_MAX = (1 << 63) - 1


def to_int64(value: int) -> int:
    """Wrap an arbitrary Python int into the signed 64-bit range."""
    value &= (1 << 64) - 1
    if value > INT64_MAX:
        value -= 1 << 64
    return value


class ObjectType(Enum):
    ERROR = 'ERROR'
    RETURN_VALUE = 'RETURN_VALUE'
    INTEGER = 'INTEGER'
    BOOLEAN = 'BOOLEAN'
    STRING = 'STRING'
    ARRAY = 'ARRAY'
    HASH = 'HASH'
    BUILTIN = 'BUILTIN'
    FUNCTION = 'FUNCTION'
    NULL = 'NULL'

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class HashKey:
    """Identity of a value used as a hash key: its type plus a digest."""
    type: ObjectType
    value: int


class Object:
    """Base class for all runtime values."""
    type: ObjectType

    def inspect(self) -> str:
        raise NotImplementedError


class Hashable:
    """Mixin for objects that may be used as hash keys."""
    def hash_key(self) -> HashKey:
        raise NotImplementedError


@dataclass(frozen=True, eq=False)
class Error(Object):
    message: str
    type = ObjectType.ERROR

    def inspect(self) -> str:
        return f"ERROR: {self.message}"


@dataclass(frozen=True, eq=False)
class ReturnValue(Object):
    """Wraps the value of a `return` while it travels out of nested blocks."""
    value: Object
    type = ObjectType.RETURN_VALUE

    def inspect(self) -> str:
        return self.value.inspect()


@dataclass(frozen=True)
class Integer(Object, Hashable):
    value: int
    type = ObjectType.INTEGER

    def inspect(self) -> str:
        return str(self.value)

    def hash_key(self) -> HashKey:
        return HashKey(self.type, self.value)


@dataclass(frozen=True, eq=False)
class Boolean(Object, Hashable):
    value: bool
    type = ObjectType.BOOLEAN

    def inspect(self) -> str:
        return 'true' if self.value else 'false'

    def hash_key(self) -> HashKey:
        return HashKey(self.type, 1 if self.value else 0)


@dataclass(frozen=True)
class String(Object, Hashable):
    value: str
    type = ObjectType.STRING

    def inspect(self) -> str:
        return self.value

    def hash_key(self) -> HashKey:
        digest = hashlib.sha512(self.value.encode('utf-8')).digest()
        return HashKey(self.type, int.from_bytes(digest, 'little'))


@dataclass(frozen=True, eq=False)
class Array(Object):
    elements: Tuple[Object, ...]
    type = ObjectType.ARRAY

    def inspect(self) -> str:
        return '[' + ', '.join(e.inspect() for e in self.elements) + ']'


@dataclass(frozen=True)
class HashPair:
    key: Object
    value: Object


@dataclass(frozen=True, eq=False)
class Hash(Object):
    pairs: Dict[HashKey, HashPair]  # insertion ordered
    type = ObjectType.HASH

    def inspect(self) -> str:
        items = ', '.join(f"{p.key.inspect()}: {p.value.inspect()}" for p in self.pairs.values())
        return '{' + items + '}'


@dataclass(frozen=True, eq=False)
class Function(Object):
    parameters: Tuple[Identifier, ...]
    body: BlockStatement
    env: 'Environment'  # the defining scope, shared, not copied
    type = ObjectType.FUNCTION

    def inspect(self) -> str:
        params = ', '.join(str(p) for p in self.parameters)
        return f"fn({params}) {self.body}"


class Null(Object):
    type = ObjectType.NULL

    def inspect(self) -> str:
        return 'null'

    def __repr__(self) -> str:
        return 'NULL'


TRUE = Boolean(True)
FALSE = Boolean(False)
NULL = Null()


def native_bool_to_boolean(value: bool) -> Boolean:
    return TRUE if value else FALSE


def is_error(obj: Object) -> bool:
    return isinstance(obj, Error)


def is_truthy(obj: Object) -> bool:
    """Only NULL and FALSE are falsy."""
    return obj is not NULL and obj is not FALSE


def is_interrupt(obj: Object) -> bool:
    """Errors and return values stop every enclosing evaluation."""
    return isinstance(obj, (Error, ReturnValue))
