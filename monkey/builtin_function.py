from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Callable, List, Optional

from monkey.types import Object, ObjectType

if TYPE_CHECKING:
    from monkey.interpreter import Interpreter


BuiltinFn = Callable[['Interpreter', List[Object]], Object]


@dataclass(frozen=True, eq=False)
class BuiltinFunction(Object):
    name: str
    arity: Optional[int]  # None means the function checks its own arguments
    fn: BuiltinFn
    type = ObjectType.BUILTIN

    def inspect(self) -> str:
        return 'builtin function'

    def __repr__(self) -> str:
        return f"<builtin {self.name}>"
