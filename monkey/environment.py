from typing import Dict, Optional

from monkey.types import Object


class Environment:
    """A scope mapping identifiers to values, chained to its enclosing scope.

    Function values keep a reference to the Environment they were defined
    in, so a scope lives as long as any closure created inside it.
    """
    def __init__(self, outer: Optional['Environment'] = None):
        self.outer = outer
        self.store: Dict[str, Object] = {}

    @classmethod
    def enclosed(cls, outer: 'Environment') -> 'Environment':
        return cls(outer=outer)

    def get(self, name: str) -> Optional[Object]:
        env: Optional[Environment] = self
        while env is not None:
            if name in env.store:
                return env.store[name]
            env = env.outer
        return None

    def is_declared(self, name: str) -> bool:
        # Only the current scope; outer bindings may be shadowed.
        return name in self.store

    def declare(self, name: str, value: Object) -> Object:
        self.store[name] = value
        return value

    def __repr__(self) -> str:
        return f"Environment({sorted(self.store)}, outer={self.outer is not None})"
