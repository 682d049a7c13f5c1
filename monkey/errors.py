from typing import List


class MonkeyError(Exception):
    """Base class for host-level Monkey exceptions.

    Runtime failures inside a program are not exceptions; they are Error
    objects returned by the interpreter. These classes are for the host
    entry points only.
    """


class ParseError(MonkeyError):
    """Raised by the convenience entry points when parsing failed."""
    def __init__(self, errors: List[str]):
        super().__init__('\n'.join(errors))
        self.errors = list(errors)
