from typing import Callable, List, Optional

from monkey.types import NULL, Object, String


class BasicIO:
    """Output sink used by `puts` and by hosts displaying results.

    The interpreter never writes to the console directly. By default lines
    go to whatever `sys.stdout` is at call time; pass `writer` to send
    them elsewhere.
    """
    def __init__(self, writer: Optional[Callable[[str], None]] = None):
        self.writer = writer

    def write_line(self, text: str):
        if self.writer is not None:
            self.writer(text)
        else:
            print(text)


def std_puts(interp, args: List[Object]) -> Object:
    for arg in args:
        interp.io.write_line(arg.inspect())
    return NULL


def std_string_of(interp, args: List[Object]) -> Object:
    return String(args[0].inspect())
