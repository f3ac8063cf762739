"""
Structured Output Writer

Streaming emitter for nested objects, arrays and scalars.

The output is a near-JSON dialect: every entry, including the last one in a
container and the root itself, is followed by a trailing comma. The writer
keeps a single depth counter and never seeks back into the stream, so each
container is finished as soon as its end call is made.
"""

from contextlib import contextmanager
from typing import Any, Iterator, Optional, TextIO

DEFAULT_INDENT = 4

# Quote, backslash and control characters, as JSON escapes them.
_STRING_ESCAPES = {ord('"'): '\\"', ord("\\"): "\\\\"}
_STRING_ESCAPES.update({code: f"\\u{code:04x}" for code in range(0x20)})


class StructuredWriter:
    """
    Write an indented, comma-terminated tree to a text stream.

    Nesting is the caller's responsibility. Mismatched start/end calls
    produce malformed output without any error being raised.
    """

    def __init__(self, stream: TextIO, indent: int = DEFAULT_INDENT, pretty: bool = True):
        """
        Args:
            stream: Append-only text sink.
            indent: Spaces per depth level in pretty mode.
            pretty: When False, indentation and newlines are suppressed.
        """
        if indent < 0:
            raise ValueError(f"Indentation width must be >= 0, got {indent}")
        self._stream = stream
        self._indent = indent
        self._pretty = pretty
        self._depth = 0

    @property
    def depth(self) -> int:
        """Current nesting depth."""
        return self._depth

    @property
    def indent(self) -> int:
        return self._indent

    @property
    def pretty(self) -> bool:
        return self._pretty

    # ===--- low level ---=== #

    def _begin_line(self, tag: Optional[str]) -> None:
        if self._pretty:
            self._stream.write(" " * (self._indent * self._depth))
        if tag is not None:
            self._stream.write(f'"{tag}": ')

    def _end_line(self, text: str) -> None:
        self._stream.write(text)
        if self._pretty:
            self._stream.write("\n")

    # ===--- containers ---=== #

    def start_array(self, tag: Optional[str] = None) -> None:
        self._begin_line(tag)
        self._end_line("[")
        self._depth += 1

    def end_array(self) -> None:
        self._depth -= 1
        self._begin_line(None)
        self._end_line("],")

    def start_object(self, tag: Optional[str] = None) -> None:
        self._begin_line(tag)
        self._end_line("{")
        self._depth += 1

    def end_object(self) -> None:
        self._depth -= 1
        self._begin_line(None)
        self._end_line("},")

    @contextmanager
    def array(self, tag: Optional[str] = None) -> Iterator["StructuredWriter"]:
        """Open an array for the duration of the block; always closed on exit."""
        self.start_array(tag)
        try:
            yield self
        finally:
            self.end_array()

    @contextmanager
    def object(self, tag: Optional[str] = None) -> Iterator["StructuredWriter"]:
        """Open an object for the duration of the block; always closed on exit."""
        self.start_object(tag)
        try:
            yield self
        finally:
            self.end_object()

    # ===--- scalars ---=== #

    def write_integer(self, tag: Optional[str], value: int) -> None:
        self._begin_line(tag)
        self._end_line(f"{int(value)},")

    def write_double(self, tag: Optional[str], value: float) -> None:
        # %g matches the C printf rendering of doubles.
        self._begin_line(tag)
        self._end_line("%g," % value)

    def write_boolean(self, tag: Optional[str], value: bool) -> None:
        self._begin_line(tag)
        self._end_line("true," if value else "false,")

    def write_string(self, tag: Optional[str], fmt: str, *args: Any) -> None:
        """
        Write a quoted string scalar.

        Args:
            tag: Field name, or None for an array element.
            fmt: printf-style format string.
            *args: Values substituted into fmt.
        """
        text = fmt % args if args else fmt
        text = text.translate(_STRING_ESCAPES)
        self._begin_line(tag)
        self._end_line(f'"{text}",')

    def write_node(self, tag: Optional[str], value: Any) -> None:
        """
        Write a plain Python tree.

        dicts become objects (insertion order kept), lists and tuples become
        arrays, and bool/int/float/str become scalars.
        """
        if isinstance(value, dict):
            with self.object(tag):
                for key, child in value.items():
                    self.write_node(str(key), child)
        elif isinstance(value, (list, tuple)):
            with self.array(tag):
                for child in value:
                    self.write_node(None, child)
        elif isinstance(value, bool):
            self.write_boolean(tag, value)
        elif isinstance(value, int):
            self.write_integer(tag, value)
        elif isinstance(value, float):
            self.write_double(tag, value)
        elif isinstance(value, str):
            self.write_string(tag, "%s", value)
        else:
            raise TypeError(f"Cannot write value of type {type(value).__name__}")
