"""
Character source for the lambdalang lexer.

Exposes source text one character at a time and tracks the position
(offset, line, column) of the next character to be read. Errors raised
through InputStream.error are anchored to that position.

Author: xwest
"""

from typing import Optional, Type

from .tokens import SourceLocation
from .errors import SourceError

# Returned by peek()/next() once the input is exhausted
END_OF_INPUT = ""

NEW_LINE = "\n"


class InputStream:
    """
    Cursor over an in-memory source string.

    Lines start at 1, columns at 0. Consuming a newline bumps the line and
    resets the column; any other character bumps the column.
    """

    def __init__(self, source: str, filename: str = "<unknown>"):
        self.source = source
        self.filename = filename
        self._pos = 0
        self._line = 1
        self._column = 0

    @property
    def pos(self) -> int:
        return self._pos

    @property
    def line(self) -> int:
        return self._line

    @property
    def column(self) -> int:
        return self._column

    @property
    def location(self) -> SourceLocation:
        """Snapshot of the current position."""
        return SourceLocation(self.filename, self._line, self._column, self._pos)

    def peek(self) -> str:
        """Return the next character without consuming it, or END_OF_INPUT."""
        if self._pos < len(self.source):
            return self.source[self._pos]
        return END_OF_INPUT

    def next(self) -> str:
        """
        Consume and return the next character.

        At end of input the position stays put and END_OF_INPUT is returned
        on every call.
        """
        if self._pos >= len(self.source):
            return END_OF_INPUT

        char = self.source[self._pos]
        self._pos += 1
        if char == NEW_LINE:
            self._line += 1
            self._column = 0
        else:
            self._column += 1
        return char

    def eof(self) -> bool:
        return self.peek() == END_OF_INPUT

    def error(
        self,
        message: str,
        error_class: Type[SourceError] = SourceError,
        location: Optional[SourceLocation] = None,
        **details
    ):
        """
        Raise error_class for message at the current position.

        Args:
            message: Human-readable description
            error_class: SourceError subclass to raise
            location: Overrides the current position when given
            **details: code, help_text and suggestions for the diagnostic

        Raises:
            SourceError: Always
        """
        raise error_class(message, location or self.location, **details)

    def __repr__(self) -> str:
        return f"InputStream({self.filename!r}, pos={self._pos}, line={self._line}, column={self._column})"
