"""
lambdalang Lexer - turns a character stream into tokens

Pull-based: the parser asks for tokens, the lexer asks the InputStream for
characters. At most one token is held as lookahead; there is no
backtracking.

xwest
"""

import logging
import string
from typing import Callable, Iterator, List, Optional, Union

from .tokens import (
    Token, TokenType, KEYWORDS, PUNCTUATION, OPERATOR_CHARS,
    WHITESPACE, IDENTIFIER_EXTRA_CHARS, DIGITS, COMMENT_START, STRING_QUOTE,
    ESCAPE_CHAR, DECIMAL_POINT
)
from .errors import LexerError
from .input_stream import InputStream

logger = logging.getLogger(__name__)

IDENTIFIER_START_CHARS = frozenset(string.ascii_letters)


class Lexer:
    """
    lambdalang lexical analyzer.

    Wraps an InputStream and yields classified tokens on demand, skipping
    whitespace and '#' line comments.
    """

    def __init__(
        self,
        source: Union[str, InputStream],
        filename: str = "<unknown>",
        strict_strings: bool = False
    ):
        """
        Initialize the lexer.

        Args:
            source: Source text, or an InputStream already positioned on it
            filename: Name of source file for error reporting (ignored when
                an InputStream is passed)
            strict_strings: Raise LexerError on strings missing their closing
                quote instead of reading to end of input
        """
        if isinstance(source, InputStream):
            self._input = source
        else:
            self._input = InputStream(source, filename)
        self.strict_strings = strict_strings
        self._current: Optional[Token] = None

    @property
    def input(self) -> InputStream:
        return self._input

    # Character classes

    @staticmethod
    def is_keyword(word: str) -> bool:
        return word in KEYWORDS

    @staticmethod
    def is_digit(char: str) -> bool:
        return char in DIGITS

    @staticmethod
    def is_id_start(char: str) -> bool:
        return char in IDENTIFIER_START_CHARS

    @staticmethod
    def is_id(char: str) -> bool:
        return char in IDENTIFIER_START_CHARS or char in IDENTIFIER_EXTRA_CHARS

    @staticmethod
    def is_op_char(char: str) -> bool:
        return char in OPERATOR_CHARS

    @staticmethod
    def is_punc(char: str) -> bool:
        return char in PUNCTUATION

    @staticmethod
    def is_whitespace(char: str) -> bool:
        return char in WHITESPACE

    # Readers

    def read_while(self, predicate: Callable[[str], bool]) -> str:
        """Consume characters while predicate holds and return them."""
        chars = []
        while not self._input.eof() and predicate(self._input.peek()):
            chars.append(self._input.next())
        return "".join(chars)

    def read_number(self) -> Token:
        """Read digits with at most one decimal point; a second point ends the number."""
        location = self._input.location
        has_dot = False

        def accept(char: str) -> bool:
            nonlocal has_dot
            if char == DECIMAL_POINT:
                if has_dot:
                    return False
                has_dot = True
                return True
            return self.is_digit(char)

        lexeme = self.read_while(accept)
        if lexeme == DECIMAL_POINT:
            # A point not followed by digits starts no token
            self.error(f"Can't handle character: {DECIMAL_POINT!r}", location=location, code="L001")

        return Token(TokenType.NUM, lexeme, float(lexeme), location)

    def read_ident(self) -> Token:
        """Read an identifier, classifying it as a keyword when reserved."""
        location = self._input.location
        word = self.read_while(self.is_id)
        token_type = TokenType.KW if self.is_keyword(word) else TokenType.VAR
        return Token(token_type, word, word, location)

    def read_escaped(self, end: str) -> str:
        """
        Read a delimited run, dropping the delimiters.

        Any character after a backslash is taken literally. Without a closing
        delimiter the run extends to end of input, unless strict_strings is set.
        """
        location = self._input.location
        escaped = False
        chars = []
        closed = False

        self._input.next()  # Skip opening quote
        while not self._input.eof():
            char = self._input.next()
            if escaped:
                chars.append(char)
                escaped = False
            elif char == ESCAPE_CHAR:
                escaped = True
            elif char == end:
                closed = True
                break
            else:
                chars.append(char)

        if not closed and self.strict_strings:
            self.error(
                "Unterminated string literal",
                location=location,
                code="L002",
                help_text='String literals must be closed with a matching " quote.'
            )

        return "".join(chars)

    def read_string(self) -> Token:
        location = self._input.location
        value = self.read_escaped(STRING_QUOTE)
        lexeme = self._input.source[location.offset:self._input.pos]
        return Token(TokenType.STR, lexeme, value, location)

    def skip_comment(self):
        """Skip to the end of the line, newline included."""
        self.read_while(lambda char: char != "\n")
        self._input.next()

    def read_next(self) -> Optional[Token]:
        """Scan the next token, or return None at end of input."""
        while True:
            self.read_while(self.is_whitespace)
            if self._input.eof():
                return None
            if self._input.peek() != COMMENT_START:
                break
            self.skip_comment()

        char = self._input.peek()
        if char == STRING_QUOTE:
            token = self.read_string()
        elif self.is_digit(char) or char == DECIMAL_POINT:
            token = self.read_number()
        elif self.is_id_start(char):
            token = self.read_ident()
        elif self.is_punc(char):
            location = self._input.location
            token = Token(TokenType.PUNC, char, self._input.next(), location)
        elif self.is_op_char(char):
            location = self._input.location
            op = self.read_while(self.is_op_char)
            token = Token(TokenType.OP, op, op, location)
        else:
            self.error(
                f"Can't handle character: {char!r}",
                code="L001",
                help_text=f"The character {char!r} cannot start a token."
            )

        logger.debug("scanned %s at %s", token, token.location)
        return token

    # Token stream interface

    def peek(self) -> Optional[Token]:
        """Return the lookahead token, scanning it on first access."""
        if self._current is None:
            self._current = self.read_next()
        return self._current

    def next(self) -> Optional[Token]:
        """Consume and return the lookahead token."""
        token = self._current
        self._current = None
        return token if token is not None else self.read_next()

    def eof(self) -> bool:
        return self.peek() is None

    def error(self, message: str, error_class=LexerError, **details):
        """Raise error_class anchored at the input stream's current position."""
        self._input.error(message, error_class, **details)

    def tokenize(self) -> List[Token]:
        """
        Drain the remaining input.

        Returns:
            List of tokens (no end marker)
        """
        return list(self)

    def __iter__(self) -> Iterator[Token]:
        while not self.eof():
            yield self.next()


def tokenize_string(source: str, filename: str = "<string>", **options) -> List[Token]:
    """
    Convenience function to tokenize a source string.

    Args:
        source: Source code string
        filename: Filename for error reporting
        **options: Forwarded to Lexer

    Returns:
        List of tokens

    Raises:
        LexerError: If lexing fails
    """
    return Lexer(source, filename, **options).tokenize()


def tokenize_file(filepath: str, **options) -> List[Token]:
    """
    Convenience function to tokenize a source file.

    Raises:
        LexerError: If lexing fails
        IOError: If file cannot be read
    """
    with open(filepath, 'r', encoding='utf-8') as f:
        source = f.read()

    return tokenize_string(source, filepath, **options)
