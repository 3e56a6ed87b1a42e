"""
Token definitions for the lambdalang lexer.

This module defines the token types of the language and the fixed lexical
tables the scanner dispatches on:
- Keywords (if, then, else, lambda, true, false)
- Punctuation (single characters: , ; ( ) { } [ ])
- Operator characters (runs of < + - * % = & > | !)
- Identifier continuation characters

The tables are process-wide constants shared by every Lexer instance.

Author: xwest
"""

from enum import Enum
from dataclasses import dataclass
from typing import Any, Dict, FrozenSet


class TokenType(Enum):
    """
    Enumeration of all token types in lambdalang.

    The values double as the short tags used in serialized token streams.
    """

    NUM = "num"                     # 42, 3.14, .5
    STR = "str"                     # "hello"
    KW = "kw"                       # if, then, else, lambda, true, false
    VAR = "var"                     # fib, empty?, set-car!
    PUNC = "punc"                   # , ; ( ) { } [ ]
    OP = "op"                       # + - <= == && ...


@dataclass(frozen=True)
class SourceLocation:
    """
    Represents a location in the source code.

    Lines are 1-based, columns are 0-based.
    """
    filename: str
    line: int
    column: int
    offset: int  # Character offset from start of input

    def __str__(self) -> str:
        return f"{self.filename}:{self.line}:{self.column}"

    def __repr__(self) -> str:
        return f"SourceLocation({self.filename!r}, {self.line}, {self.column}, {self.offset})"


@dataclass(frozen=True)
class Token:
    """
    Represents a lexical token in the lambdalang language.

    Contains the token type, lexeme (raw text), semantic value
    and the location of its first character.
    """
    type: TokenType
    lexeme: str                     # Raw text from source
    value: Any                      # float for NUM, decoded text for STR, lexeme otherwise
    location: SourceLocation

    def __str__(self) -> str:
        if self.value != self.lexeme:
            return f"{self.type.name}({self.lexeme!r} -> {self.value!r})"
        return f"{self.type.name}({self.lexeme!r})"

    def __repr__(self) -> str:
        return (f"Token({self.type.name}, {self.lexeme!r}, "
                f"{self.value!r}, {self.location!r})")

    def to_dict(self) -> Dict[str, Any]:
        """Serialize the token as {"type": ..., "value": ...}."""
        return {"type": self.type.value, "value": self.value}


# ============================================================================
# Lexical tables
# ============================================================================

KEYWORDS: FrozenSet[str] = frozenset({
    "if",
    "then",
    "else",
    "lambda",
    "true",
    "false",
})

PUNCTUATION: FrozenSet[str] = frozenset(",;(){}[]")

OPERATOR_CHARS: FrozenSet[str] = frozenset("<+-*%=&>|!")

WHITESPACE: FrozenSet[str] = frozenset(" \t\n")

# Characters allowed after the first letter of an identifier, besides letters
IDENTIFIER_EXTRA_CHARS: FrozenSet[str] = frozenset("?!-0<1>2=3456789_")

DIGITS: FrozenSet[str] = frozenset("0123456789")

COMMENT_START = "#"
STRING_QUOTE = '"'
ESCAPE_CHAR = "\\"
DECIMAL_POINT = "."
