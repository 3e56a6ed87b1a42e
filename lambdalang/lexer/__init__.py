"""
lambdalang Lexer Package

Implements the character source and the lexical scanner for lambdalang.

Key Features:
- Position tracking (line/column) for every character consumed
- Single-token lookahead, no backtracking
- Maximal-munch operator runs ('<=' is one token)
- '#' line comments
- Fatal, position-anchored diagnostics

Author: xwest
"""

from .tokens import Token, TokenType, SourceLocation, KEYWORDS, PUNCTUATION, OPERATOR_CHARS
from .input_stream import InputStream, END_OF_INPUT
from .lexer import Lexer, tokenize_string, tokenize_file
from .errors import Diagnostic, SourceError, LexerError

__all__ = [
    "Lexer",
    "InputStream",
    "END_OF_INPUT",
    "Token",
    "TokenType",
    "SourceLocation",
    "KEYWORDS",
    "PUNCTUATION",
    "OPERATOR_CHARS",
    "Diagnostic",
    "SourceError",
    "LexerError",
    "tokenize_string",
    "tokenize_file",
]
