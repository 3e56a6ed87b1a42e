"""
lambdalang Front End Package

Lexer and parser for lambdalang, a small expression-oriented language.
The AST produced by the parser is the final product of this package;
evaluation and code generation live elsewhere.

Architecture:
    lambdalang/
    ├── lexer/           # Character source and tokenization
    └── parser/          # Syntax analysis and AST generation

Author: xwest
License: MIT
"""

import logging

__version__ = "0.1.0"
__author__ = "xwest"
__email__ = "dev@neuralscript.org"
__license__ = "MIT"

from .lexer import InputStream, Lexer, Token, TokenType, SourceLocation, SourceError, LexerError
from .parser import Parser, ParseError, Program, parse_string, parse_file

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    # Core classes
    "InputStream",
    "Lexer",
    "Parser",
    "Token",
    "TokenType",
    "SourceLocation",
    "Program",

    # Errors
    "SourceError",
    "LexerError",
    "ParseError",

    # Convenience
    "parse_string",
    "parse_file",

    # Version info
    "__version__",
    "__author__",
    "__email__",
    "__license__",
]
