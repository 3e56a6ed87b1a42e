"""
Error handling for the lambdalang parser.

Syntax errors are fatal: the first one aborts the parse. They are raised
through the input stream so the message carries the position of the
character the scanner was about to read.

Author: xwest
"""

from typing import Dict, List, Optional

from ..lexer.tokens import Token, SourceLocation
from ..lexer.errors import SourceError


# Common parser error codes for categorization
PARSER_ERROR_CODES: Dict[str, str] = {
    "P001": "Unexpected token",
    "P002": "Expected token not found",
    "P003": "Expected variable name",
    "P004": "Maximum nesting depth exceeded",
}


class ParseError(SourceError):
    """
    Exception raised when the parser encounters a syntax error.

    Carries the offending token when there was one.
    """

    error_codes: Dict[str, str] = PARSER_ERROR_CODES

    def __init__(
        self,
        message: str,
        location: SourceLocation,
        token: Optional[Token] = None,
        code: Optional[str] = None,
        help_text: Optional[str] = None,
        suggestions: Optional[List[str]] = None
    ):
        super().__init__(message, location, code=code, help_text=help_text, suggestions=suggestions)
        self.token = token


_CLOSING_SUGGESTIONS: Dict[str, str] = {
    ")": "Add a closing parenthesis ')'",
    "}": "Add a closing brace '}'",
    "]": "Add a closing bracket ']'",
    ";": "Separate expressions with ';'",
    ",": "Separate items with ','",
}


def suggest_missing_punctuation(expected: str) -> List[str]:
    """Suggest how to fix a missing punctuation character."""
    suggestion = _CLOSING_SUGGESTIONS.get(expected)
    return [suggestion] if suggestion else []


def describe_token(token: Optional[Token]) -> str:
    """Render a token for error messages."""
    if token is None:
        return "end of input"
    return f"{token.type.value} {token.lexeme!r}"
