"""
Error handling for the lambdalang lexer.

Every failure in the front end is fatal and is reported as a SourceError
whose text is "<description> (<line>:<column>)". LexerError and ParseError
refine it for callers that want to tell scanning and parsing apart.

Author: xwest
"""

from typing import Dict, Optional, List
from dataclasses import dataclass
from .tokens import SourceLocation


# Common error codes for categorization
ERROR_CODES: Dict[str, str] = {
    "L001": "Unhandled character",
    "L002": "Unterminated string literal",
}


@dataclass
class Diagnostic:
    """Diagnostic record attached to every front-end error."""
    message: str
    location: SourceLocation
    severity: str  # "error", "warning"
    code: Optional[str] = None
    help_text: Optional[str] = None
    suggestions: Optional[List[str]] = None

    def __str__(self) -> str:
        severity_prefix = self.severity.upper()
        if self.code:
            severity_prefix += f"[{self.code}]"
        result = f"{severity_prefix}: {self.message}\n"
        result += f"  --> {self.location}\n"

        if self.help_text:
            result += f"  help: {self.help_text}\n"

        if self.suggestions:
            result += "  suggestions:\n"
            for suggestion in self.suggestions:
                result += f"    - {suggestion}\n"

        return result


class SourceError(Exception):
    """
    Exception raised when the front end encounters a fatal error.

    str(error) is the description followed by the 1-based line and
    0-based column the input stream was positioned at.
    """

    error_codes: Dict[str, str] = ERROR_CODES

    def __init__(
        self,
        message: str,
        location: SourceLocation,
        code: Optional[str] = None,
        help_text: Optional[str] = None,
        suggestions: Optional[List[str]] = None
    ):
        if code is not None and code not in self.error_codes:
            raise ValueError(f"Unknown error code for {type(self).__name__}: {code!r}")
        self.message = message
        self.location = location
        self.diagnostic = Diagnostic(
            message=message,
            location=location,
            severity="error",
            code=code,
            help_text=help_text,
            suggestions=suggestions
        )
        super().__init__(f"{message} ({location.line}:{location.column})")

    @property
    def line(self) -> int:
        return self.location.line

    @property
    def column(self) -> int:
        return self.location.column

    @property
    def code(self) -> Optional[str]:
        return self.diagnostic.code

    @property
    def category(self) -> Optional[str]:
        """Short description of the error code, if one was given."""
        return self.error_codes.get(self.code) if self.code else None

    def describe(self) -> str:
        """Long form with location, help text and suggestions."""
        return str(self.diagnostic)


class LexerError(SourceError):
    """Raised when the scanner meets input it cannot tokenize."""
