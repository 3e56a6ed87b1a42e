"""
lambdalang Recursive-Descent Parser

Pulls tokens from a Lexer and builds one AST per program. Atoms are parsed
by recursive descent; binary operators by precedence climbing. Every
syntax error is fatal and reported with the line and column the input
stream had reached.

Author: xwest
"""

import logging
from contextlib import contextmanager
from enum import IntEnum
from types import MappingProxyType
from typing import Callable, List, Mapping, Optional, TypeVar

from ..lexer.lexer import Lexer
from ..lexer.tokens import Token, TokenType, SourceLocation
from .ast_nodes import (
    Expression, SourceSpan, NumberLiteral, StringLiteral, BoolLiteral,
    Variable, OperatorRef, Assign, Binary, If, Lambda, Call, Program
)
from .errors import ParseError, describe_token, suggest_missing_punctuation

logger = logging.getLogger(__name__)

T = TypeVar("T")

# Enough headroom below the interpreter's default recursion limit; each
# nesting level costs a handful of Python frames.
DEFAULT_MAX_DEPTH = 128

ASSIGN_OPERATOR = "="


class Precedence(IntEnum):
    """Binary operator binding strength (higher binds tighter)."""
    NONE = 0
    ASSIGNMENT = 1      # =
    OR = 2              # ||
    AND = 3             # &&
    COMPARISON = 7      # < > <= >= == !=
    TERM = 10           # + -
    FACTOR = 20         # * / %


PRECEDENCE: Mapping[str, Precedence] = MappingProxyType({
    "=": Precedence.ASSIGNMENT,
    "||": Precedence.OR,
    "&&": Precedence.AND,
    "<": Precedence.COMPARISON,
    ">": Precedence.COMPARISON,
    "<=": Precedence.COMPARISON,
    ">=": Precedence.COMPARISON,
    "==": Precedence.COMPARISON,
    "!=": Precedence.COMPARISON,
    "+": Precedence.TERM,
    "-": Precedence.TERM,
    "*": Precedence.FACTOR,
    "/": Precedence.FACTOR,
    "%": Precedence.FACTOR,
})


class Parser:
    """
    lambdalang recursive-descent parser.

    Holds nothing but the token stream, the last consumed token (for
    source spans) and the current nesting depth. Single use: once the
    stream is exhausted parse_toplevel returns an empty Program.
    """

    def __init__(
        self,
        lexer: Lexer,
        right_assoc_assignment: bool = False,
        trailing_separators: bool = False,
        max_depth: int = DEFAULT_MAX_DEPTH
    ):
        """
        Initialize parser with a token stream.

        Args:
            lexer: Lexer positioned at the start of the program
            right_assoc_assignment: Parse a=b=c as a=(b=c) instead of (a=b)=c
            trailing_separators: Accept a separator directly before the closing
                punctuation, as in `f(a,)` or `{ a; }`
            max_depth: Deepest expression nesting accepted before a ParseError;
                every operator folded onto a left operand counts as one level
        """
        self._input = lexer
        self.right_assoc_assignment = right_assoc_assignment
        self.trailing_separators = trailing_separators
        self.max_depth = max_depth
        self._last: Optional[Token] = None
        self._depth = 0

    # Token predicates

    def _peek_of(self, token_type: TokenType, value: Optional[str] = None) -> Optional[Token]:
        token = self._input.peek()
        if token is None or token.type != token_type:
            return None
        if value is not None and token.value != value:
            return None
        return token

    def is_punc(self, char: Optional[str] = None) -> bool:
        return self._peek_of(TokenType.PUNC, char) is not None

    def is_kw(self, keyword: Optional[str] = None) -> bool:
        return self._peek_of(TokenType.KW, keyword) is not None

    def is_op(self, op: Optional[str] = None) -> bool:
        return self._peek_of(TokenType.OP, op) is not None

    def skip_punc(self, char: str):
        if not self.is_punc(char):
            self.error(
                f"Expecting punctuation: {char!r}",
                token=self._input.peek(),
                code="P002",
                suggestions=suggest_missing_punctuation(char)
            )
        self._advance()

    def skip_kw(self, keyword: str):
        if not self.is_kw(keyword):
            self.error(f"Expecting keyword: {keyword!r}", token=self._input.peek(), code="P002")
        self._advance()

    def skip_op(self, op: str):
        if not self.is_op(op):
            self.error(f"Expecting operator: {op!r}", token=self._input.peek(), code="P002")
        self._advance()

    def unexpected(self):
        token = self._input.peek()
        if token is None:
            self.error("Unexpected end of input", code="P001")
        self.error(f"Unexpected token: {describe_token(token)}", token=token, code="P001")

    def error(self, message: str, **details):
        """Raise a ParseError at the input stream's current position."""
        self._input.error(message, ParseError, **details)

    # Grammar

    def delimited(self, start: str, stop: str, separator: str,
                  parser: Callable[[], T]) -> List[T]:
        """
        Parse `start elem (separator elem)* stop`, allowing zero elements.

        A separator directly before stop is rejected unless
        trailing_separators is set.
        """
        items = []
        first = True
        self.skip_punc(start)
        while not self._input.eof():
            if self.is_punc(stop):
                break
            if first:
                first = False
            else:
                self.skip_punc(separator)
                if self.trailing_separators and self.is_punc(stop):
                    break
            items.append(parser())
        self.skip_punc(stop)
        return items

    def maybe_binary(self, left: Expression, my_prec: int) -> Expression:
        """
        Fold binary operators binding tighter than my_prec onto left.

        The right operand is parsed with the operator's own precedence as the
        bound, which makes every operator left-associative; with
        right_assoc_assignment the bound for '=' drops by one.

        Each fold deepens the tree by one level, so folds count against
        max_depth for as long as this call runs.
        """
        folds = 0
        try:
            while True:
                token = self._peek_of(TokenType.OP)
                if token is None:
                    return left
                his_prec = PRECEDENCE.get(token.value, Precedence.NONE)
                if his_prec <= my_prec:
                    return left

                self._advance()
                folds += 1
                self._descend()
                left = self._fold(left, token.value, his_prec)
        finally:
            self._depth -= folds

    def _fold(self, left: Expression, operator: str, his_prec: int) -> Expression:
        right_prec = his_prec
        if operator == ASSIGN_OPERATOR and self.right_assoc_assignment:
            right_prec = his_prec - 1

        with self._nested():
            right = self.maybe_binary(self.parse_atom(), right_prec)

        span = SourceSpan(left.span.start, right.span.end)
        if operator == ASSIGN_OPERATOR:
            return Assign(left, right, span)
        return Binary(operator, left, right, span)

    def maybe_call(self, expr: Expression) -> Expression:
        return self.parse_call(expr) if self.is_punc("(") else expr

    def parse_call(self, func: Expression) -> Call:
        args = self.delimited("(", ")", ",", self.parse_expression)
        return Call(func, args, self._span_from(func.span.start))

    def parse_varname(self) -> str:
        token = self._advance()
        if token is None or token.type != TokenType.VAR:
            self.error("Expecting variable name", token=token, code="P003")
        return token.value

    def parse_if(self) -> If:
        start = self._start_location()
        self.skip_kw("if")
        cond = self.parse_expression()
        if not self.is_punc("{"):
            self.skip_kw("then")
        then = self.parse_expression()
        else_branch = None
        if self.is_kw("else"):
            self._advance()
            else_branch = self.parse_expression()
        return If(cond, then, else_branch, self._span_from(start))

    def parse_lambda(self) -> Lambda:
        start = self._start_location()
        self.skip_kw("lambda")
        params = self.delimited("(", ")", ",", self.parse_varname)
        body = self.parse_expression()
        return Lambda(params, body, self._span_from(start))

    def parse_bool(self) -> BoolLiteral:
        token = self._advance()
        return BoolLiteral(token.value == "true", self._span_from(token.location))

    def parse_atom(self) -> Expression:
        """Parse a primary expression, then an optional call suffix."""
        return self.maybe_call(self._parse_primary())

    def _parse_primary(self) -> Expression:
        if self.is_punc("("):
            self._advance()
            expr = self.parse_expression()
            self.skip_punc(")")
            return expr
        if self.is_punc("{"):
            return self.parse_prog()
        if self.is_kw("if"):
            return self.parse_if()
        if self.is_kw("true") or self.is_kw("false"):
            return self.parse_bool()
        if self.is_kw("lambda"):
            return self.parse_lambda()

        token = self._input.peek()
        if token is None or token.type in (TokenType.PUNC, TokenType.KW):
            self.unexpected()

        self._advance()
        span = self._span_from(token.location)
        if token.type == TokenType.VAR:
            return Variable(token.value, span)
        if token.type == TokenType.NUM:
            return NumberLiteral(token.value, span)
        if token.type == TokenType.STR:
            return StringLiteral(token.value, span)
        return OperatorRef(token.value, span)

    def parse_expression(self) -> Expression:
        with self._nested():
            return self.maybe_call(self.maybe_binary(self.parse_atom(), Precedence.NONE))

    def parse_prog(self) -> Expression:
        """
        Parse a `{ ... }` block.

        An empty block is the literal false and a single statement is
        returned unwrapped; only longer blocks become a Program.
        """
        start = self._start_location()
        body = self.delimited("{", "}", ";", self.parse_expression)
        span = self._span_from(start)
        if not body:
            return BoolLiteral(False, span)
        if len(body) == 1:
            return body[0]
        return Program(body, span)

    def parse_toplevel(self) -> Program:
        """
        Parse the whole input.

        Top-level expressions are separated by ';'; a final ';' is optional.

        Returns:
            Program AST node holding every top-level expression

        Raises:
            ParseError: On the first syntax error
            LexerError: On the first lexical error
        """
        start = self._input.input.location
        body = []
        while not self._input.eof():
            expr = self.parse_expression()
            logger.debug("parsed top-level %s", expr.node_type.value)
            body.append(expr)
            if not self._input.eof():
                self.skip_punc(";")

        end = self._last.location if self._last is not None else start
        logger.debug("parsed %d top-level expressions from %s", len(body), start.filename)
        return Program(body, SourceSpan(start, end))

    # Utility methods

    def _advance(self) -> Optional[Token]:
        """Consume and return the lookahead token."""
        token = self._input.next()
        if token is not None:
            self._last = token
        return token

    def _start_location(self) -> SourceLocation:
        token = self._input.peek()
        return token.location if token is not None else self._input.input.location

    def _span_from(self, start: SourceLocation) -> SourceSpan:
        end = self._last.location if self._last is not None else start
        return SourceSpan(start, end)

    def _descend(self):
        """Enter one more nesting level; the caller undoes the increment."""
        self._depth += 1
        if self._depth > self.max_depth:
            self.error(
                f"Maximum nesting depth exceeded ({self.max_depth})",
                token=self._input.peek(),
                code="P004"
            )

    @contextmanager
    def _nested(self):
        try:
            self._descend()
            yield
        finally:
            self._depth -= 1


def parse_string(
    source: str,
    filename: str = "<string>",
    strict_strings: bool = False,
    **parser_options
) -> Program:
    """
    Convenience function to parse a source string.

    Args:
        source: Source code string
        filename: Filename for error reporting
        strict_strings: Forwarded to Lexer
        **parser_options: Forwarded to Parser (right_assoc_assignment,
            trailing_separators, max_depth)

    Returns:
        Program AST

    Raises:
        SourceError: If lexing or parsing fails
    """
    lexer = Lexer(source, filename, strict_strings=strict_strings)
    return Parser(lexer, **parser_options).parse_toplevel()


def parse_file(filepath: str, **options) -> Program:
    """
    Convenience function to parse a source file.

    Raises:
        SourceError: If lexing or parsing fails
        IOError: If file cannot be read
    """
    with open(filepath, 'r', encoding='utf-8') as f:
        source = f.read()

    return parse_string(source, filepath, **options)
