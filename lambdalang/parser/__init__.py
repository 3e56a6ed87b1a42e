"""
lambdalang Parser Package

Implements a recursive-descent parser with precedence climbing for binary
operators. Produces an immutable AST whose root is always a Program.

Key Features:
- Single-token lookahead, no backtracking
- Block collapsing ({} is false, {x} is x)
- Optional 'then' before a braced consequent
- Serializable AST (to_dict keeps node and field names stable)
- Fatal, position-anchored diagnostics

Author: xwest
"""

from .ast_nodes import (
    ASTNode, ASTNodeType, ASTVisitor, SourceSpan, Expression,
    NumberLiteral, StringLiteral, BoolLiteral, Variable, OperatorRef,
    Assign, Binary, If, Lambda, Call, Program, DictBuilder
)
from .parser import Parser, Precedence, PRECEDENCE, parse_string, parse_file
from .errors import ParseError

__all__ = [
    # Core parser
    "Parser",
    "Precedence",
    "PRECEDENCE",
    "parse_string",
    "parse_file",

    # AST nodes
    "ASTNode", "ASTNodeType", "ASTVisitor", "SourceSpan", "Expression",
    "NumberLiteral", "StringLiteral", "BoolLiteral", "Variable", "OperatorRef",
    "Assign", "Binary", "If", "Lambda", "Call", "Program", "DictBuilder",

    # Error handling
    "ParseError",
]
