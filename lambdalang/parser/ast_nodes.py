"""
Abstract Syntax Tree node definitions for lambdalang.

The node set is closed: literals (Number, String, Bool), Variable, Assign,
Binary, If, Lambda, Call, Program, and the Operator leaf a bare operator
token turns into. Nodes are built bottom-up by the parser and never
mutated afterwards; child sequences are stored as tuples.

Equality is structural and ignores source spans, so two parses of the
same text compare equal.

Author: xwest
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional, Sequence, Tuple
from dataclasses import dataclass
from enum import Enum

from ..lexer.tokens import SourceLocation


class ASTNodeType(Enum):
    """Enumeration of all AST node types. Values are the serialized tags."""

    # Top-level
    PROGRAM = "Program"

    # Literals
    NUMBER = "Number"
    STRING = "String"
    BOOL = "Bool"

    # References
    VARIABLE = "Variable"
    OPERATOR = "Operator"

    # Compound expressions
    ASSIGN = "Assign"
    BINARY = "Binary"
    IF = "If"
    LAMBDA = "Lambda"
    CALL = "Call"


@dataclass(frozen=True)
class SourceSpan:
    """Represents a span of source code (start of first and last token)."""
    start: SourceLocation
    end: SourceLocation

    def __str__(self) -> str:
        if self.start.filename == self.end.filename:
            return f"{self.start.filename}:{self.start.line}:{self.start.column}-{self.end.line}:{self.end.column}"
        return f"{self.start}-{self.end}"


class ASTVisitor(ABC):
    """
    Visitor interface for traversing AST nodes.

    visit() dispatches to visit_<node type> (e.g. visit_binary), falling
    back to generic_visit.
    """

    def visit(self, node: 'ASTNode') -> Any:
        method = getattr(self, f"visit_{node.node_type.name.lower()}", self.generic_visit)
        return method(node)

    @abstractmethod
    def generic_visit(self, node: 'ASTNode') -> Any:
        """Handle a node with no dedicated visit method."""


class ASTNode(ABC):
    """Base class for all AST nodes."""

    node_type: ASTNodeType
    _fields: Tuple[str, ...] = ()

    def __init__(self, span: Optional[SourceSpan] = None):
        self.span = span

    def accept(self, visitor: ASTVisitor) -> Any:
        """Accept a visitor (visitor pattern)."""
        return visitor.visit(self)

    @abstractmethod
    def children(self) -> List['ASTNode']:
        """Get all child nodes."""

    def field_values(self) -> Tuple[Any, ...]:
        return tuple(getattr(self, name) for name in self._fields)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize the subtree to plain dicts/lists (JSON-compatible)."""
        return DictBuilder().visit(self)

    def walk(self):
        """Yield this node and all descendants, depth first."""
        yield self
        for child in self.children():
            yield from child.walk()

    def __eq__(self, other) -> bool:
        if type(self) is not type(other):
            return NotImplemented
        return self.field_values() == other.field_values()

    def __hash__(self) -> int:
        return hash((type(self).__name__, self.field_values()))

    def __str__(self) -> str:
        return f"{self.node_type.value}@{self.span}"

    def __repr__(self) -> str:
        args = ", ".join(repr(value) for value in self.field_values())
        return f"{self.__class__.__name__}({args})"


class Expression(ASTNode):
    """Base class for expressions."""


# ============================================================================
# Literals and references
# ============================================================================

class NumberLiteral(Expression):
    """Numeric literal. All numbers are floats."""
    node_type = ASTNodeType.NUMBER
    _fields = ("value",)

    def __init__(self, value: float, span: Optional[SourceSpan] = None):
        super().__init__(span)
        self.value = float(value)

    def children(self) -> List[ASTNode]:
        return []


class StringLiteral(Expression):
    """String literal with escapes already decoded."""
    node_type = ASTNodeType.STRING
    _fields = ("value",)

    def __init__(self, value: str, span: Optional[SourceSpan] = None):
        super().__init__(span)
        self.value = value

    def children(self) -> List[ASTNode]:
        return []


class BoolLiteral(Expression):
    node_type = ASTNodeType.BOOL
    _fields = ("value",)

    def __init__(self, value: bool, span: Optional[SourceSpan] = None):
        super().__init__(span)
        self.value = value

    def children(self) -> List[ASTNode]:
        return []


class Variable(Expression):
    """Reference to an identifier."""
    node_type = ASTNodeType.VARIABLE
    _fields = ("name",)

    def __init__(self, name: str, span: Optional[SourceSpan] = None):
        super().__init__(span)
        self.name = name

    def children(self) -> List[ASTNode]:
        return []


class OperatorRef(Expression):
    """An operator token that appeared where an operand was expected."""
    node_type = ASTNodeType.OPERATOR
    _fields = ("operator",)

    def __init__(self, operator: str, span: Optional[SourceSpan] = None):
        super().__init__(span)
        self.operator = operator

    def children(self) -> List[ASTNode]:
        return []


# ============================================================================
# Compound expressions
# ============================================================================

class Assign(Expression):
    """
    Assignment expression.

    The left side should be a Variable; the parser does not enforce it.
    """
    node_type = ASTNodeType.ASSIGN
    _fields = ("operator", "left", "right")

    def __init__(self, left: Expression, right: Expression, span: Optional[SourceSpan] = None):
        super().__init__(span)
        self.operator = "="
        self.left = left
        self.right = right

    def children(self) -> List[ASTNode]:
        return [self.left, self.right]


class Binary(Expression):
    """Binary operation expression (any operator but '=')."""
    node_type = ASTNodeType.BINARY
    _fields = ("operator", "left", "right")

    def __init__(self, operator: str, left: Expression, right: Expression,
                 span: Optional[SourceSpan] = None):
        super().__init__(span)
        self.operator = operator
        self.left = left
        self.right = right

    def children(self) -> List[ASTNode]:
        return [self.left, self.right]


class If(Expression):
    """Conditional expression; else_branch is None when there is no else."""
    node_type = ASTNodeType.IF
    _fields = ("cond", "then", "else_branch")

    def __init__(self, cond: Expression, then: Expression,
                 else_branch: Optional[Expression] = None,
                 span: Optional[SourceSpan] = None):
        super().__init__(span)
        self.cond = cond
        self.then = then
        self.else_branch = else_branch

    def children(self) -> List[ASTNode]:
        nodes = [self.cond, self.then]
        if self.else_branch is not None:
            nodes.append(self.else_branch)
        return nodes


class Lambda(Expression):
    node_type = ASTNodeType.LAMBDA
    _fields = ("params", "body")

    def __init__(self, params: Sequence[str], body: Expression,
                 span: Optional[SourceSpan] = None):
        super().__init__(span)
        self.params: Tuple[str, ...] = tuple(params)
        self.body = body

    def children(self) -> List[ASTNode]:
        return [self.body]


class Call(Expression):
    """Function call expression."""
    node_type = ASTNodeType.CALL
    _fields = ("func", "args")

    def __init__(self, func: Expression, args: Sequence[Expression],
                 span: Optional[SourceSpan] = None):
        super().__init__(span)
        self.func = func
        self.args: Tuple[Expression, ...] = tuple(args)

    def children(self) -> List[ASTNode]:
        return [self.func] + list(self.args)


class Program(Expression):
    """
    Sequence of expressions.

    Produced for the top level, and for blocks holding more than one
    statement.
    """
    node_type = ASTNodeType.PROGRAM
    _fields = ("body",)

    def __init__(self, body: Sequence[Expression], span: Optional[SourceSpan] = None):
        super().__init__(span)
        self.body: Tuple[Expression, ...] = tuple(body)

    def children(self) -> List[ASTNode]:
        return list(self.body)


# ============================================================================
# Serialization
# ============================================================================

class DictBuilder(ASTVisitor):
    """Turns a tree into nested dicts keyed by the node's field names."""

    def generic_visit(self, node: ASTNode) -> Dict[str, Any]:
        result: Dict[str, Any] = {"type": node.node_type.value}
        for name, value in zip(node._fields, node.field_values()):
            result[name] = self._convert(value)
        return result

    def visit_if(self, node: If) -> Dict[str, Any]:
        result = {
            "type": node.node_type.value,
            "cond": self.visit(node.cond),
            "then": self.visit(node.then),
        }
        if node.else_branch is not None:
            result["else"] = self.visit(node.else_branch)
        return result

    def _convert(self, value: Any) -> Any:
        if isinstance(value, ASTNode):
            return self.visit(value)
        if isinstance(value, tuple):
            return [self._convert(item) for item in value]
        return value
