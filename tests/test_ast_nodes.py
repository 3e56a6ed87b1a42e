"""
Tests for lambdalang AST nodes: equality, traversal and serialization.

Author: xwest
"""

import json
import unittest
import sys
import os

# Add the project root to the Python path
project_root = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))
sys.path.insert(0, project_root)

from lambdalang.lexer.tokens import SourceLocation
from lambdalang.parser.parser import parse_string
from lambdalang.parser.ast_nodes import (
    ASTVisitor, ASTNodeType, SourceSpan, NumberLiteral, StringLiteral, BoolLiteral,
    Variable, OperatorRef, Assign, Binary, If, Lambda, Call, Program
)


class VariableCollector(ASTVisitor):
    """Collects variable names in visiting order."""

    def __init__(self):
        self.names = []

    def visit_variable(self, node):
        self.names.append(node.name)

    def generic_visit(self, node):
        for child in node.children():
            self.visit(child)


class TestNodeEquality(unittest.TestCase):

    def test_equality_ignores_spans(self):
        here = SourceLocation("a", 1, 0, 0)
        there = SourceLocation("b", 3, 7, 42)
        self.assertEqual(Variable("x", SourceSpan(here, here)), Variable("x", SourceSpan(there, there)))

    def test_different_variants_are_unequal(self):
        self.assertNotEqual(NumberLiteral(1), StringLiteral("1"))
        self.assertNotEqual(Binary("=", Variable("a"), Variable("b")), Assign(Variable("a"), Variable("b")))

    def test_sequences_are_tuples(self):
        call = Call(Variable("f"), [NumberLiteral(1)])
        self.assertIsInstance(call.args, tuple)
        self.assertIsInstance(Lambda(["x"], Variable("x")).params, tuple)
        self.assertIsInstance(Program([]).body, tuple)

    def test_assign_operator(self):
        self.assertEqual(Assign(Variable("a"), NumberLiteral(1)).operator, "=")

    def test_repr(self):
        self.assertEqual(
            repr(Binary("+", NumberLiteral(1), Variable("x"))),
            "Binary('+', NumberLiteral(1.0), Variable('x'))"
        )

    def test_node_types(self):
        self.assertEqual(OperatorRef("-").node_type, ASTNodeType.OPERATOR)
        self.assertEqual(BoolLiteral(True).node_type.value, "Bool")


class TestTraversal(unittest.TestCase):

    def test_children(self):
        node = If(Variable("c"), Variable("t"))
        self.assertEqual(node.children(), [Variable("c"), Variable("t")])
        node = If(Variable("c"), Variable("t"), Variable("e"))
        self.assertEqual(len(node.children()), 3)

    def test_walk_is_depth_first(self):
        tree = parse_string("f(a + b, c)")
        kinds = [node.node_type.value for node in tree.walk()]
        self.assertEqual(kinds, ["Program", "Call", "Variable", "Binary", "Variable", "Variable", "Variable"])

    def test_visitor_dispatch(self):
        tree = parse_string("x = lambda (y) if y then z else w(x)")
        collector = VariableCollector()
        tree.accept(collector)
        self.assertEqual(collector.names, ["x", "y", "z", "w", "x"])


class TestSerialization(unittest.TestCase):

    def test_literals(self):
        self.assertEqual(NumberLiteral(2).to_dict(), {"type": "Number", "value": 2.0})
        self.assertEqual(StringLiteral("s").to_dict(), {"type": "String", "value": "s"})
        self.assertEqual(BoolLiteral(False).to_dict(), {"type": "Bool", "value": False})
        self.assertEqual(OperatorRef("-").to_dict(), {"type": "Operator", "operator": "-"})

    def test_if_without_else_omits_key(self):
        self.assertNotIn("else", If(Variable("a"), Variable("b")).to_dict())

    def test_call(self):
        self.assertEqual(
            Call(Variable("f"), [NumberLiteral(1)]).to_dict(),
            {"type": "Call", "func": {"type": "Variable", "name": "f"},
             "args": [{"type": "Number", "value": 1.0}]}
        )

    def test_json_compatible(self):
        tree = parse_string('greet = lambda (name) { print("hi "); print(name) }; greet("bob")')
        encoded = json.dumps(tree.to_dict())
        self.assertEqual(json.loads(encoded), tree.to_dict())


if __name__ == '__main__':
    unittest.main()
