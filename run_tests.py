#!/usr/bin/env python3
"""
Main test runner for lambdalang front-end tests.

Author: xwest
"""

import sys
import os
import unittest

# Add the project root to the Python path
project_root = os.path.abspath(os.path.dirname(__file__))
sys.path.insert(0, project_root)


def run_all_tests():
    """Run all lambdalang front-end tests."""

    print("🚀 lambdalang Front End Test Suite")
    print("=" * 60)

    # Test if basic imports work
    try:
        from lambdalang.lexer.lexer import Lexer
        from lambdalang.parser.parser import Parser

        print("✅ All front-end modules imported successfully")
        print()

    except ImportError as e:
        print(f"❌ Failed to import front-end modules: {e}")
        return False

    # Smoke test the pipeline
    print("Testing simple parse pipeline...")
    code = "fib = lambda (n) if n < 2 then n else fib(n - 1) + fib(n - 2);"
    try:
        print("  🔧 Lexing...")
        tokens = Lexer(code).tokenize()
        print(f"     Generated {len(tokens)} tokens")

        print("  🔧 Parsing...")
        ast = Parser(Lexer(code)).parse_toplevel()
        print(f"     Generated AST with {len(ast.body)} top-level expressions")
        print()

    except Exception as e:
        print(f"❌ Parse pipeline test FAILED: {e}")
        import traceback
        traceback.print_exc()
        return False

    # Run the unit test suites
    print("Running unit tests...")
    print("-" * 40)
    suite = unittest.defaultTestLoader.discover(os.path.join(project_root, "tests"), pattern="test_*.py")
    result = unittest.TextTestRunner(verbosity=1).run(suite)
    print("-" * 40)

    if result.wasSuccessful():
        print("✅ All tests PASSED")
    else:
        print(f"❌ {len(result.failures)} failures, {len(result.errors)} errors")
    return result.wasSuccessful()


if __name__ == "__main__":
    success = run_all_tests()
    sys.exit(0 if success else 1)
