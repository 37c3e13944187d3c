import unittest

from lox.core.nodes import Binary, Grouping, Literal, Unary
from lox.core.printer import AstPrinter, print_ast
from lox.core.tokens import Token, TokenKind


class PrinterTestCase(unittest.TestCase):

    def test_expression(self):
        expr = Binary(
            Unary(Token(TokenKind.MINUS, "-", None, 1), Literal(123.0)),
            Token(TokenKind.STAR, "*", None, 1),
            Grouping(Literal(45.67)),
        )
        self.assertEqual("(* (- 123) (group 45.67))", print_ast(expr))

    def test_literals(self):
        cases = {
            None: "nil",
            True: "true",
            False: "false",
            3.0: "3",
            0.5: "0.5",
            "text": "text",
        }
        for case, expected in cases.items():
            self.assertEqual(expected, print_ast(Literal(case)))

    def test_parenthesize(self):
        printer = AstPrinter()
        self.assertEqual("(fun f (a b))", printer.parenthesize("fun", "f", "(a b)"))
        self.assertEqual("(group 1)", printer.parenthesize("group", Literal(1.0)))
        self.assertEqual("(block)", printer.parenthesize("block"))

    def test_unknown_node(self):
        self.assertRaises(TypeError, print_ast, object())


if __name__ == '__main__':
    unittest.main()
