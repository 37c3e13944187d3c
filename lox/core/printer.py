"""Debug printer rendering an AST in a canonical, fully parenthesized prefix form, e.g.

```
(123.9 + 92) >= 5 * -9    ->    (>= (group (+ 123.9 92)) (* 5 (- 9)))
```

Used by tooling and tests only: the evaluator never depends on it.
"""

from lox.core.callables import stringify
from lox.core.nodes import (Assign, Binary, Block, Call, Expression, Function, Grouping, If, Literal, Logical, Print,
                            Return, Unary, Var, Variable, While)


class AstPrinter:

    def print(self, node):
        """Renders an expression or statement."""
        match node:
            case Literal(value):
                return stringify(value)
            case Variable(name):
                return name.lexeme
            case Assign(name, value):
                return self.parenthesize("=", name.lexeme, value)
            case Unary(operator, right):
                return self.parenthesize(operator.lexeme, right)
            case Binary(left, operator, right) | Logical(left, operator, right):
                return self.parenthesize(operator.lexeme, left, right)
            case Grouping(expression):
                return self.parenthesize("group", expression)
            case Call(callee, _, arguments):
                return self.parenthesize("call", callee, *arguments)

            case Expression(expression):
                return self.parenthesize(";", expression)
            case Print(expression):
                return self.parenthesize("print", expression)
            case Var(name, None):
                return self.parenthesize("var", name.lexeme)
            case Var(name, initializer):
                return self.parenthesize("var", name.lexeme, initializer)
            case Block(statements):
                return self.parenthesize("block", *statements)
            case If(condition, then_branch, None):
                return self.parenthesize("if", condition, then_branch)
            case If(condition, then_branch, else_branch):
                return self.parenthesize("if", condition, then_branch, else_branch)
            case While(condition, body):
                return self.parenthesize("while", condition, body)
            case Function(name, params, body):
                params = "(" + " ".join(param.lexeme for param in params) + ")"
                return self.parenthesize("fun", name.lexeme, params, *body)
            case Return(_, None):
                return "(return)"
            case Return(_, value):
                return self.parenthesize("return", value)

        raise TypeError(f"Unexpected node @ print(): {node!r}")

    def parenthesize(self, name, *parts):
        """Strings in parts are emitted verbatim; nodes are printed recursively."""
        rendered = [part if isinstance(part, str) else self.print(part) for part in parts]
        return "(" + " ".join([name] + rendered) + ")"


def print_ast(node):
    return AstPrinter().print(node)
