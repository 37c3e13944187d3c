"""Tree-walking evaluator for Lox.

The Interpreter keeps a single "current environment" pointer which is swapped on every block and function entry and
restored on every exit, including exits caused by errors. Runtime errors raise LoxRuntimeError, which unwinds straight
to interpret(); there it is reported and the rest of the run is abandoned. The interpreter itself stays usable, so a
shell can keep feeding it lines after a runtime error.
"""

import math
import sys

from lox.core.callables import Clock, LoxCallable, LoxFunction, ReturnSignal, is_equal, is_truthy, stringify
from lox.core.environment import Environment
from lox.core.nodes import (Assign, Binary, Block, Call, Expression, Function, Grouping, If, Literal, Logical, Print,
                            Return, Unary, Var, Variable, While)
from lox.core.tokens import TokenKind
from lox.lang.error import LoxRuntimeError


class Interpreter:
    """Executes statements against a long-lived global environment."""
    RECURSION_LIMIT = 20000  # host frames; a Lox call takes about six

    def __init__(self, out=None):
        if sys.getrecursionlimit() < Interpreter.RECURSION_LIMIT:
            sys.setrecursionlimit(Interpreter.RECURSION_LIMIT)

        self.out = out  # None means sys.stdout at time of writing
        self.globals = Environment()
        self.globals.define("clock", Clock())
        self.environment = self.globals

    def interpret(self, statements, error_handler):
        """Executes statements in order, stopping at the first runtime error (which is reported to error_handler).
        Anything that isn't a LoxRuntimeError propagates.
        """
        try:
            for statement in statements:
                self.execute(statement)
        except LoxRuntimeError as error:
            error_handler.report_runtime_error(error.token.line, error.message)

    def get_global(self, name):
        """Value of global variable name. Raises KeyError if it isn't defined."""
        return self.globals.values[name]

    # ---- statements ----

    def execute(self, stmt):
        match stmt:
            case Expression(expression):
                self.evaluate(expression)

            case Print(expression):
                value = self.evaluate(expression)
                print(stringify(value), file=self.out if self.out is not None else sys.stdout)

            case Var(name, initializer):
                value = None if initializer is None else self.evaluate(initializer)
                self.environment.define(name.lexeme, value)

            case Block(statements):
                self.execute_block(statements, Environment(self.environment))

            case If(condition, then_branch, else_branch):
                if is_truthy(self.evaluate(condition)):
                    self.execute(then_branch)
                elif else_branch is not None:
                    self.execute(else_branch)

            case While(condition, body):
                while is_truthy(self.evaluate(condition)):
                    self.execute(body)

            case Function(name):
                self.environment.define(name.lexeme, LoxFunction(stmt, self.environment))

            case Return(_, value):
                raise ReturnSignal(None if value is None else self.evaluate(value))

            case _:
                raise TypeError(f"Unexpected statement @ execute(): {stmt!r}")

    def execute_block(self, statements, env):
        """Runs statements with env as the current environment, restoring the previous one however the block exits."""
        previous = self.environment
        try:
            self.environment = env
            for statement in statements:
                self.execute(statement)
        finally:
            self.environment = previous

    # ---- expressions ----

    def evaluate(self, expr):
        match expr:
            case Literal(value):
                return value

            case Grouping(expression):
                return self.evaluate(expression)

            case Variable(name):
                return self.environment.get(name)

            case Assign(name, value_expr):
                value = self.evaluate(value_expr)
                self.environment.assign(name, value)
                return value

            case Logical(left_expr, operator, right_expr):
                left = self.evaluate(left_expr)
                if operator.kind is TokenKind.OR:
                    if is_truthy(left):
                        return left
                elif not is_truthy(left):
                    return left
                return self.evaluate(right_expr)

            case Unary(operator, right_expr):
                return self._unary(operator, self.evaluate(right_expr))

            case Binary(left_expr, operator, right_expr):
                left = self.evaluate(left_expr)
                right = self.evaluate(right_expr)
                return self._binary(operator, left, right)

            case Call(callee_expr, paren, argument_exprs):
                callee = self.evaluate(callee_expr)
                arguments = [self.evaluate(argument) for argument in argument_exprs]
                return self._call(callee, paren, arguments)

            case _:
                raise TypeError(f"Unexpected expression @ evaluate(): {expr!r}")

    @staticmethod
    def _unary(operator, right):
        match operator.kind:
            case TokenKind.BANG:
                return not is_truthy(right)
            case TokenKind.MINUS:
                check_number_operand(operator, right)
                return -right
        raise TypeError(f"Unexpected unary operator @ _unary(): {operator}")

    @staticmethod
    def _binary(operator, left, right):
        match operator.kind:
            case TokenKind.EQUAL_EQUAL:
                return is_equal(left, right)
            case TokenKind.BANG_EQUAL:
                return not is_equal(left, right)
            case TokenKind.PLUS:
                if isinstance(left, float) and isinstance(right, float):
                    return left + right
                if isinstance(left, str) and isinstance(right, str):
                    return left + right
                raise LoxRuntimeError(operator, "Operands must be two numbers or two strings.")

        check_number_operands(operator, left, right)

        match operator.kind:
            case TokenKind.MINUS:
                return left - right
            case TokenKind.STAR:
                return left * right
            case TokenKind.SLASH:
                return divide(left, right)
            case TokenKind.GREATER:
                return left > right
            case TokenKind.GREATER_EQUAL:
                return left >= right
            case TokenKind.LESS:
                return left < right
            case TokenKind.LESS_EQUAL:
                return left <= right
        raise TypeError(f"Unexpected binary operator @ _binary(): {operator}")

    def _call(self, callee, paren, arguments):
        if not isinstance(callee, LoxCallable):
            raise LoxRuntimeError(paren, "Can only call functions and classes.")
        if len(arguments) != callee.arity:
            raise LoxRuntimeError(paren, f"Expected {callee.arity} arguments but got {len(arguments)}.")
        return callee.call(self, arguments)


def check_number_operand(operator, operand):
    if not isinstance(operand, float):
        raise LoxRuntimeError(operator, "Operand must be a number.")


def check_number_operands(operator, left, right):
    if not (isinstance(left, float) and isinstance(right, float)):
        raise LoxRuntimeError(operator, "Operands must be numbers.")


def divide(left, right):
    """IEEE-754 division: dividing by zero gives an infinity or NaN rather than an error."""
    if right == 0:
        if left == 0 or math.isnan(left):
            return math.nan
        return math.copysign(math.inf, left) * math.copysign(1.0, right)
    return left / right
