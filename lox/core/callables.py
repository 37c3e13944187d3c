"""Runtime values of Lox. Values are plain Python objects:

```
nil      -> None
boolean  -> bool
number   -> float
string   -> str
callable -> LoxCallable (Clock, LoxFunction)
```

Helpers here define truthiness, equality and the printed form of a value.
"""

import math
import time
from abc import ABC, abstractmethod

from lox.core.environment import Environment


class ReturnSignal(Exception):
    """Unwinds a function body on a `return` statement. Carries the returned value; not an error."""

    def __init__(self, value):
        super().__init__()
        self.value = value


class LoxCallable(ABC):
    """Anything that can appear as the callee of a call expression."""

    @property
    @abstractmethod
    def arity(self):
        """Exact number of arguments the callable accepts."""

    @abstractmethod
    def call(self, interpreter, arguments):
        """Invokes the callable. arguments has already been checked against arity."""


class Clock(LoxCallable):
    """Native clock(): seconds since the epoch as a number."""

    @property
    def arity(self):
        return 0

    def call(self, interpreter, arguments):
        return time.time()

    def __str__(self):
        return "<native fn>"


class LoxFunction(LoxCallable):
    """User-defined function: a Function declaration paired with the environment it was declared in."""

    def __init__(self, declaration, closure):
        self.declaration = declaration
        self.closure = closure

    @property
    def arity(self):
        return len(self.declaration.params)

    def call(self, interpreter, arguments):
        env = Environment(self.closure)
        for param, argument in zip(self.declaration.params, arguments):
            env.define(param.lexeme, argument)

        try:
            interpreter.execute_block(self.declaration.body, env)
        except ReturnSignal as ret:
            return ret.value
        return None

    def __str__(self):
        return f"<fn {self.declaration.name.lexeme}>"


def is_truthy(value):
    """nil and false are falsy; everything else, 0 and "" included, is truthy."""
    if value is None:
        return False
    if isinstance(value, bool):
        return value
    return True


def is_equal(left, right):
    """Value equality. Values of different types are never equal, so true != 1."""
    if left is None or right is None:
        return left is right
    if type(left) is not type(right):
        return False
    return left == right


def stringify(value):
    if value is None:
        return "nil"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float):
        return format_number(value)
    return str(value)


def format_number(value):
    """Integral numbers print without a fractional part; everything else uses the shortest round-trip form."""
    if math.isfinite(value) and value.is_integer() and abs(value) < 1e16:
        return f"{value:.0f}"
    return repr(value)
