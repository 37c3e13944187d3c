"""Lexical scopes. Each block entry and each function call gets a fresh Environment whose parent is the scope active at
its static entry point; a closure keeps its defining Environment alive simply by holding a reference to it.
"""

from lox.lang.error import LoxRuntimeError


class Environment:
    """Mapping of names to values within one scope, linked to an optional enclosing scope."""

    def __init__(self, parent=None):
        self.parent = parent
        self.values = {}

    def define(self, name, value):
        """Binds name in this scope, replacing any existing binding here. Never touches enclosing scopes."""
        self.values[name] = value

    def get(self, name):
        """Returns the value bound to token name in the nearest scope that defines it."""
        return self._resolve(name).values[name.lexeme]

    def assign(self, name, value):
        """Rebinds token name in the nearest scope that already defines it."""
        self._resolve(name).values[name.lexeme] = value

    def _resolve(self, name):
        env = self
        while env is not None:
            if name.lexeme in env.values:
                return env
            env = env.parent
        raise LoxRuntimeError(name, f"Undefined variable '{name.lexeme}'.")

    def __repr__(self):
        content = ", ".join(self.values)
        return f"[{content}]" + (f" < {self.parent}" if self.parent else "")
