"""Abstract syntax tree for Lox.

The node set is closed: every consumer (the evaluator, the debug printer) walks the tree with a `match` over the
concrete node classes below rather than through per-node accept methods. Nodes are immutable once the parser has built
them and each node exclusively owns its children.

```
Expr ::= Literal(value) | Variable(name) | Assign(name, value) | Unary(operator, right)
       | Binary(left, operator, right) | Logical(left, operator, right) | Grouping(expression)
       | Call(callee, paren, arguments)

Stmt ::= Expression(expression) | Print(expression) | Var(name, initializer) | Block(statements)
       | If(condition, then_branch, else_branch) | While(condition, body) | Function(name, params, body)
       | Return(keyword, value)
```
"""

from dataclasses import dataclass
from typing import Any, Optional, Tuple

from lox.core.tokens import Token


class Expr:
    """Base class of all expression nodes."""
    __slots__ = ()


class Stmt:
    """Base class of all statement nodes."""
    __slots__ = ()


@dataclass(frozen=True)
class Literal(Expr):
    value: Any


@dataclass(frozen=True)
class Variable(Expr):
    name: Token


@dataclass(frozen=True)
class Assign(Expr):
    name: Token
    value: Expr


@dataclass(frozen=True)
class Unary(Expr):
    operator: Token
    right: Expr


@dataclass(frozen=True)
class Binary(Expr):
    left: Expr
    operator: Token
    right: Expr


@dataclass(frozen=True)
class Logical(Expr):
    """Short-circuiting `and` / `or`."""
    left: Expr
    operator: Token
    right: Expr


@dataclass(frozen=True)
class Grouping(Expr):
    expression: Expr


@dataclass(frozen=True)
class Call(Expr):
    callee: Expr
    paren: Token  # closing paren, used to locate runtime errors
    arguments: Tuple[Expr, ...]


@dataclass(frozen=True)
class Expression(Stmt):
    expression: Expr


@dataclass(frozen=True)
class Print(Stmt):
    expression: Expr


@dataclass(frozen=True)
class Var(Stmt):
    name: Token
    initializer: Optional[Expr]


@dataclass(frozen=True)
class Block(Stmt):
    statements: Tuple[Stmt, ...]


@dataclass(frozen=True)
class If(Stmt):
    condition: Expr
    then_branch: Stmt
    else_branch: Optional[Stmt]


@dataclass(frozen=True)
class While(Stmt):
    condition: Expr
    body: Stmt


@dataclass(frozen=True)
class Function(Stmt):
    name: Token
    params: Tuple[Token, ...]
    body: Tuple[Stmt, ...]


@dataclass(frozen=True)
class Return(Stmt):
    keyword: Token
    value: Optional[Expr]
