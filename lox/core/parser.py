"""Recursive-descent parser converting a list of Tokens into a list of statements, using the following rules (highest
precedence last):

```
program        → declaration* EOF ;
declaration    → funDecl | varDecl | statement ;
funDecl        → "fun" IDENTIFIER "(" parameters? ")" block ;
parameters     → IDENTIFIER ( "," IDENTIFIER )* ;
varDecl        → "var" IDENTIFIER ( "=" expression )? ";" ;
statement      → exprStmt | forStmt | ifStmt | printStmt | returnStmt | whileStmt | block ;
exprStmt       → expression ";" ;
forStmt        → "for" "(" ( varDecl | exprStmt | ";" ) expression? ";" expression? ")" statement ;
ifStmt         → "if" "(" expression ")" statement ( "else" statement )? ;
printStmt      → "print" expression ";" ;
returnStmt     → "return" expression? ";" ;
whileStmt      → "while" "(" expression ")" statement ;
block          → "{" declaration* "}" ;

expression     → assignment ;
assignment     → IDENTIFIER "=" assignment | logic_or ;
logic_or       → logic_and ( "or" logic_and )* ;
logic_and      → equality ( "and" equality )* ;
equality       → comparison ( ( "!=" | "==" ) comparison )* ;
comparison     → addition ( ( ">" | ">=" | "<" | "<=" ) addition )* ;
addition       → multiplication ( ( "-" | "+" ) multiplication )* ;
multiplication → unary ( ( "/" | "*" ) unary )* ;
unary          → ( "!" | "-" ) unary | call ;
call           → primary ( "(" arguments? ")" )* ;
arguments      → expression ( "," expression )* ;
primary        → NUMBER | STRING | "false" | "true" | "nil" | "(" expression ")" | IDENTIFIER ;
```

Syntax errors are reported through the error handler as soon as they are found. A missing required token raises a
ParseError, which unwinds to the enclosing declaration; the parser then discards tokens up to the next statement
boundary and carries on, so one mistake costs at most the statement it appears in. Errors that leave the parser in a
known state (bad assignment target, too many arguments, top-level return) are reported without unwinding.
"""

from lox.core.nodes import (Assign, Binary, Block, Call, Expression, Function, Grouping, If, Literal, Logical, Print,
                            Return, Unary, Var, Variable, While)
from lox.core.tokens import TokenKind
from lox.lang.error import ParseError


class Parser:
    """Parses one token list. Instances are single-use."""
    MAX_ARGS = 255

    # tokens that begin a declaration/statement: safe places to resume after an error
    SYNC_KINDS = {
        TokenKind.CLASS, TokenKind.FUN, TokenKind.VAR, TokenKind.FOR,
        TokenKind.IF, TokenKind.WHILE, TokenKind.PRINT, TokenKind.RETURN,
    }

    def __init__(self, tokens, error_handler):
        self.tokens = tokens
        self.error_handler = error_handler
        self.current = 0
        self.function_depth = 0  # > 0 while parsing a function body

    def parse(self):
        statements = []
        while not self._is_at_end():
            statement = self._declaration()
            if statement is not None:
                statements.append(statement)
        return statements

    # ---- declarations ----

    def _declaration(self):
        """Returns the parsed declaration, or None if it was discarded after a syntax error."""
        try:
            if self._match(TokenKind.FUN):
                return self._function()
            if self._match(TokenKind.VAR):
                return self._var_declaration()
            return self._statement()
        except ParseError:
            self._synchronize()
            return None

    def _function(self):
        name = self._consume(TokenKind.IDENTIFIER, "Expect function name.")
        self._consume(TokenKind.LEFT_PAREN, "Expect '(' after function name.")

        params = []
        if not self._check(TokenKind.RIGHT_PAREN):
            while True:
                if len(params) >= Parser.MAX_ARGS:
                    self._error(self._peek(), f"Cannot have more than {Parser.MAX_ARGS} parameters.")
                params.append(self._consume(TokenKind.IDENTIFIER, "Expect parameter name."))
                if not self._match(TokenKind.COMMA):
                    break

        self._consume(TokenKind.RIGHT_PAREN, "Expect ')' after parameters.")
        self._consume(TokenKind.LEFT_BRACE, "Expect '{' before function body.")

        self.function_depth += 1
        try:
            body = self._block()
        finally:
            self.function_depth -= 1

        return Function(name, tuple(params), tuple(body))

    def _var_declaration(self):
        name = self._consume(TokenKind.IDENTIFIER, "Expect variable name.")

        initializer = None
        if self._match(TokenKind.EQUAL):
            initializer = self._expression()

        self._consume(TokenKind.SEMICOLON, "Expect ';' after variable declaration.")
        return Var(name, initializer)

    # ---- statements ----

    def _statement(self):
        if self._match(TokenKind.FOR):
            return self._for_statement()
        if self._match(TokenKind.IF):
            return self._if_statement()
        if self._match(TokenKind.PRINT):
            return self._print_statement()
        if self._match(TokenKind.RETURN):
            return self._return_statement()
        if self._match(TokenKind.WHILE):
            return self._while_statement()
        if self._match(TokenKind.LEFT_BRACE):
            return Block(tuple(self._block()))
        return self._expression_statement()

    def _for_statement(self):
        """Desugars `for` into a block holding the initializer and a while loop. The loop body is always a block of the
        user's body followed by the increment, if any.
        """
        self._consume(TokenKind.LEFT_PAREN, "Expect '(' after 'for'.")

        if self._match(TokenKind.SEMICOLON):
            initializer = None
        elif self._match(TokenKind.VAR):
            initializer = self._var_declaration()
        else:
            initializer = self._expression_statement()

        condition = None
        if not self._check(TokenKind.SEMICOLON):
            condition = self._expression()
        self._consume(TokenKind.SEMICOLON, "Expect ';' after loop condition.")

        increment = None
        if not self._check(TokenKind.RIGHT_PAREN):
            increment = self._expression()
        self._consume(TokenKind.RIGHT_PAREN, "Expect ')' after for clauses.")

        body = self._statement()

        body_statements = [body]
        if increment is not None:
            body_statements.append(Expression(increment))

        if condition is None:
            condition = Literal(True)

        loop = While(condition, Block(tuple(body_statements)))
        return Block((initializer, loop) if initializer is not None else (loop,))

    def _if_statement(self):
        self._consume(TokenKind.LEFT_PAREN, "Expect '(' after 'if'.")
        condition = self._expression()
        self._consume(TokenKind.RIGHT_PAREN, "Expect ')' after if condition.")

        then_branch = self._statement()
        else_branch = None
        if self._match(TokenKind.ELSE):
            else_branch = self._statement()

        return If(condition, then_branch, else_branch)

    def _print_statement(self):
        value = self._expression()
        self._consume(TokenKind.SEMICOLON, "Expect ';' after value.")
        return Print(value)

    def _return_statement(self):
        keyword = self._previous()
        if self.function_depth == 0:
            self._error(keyword, "Cannot return from top-level code.")

        value = None
        if not self._check(TokenKind.SEMICOLON):
            value = self._expression()

        self._consume(TokenKind.SEMICOLON, "Expect ';' after return value.")
        return Return(keyword, value)

    def _while_statement(self):
        self._consume(TokenKind.LEFT_PAREN, "Expect '(' after 'while'.")
        condition = self._expression()
        self._consume(TokenKind.RIGHT_PAREN, "Expect ')' after condition.")
        return While(condition, self._statement())

    def _block(self):
        statements = []
        while not self._check(TokenKind.RIGHT_BRACE) and not self._is_at_end():
            statement = self._declaration()
            if statement is not None:
                statements.append(statement)

        self._consume(TokenKind.RIGHT_BRACE, "Expect '}' after block.")
        return statements

    def _expression_statement(self):
        expr = self._expression()
        self._consume(TokenKind.SEMICOLON, "Expect ';' after expression.")
        return Expression(expr)

    # ---- expressions ----

    def _expression(self):
        return self._assignment()

    def _assignment(self):
        expr = self._or()

        if self._match(TokenKind.EQUAL):
            equals = self._previous()
            value = self._assignment()

            if isinstance(expr, Variable):
                return Assign(expr.name, value)

            self._error(equals, "Invalid assignment target.")

        return expr

    def _or(self):
        expr = self._and()
        while self._match(TokenKind.OR):
            operator = self._previous()
            expr = Logical(expr, operator, self._and())
        return expr

    def _and(self):
        expr = self._equality()
        while self._match(TokenKind.AND):
            operator = self._previous()
            expr = Logical(expr, operator, self._equality())
        return expr

    def _equality(self):
        return self._binary(self._comparison, TokenKind.BANG_EQUAL, TokenKind.EQUAL_EQUAL)

    def _comparison(self):
        return self._binary(self._addition, TokenKind.GREATER, TokenKind.GREATER_EQUAL, TokenKind.LESS,
                            TokenKind.LESS_EQUAL)

    def _addition(self):
        return self._binary(self._multiplication, TokenKind.MINUS, TokenKind.PLUS)

    def _multiplication(self):
        return self._binary(self._unary, TokenKind.SLASH, TokenKind.STAR)

    def _binary(self, operand, *kinds):
        """Parses a left-associative chain of operand (kind operand)*."""
        expr = operand()
        while self._match(*kinds):
            operator = self._previous()
            expr = Binary(expr, operator, operand())
        return expr

    def _unary(self):
        if self._match(TokenKind.BANG, TokenKind.MINUS):
            operator = self._previous()
            return Unary(operator, self._unary())
        return self._call()

    def _call(self):
        expr = self._primary()
        while self._match(TokenKind.LEFT_PAREN):
            expr = self._finish_call(expr)
        return expr

    def _finish_call(self, callee):
        arguments = []
        if not self._check(TokenKind.RIGHT_PAREN):
            while True:
                if len(arguments) >= Parser.MAX_ARGS:
                    self._error(self._peek(), f"Cannot have more than {Parser.MAX_ARGS} arguments.")
                arguments.append(self._expression())
                if not self._match(TokenKind.COMMA):
                    break

        paren = self._consume(TokenKind.RIGHT_PAREN, "Expect ')' after arguments.")
        return Call(callee, paren, tuple(arguments))

    def _primary(self):
        if self._match(TokenKind.FALSE):
            return Literal(False)
        if self._match(TokenKind.TRUE):
            return Literal(True)
        if self._match(TokenKind.NIL):
            return Literal(None)
        if self._match(TokenKind.NUMBER, TokenKind.STRING):
            return Literal(self._previous().literal)
        if self._match(TokenKind.IDENTIFIER):
            return Variable(self._previous())
        if self._match(TokenKind.LEFT_PAREN):
            expr = self._expression()
            self._consume(TokenKind.RIGHT_PAREN, "Expect ')' after expression.")
            return Grouping(expr)

        raise self._error(self._peek(), "Expect expression.")

    # ---- token stream primitives ----

    def _match(self, *kinds):
        for kind in kinds:
            if self._check(kind):
                self._advance()
                return True
        return False

    def _consume(self, kind, message):
        if self._check(kind):
            return self._advance()
        raise self._error(self._peek(), message)

    def _check(self, kind):
        if self._is_at_end():
            return False
        return self._peek().kind is kind

    def _advance(self):
        if not self._is_at_end():
            self.current += 1
        return self._previous()

    def _is_at_end(self):
        return self._peek().kind is TokenKind.EOF

    def _peek(self):
        return self.tokens[self.current]

    def _previous(self):
        return self.tokens[self.current - 1]

    def _error(self, token, message):
        """Reports a syntax error at token and returns (does not raise) the matching ParseError."""
        if token.kind is TokenKind.EOF:
            self.error_handler.report(token.line, "at end", message)
        else:
            self.error_handler.report(token.line, f"at '{token.lexeme}'", message)
        return ParseError(token, message)

    def _synchronize(self):
        self._advance()
        while not self._is_at_end():
            if self._previous().kind is TokenKind.SEMICOLON:
                return
            if self._peek().kind in Parser.SYNC_KINDS:
                return
            self._advance()


def parse(tokens, error_handler):
    """Shorthand for Parser(tokens, error_handler).parse()."""
    return Parser(tokens, error_handler).parse()
