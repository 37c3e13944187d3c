"""Lexical analysis for Lox. A single left-to-right pass over a Source that turns program text into a flat list of
Tokens, always terminated by an EOF token.

Lexical errors (an unexpected character, an unterminated string) are reported through the error handler and scanning
carries on, so a single run surfaces every lexical error in the program.
"""

from string import ascii_letters, digits

from lox.core.source import Source
from lox.core.tokens import KEYWORDS, Token, TokenKind


SINGLE_CHAR_TOKENS = {
    "(": TokenKind.LEFT_PAREN,
    ")": TokenKind.RIGHT_PAREN,
    "{": TokenKind.LEFT_BRACE,
    "}": TokenKind.RIGHT_BRACE,
    ",": TokenKind.COMMA,
    ".": TokenKind.DOT,
    "-": TokenKind.MINUS,
    "+": TokenKind.PLUS,
    ";": TokenKind.SEMICOLON,
    "*": TokenKind.STAR,
}

# first char: (kind without "=", kind with "=")
EQUAL_SUFFIXED_TOKENS = {
    "!": (TokenKind.BANG, TokenKind.BANG_EQUAL),
    "=": (TokenKind.EQUAL, TokenKind.EQUAL_EQUAL),
    "<": (TokenKind.LESS, TokenKind.LESS_EQUAL),
    ">": (TokenKind.GREATER, TokenKind.GREATER_EQUAL),
}

WHITESPACE = " \r\t"


def is_digit(char):
    return char in digits


def is_alpha(char):
    return char in ascii_letters or char == "_"


def is_alphanumeric(char):
    return is_alpha(char) or is_digit(char)


class Scanner:
    """Converts source text into tokens, reporting lexical errors to error_handler."""

    def __init__(self, src, error_handler):
        self.source = Source(src)
        self.error_handler = error_handler
        self.tokens = []

    def scan_tokens(self):
        while not self.source.at_end():
            self.source.begin_lexeme()
            self._scan_token()

        self.tokens.append(Token(TokenKind.EOF, "", None, self.source.line))
        return self.tokens

    def _scan_token(self):
        char = self.source.advance()

        if char in SINGLE_CHAR_TOKENS:
            self._add_token(SINGLE_CHAR_TOKENS[char])

        elif char in EQUAL_SUFFIXED_TOKENS:
            plain, with_equal = EQUAL_SUFFIXED_TOKENS[char]
            self._add_token(with_equal if self.source.match("=") else plain)

        elif char == "/":
            if self.source.match("/"):
                while self.source.peek() != "\n" and not self.source.at_end():
                    self.source.advance()
            else:
                self._add_token(TokenKind.SLASH)

        elif char in WHITESPACE:
            pass

        elif char == "\n":
            self.source.new_line()

        elif char == "\"":
            self._string()

        elif is_digit(char):
            self._number()

        elif is_alpha(char):
            self._identifier()

        else:
            self.error_handler.report(self.source.line, "", "Unexpected character.")

    def _string(self):
        while self.source.peek() != "\"" and not self.source.at_end():
            if self.source.peek() == "\n":
                self.source.new_line()  # the token ends up on the line of its closing quote
            self.source.advance()

        if self.source.at_end():
            self.error_handler.report(self.source.line, "", "Unterminated string.")
            return

        self.source.advance()  # closing "
        self._add_token(TokenKind.STRING, self.source.lexeme(1, -1))

    def _number(self):
        while is_digit(self.source.peek()):
            self.source.advance()

        if self.source.peek() == "." and is_digit(self.source.peek_next()):
            self.source.advance()
            while is_digit(self.source.peek()):
                self.source.advance()

        self._add_token(TokenKind.NUMBER, float(self.source.lexeme()))

    def _identifier(self):
        while is_alphanumeric(self.source.peek()):
            self.source.advance()

        self._add_token(KEYWORDS.get(self.source.lexeme(), TokenKind.IDENTIFIER))

    def _add_token(self, kind, literal=None):
        self.tokens.append(Token(kind, self.source.lexeme(), literal, self.source.line))


def scan_tokens(src, error_handler):
    """Shorthand for Scanner(src, error_handler).scan_tokens()."""
    return Scanner(src, error_handler).scan_tokens()
