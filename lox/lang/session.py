"""Session control for the Lox interpreter: runs source text through scanner, parser and evaluator against one
long-lived Interpreter, either from a script file or line by line from the shell.
"""

import sys

from lox.core.evaluator import Interpreter
from lox.core.lexical import scan_tokens
from lox.core.parser import parse
from lox.core.printer import print_ast
from lox.lang.error import GenericException


class Session:
    """Governs a Lox session. Global state persists across runs; diagnostics go to error_handler."""
    OPENERS = "({"
    CLOSERS = ")}"

    def __init__(self, error_handler, interpreter=None, show_tokens=False, show_ast=False, out=None):
        self.error_handler = error_handler
        self.interpreter = interpreter if interpreter is not None else Interpreter(out)

        self.show_tokens = show_tokens  # dump the token stream before parsing
        self.show_ast = show_ast        # dump the parsed statements before evaluating
        self.out = out

    def run(self, source):
        """Runs one program. Evaluation is skipped if scanning or parsing reported an error."""
        tokens = scan_tokens(source, self.error_handler)
        if self.show_tokens:
            for token in tokens:
                self._print(str(token))

        statements = parse(tokens, self.error_handler)
        if self.error_handler.had_error:
            return

        if self.show_ast:
            for statement in statements:
                self._print(print_ast(statement))

        self.interpreter.interpret(statements, self.error_handler)

    def run_file(self, path):
        try:
            with open(path, "r", encoding="utf-8") as file:
                source = file.read()
        except (OSError, UnicodeDecodeError):
            raise GenericException("'{}' could not be opened", path)

        if not source.strip():
            self.error_handler.warn(1, f"'{path}' is empty")
        self.run(source)

    @staticmethod
    def preprocess_line(line, prev=""):
        """Joins line onto prev (a pending, unfinished shell input) and returns the combined text along with whether
        more input is needed: brackets are still open, or a string literal is still open. Brackets inside strings and
        comments are ignored.
        """
        text = prev + "\n" + line if prev else line

        depth = 0
        in_string = False
        idx = 0
        while idx < len(text):
            char = text[idx]
            if in_string:
                in_string = char != "\""
            elif char == "\"":
                in_string = True
            elif text.startswith("//", idx):
                idx = text.find("\n", idx)
                if idx == -1:
                    break
            elif char in Session.OPENERS:
                depth += 1
            elif char in Session.CLOSERS:
                depth -= 1
            idx += 1

        return text, depth > 0 or in_string

    def _print(self, text):
        print(text, file=self.out if self.out is not None else sys.stdout)
