"""Error handling for the Lox interpreter.

Two kinds of user-facing error exist. Syntax errors come from the scanner and parser: they are reported as they are
found, set ErrorHandler.had_error, and parsing resynchronizes and carries on. Runtime errors (LoxRuntimeError) are
raised while evaluating, unwind to the top of Interpreter.interpret, and are reported once. GenericException covers
host-level problems such as an unreadable script. Any other exception that reaches an ErrorHandler is assumed to be an
internal issue and is never dressed up as one of the above.
"""

import sys

from termcolor import colored


class ParseError(Exception):
    """Unwinds the parser to the nearest declaration so it can resynchronize. Never escapes Parser.parse."""

    def __init__(self, token, message):
        super().__init__(message)
        self.token = token
        self.message = message


class LoxRuntimeError(Exception):
    """Error raised while evaluating a program, located by the token whose operation failed."""

    def __init__(self, token, message):
        super().__init__(message)
        self.token = token
        self.message = message


class GenericException(Exception):
    """Host-level error (bad script path and the like). msg is a format string whose fields are filled with exprs."""

    def __init__(self, msg, exprs=None):
        if exprs is None:
            exprs = []
        if isinstance(exprs, str):
            exprs = [exprs]

        super().__init__(msg.format(*exprs))
        self.msg = msg.format(*(colored(expr, attrs=["bold"]) for expr in exprs))
        self.plain_msg = msg.format(*exprs)


class ErrorHandler:
    """Diagnostic sink for a run of the interpreter, and a context manager that turns stray Python errors into
    diagnostics at the command-line/shell boundary.

    Every diagnostic is printed (colored when the terminal allows) and its plain text is kept in self.messages.
    """
    ERROR = "red"
    WARNING = "magenta"

    def __init__(self, fatal=True, stream=None):
        self.fatal = fatal    # whether a fault caught as a context manager ends the process
        self.stream = stream  # None means sys.stdout at time of writing
        self.had_error = False
        self.had_runtime_error = False
        self.messages = []
        self._internal_fault = None  # last internal fault reported, so nested boundaries report it once

    def report(self, line, where, message):
        """Reports a syntax error. where is "at end", "at '<lexeme>'", or empty for lexical errors."""
        self.had_error = True
        location = f" {where}" if where else ""
        self._emit(f"[line {line}] ", f"Error{location}:", f" {message}", ErrorHandler.ERROR)

    def report_runtime_error(self, line, message):
        self.had_runtime_error = True
        self._emit(f"[line {line}] ", "Runtime error:", f" {message}", ErrorHandler.ERROR)

    def warn(self, line, message):
        self._emit(f"[line {line}] ", "Warning:", f" {message}", ErrorHandler.WARNING)

    def reset(self):
        """Clears the syntax error flag. Called by the shell between lines."""
        self.had_error = False

    def throw(self, error, internal=False):
        """Reports a GenericException caught at the boundary. Exits the process if self.fatal."""
        error_msg = ""
        if internal:
            error_msg += colored("[internal] ", ErrorHandler.ERROR, attrs=["bold"])
        error_msg += colored("error: ", ErrorHandler.ERROR, attrs=["bold"]) + error.msg

        self.messages.append(("[internal] " if internal else "") + "error: " + error.plain_msg)
        self._print(error_msg)

        if self.fatal:
            sys.exit(1)

    def _emit(self, prefix, label, message, color):
        self.messages.append(prefix + label + message)
        self._print(prefix + colored(label, color, attrs=["bold"]) + message)

    def _print(self, text):
        print(text, file=self.stream if self.stream is not None else sys.stdout)

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        do_exit = False
        if exc_type is KeyboardInterrupt:
            self.throw(GenericException("keyboard interrupt"))
        elif exc_type is SystemExit:
            do_exit = True
        elif exc_type is RecursionError:
            self.throw(GenericException("maximum recursion depth exceeded"))
        elif exc_type is GenericException:
            self.throw(exc_val)
        elif exc_type is not None:
            if exc_val is not self._internal_fault:
                self._internal_fault = exc_val
                self.throw(GenericException("unknown error: '{}: {}'", [exc_type.__name__, str(exc_val)]), internal=True)
            do_exit = True

        return not do_exit
