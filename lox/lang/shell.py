"""Handles interactive/command-line mode for the Lox interpreter. Uses cmd as backend."""

import cmd

from lox.lang.session import Session


class Shell(cmd.Cmd):
    """Lox interpreter shell. Each complete input is run as its own program against the session's interpreter."""
    intro = "Lox interpreter :: Python backend\nType 'exit' or press Ctrl-D to leave."
    prompt = "> "
    secondary_prompt = ". "  # used for line continuations
    _tmp_prompt = "> "       # also used for prompt swapping in line continuations

    def __init__(self, sess, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.sess = sess
        self._tmp_line = ""

    def default(self, line):
        """Executes arbitrary Lox code."""
        with self.sess.error_handler:  # needed because cmd.Cmd automatically exits on Exception
            line, add_to_prev = Session.preprocess_line(line, self._tmp_line)

            if add_to_prev:
                self._tmp_line = line
                self.prompt = self.secondary_prompt
                return

            self._tmp_line = ""
            self.prompt = self._tmp_prompt
            try:
                self.sess.run(line)
            finally:
                self.sess.error_handler.reset()  # a syntax error only spoils its own input

    def do_help(self, arg):
        """Prints a short tour of the language instead of the command list."""
        print("Welcome to the Lox interpreter!\n\n"
              "Lox is a small dynamically-typed scripting language with C-like syntax. Statements end\n"
              "with ';' and blocks are wrapped in braces; unfinished blocks continue on the next line.\n\n"
              "Try it out by typing 'var greeting = \"hi\";'. Next, type 'print greeting;'. Functions\n"
              "are declared with 'fun', and 'clock()' returns the current time in seconds.")

    def emptyline(self):
        """Do not repeat previous command on empty line."""
        return ""

    def do_EOF(self, arg):
        """Exits interpreter."""
        print()
        return self.do_exit(arg)

    def do_exit(self, arg):
        """Exits interpreter."""
        return True
