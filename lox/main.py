"""Runs the Lox interpreter on a script, or in command-line mode when no script is given. Also uses the error handling
context manager. Called from the lox executable script.
"""

import argparse
import sys

from lox.lang.error import ErrorHandler
from lox.lang.session import Session
from lox.lang.shell import Shell


def create_arg_parser():
    parser = argparse.ArgumentParser(prog="lox", description="Tree-walking interpreter for the Lox language.")
    parser.add_argument("script", help="file to interpret and run (if empty, goes to command-line mode)", nargs="?")
    parser.add_argument("--tokens", action="store_true", help="print the token stream before parsing")
    parser.add_argument("--ast", action="store_true", help="print the parsed statements before running them")
    return parser


def main(argv=None):
    """Runs the Lox interpreter. Exits with status 1 if a script had a syntax or runtime error."""
    args = create_arg_parser().parse_args(argv)

    with ErrorHandler() as error_handler:
        sess = Session(error_handler, show_tokens=args.tokens, show_ast=args.ast)

        if args.script is not None:
            sess.run_file(args.script)
            if error_handler.had_error or error_handler.had_runtime_error:
                sys.exit(1)

        else:
            error_handler.fatal = False
            Shell(sess).cmdloop()


if __name__ == "__main__":
    main()
