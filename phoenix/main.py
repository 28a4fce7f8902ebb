"""Runs the Phoenix interpreter on a file, or in command-line mode if no file is given. Also uses the error handling
context manager. Called from the phoenix executable script.
"""

import argparse

from phoenix.lang.error import ErrorHandler
from phoenix.lang.session import Session
from phoenix.lang.shell import Shell

VERSION = "0.1.0"


def main(argv=None):
    """Runs Phoenix interpreter. Called from phoenix executable script."""
    with ErrorHandler() as error_handler:
        parser = argparse.ArgumentParser(prog="phoenix")
        parser.add_argument("file", help="file to interpret and run (if empty, goes to command-line mode)", nargs="?")
        parser.add_argument("--debug", help="print tokens and syntax tree of every line", action="store_true")
        parser.add_argument("--version", action="version", version=f"Phoenix v{VERSION}")
        args = parser.parse_args(argv)

        error_handler.verbose = args.debug

        if args.file is not None:
            Session(error_handler, args.file).run()
        else:
            error_handler.fatal = False
            Shell(Session(error_handler, Session.SH_FILE), VERSION).cmdloop()


if __name__ == "__main__":
    main()
