"""Runs Wuvi source files, the built-in demo program or the interactive shell. Called from the wuvi console script
and `python -m wuvi`. Also uses the error handling context manager, which exits with status 1 on a fatal error.
"""

import argparse
import sys

import wuvi
from wuvi.lang.error import ErrorHandler, WuviException
from wuvi.lang.session import Session
from wuvi.lang.shell import Shell


DEMO = """
msg = >>+> Hello_World!
58 msg
x = <<- 42
58 x
flag = <<>> <<>>
58 flag
"""


def run_demo(sess):
    """Runs DEMO between the interpreter's banner lines."""
    print("Wuvi Interpreter", file=sess.stdout)
    print("Executing program...", file=sess.stdout)
    print(file=sess.stdout)

    sess.execute(DEMO)

    print(file=sess.stdout)
    print("Wuvin' done", file=sess.stdout)


def read_source(path):
    """Returns the program text at path ('-' is stdin)."""
    if path == "-":
        return sys.stdin.read()

    try:
        with open(path, "r") as file:
            return file.read()
    except OSError:
        raise WuviException("'{}' could not be opened", path, diagnosis=False)


def main(argv=None):
    """Runs the Wuvi interpreter."""
    with ErrorHandler() as error_handler:
        parser = argparse.ArgumentParser(prog="wuvi", description="Wuvi interpreter")
        parser.add_argument("file", help="file to interpret and run ('-' for stdin, if empty, goes to command-line "
                                         "mode)", nargs="?")
        parser.add_argument("--demo", action="store_true", help="run the built-in demo program")
        parser.add_argument("--version", action="version", version=f"%(prog)s {wuvi.__version__}")
        args = parser.parse_args(argv)

        if args.demo:
            run_demo(Session(error_handler, "<demo>"))

        elif args.file is not None:
            source = read_source(args.file)
            Session(error_handler, "<stdin>" if args.file == "-" else args.file).execute(source)

        else:
            error_handler.fatal = False
            Shell(Session(error_handler, Session.SH_FILE)).cmdloop()
