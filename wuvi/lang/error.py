"""Error handling for the Wuvi language. Only WuviExceptions should be encountered while running a program: if
another type of error is raised and makes it all the way to ErrorHandler, it is assumed to be an internal issue.

Unknown type markers, unknown opcodes and unrecognized lines are not errors at all and never get here.
"""

import sys

from termcolor import colored


class WuviException(Exception):
    """Templates an error/warning message so that it can be used to throw a Wuvi error/warning."""

    def __init__(self, msg, exprs=None, start=0, end=-1, diagnosis=True, internal=False):
        if exprs is None:
            exprs = ""
        if isinstance(exprs, str):
            exprs = [exprs]

        self.msg = msg.format(*(colored(expr, attrs=["bold"]) for expr in exprs))  # color expr snippets
        self.expr = exprs[0]  # exprs[0] should be the offending token that caused the error
        self.end = end if end != -1 else len(self.expr)  # needed for error display

        self.start = start
        self.col = None  # column of expr in the registered line, when the raiser knows it
        self.diagnosis = diagnosis
        self.internal = internal

        super().__init__(msg.format(*exprs))


class ParseError(WuviException):
    """A literal could not be coerced to the type its marker declared. Aborts the run."""

    def __init__(self, token, tag):
        self.token = token
        self.tag = tag
        if token:
            super().__init__("cannot parse '{}' as {}", [token, tag.name.lower()])
        else:
            super().__init__(f"cannot parse an empty literal as {tag.name.lower()}", diagnosis=False)


class InputError(WuviException):
    """The input stream ended while builtin 67 was waiting for a line. Recoverable: the variable stays unbound."""

    def __init__(self, name):
        self.name = name
        super().__init__("end of input while reading '{}'", name)


class ErrorHandler:
    """Context manager that reports Wuvi errors/warnings and stops Python errors from leaking tracebacks."""
    ERROR = "red"
    WARNING = "magenta"

    def __init__(self, fatal=True):
        self.fatal = fatal
        self.traceback = {}

    def register_file(self, path):
        """Registers path in traceback."""
        self.traceback[path] = (None, None)

    def register_line(self, path, line, line_num):
        """Registers line in traceback given path. Should be called before a line is run."""
        self.traceback[path] = (line, line_num)

    def remove_line(self, path):
        """Removes line from traceback given path. Should be called after a line ran successfully."""
        self.traceback[path] = (None, None)

    @staticmethod
    def column(error, line):
        """Returns the column of error in line: error.col if set, else the first occurrence of error.expr."""
        if error.col is not None:
            return error.col + error.start
        return max(line.find(error.expr), 0) + error.start

    @staticmethod
    def diagnose(error, line, warning=False):
        """Returns line with the offending part of error.expr highlighted, and a caret underneath it."""
        color = ErrorHandler.WARNING if warning else ErrorHandler.ERROR
        col = ErrorHandler.column(error, line)
        end = max(col + error.end - error.start, col + 1)

        diagnosis = "  " + line[:col]
        diagnosis += colored(line[col:end], color, attrs=["bold"])
        diagnosis += line[end:] + "\n"

        diagnosis += "  " + " " * col
        diagnosis += colored("^" + "~" * (end - col - 1), color, attrs=["bold"])

        return diagnosis

    def _location(self):
        """Returns (file, line, line_num) of the innermost registered line, or Nones."""
        for file, (line, line_num) in reversed(list(self.traceback.items())):
            if line is not None:
                return file, line, line_num
        return None, None, None

    def warn(self, error):
        """Prints a runtime warning for error and carries on."""
        file, line, line_num = self._location()

        if line is not None:
            col = ErrorHandler.column(error, line)
            error_msg = colored(f"{file}:{line_num}:{col}: ", attrs=["bold"])
        else:
            error_msg = ""
        error_msg += colored("warning: ", ErrorHandler.WARNING, attrs=["bold"]) + error.msg

        print(error_msg, file=sys.stderr)

        if line is not None and not error.internal and error.expr and error.diagnosis:
            print(ErrorHandler.diagnose(error, line, warning=True), file=sys.stderr)

    def throw(self, error):
        """Prints error along with the lines registered in self.traceback. Exits if self.fatal."""
        error_msg = ""
        lines = 0
        for file, (line, line_num) in self.traceback.items():  # dicts are insertion-ordered
            if line is not None:
                error_msg += f"  File '{file}', line {line_num}:\n"
                error_msg += f"    {line}\n"
                lines += 1

        if lines > 1:
            error_msg = "Traceback:\n" + error_msg

        if error.internal:
            error_msg += colored("[internal] ", ErrorHandler.ERROR, attrs=["bold"])

        error_msg += colored("error: ", ErrorHandler.ERROR, attrs=["bold"]) + error.msg
        print(error_msg, file=sys.stderr)

        __, line, __ = self._location()
        if line is not None and not error.internal and error.expr and error.diagnosis:
            print(ErrorHandler.diagnose(error, line), file=sys.stderr)

        if self.fatal:
            sys.exit(1)
        self.traceback = {}  # if error occurred, reset traceback (no need if error is fatal)

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        do_exit = False
        if exc_type is KeyboardInterrupt:
            self.throw(WuviException("keyboard interrupt"))
        elif exc_type is SystemExit:
            do_exit = True
        elif exc_type is not None and issubclass(exc_type, WuviException):
            self.throw(exc_val)
        elif exc_type is not None:
            self.throw(WuviException("unknown error: '{}: {}'", [exc_type.__name__, str(exc_val)], internal=True))
            do_exit = True

        return not do_exit
