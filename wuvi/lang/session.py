"""Session control for the Wuvi language. A session owns the interpreter state (variables and captured functions)
and runs source text line by line, either a whole program at once or one line at a time from the shell.
"""

import sys
from dataclasses import dataclass, field
from typing import List, Optional

from wuvi.lang.builtins import dispatch
from wuvi.lang.error import ErrorHandler, InputError, ParseError
from wuvi.lang.lexical import Assignment, BuiltinCall, FunctionDef, Statement, is_terminator
from wuvi.lang.values import coerce


@dataclass
class FunctionDefinition:
    """A named block of raw source lines. Captured so its lines are not run as statements, never executed."""
    name: Optional[str]
    params: List[str] = field(default_factory=list)  # header tokens after the name, not interpreted
    body: List[str] = field(default_factory=list)


class Session:
    """Governs a Wuvi session. Sessions are not thread safe: share one across threads only behind a lock."""
    SH_FILE = "<in>"        # command-line interpreter filename
    STRING_FILE = "<string>"

    def __init__(self, error_handler=None, path=STRING_FILE, stdin=None, stdout=None):
        if error_handler is None:
            error_handler = ErrorHandler(fatal=False)

        self.error_handler = error_handler
        self.error_handler.register_file(path)

        self.path = path                                     # used for error messages
        self.stdin = stdin if stdin is not None else sys.stdin
        self.stdout = stdout if stdout is not None else sys.stdout

        self.variables = {}     # dict of name: TaggedValue
        self.functions = {}     # dict of name: FunctionDefinition
        self.capturing = None   # FunctionDefinition whose body is still being read
        self.line_num = 0

    def execute(self, source):
        """Runs every line of source. A ParseError aborts the run: it propagates and the remaining lines are not run.
        A function body left open when source runs out is stored as is.
        """
        self.line_num = 0
        lines = source.split("\n")
        if source.endswith("\n"):
            lines.pop()  # a final newline ends the last line, it does not start a new one

        for line in lines:
            self.feed(line)
        self.finish()

    def feed(self, line):
        """Runs a single line, or adds it to the body of the function currently being captured."""
        self.line_num += 1

        if self.capturing is not None:
            if is_terminator(line):
                self.finish()
            else:
                self.capturing.body.append(line)
            return

        stmt = Statement.infer(line)
        if stmt is None:
            return

        self.error_handler.register_line(self.path, stmt.line.rstrip(), self.line_num)  # in case error is raised
        try:
            self.run(stmt)
        except InputError as error:
            error.col = stmt.columns[1]
            self.error_handler.warn(error)
        self.error_handler.remove_line(self.path)  # error was not raised

    def run(self, stmt):
        """Runs one classified statement against this session's state."""
        if isinstance(stmt, FunctionDef):
            if stmt.valid:
                self.capturing = FunctionDefinition(stmt.name, stmt.params)

        elif isinstance(stmt, Assignment):
            # replaces any previous binding, whatever its tag
            try:
                self.variables[stmt.name] = coerce(stmt.tag, stmt.literal)
            except ParseError as error:
                error.col = stmt.columns[3]  # point at the literal, not an earlier token spelled the same
                raise

        elif isinstance(stmt, BuiltinCall):
            dispatch(self, stmt.opcode, stmt.argument)

    def finish(self):
        """Stores the function being captured, if any."""
        if self.capturing is not None:
            self.functions[self.capturing.name] = self.capturing
            self.capturing = None

    def lookup(self, name):
        """Returns the TaggedValue bound to name, or None."""
        return self.variables.get(name)

    def write(self, text):
        print(text, file=self.stdout)
