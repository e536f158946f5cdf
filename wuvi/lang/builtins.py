"""Builtins of the Wuvi language, invoked by opcode rather than by name.

| opcode | builtin                                   |
|--------|-------------------------------------------|
| 58     | print a variable, or echo the argument    |
| 67     | read one line of input into a variable    |
| 24     | +  (not implemented)                      |
| 32     | -  (not implemented)                      |
| 15     | /  (not implemented)                      |
| 45     | *  (not implemented)                      |
| 40     | ^  (not implemented)                      |
| 0      | %  (not implemented)                      |

Any other opcode does nothing.
"""

from wuvi.lang.error import InputError
from wuvi.lang.values import Tag, TaggedValue, render


PRINT = 58
INPUT = 67
ARITHMETIC = {24: "+", 32: "-", 15: "/", 45: "*", 40: "^", 0: "%"}

MATH_NOTICE = ("Math operations need implementation "
               "(they won't be implemented, they are just added in here for coziness)")


def print_builtin(session, arg):
    """Prints the variable named arg, or arg itself if no such variable exists."""
    tagged = session.lookup(arg)
    session.write(render(tagged) if tagged is not None else arg)


def input_builtin(session, arg):
    """Blocks until a line is read from the session's input, then binds it as a string under arg."""
    line = session.stdin.readline()
    if not line:
        raise InputError(arg)

    if line.endswith("\n"):
        line = line[:-1]
    session.variables[arg] = TaggedValue(Tag.STRING, line)


def math_builtin(session, arg):
    session.write(MATH_NOTICE)


BUILTINS = {PRINT: print_builtin, INPUT: input_builtin}
BUILTINS.update({opcode: math_builtin for opcode in ARITHMETIC})


def dispatch(session, opcode, arg):
    """Runs the builtin for opcode with arg. Unknown opcodes are a no-op."""
    builtin = BUILTINS.get(opcode)
    if builtin is not None:
        builtin(session, arg)
