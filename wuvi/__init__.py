"""Wuvi: a line-oriented interpreter for a mini-language spelled with symbolic type markers and numeric opcodes.

Basic program flow:
    1. Lexical analysis: each line is split on whitespace and classified as a function definition, an assignment or
       a builtin call (see wuvi/lang/lexical.py). Lines that are none of these are ignored.
    2. Execution: a Session runs the classified statement against its variables, or captures the line into the body
       of the function being defined (see wuvi/lang/session.py).
"""

from wuvi.lang.error import ErrorHandler, InputError, ParseError, WuviException
from wuvi.lang.session import FunctionDefinition, Session
from wuvi.lang.values import Tag, TaggedValue

__version__ = "0.1.0"
