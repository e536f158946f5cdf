"""Lexical analysis for the Wuvi language. Note that this module does not run anything: it tokenizes lines and
classifies them into statements, which are run by session.py.

All grammar can be loosely defined as follows:

```
<func_def>   ::= "init" <name> <token> <token> <token>*   ; body lines follow until a line containing "end"
<assignment> ::= <name> "=" <type_marker> [<literal>]     ; tokens after <literal> are ignored
<builtin>    ::= <opcode> <argument>                      ; opcode is a decimal integer, see builtins.py
```

Anything else is silently ignored. Tokens are separated by whitespace and cannot contain it, so a string literal is
always a single word.
"""

import re
from abc import abstractmethod, ABC

from wuvi.lang.values import Tag


STRING_MARKER = ">>+>"
INTEGER_MARKER = "<<-"
FLOAT_MARKER = ">>+>>"
DOUBLE_MARKER = ">><<++--__"
BOOL_MARKER = "<<>>"        # same spelling as the true literal, see values.TRUE_LITERAL
FALSE_BOOL_MARKER = ">>"    # same spelling as the false literal, see values.FALSE_LITERAL
NULL_MARKER = "_-_"
CHAR_MARKER = "_+_"

TYPE_MARKERS = {
    STRING_MARKER: Tag.STRING,
    INTEGER_MARKER: Tag.INTEGER,
    FLOAT_MARKER: Tag.FLOAT,
    DOUBLE_MARKER: Tag.DOUBLE,
    BOOL_MARKER: Tag.BOOL,
    FALSE_BOOL_MARKER: Tag.BOOL,
    NULL_MARKER: Tag.NULL,
    CHAR_MARKER: Tag.CHAR,
}

DEFINE_KEYWORD = "init"
ASSIGN_MARKER = "="
TERMINATOR = "end"  # matched as a substring of the whole line, not as a token

_OPCODE = re.compile(r"[+-]?\d+")
_TOKEN = re.compile(r"\S+")


def tokenize(line):
    """Splits line on runs of whitespace. Blank lines give []."""
    return line.split()


def parse_type(token):
    """Returns the Tag denoted by a type marker. Unknown markers are null, never an error."""
    return TYPE_MARKERS.get(token, Tag.NULL)


def parse_opcode(token):
    """Returns the leading decimal integer of token, or None if it has none."""
    match = _OPCODE.match(token)
    return int(match.group()) if match else None


def is_terminator(line):
    """Whether line closes a function body: any occurrence of "end", even inside a word, does."""
    return TERMINATOR in line


class Statement(ABC):
    """Superclass representing any statement in the Wuvi language."""

    def __init__(self, tokens, line=None):
        """Assumes check_grammar has returned True for tokens."""
        self.tokens = list(tokens)
        self.line = line if line is not None else " ".join(tokens)  # used for error messages
        self.columns = [match.start() for match in _TOKEN.finditer(self.line)]  # column of each token in line
        self._cls = type(self).__name__

    @staticmethod
    @abstractmethod
    def check_grammar(tokens):
        """This method should check tokens' top-level grammar and return whether or not it is valid."""

    @classmethod
    def infer(cls, line):
        """Tokenizes line and returns an object of the first Statement subclass that accepts it, in the order the
        subclasses are defined. Returns None if no statement matches.
        """
        tokens = tokenize(line)
        if not tokens:
            return None

        for subclass in cls.__subclasses__():
            if subclass.check_grammar(tokens):
                return subclass(tokens, line)
        return None

    def __repr__(self):
        return f"{self._cls}({self.tokens!r})"

    def __eq__(self, other):
        return isinstance(other, type(self)) and other.tokens == self.tokens

    def __hash__(self):
        return hash(tuple(self.tokens))


class FunctionDef(Statement):
    """Function definition header: init <name> <token> <token> <token>*. The body is captured by the session."""
    MIN_TOKENS = 5

    def __init__(self, tokens, line=None):
        super().__init__(tokens, line)
        self.name = self.tokens[1] if len(self.tokens) > 1 else None
        self.params = self.tokens[2:]

    @staticmethod
    def check_grammar(tokens):
        return tokens[0] == DEFINE_KEYWORD

    @property
    def valid(self):
        """Headers that are too short are dropped without capturing a body."""
        return len(self.tokens) >= FunctionDef.MIN_TOKENS


class Assignment(Statement):
    """Variable assignment: <name> = <type_marker> [<literal>]."""

    def __init__(self, tokens, line=None):
        super().__init__(tokens, line)
        self.name, __, self.marker = self.tokens[:3]
        self.literal = self.tokens[3] if len(self.tokens) > 3 else None

    @staticmethod
    def check_grammar(tokens):
        return len(tokens) >= 3 and tokens[1] == ASSIGN_MARKER

    @property
    def tag(self):
        return parse_type(self.marker)


class BuiltinCall(Statement):
    """Builtin invocation: <opcode> <argument>. Tokens after the argument are ignored."""

    def __init__(self, tokens, line=None):
        super().__init__(tokens, line)
        self.opcode = parse_opcode(self.tokens[0])
        self.argument = self.tokens[1]

    @staticmethod
    def check_grammar(tokens):
        return len(tokens) >= 2 and parse_opcode(tokens[0]) is not None
