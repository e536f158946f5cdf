"""Tagged values for the Wuvi language: the seven value tags, coercion of raw literal tokens into tagged values and
rendering of tagged values back into their display form.

Every per-tag table in this module is keyed by Tag and must cover all of its members, so adding a tag fails at
import time until coercion, defaults and rendering all know about it.
"""

import re
import struct
from dataclasses import dataclass
from enum import Enum

from wuvi.lang.error import ParseError


TRUE_LITERAL = "<<>>"   # boolean literal true, also printed for true
FALSE_LITERAL = ">>"    # boolean literal false, also printed for false
NULL_LITERAL = "_-_"    # printed for null values

INT_MIN, INT_MAX = -2 ** 31, 2 ** 31 - 1

_INTEGER = re.compile(r"[+-]?\d+")
_REAL = re.compile(r"[+-]?(?:(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?|inf(?:inity)?|nan)", re.IGNORECASE)
_NONZERO_DIGIT = re.compile(r"[1-9]")


class Tag(Enum):
    STRING = "string"
    INTEGER = "integer"
    FLOAT = "float"
    DOUBLE = "double"
    BOOL = "bool"
    CHAR = "char"
    NULL = "null"


def _is_char(value):
    return isinstance(value, str) and len(value) == 1


_PAYLOAD_CHECKS = {
    Tag.STRING: lambda value: isinstance(value, str),
    Tag.INTEGER: lambda value: isinstance(value, int) and not isinstance(value, bool) and INT_MIN <= value <= INT_MAX,
    Tag.FLOAT: lambda value: isinstance(value, float),
    Tag.DOUBLE: lambda value: isinstance(value, float),
    Tag.BOOL: lambda value: isinstance(value, bool),
    Tag.CHAR: _is_char,
    Tag.NULL: lambda value: value is None,
}


@dataclass(frozen=True)
class TaggedValue:
    """A value together with its tag. The payload always matches the tag; a mismatch raises TypeError."""
    tag: Tag
    value: object = None

    def __post_init__(self):
        if not _PAYLOAD_CHECKS[self.tag](self.value):
            raise TypeError(f"{self.value!r} is not a valid {self.tag.value} payload")

    def __str__(self):
        return render(self)


def _single(value):
    """Rounds value to single precision. Raises OverflowError outside the single precision range."""
    return struct.unpack("f", struct.pack("f", value))[0]


def _parse_integer(token, tag):
    match = _INTEGER.match(token)
    if not match:
        raise ParseError(token, tag)

    value = int(match.group())
    if not INT_MIN <= value <= INT_MAX:
        raise ParseError(token, tag)
    return value


def _parse_real(token, tag):
    """Parses the leading decimal real of token, trailing characters are ignored."""
    match = _REAL.match(token)
    if not match:
        raise ParseError(token, tag)

    text = match.group()
    value = float(text)
    if value in (float("inf"), float("-inf")) and "inf" not in text.lower():
        raise ParseError(token, tag)  # out of double range

    if tag is Tag.FLOAT:
        try:
            value = _single(value)
        except OverflowError:
            raise ParseError(token, tag)

    mantissa = re.split("[eE]", text)[0]
    if value == 0.0 and _NONZERO_DIGIT.search(mantissa):
        raise ParseError(token, tag)  # underflow: a nonzero literal too small for the type
    return value


def _parse_char(token, tag):
    if not token:
        raise ParseError(token, tag)
    return token[0]


_COERCIONS = {
    Tag.STRING: lambda token, tag: token,
    Tag.INTEGER: _parse_integer,
    Tag.FLOAT: _parse_real,
    Tag.DOUBLE: _parse_real,
    Tag.BOOL: lambda token, tag: token == TRUE_LITERAL,
    Tag.CHAR: _parse_char,
    Tag.NULL: lambda token, tag: None,
}

_DEFAULTS = {
    Tag.STRING: "",
    Tag.INTEGER: 0,
    Tag.FLOAT: 0.0,
    Tag.DOUBLE: 0.0,
    Tag.BOOL: False,
    Tag.CHAR: "\0",
    Tag.NULL: None,
}

_RENDERERS = {
    Tag.STRING: lambda value: value,
    Tag.INTEGER: str,
    Tag.FLOAT: lambda value: format(value, "g"),
    Tag.DOUBLE: lambda value: format(value, "g"),
    Tag.BOOL: lambda value: TRUE_LITERAL if value else FALSE_LITERAL,
    Tag.CHAR: lambda value: value,
    Tag.NULL: lambda value: NULL_LITERAL,
}

for _table in (_PAYLOAD_CHECKS, _COERCIONS, _DEFAULTS, _RENDERERS):
    assert set(_table) == set(Tag), "every tag needs an entry"


def coerce(tag, token=None):
    """Returns a TaggedValue of tag built from the raw literal token, or the tag's default if token is None.
    Raises ParseError when token is not a valid literal for tag.
    """
    if token is None:
        return TaggedValue(tag, _DEFAULTS[tag])
    return TaggedValue(tag, _COERCIONS[tag](token, tag))


def render(tagged):
    """Returns the display form of a TaggedValue (no trailing newline)."""
    return _RENDERERS[tagged.tag](tagged.value)
