"""Line grammar and value decoding for env files."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
import re

from envweave.errors import FormatError

LINE_PATTERN = re.compile(
    r"""
    \A
    (?:export\s+)?
    (?P<key>[A-Za-z0-9_.]+)
    (?:\s*=\s*|:\s+?)
    (?P<value>
        '(?:\\'|[^'])*'
      | "(?:\\"|[^"])*"
      | [^\#\n]+
    )?
    (?:\s*\#.*)?
    \Z
    """,
    re.VERBOSE | re.ASCII,
)

# Horizontal whitespace; lines never contain CR or LF.
_BLANK = " \t\f\v"
_QUOTED = re.compile(r"\A(['\"])(.*)\1\Z", re.DOTALL)
_ESCAPED_CHAR = re.compile(r"\\([^$])")


class QuoteContext(str, Enum):
    UNQUOTED = "unquoted"
    SINGLE = "single"
    DOUBLE = "double"

    @classmethod
    def of(cls, raw_value: str) -> "QuoteContext":
        stripped = raw_value.lstrip(_BLANK)
        if stripped.startswith("'"):
            return cls.SINGLE
        if stripped.startswith('"'):
            return cls.DOUBLE
        return cls.UNQUOTED


@dataclass(frozen=True)
class ParsedAssignment:
    key: str
    raw_value: str

    @property
    def quote_context(self) -> QuoteContext:
        return QuoteContext.of(self.raw_value)


def is_ignorable(line: str) -> bool:
    stripped = line.strip()
    return not stripped or stripped.startswith("#")


def match_line(line: str) -> ParsedAssignment | None:
    """Classify one line.

    Returns ``None`` for blank and comment lines and a :class:`ParsedAssignment`
    for an assignment. Anything else raises :class:`FormatError`.
    """
    match = LINE_PATTERN.match(line)
    if match is None:
        if is_ignorable(line):
            return None
        raise FormatError(line)
    return ParsedAssignment(key=match.group("key"), raw_value=match.group("value") or "")


def decode_value(raw_value: str, context: QuoteContext) -> str:
    value = raw_value.strip(_BLANK)
    if context is QuoteContext.UNQUOTED:
        return value

    value = _QUOTED.sub(r"\2", value)
    if context is QuoteContext.DOUBLE:
        value = value.replace("\\n", "\n").replace("\\r", "\r")
        # \$ is kept so the expander can tell an escaped reference apart.
        value = _ESCAPED_CHAR.sub(r"\1", value)
    return value
