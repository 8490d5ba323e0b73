"""Load ``.env`` files into the environment, with variable expansion."""

import logging

from envweave.environ import EnvironmentStore, MappingEnvironment, process_environment
from envweave.errors import EncodingError, EnvweaveError, FormatError, LineTooLongError
from envweave.grammar import ParsedAssignment, QuoteContext, decode_value, match_line
from envweave.expand import expand_value
from envweave.loader import apply, load, merge, must_load, must_overload, over_apply, overload
from envweave.parser import Env, parse, strict_parse
from envweave.scanner import scan_lines

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "EncodingError",
    "Env",
    "EnvironmentStore",
    "EnvweaveError",
    "FormatError",
    "LineTooLongError",
    "MappingEnvironment",
    "ParsedAssignment",
    "QuoteContext",
    "apply",
    "decode_value",
    "expand_value",
    "load",
    "match_line",
    "merge",
    "must_load",
    "must_overload",
    "over_apply",
    "overload",
    "parse",
    "process_environment",
    "scan_lines",
    "strict_parse",
]
