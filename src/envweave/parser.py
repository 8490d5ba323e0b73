"""Parse env streams into an :data:`Env` mapping."""

from __future__ import annotations

import logging

from envweave.config import MAX_LINE_SIZE
from envweave.environ import EnvironmentLike, EnvironmentStore, resolve_store
from envweave.errors import FormatError
from envweave.expand import expand_value
from envweave.grammar import QuoteContext, decode_value, match_line
from envweave.scanner import Stream, scan_lines

Env = dict[str, str]

logger = logging.getLogger(__name__)


def parse(
    stream: Stream,
    *,
    environ: EnvironmentLike = None,
    max_line_size: int = MAX_LINE_SIZE,
    source: str | None = None,
) -> Env:
    """Parse ``stream``, skipping lines that do not match the grammar.

    Variable references resolve against earlier lines and then ``environ``
    (the process environment by default), which is only read.
    """
    return _parse(stream, resolve_store(environ), strict=False, max_line_size=max_line_size, source=source)


def strict_parse(
    stream: Stream,
    *,
    environ: EnvironmentLike = None,
    max_line_size: int = MAX_LINE_SIZE,
    source: str | None = None,
) -> Env:
    """Parse ``stream``, raising :class:`FormatError` on the first bad line.

    The error's ``env`` attribute holds the variables parsed before it.
    """
    return _parse(stream, resolve_store(environ), strict=True, max_line_size=max_line_size, source=source)


def parse_line(line: str, env: Env, store: EnvironmentStore) -> None:
    assignment = match_line(line)
    if assignment is None:
        return
    context = assignment.quote_context
    value = decode_value(assignment.raw_value, context)
    if context is not QuoteContext.SINGLE:
        value = expand_value(value, env, store)
    env[assignment.key] = value


def _parse(
    stream: Stream,
    store: EnvironmentStore,
    *,
    strict: bool,
    max_line_size: int,
    source: str | None,
) -> Env:
    env: Env = {}
    for line_number, line in enumerate(scan_lines(stream, max_line_size=max_line_size), start=1):
        try:
            parse_line(line, env, store)
        except FormatError as exc:
            exc.line_number = line_number
            exc.source = source
            if strict:
                exc.env = env
                raise
            logger.debug("Skipping %s", exc)
    return env
