"""Line scanner that accepts LF, CR and CRLF terminators, even mixed."""

from __future__ import annotations

import codecs
import re
from typing import IO, Iterator, Union

from envweave.config import MAX_LINE_SIZE
from envweave.errors import EncodingError, LineTooLongError

READ_SIZE = 4096

_TERMINATOR = re.compile(r"\r\n|\r|\n")

Stream = Union[IO[str], IO[bytes]]


def scan_lines(
    stream: Stream,
    *,
    max_line_size: int = MAX_LINE_SIZE,
    read_size: int = READ_SIZE,
) -> Iterator[str]:
    """Yield the lines of ``stream`` without their terminators.

    Runs of terminators are not collapsed, and the trailing chunk is always
    yielded, so ``"aa\\n"`` scans to ``["aa", ""]``. Binary streams are decoded
    as UTF-8.
    """
    decoder = None
    buffer = ""
    line_number = 0

    while True:
        chunk = stream.read(read_size)
        if not chunk:
            if decoder is not None:
                buffer += _decode(decoder, b"", final=True, line_number=line_number, pending=buffer)
            break
        if isinstance(chunk, bytes):
            if decoder is None:
                decoder = codecs.getincrementaldecoder("utf-8")()
            chunk = _decode(decoder, chunk, final=False, line_number=line_number, pending=buffer)
        buffer += chunk

        lines, buffer = _split(buffer, final=False)
        for line in lines:
            line_number += 1
            _check_size(line, line_number, max_line_size)
            yield line
        _check_size(buffer.removesuffix("\r"), line_number + 1, max_line_size)

    lines, buffer = _split(buffer, final=True)
    for line in lines:
        line_number += 1
        _check_size(line, line_number, max_line_size)
        yield line
    _check_size(buffer, line_number + 1, max_line_size)
    yield buffer


def _split(buffer: str, *, final: bool) -> tuple[list[str], str]:
    lines: list[str] = []
    start = 0
    for match in _TERMINATOR.finditer(buffer):
        # A CR at the end of a read may be the first half of a CRLF.
        if not final and match.group() == "\r" and match.end() == len(buffer):
            break
        lines.append(buffer[start : match.start()])
        start = match.end()
    return lines, buffer[start:]


def _decode(decoder: codecs.IncrementalDecoder, data: bytes, *, final: bool, line_number: int, pending: str) -> str:
    try:
        return decoder.decode(data, final=final)
    except UnicodeDecodeError as exc:
        # Lines still held in the buffer come before the bad bytes.
        before = pending + data[: exc.start].decode("utf-8", errors="replace")
        bad_line = line_number + 1 + len(_TERMINATOR.findall(before))
        raise EncodingError(bad_line, exc.reason) from exc


def _check_size(line: str, line_number: int, limit: int) -> None:
    if len(line) > limit:
        raise LineTooLongError(limit, line_number)
