"""Error types raised by envweave."""

from __future__ import annotations

from dataclasses import dataclass, field


class EnvweaveError(Exception):
    """Base class for envweave errors."""


@dataclass(eq=False)
class FormatError(EnvweaveError, ValueError):
    line: str
    line_number: int | None = None
    source: str | None = None
    env: dict[str, str] = field(default_factory=dict)

    def __str__(self) -> str:
        message = f"Line `{self.line}` doesn't match format"
        if self.line_number is None:
            return message
        location = f"{self.source}:{self.line_number}" if self.source else f"line {self.line_number}"
        return f"{location}: {message}"


class LineTooLongError(EnvweaveError, OSError):
    def __init__(self, limit: int, line_number: int) -> None:
        super().__init__(f"line {line_number} exceeds the maximum line size of {limit} characters")
        self.limit = limit
        self.line_number = line_number


class EncodingError(EnvweaveError, ValueError):
    def __init__(self, line_number: int, reason: str) -> None:
        super().__init__(f"line {line_number} is not valid UTF-8: {reason}")
        self.line_number = line_number
        self.reason = reason
