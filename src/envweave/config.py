"""Runtime settings for envweave."""

from __future__ import annotations

from dataclasses import dataclass
import os
from typing import Mapping

DEFAULT_FILENAME = ".env"
MAX_LINE_SIZE = 64 * 1024


@dataclass(frozen=True)
class Settings:
    default_filename: str = DEFAULT_FILENAME
    max_line_size: int = MAX_LINE_SIZE
    log_level: str | None = None
    log_file: str | None = None

    @classmethod
    def from_environ(cls, environ: Mapping[str, str] | None = None) -> "Settings":
        source = os.environ if environ is None else environ
        return cls(
            default_filename=source.get("ENVWEAVE_DEFAULT_FILE") or DEFAULT_FILENAME,
            max_line_size=_positive_int(source.get("ENVWEAVE_MAX_LINE_SIZE"), MAX_LINE_SIZE),
            log_level=source.get("ENVWEAVE_LOG_LEVEL") or None,
            log_file=source.get("ENVWEAVE_LOG_FILE") or None,
        )

    def to_dict(self) -> dict:
        return {
            "default_filename": self.default_filename,
            "max_line_size": self.max_line_size,
            "log_level": self.log_level,
            "log_file": self.log_file,
        }


def _positive_int(raw: str | None, default: int) -> int:
    if not raw:
        return default
    try:
        value = int(raw)
    except ValueError:
        return default
    return value if value > 0 else default
