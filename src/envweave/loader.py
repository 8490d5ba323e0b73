"""Load env files into an environment store."""

from __future__ import annotations

import logging
from os import PathLike
from pathlib import Path
from typing import Union

from envweave.config import Settings
from envweave.environ import EnvironmentLike, EnvironmentStore, resolve_store
from envweave.errors import EnvweaveError
from envweave.parser import Env, parse, strict_parse
from envweave.scanner import Stream

logger = logging.getLogger(__name__)

Filename = Union[str, PathLike]


def load(
    *filenames: Filename,
    environ: EnvironmentLike = None,
    strict: bool = False,
    max_line_size: int | None = None,
) -> Env:
    """Load ``filenames`` without overriding set variables.

    With no filenames, ``ENVWEAVE_DEFAULT_FILE`` (default ``.env``) is loaded;
    ``max_line_size`` defaults to ``ENVWEAVE_MAX_LINE_SIZE`` (64 KiB).

    A variable already set to a non-empty value in ``environ`` is left alone.
    Files are processed in order, so later files can reference variables from
    earlier ones. The first file that cannot be opened raises ``OSError``;
    variables from files before it stay set. Returns the variables written.
    """
    return _load_files(filenames, resolve_store(environ), override=False, strict=strict, max_line_size=max_line_size)


def overload(
    *filenames: Filename,
    environ: EnvironmentLike = None,
    strict: bool = False,
    max_line_size: int | None = None,
) -> Env:
    """Like :func:`load`, but overwrite variables that are already set."""
    return _load_files(filenames, resolve_store(environ), override=True, strict=strict, max_line_size=max_line_size)


def apply(stream: Stream, *, environ: EnvironmentLike = None, max_line_size: int | None = None) -> Env:
    """Strictly parse an open stream and merge it without overriding.

    A :class:`~envweave.errors.FormatError` propagates and nothing from the
    stream is merged.
    """
    store = resolve_store(environ)
    env = strict_parse(stream, environ=store, max_line_size=max_line_size or Settings.from_environ().max_line_size)
    return merge(env, store, override=False)


def over_apply(stream: Stream, *, environ: EnvironmentLike = None, max_line_size: int | None = None) -> Env:
    store = resolve_store(environ)
    env = strict_parse(stream, environ=store, max_line_size=max_line_size or Settings.from_environ().max_line_size)
    return merge(env, store, override=True)


def must_load(*filenames: Filename, environ: EnvironmentLike = None) -> Env:
    """Call :func:`load` and exit the process if it fails."""
    try:
        return load(*filenames, environ=environ)
    except (OSError, EnvweaveError) as exc:
        logger.critical("Failed to load env files: %s", exc)
        raise SystemExit(f"envweave: {exc}") from exc


def must_overload(*filenames: Filename, environ: EnvironmentLike = None) -> Env:
    try:
        return overload(*filenames, environ=environ)
    except (OSError, EnvweaveError) as exc:
        logger.critical("Failed to load env files: %s", exc)
        raise SystemExit(f"envweave: {exc}") from exc


def merge(env: Env, store: EnvironmentStore, *, override: bool) -> Env:
    """Write ``env`` into ``store``; empty store values count as unset."""
    written: Env = {}
    for key, value in env.items():
        if not override and store.get(key):
            continue
        store.set(key, value)
        written[key] = value
    return written


def _load_files(
    filenames: tuple[Filename, ...],
    store: EnvironmentStore,
    *,
    override: bool,
    strict: bool,
    max_line_size: int | None,
) -> Env:
    settings = Settings.from_environ()
    limit = max_line_size or settings.max_line_size
    written: Env = {}
    for filename in filenames or (settings.default_filename,):
        path = Path(filename)
        read = strict_parse if strict else parse
        with path.open("rb") as handle:
            env = read(handle, environ=store, max_line_size=limit, source=str(path))
        applied = merge(env, store, override=override)
        logger.info("Loaded %d of %d variables from %s", len(applied), len(env), path)
        written.update(applied)
    return written
