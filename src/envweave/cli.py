"""CLI entrypoint for envweave."""

from __future__ import annotations

import json
import os
from pathlib import Path
import subprocess
from typing import List, Optional

import typer

from envweave.config import Settings
from envweave.environ import MappingEnvironment
from envweave.errors import EnvweaveError, FormatError
from envweave.loader import load, overload
from envweave.logging_config import setup_logging
from envweave.parser import strict_parse
from envweave.ui.render import (
    render_env_table,
    render_error,
    render_info,
    render_success,
    render_validation_panel,
)

app = typer.Typer(add_completion=False, help="Load .env files with variable expansion.")


@app.callback(invoke_without_command=True)
def root(ctx: typer.Context) -> None:
    """envweave command line tools."""
    settings = Settings.from_environ()
    try:
        setup_logging(settings)
    except ValueError as exc:
        render_error(str(exc))
        raise typer.Exit(code=2) from exc
    ctx.obj = settings
    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())
        raise typer.Exit(code=0)


@app.command("show")
def show(
    ctx: typer.Context,
    files: Optional[List[Path]] = typer.Argument(None, help="Env files, in load order."),
    strict: bool = typer.Option(False, "--strict", help="Fail on lines that do not parse."),
    as_json: bool = typer.Option(False, "--json", help="Print the variables as JSON."),
) -> None:
    """Show the variables the files resolve to, without touching the environment."""
    settings: Settings = ctx.obj
    paths = _resolve_paths(files, settings)
    scratch = MappingEnvironment(dict(os.environ))
    try:
        env = overload(*paths, environ=scratch, strict=strict, max_line_size=settings.max_line_size)
    except (OSError, EnvweaveError) as exc:
        render_error(str(exc))
        raise typer.Exit(code=1) from exc

    if as_json:
        print(json.dumps(env, indent=2, sort_keys=True, ensure_ascii=False))
        return
    if not env:
        render_info("No variables found.")
        return
    render_env_table(env, title=", ".join(str(path) for path in paths))


@app.command("check")
def check(
    ctx: typer.Context,
    files: Optional[List[Path]] = typer.Argument(None, help="Env files to validate."),
) -> None:
    """Validate env files, reporting the first malformed line of each."""
    settings: Settings = ctx.obj
    paths = _resolve_paths(files, settings)
    scratch = MappingEnvironment(dict(os.environ))
    errors: list[str] = []
    counts: list[str] = []
    for path in paths:
        try:
            with path.open("rb") as handle:
                env = strict_parse(
                    handle,
                    environ=scratch,
                    max_line_size=settings.max_line_size,
                    source=str(path),
                )
        except FormatError as exc:
            errors.append(str(exc))
            continue
        except (EnvweaveError, OSError) as exc:
            errors.append(f"{path}: {exc}")
            continue
        counts.append(f"{path}: {len(env)} variables")

    if errors:
        render_validation_panel("INVALID", errors, style="error")
        raise typer.Exit(code=1)
    render_validation_panel("VALID", counts, style="success")


@app.command("run", context_settings={"allow_interspersed_args": False})
def run(
    ctx: typer.Context,
    command: List[str] = typer.Argument(..., help="Command to run, after --."),
    files: Optional[List[Path]] = typer.Option(None, "--file", "-f", help="Env file; repeat for several."),
    override: bool = typer.Option(False, "--override", help="Overwrite variables that are already set."),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Do not report loaded variables."),
) -> None:
    """Load env files into the environment and run a command."""
    settings: Settings = ctx.obj
    paths = _resolve_paths(files, settings)
    loader = overload if override else load
    try:
        written = loader(*paths, max_line_size=settings.max_line_size)
    except (OSError, EnvweaveError) as exc:
        render_error(str(exc))
        raise typer.Exit(code=1) from exc
    if not quiet:
        render_success(f"Loaded {len(written)} variables from {len(paths)} file(s).")

    try:
        completed = subprocess.run(command, check=False)
    except OSError as exc:
        render_error(f"Failed to run {command[0]}: {exc}")
        raise typer.Exit(code=127) from exc
    raise typer.Exit(code=completed.returncode)


def _resolve_paths(files: Optional[List[Path]], settings: Settings) -> list[Path]:
    if files:
        return list(files)
    return [Path(settings.default_filename)]


def main() -> None:
    app()


if __name__ == "__main__":
    main()
