"""One CLI command per named workflow."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

import typer

from jreleaser.cli.context import build_execution_context
from jreleaser.core.errors import ErrorCode
from jreleaser.core.result import Err
from jreleaser.output.console import ConsoleProtocol, RichConsole
from jreleaser.output.errors import print_step_error
from jreleaser.workflow import workflows


def make_console() -> ConsoleProtocol:
    return RichConsole()


def run_workflow(
    name: str,
    *,
    config_file: Path | None,
    basedir: Path | None,
    dry_run: bool,
) -> None:
    """Build the context, run the named workflow and map failure to an exit code."""
    console = make_console()
    context = build_execution_context(
        config_file=config_file,
        basedir=basedir,
        dry_run=dry_run,
        console=console,
    )

    pipeline = workflows.create(name, context)
    result = pipeline.execute()
    if isinstance(result, Err):
        print_step_error(result.error, console)
        raise typer.Exit(code=int(ErrorCode.STEP_ERROR))


def make_command(name: str) -> Callable[..., None]:
    """Create the typer callback for one workflow."""

    def command(
        config_file: Path | None = typer.Option(
            None,
            "--config-file",
            help="The config file (defaults to ./jreleaser.[toml|yml|json])",
        ),
        basedir: Path | None = typer.Option(
            None,
            "--basedir",
            help="Base directory (defaults to the config file's directory)",
        ),
        dry_run: bool = typer.Option(
            False,
            "--dry-run",
            help="Report what would be done without touching external services",
        ),
    ) -> None:
        run_workflow(name, config_file=config_file, basedir=basedir, dry_run=dry_run)

    command.__name__ = name.replace("-", "_")
    command.__doc__ = workflows.WORKFLOWS[name].__doc__
    return command
