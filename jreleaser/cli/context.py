from __future__ import annotations

from pathlib import Path

import typer

from jreleaser.core.config import (
    ensure_output_directory,
    load_config,
    output_directory,
    resolve_basedir,
    resolve_config_file,
)
from jreleaser.core.context import ExecutionContext, build_context
from jreleaser.core.errors import ErrorCode
from jreleaser.core.result import Err
from jreleaser.output.console import ConsoleProtocol, Style
from jreleaser.output.errors import error_exit_code, print_configuration_error


def build_execution_context(
    *,
    config_file: Path | None,
    basedir: Path | None,
    dry_run: bool,
    console: ConsoleProtocol,
    cwd: Path | None = None,
) -> ExecutionContext:
    """Resolve, load and validate the configuration for one invocation.

    Exits with USER_ERROR when the config file or base directory cannot be
    found, with CONFIG_ERROR when the config does not parse or validate, and
    with IO_ERROR when the output directory cannot be created or written.
    No pipeline is built in any of these cases.
    """
    config_result = resolve_config_file(config_file, cwd or Path.cwd())
    if isinstance(config_result, Err):
        typer.echo(f"error: {config_result.error.message}", err=True)
        typer.echo("Try 'jreleaser <workflow> --help' for help.", err=True)
        raise typer.Exit(code=int(ErrorCode.USER_ERROR))
    actual_config = config_result.value

    basedir_result = resolve_basedir(basedir, actual_config)
    if isinstance(basedir_result, Err):
        typer.echo(f"error: {basedir_result.error.message}", err=True)
        raise typer.Exit(code=int(ErrorCode.USER_ERROR))
    actual_basedir = basedir_result.value

    console.info(f"Configuring with {actual_config}")
    with console.indented():
        console.print(f"- basedir set to {actual_basedir}", Style.DIM)
        console.print(f"- dryrun set to {str(dry_run).lower()}", Style.DIM)

    console.info("Reading configuration")
    model_result = load_config(actual_config)
    if isinstance(model_result, Err):
        print_configuration_error(model_result.error, console)
        raise typer.Exit(code=error_exit_code(model_result.error))

    context_result = build_context(
        model_result.value,
        actual_basedir,
        output_directory(actual_basedir),
        dry_run,
        console,
    )
    if isinstance(context_result, Err):
        print_configuration_error(context_result.error, console)
        raise typer.Exit(code=error_exit_code(context_result.error))

    output_result = ensure_output_directory(context_result.value.output_dir)
    if isinstance(output_result, Err):
        console.error(output_result.error.pretty())
        raise typer.Exit(code=error_exit_code(output_result.error))

    return context_result.value
