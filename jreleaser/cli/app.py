from __future__ import annotations

import typer

from jreleaser import __version__
from jreleaser.cli.commands.workflow_cmd import make_command
from jreleaser.workflow.workflows import WORKFLOWS

app = typer.Typer(
    add_completion=False,
    no_args_is_help=True,
    rich_markup_mode="rich",
    help="Release projects: checksum, sign, release, package, upload and announce.",
)


# One command per workflow, in declaration order
for _name in WORKFLOWS:
    app.command(_name)(make_command(_name))


def _print_version(value: bool) -> None:
    if value:
        typer.echo(__version__)
        raise typer.Exit(code=0)


@app.callback()
def _main(  # pyright: ignore[reportUnusedFunction]
    version: bool = typer.Option(
        False,
        "--version",
        help="Show version and exit.",
        callback=_print_version,
        is_eager=True,
    ),
) -> None:
    pass


def main() -> None:
    app()
