"""Error presentation utilities.

Centralized formatting of configuration and step errors, plus the exit
code each of them maps to.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from jreleaser.core.errors import ConfigurationError, ErrorCode, OutputDirectoryError, StepError
from jreleaser.output.console import Style

if TYPE_CHECKING:
    from jreleaser.output.console import ConsoleProtocol

__all__ = ["print_configuration_error", "print_step_error", "error_exit_code"]


def print_configuration_error(error: ConfigurationError, console: ConsoleProtocol) -> None:
    console.error(error.pretty())
    with console.indented():
        for message in error.errors:
            console.print(f"- {message}", Style.DIM)


def print_step_error(error: StepError, console: ConsoleProtocol) -> None:
    console.error(f"{error.step}: {error.message}")
    if error.hint:
        console.print(f"hint: {error.hint}", Style.DIM)


def error_exit_code(error: ConfigurationError | OutputDirectoryError | StepError) -> int:
    match error:
        case StepError():
            return int(ErrorCode.STEP_ERROR)
        case ConfigurationError():
            return int(ErrorCode.CONFIG_ERROR)
        case OutputDirectoryError():
            return int(ErrorCode.IO_ERROR)
