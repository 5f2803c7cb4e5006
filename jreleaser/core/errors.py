"""Exit codes and error payloads shared across the release workflow.

Failures are carried as frozen dataclasses inside ``Err`` results. The CLI
maps them to the stable exit codes below.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum
from pathlib import Path

__all__ = ["ErrorCode", "ConfigurationError", "OutputDirectoryError", "StepError"]


class ErrorCode(IntEnum):
    """Exit codes for CLI commands.

    These values are used as process exit codes and should remain stable:
    - 0: Success
    - 1: User error (missing option, config file not found)
    - 2: Configuration error (unparsable or invalid configuration)
    - 3: Step error (a workflow step could not complete)
    - 4: I/O error (output directory not writable)
    """

    OK = 0
    USER_ERROR = 1
    CONFIG_ERROR = 2
    STEP_ERROR = 3
    IO_ERROR = 4

    def __str__(self) -> str:
        return self.name.lower().replace("_", " ")

    @property
    def is_success(self) -> bool:
        return self == ErrorCode.OK


@dataclass(frozen=True, slots=True)
class ConfigurationError:
    """Configuration could not be located, parsed or validated.

    Attributes:
        message: Summary of the problem.
        path: Config file involved, when known.
        errors: Individual validation messages (empty for parse errors).
    """

    message: str
    path: Path | None = None
    errors: tuple[str, ...] = field(default_factory=tuple)

    def pretty(self) -> str:
        if self.path is not None:
            return f"{self.message} ({self.path})"
        return self.message


@dataclass(frozen=True, slots=True)
class StepError:
    """A workflow step failed and the pipeline must halt.

    Attributes:
        step: Name tag of the failing step (e.g. "sign").
        message: What went wrong.
        hint: Optional suggestion for fixing it.
    """

    step: str
    message: str
    hint: str | None = None

    def pretty(self) -> str:
        if self.hint:
            return f"{self.step}: {self.message} (hint: {self.hint})"
        return f"{self.step}: {self.message}"


@dataclass(frozen=True, slots=True)
class OutputDirectoryError:
    """The output directory cannot be created or written to."""

    path: Path
    message: str

    def pretty(self) -> str:
        return f"{self.message} ({self.path})"
