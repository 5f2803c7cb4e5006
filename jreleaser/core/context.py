"""Execution context shared by every step of a workflow run."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING

from .errors import ConfigurationError
from .model import ReleaseModel
from .result import Err, Ok, Result

if TYPE_CHECKING:
    from jreleaser.output.console import ConsoleProtocol

__all__ = ["ExecutionContext", "build_context"]


@dataclass(frozen=True, slots=True)
class ExecutionContext:
    """Validated model plus run parameters, read-only for the whole run.

    Steps must not use the context to hand data to later steps; anything a
    later step needs is read back from the output directory.
    """

    model: ReleaseModel
    basedir: Path
    output_dir: Path
    dry_run: bool
    logger: ConsoleProtocol

    @property
    def checksums_dir(self) -> Path:
        return self.output_dir / "checksums"

    @property
    def signatures_dir(self) -> Path:
        return self.output_dir / "signatures"

    @property
    def prepare_dir(self) -> Path:
        """Staging directory for the distribution (prepare/<name>-<version>)."""
        return self.output_dir / "prepare" / self.distribution_name

    @property
    def package_dir(self) -> Path:
        return self.output_dir / "package"

    @property
    def distribution_name(self) -> str:
        return f"{self.model.project.name}-{self.model.project.version}"

    def artifact_paths(self) -> list[Path]:
        """Configured artifacts resolved against the base directory."""
        return [self.basedir / a for a in self.model.artifacts]


def build_context(
    model: ReleaseModel,
    basedir: Path,
    output_dir: Path,
    dry_run: bool,
    logger: ConsoleProtocol,
) -> Result[ExecutionContext, ConfigurationError]:
    """Validate the model and bundle it with the run parameters.

    No I/O is performed; locating and reading the config is the caller's job.

    Returns:
        Ok(ExecutionContext), or Err(ConfigurationError) listing every
        validation error when the model is not properly configured.
    """
    errors = model.validate()
    if errors:
        return Err(
            ConfigurationError(
                "JReleaser has not been properly configured",
                errors=tuple(errors),
            )
        )

    return Ok(
        ExecutionContext(
            model=model,
            basedir=basedir,
            output_dir=output_dir,
            dry_run=dry_run,
            logger=logger,
        )
    )
