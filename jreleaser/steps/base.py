"""Step contract shared by every workflow stage."""

from __future__ import annotations

from pathlib import Path
from typing import Protocol, TypeAlias, runtime_checkable

from jreleaser.core.context import ExecutionContext
from jreleaser.core.errors import StepError
from jreleaser.core.result import Result

__all__ = ["Step", "StepResult", "files_in", "checksum_files", "signature_files"]

StepResult: TypeAlias = Result[None, StepError]


@runtime_checkable
class Step(Protocol):
    """A single unit of release work.

    ``invoke`` is called exactly once per pipeline run with the shared,
    read-only context. Any failure the step can anticipate comes back as
    ``Err(StepError)``; the pipeline stops at the first one.
    """

    name: str

    def invoke(self, context: ExecutionContext) -> StepResult: ...


def files_in(directory: Path, pattern: str = "*") -> list[Path]:
    """Regular files directly under ``directory``, sorted by name."""
    if not directory.is_dir():
        return []
    return sorted(p for p in directory.glob(pattern) if p.is_file())


def checksum_files(context: ExecutionContext) -> list[Path]:
    """Checksum listings produced by the checksum step."""
    return files_in(context.checksums_dir, "checksums_*.txt")


def signature_files(context: ExecutionContext) -> list[Path]:
    return files_in(context.signatures_dir, f"*{context.model.signing.extension}")
