"""Checksum step: hash every artifact with every configured algorithm."""

from __future__ import annotations

import hashlib
from pathlib import Path

from jreleaser.core.context import ExecutionContext
from jreleaser.core.errors import StepError
from jreleaser.core.result import Err, Ok
from jreleaser.output.console import Style

from .base import StepResult

__all__ = ["ChecksumStep", "file_digest", "checksum_filename"]

_CHUNK_SIZE = 1024 * 1024


def file_digest(path: Path, algorithm: str) -> str:
    h = hashlib.new(algorithm)
    with path.open("rb") as f:
        for chunk in iter(lambda: f.read(_CHUNK_SIZE), b""):
            h.update(chunk)
    return h.hexdigest()


def checksum_filename(algorithm: str) -> str:
    return f"checksums_{algorithm}.txt"


class ChecksumStep:
    """Writes ``checksums/checksums_<algorithm>.txt`` listings.

    Each line is ``<hex digest>  <file name>`` (the format ``sha256sum -c``
    reads). With ``checksum.individual`` a ``<file>.<algorithm>`` file is
    written next to the listing as well. Runs in dry-run mode too: nothing
    leaves the output directory.
    """

    name = "checksum"

    def invoke(self, context: ExecutionContext) -> StepResult:
        console = context.logger
        console.header("Calculating checksums")

        artifacts = context.artifact_paths()
        if not artifacts:
            with console.indented():
                console.warning("no artifacts configured")
            return Ok(None)

        missing = [p for p in artifacts if not p.is_file()]
        if missing:
            return Err(
                StepError(
                    self.name,
                    f"artifact not found: {missing[0]}",
                    hint="build the project before running a release workflow",
                )
            )

        config = context.model.checksum
        out_dir = context.checksums_dir
        try:
            out_dir.mkdir(parents=True, exist_ok=True)
            for algorithm in config.algorithms:
                lines: list[str] = []
                with console.indented():
                    for artifact in artifacts:
                        digest = file_digest(artifact, algorithm)
                        lines.append(f"{digest}  {artifact.name}")
                        console.print(f"{algorithm} {artifact.name}", Style.DIM)
                        if config.individual:
                            individual = out_dir / f"{artifact.name}.{algorithm}"
                            individual.write_text(digest + "\n", encoding="utf-8")
                listing = out_dir / checksum_filename(algorithm)
                listing.write_text("\n".join(lines) + "\n", encoding="utf-8")
        except OSError as e:
            return Err(StepError(self.name, f"cannot write checksums: {e}"))

        return Ok(None)
