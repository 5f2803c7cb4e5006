"""Package step: archive the prepared distribution."""

from __future__ import annotations

import tarfile
from pathlib import Path
from zipfile import ZIP_DEFLATED, ZipFile

from jreleaser.core.context import ExecutionContext
from jreleaser.core.errors import StepError
from jreleaser.core.result import Err, Ok

from .base import StepResult

__all__ = ["PackageStep", "archive_name"]


def archive_name(distribution: str, fmt: str) -> str:
    return f"{distribution}.{fmt}"


def _collect(stage: Path) -> list[tuple[Path, str]]:
    """Files under ``stage`` paired with their archive names.

    Archive names are rooted at the distribution directory name so that
    extracting yields a single top-level folder.
    """
    out: list[tuple[Path, str]] = []
    for p in sorted(stage.rglob("*")):
        if p.is_dir():
            continue
        rel = p.relative_to(stage).as_posix()
        out.append((p, f"{stage.name}/{rel}"))
    return out


def _write_zip(archive: Path, files: list[tuple[Path, str]]) -> None:
    # Artifacts with mtime before 1980 cannot be stored in ZIP without
    # disabling strict timestamps.
    with ZipFile(archive, "w", compression=ZIP_DEFLATED, strict_timestamps=False) as zf:
        for src, arc in files:
            zf.write(src, arcname=arc)


def _write_tar_gz(archive: Path, files: list[tuple[Path, str]]) -> None:
    with tarfile.open(archive, "w:gz") as tf:
        for src, arc in files:
            tf.add(src, arcname=arc, recursive=False)


_WRITERS = {
    "zip": _write_zip,
    "tar.gz": _write_tar_gz,
}


class PackageStep:
    """Writes ``package/<name>-<version>.<format>`` for each configured format."""

    name = "package"

    def invoke(self, context: ExecutionContext) -> StepResult:
        console = context.logger
        console.header("Packaging distribution")

        stage = context.prepare_dir
        if not stage.is_dir():
            return Err(
                StepError(
                    self.name,
                    f"nothing to package, {stage} does not exist",
                    hint="run the prepare workflow first",
                )
            )

        files = _collect(stage)
        out_dir = context.package_dir
        with console.indented():
            for fmt in context.model.packaging.formats:
                archive = out_dir / archive_name(stage.name, fmt)
                try:
                    out_dir.mkdir(parents=True, exist_ok=True)
                    _WRITERS[fmt](archive, files)
                except (OSError, tarfile.TarError) as e:
                    return Err(StepError(self.name, f"cannot write {archive.name}: {e}"))
                console.success(archive.name)

        return Ok(None)
