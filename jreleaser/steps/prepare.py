"""Prepare step: stage the distribution directory."""

from __future__ import annotations

import json
import shutil
from pathlib import Path

from jreleaser.core.context import ExecutionContext
from jreleaser.core.errors import StepError
from jreleaser.core.result import Err, Ok

from .base import StepResult, checksum_files
from .checksum import file_digest

__all__ = ["PrepareStep", "MANIFEST_NAME"]

MANIFEST_NAME = "release.json"


class PrepareStep:
    """Fills ``prepare/<name>-<version>/`` with everything to be packaged.

    The directory is recreated on every run and receives the artifacts, the
    checksum listings and a ``release.json`` manifest.
    """

    name = "prepare"

    def invoke(self, context: ExecutionContext) -> StepResult:
        console = context.logger
        console.header("Preparing distribution")

        artifacts = context.artifact_paths()
        missing = [p for p in artifacts if not p.is_file()]
        if missing:
            return Err(
                StepError(
                    self.name,
                    f"artifact not found: {missing[0]}",
                    hint="build the project before running a release workflow",
                )
            )

        stage = context.prepare_dir
        try:
            if stage.exists():
                shutil.rmtree(stage)
            stage.mkdir(parents=True)
            for path in [*artifacts, *checksum_files(context)]:
                shutil.copy2(path, stage / path.name)
            manifest = _manifest(context, artifacts)
            (stage / MANIFEST_NAME).write_text(
                json.dumps(manifest, indent=2) + "\n",
                encoding="utf-8",
            )
        except OSError as e:
            return Err(StepError(self.name, f"cannot stage {stage}: {e}"))

        with console.indented():
            console.success(str(stage))
        return Ok(None)


def _manifest(context: ExecutionContext, artifacts: list[Path]) -> dict[str, object]:
    model = context.model
    return {
        "project": model.project.name,
        "version": model.project.version,
        "description": model.project.description,
        "tag": model.tag_name(),
        "artifacts": [
            {
                "name": p.name,
                "size": p.stat().st_size,
                "sha256": file_digest(p, "sha256"),
            }
            for p in artifacts
        ],
    }
