"""Tests for the prepare and package steps."""

from __future__ import annotations

import hashlib
import json
import tarfile
from pathlib import Path
from zipfile import ZipFile

from jreleaser.core.context import ExecutionContext
from jreleaser.core.model import PackagingConfig, ProjectConfig, ReleaseModel
from jreleaser.core.result import Err, Ok
from jreleaser.output.console import MockConsole
from jreleaser.steps.package import PackageStep, archive_name
from jreleaser.steps.prepare import MANIFEST_NAME, PrepareStep


def _context(tmp_path: Path, formats: tuple[str, ...] = ("zip",)) -> ExecutionContext:
    jar = tmp_path / "build" / "app.jar"
    jar.parent.mkdir(parents=True, exist_ok=True)
    jar.write_bytes(b"jar-bytes")
    return ExecutionContext(
        model=ReleaseModel(
            project=ProjectConfig(name="app", version="1.0.0", description="Demo"),
            artifacts=("build/app.jar",),
            packaging=PackagingConfig(formats=formats),
        ),
        basedir=tmp_path,
        output_dir=tmp_path / "out",
        dry_run=False,
        logger=MockConsole(),
    )


def _write_checksums(context: ExecutionContext) -> None:
    context.checksums_dir.mkdir(parents=True, exist_ok=True)
    (context.checksums_dir / "checksums_sha256.txt").write_text("x  app.jar\n", encoding="utf-8")


class TestPrepareStep:
    def test_stages_distribution(self, tmp_path: Path) -> None:
        context = _context(tmp_path)
        _write_checksums(context)

        assert PrepareStep().invoke(context) == Ok(None)

        stage = context.prepare_dir
        assert sorted(p.name for p in stage.iterdir()) == [
            "app.jar",
            "checksums_sha256.txt",
            MANIFEST_NAME,
        ]
        manifest = json.loads((stage / MANIFEST_NAME).read_text(encoding="utf-8"))
        assert manifest == {
            "project": "app",
            "version": "1.0.0",
            "description": "Demo",
            "tag": "v1.0.0",
            "artifacts": [
                {
                    "name": "app.jar",
                    "size": len(b"jar-bytes"),
                    "sha256": hashlib.sha256(b"jar-bytes").hexdigest(),
                }
            ],
        }

    def test_recreates_stage(self, tmp_path: Path) -> None:
        context = _context(tmp_path)
        context.prepare_dir.mkdir(parents=True)
        (context.prepare_dir / "stale.txt").write_text("old", encoding="utf-8")

        assert PrepareStep().invoke(context) == Ok(None)
        assert not (context.prepare_dir / "stale.txt").exists()

    def test_missing_artifact(self, tmp_path: Path) -> None:
        context = _context(tmp_path)
        (tmp_path / "build" / "app.jar").unlink()

        result = PrepareStep().invoke(context)

        assert isinstance(result, Err)
        assert result.error.step == "prepare"


class TestPackageStep:
    def test_archive_name(self) -> None:
        assert archive_name("app-1.0.0", "tar.gz") == "app-1.0.0.tar.gz"

    def test_requires_prepared_distribution(self, tmp_path: Path) -> None:
        result = PackageStep().invoke(_context(tmp_path))

        assert isinstance(result, Err)
        assert result.error.step == "package"
        assert result.error.hint == "run the prepare workflow first"

    def test_builds_every_format(self, tmp_path: Path) -> None:
        context = _context(tmp_path, formats=("zip", "tar.gz"))
        assert PrepareStep().invoke(context) == Ok(None)

        assert PackageStep().invoke(context) == Ok(None)

        zip_path = context.package_dir / "app-1.0.0.zip"
        with ZipFile(zip_path) as zf:
            assert sorted(zf.namelist()) == ["app-1.0.0/app.jar", f"app-1.0.0/{MANIFEST_NAME}"]
            assert zf.read("app-1.0.0/app.jar") == b"jar-bytes"

        tar_path = context.package_dir / "app-1.0.0.tar.gz"
        with tarfile.open(tar_path, "r:gz") as tf:
            assert sorted(tf.getnames()) == ["app-1.0.0/app.jar", f"app-1.0.0/{MANIFEST_NAME}"]
