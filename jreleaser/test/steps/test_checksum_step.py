"""Tests for the checksum step."""

from __future__ import annotations

import hashlib
from pathlib import Path

from jreleaser.core.context import ExecutionContext
from jreleaser.core.model import ChecksumConfig, ProjectConfig, ReleaseModel
from jreleaser.core.result import Err, Ok
from jreleaser.output.console import MockConsole
from jreleaser.steps.checksum import ChecksumStep, checksum_filename, file_digest


def _context(tmp_path: Path, model: ReleaseModel, *, dry_run: bool = False) -> ExecutionContext:
    return ExecutionContext(
        model=model,
        basedir=tmp_path,
        output_dir=tmp_path / "out" / "jreleaser",
        dry_run=dry_run,
        logger=MockConsole(),
    )


def _artifact(tmp_path: Path, name: str, content: bytes) -> str:
    path = tmp_path / "build" / name
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(content)
    return f"build/{name}"


def test_file_digest(tmp_path: Path) -> None:
    path = tmp_path / "a.bin"
    path.write_bytes(b"abc")
    assert file_digest(path, "sha256") == hashlib.sha256(b"abc").hexdigest()
    assert file_digest(path, "md5") == hashlib.md5(b"abc").hexdigest()


def test_checksum_filename() -> None:
    assert checksum_filename("sha512") == "checksums_sha512.txt"


def test_writes_listing_per_algorithm(tmp_path: Path) -> None:
    a = _artifact(tmp_path, "app.jar", b"jar")
    b = _artifact(tmp_path, "app.tar", b"tar")
    model = ReleaseModel(
        project=ProjectConfig(name="app", version="1"),
        artifacts=(a, b),
        checksum=ChecksumConfig(algorithms=("sha256", "sha512")),
    )
    context = _context(tmp_path, model)

    assert ChecksumStep().invoke(context) == Ok(None)

    sha256 = (context.checksums_dir / "checksums_sha256.txt").read_text(encoding="utf-8")
    assert sha256 == (
        f"{hashlib.sha256(b'jar').hexdigest()}  app.jar\n"
        f"{hashlib.sha256(b'tar').hexdigest()}  app.tar\n"
    )
    assert (context.checksums_dir / "checksums_sha512.txt").is_file()
    assert not (context.checksums_dir / "app.jar.sha256").exists()


def test_individual_files(tmp_path: Path) -> None:
    a = _artifact(tmp_path, "app.jar", b"jar")
    model = ReleaseModel(
        project=ProjectConfig(name="app", version="1"),
        artifacts=(a,),
        checksum=ChecksumConfig(algorithms=("sha1",), individual=True),
    )
    context = _context(tmp_path, model)

    assert ChecksumStep().invoke(context) == Ok(None)

    individual = context.checksums_dir / "app.jar.sha1"
    assert individual.read_text(encoding="utf-8") == hashlib.sha1(b"jar").hexdigest() + "\n"


def test_missing_artifact_fails(tmp_path: Path) -> None:
    model = ReleaseModel(project=ProjectConfig(name="app", version="1"), artifacts=("build/x.jar",))
    context = _context(tmp_path, model)

    result = ChecksumStep().invoke(context)

    assert isinstance(result, Err)
    assert result.error.step == "checksum"
    assert "x.jar" in result.error.message
    assert not context.checksums_dir.exists()


def test_no_artifacts_is_a_warning(tmp_path: Path) -> None:
    context = _context(tmp_path, ReleaseModel(project=ProjectConfig(name="app", version="1")))

    assert ChecksumStep().invoke(context) == Ok(None)
    assert isinstance(context.logger, MockConsole)
    assert context.logger.find("no artifacts configured")


def test_runs_in_dry_run(tmp_path: Path) -> None:
    a = _artifact(tmp_path, "app.jar", b"jar")
    model = ReleaseModel(project=ProjectConfig(name="app", version="1"), artifacts=(a,))
    context = _context(tmp_path, model, dry_run=True)

    assert ChecksumStep().invoke(context) == Ok(None)
    assert (context.checksums_dir / "checksums_sha256.txt").is_file()
