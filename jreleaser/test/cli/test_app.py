from __future__ import annotations

from pathlib import Path

import pytest
from typer.testing import CliRunner

from jreleaser import __version__
from jreleaser.cli.app import app
from jreleaser.core.errors import ErrorCode
from jreleaser.workflow.workflows import WORKFLOWS

runner = CliRunner()


def test_version() -> None:
    result = runner.invoke(app, ["--version"])
    assert result.exit_code == 0
    assert result.output.strip() == __version__


def test_help_lists_every_workflow() -> None:
    result = runner.invoke(app, ["--help"])
    assert result.exit_code == 0
    for name in WORKFLOWS:
        assert name in result.output


def test_unknown_workflow_is_rejected() -> None:
    result = runner.invoke(app, ["deploy"])
    assert result.exit_code != 0


def test_missing_config_exit_code(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.chdir(tmp_path)
    result = runner.invoke(app, ["checksum"])
    assert result.exit_code == int(ErrorCode.USER_ERROR)


def test_dry_run_checksum(tmp_path: Path) -> None:
    config = tmp_path / "jreleaser.json"
    config.write_text(
        '{"project": {"name": "app", "version": "1.0.0"}, "artifacts": ["app.jar"]}',
        encoding="utf-8",
    )
    (tmp_path / "app.jar").write_bytes(b"jar")

    result = runner.invoke(app, ["checksum", "--config-file", str(config), "--dry-run"])

    assert result.exit_code == 0, result.output
    assert (tmp_path / "out" / "jreleaser" / "checksums" / "checksums_sha256.txt").is_file()
