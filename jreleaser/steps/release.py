"""Release step: publish a GitHub release through the ``gh`` CLI."""

from __future__ import annotations

import os
import shlex
import shutil
from collections.abc import Callable
from pathlib import Path

from jreleaser.core.context import ExecutionContext
from jreleaser.core.errors import StepError
from jreleaser.core.model import ReleaseConfig
from jreleaser.core.result import Err, Ok
from jreleaser.output.console import Style
from jreleaser.platform.process import ProcessRunner
from jreleaser.platform.process import run as run_process

from .base import StepResult, checksum_files, signature_files

__all__ = ["ReleaseStep", "TOKEN_ENV", "GH_TIMEOUT_SECONDS"]

TOKEN_ENV = "JRELEASER_GITHUB_TOKEN"
GH_TIMEOUT_SECONDS = 15 * 60.0


class ReleaseStep:
    """Creates the tag and release, attaching artifacts, checksums and signatures.

    Skipped when the model has no ``release`` section. A token found in
    ``JRELEASER_GITHUB_TOKEN`` is handed to ``gh`` as ``GH_TOKEN``;
    otherwise ``gh``'s own login is used.
    """

    name = "release"

    def __init__(
        self,
        *,
        runner: ProcessRunner = run_process,
        which: Callable[[str], str | None] = shutil.which,
    ) -> None:
        self._run = runner
        self._which = which

    def invoke(self, context: ExecutionContext) -> StepResult:
        console = context.logger
        release = context.model.release
        console.header("Releasing")

        if release is None:
            with console.indented():
                console.info("release is not configured, skipping")
            return Ok(None)

        gh = self._which("gh")
        if gh is None:
            return Err(
                StepError(
                    self.name,
                    "gh executable not found",
                    hint="install the GitHub CLI: https://cli.github.com",
                )
            )

        assets = [
            *context.artifact_paths(),
            *checksum_files(context),
            *signature_files(context),
        ]
        cmd = _gh_command(gh, context, release, assets)
        tag = context.model.tag_name()

        with console.indented():
            console.info(f"release {tag} on {release.repository}")
            if context.dry_run:
                console.print(f"dryrun: {shlex.join(cmd)}", Style.DIM)
                return Ok(None)

            token = os.environ.get(TOKEN_ENV)
            env = {"GH_TOKEN": token} if token else None
            result = self._run(cmd, cwd=context.basedir, env=env, timeout=GH_TIMEOUT_SECONDS)
            if isinstance(result, Err):
                return Err(
                    StepError(
                        self.name,
                        f"could not create release {tag}: {result.error.detail or result.error}",
                        hint=f"check access to {release.repository} (gh auth status)",
                    )
                )
            url = result.value.strip()
            if url:
                console.print(url, Style.DIM)

        return Ok(None)


def _gh_command(
    gh: str,
    context: ExecutionContext,
    release: ReleaseConfig,
    assets: list[Path],
) -> list[str]:
    model = context.model
    cmd = [
        gh,
        "release",
        "create",
        model.tag_name(),
        "--repo",
        release.repository,
        "--title",
        model.render(release.release_name),
    ]
    if release.notes_file:
        cmd += ["--notes-file", str(context.basedir / release.notes_file)]
    else:
        cmd.append("--generate-notes")
    if release.target:
        cmd += ["--target", release.target]
    if release.draft:
        cmd.append("--draft")
    if release.prerelease:
        cmd.append("--prerelease")
    cmd += [str(p) for p in assets]
    return cmd
