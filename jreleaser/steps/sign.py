"""Sign step: detached GnuPG signatures for artifacts and checksums."""

from __future__ import annotations

import os
import shutil
from collections.abc import Callable
from pathlib import Path

from jreleaser.core.context import ExecutionContext
from jreleaser.core.errors import StepError
from jreleaser.core.result import Err, Ok
from jreleaser.output.console import Style
from jreleaser.platform.process import ProcessRunner
from jreleaser.platform.process import run as run_process

from .base import StepResult, checksum_files

__all__ = ["SignStep", "PASSPHRASE_ENV", "GPG_TIMEOUT_SECONDS"]

PASSPHRASE_ENV = "JRELEASER_GPG_PASSPHRASE"
GPG_TIMEOUT_SECONDS = 60.0


class SignStep:
    """Writes ``signatures/<file>.asc`` (or ``.sig`` when not armored).

    Skipped when ``signing.enabled`` is false. The key passphrase, if any,
    is read from ``JRELEASER_GPG_PASSPHRASE`` and passed on stdin.
    """

    name = "sign"

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
        signing = context.model.signing
        console.header("Signing files")

        if not signing.enabled:
            with console.indented():
                console.info("signing is not enabled, skipping")
            return Ok(None)

        files = [*context.artifact_paths(), *checksum_files(context)]
        if not files:
            with console.indented():
                console.warning("no files to sign")
            return Ok(None)

        gpg = self._which("gpg")
        if gpg is None:
            return Err(
                StepError(self.name, "gpg executable not found", hint="install GnuPG")
            )

        passphrase = os.environ.get(PASSPHRASE_ENV)
        out_dir = context.signatures_dir
        if not context.dry_run:
            try:
                out_dir.mkdir(parents=True, exist_ok=True)
            except OSError as e:
                return Err(StepError(self.name, f"cannot create {out_dir}: {e}"))

        with console.indented():
            for path in files:
                target = out_dir / f"{path.name}{signing.extension}"
                cmd = _gpg_command(
                    gpg,
                    path,
                    target,
                    key_id=signing.key_id,
                    armored=signing.armored,
                    with_passphrase=passphrase is not None,
                )
                if context.dry_run:
                    console.print(f"dryrun: sign {path.name}", Style.DIM)
                    continue

                result = self._run(
                    cmd,
                    cwd=context.basedir,
                    input=passphrase,
                    timeout=GPG_TIMEOUT_SECONDS,
                )
                if isinstance(result, Err):
                    return Err(
                        StepError(
                            self.name,
                            f"could not sign {path.name}: {result.error.detail or result.error}",
                            hint="check signing.key_id and that the key is in your keyring",
                        )
                    )
                console.print(target.name, Style.DIM)

        return Ok(None)


def _gpg_command(
    gpg: str,
    source: Path,
    target: Path,
    *,
    key_id: str | None,
    armored: bool,
    with_passphrase: bool,
) -> list[str]:
    cmd = [gpg, "--batch", "--yes"]
    if with_passphrase:
        # passphrase is fed on stdin
        cmd += ["--pinentry-mode", "loopback", "--passphrase-fd", "0"]
    if key_id:
        cmd += ["--local-user", key_id]
    cmd.append("--detach-sign")
    if armored:
        cmd.append("--armor")
    cmd += ["--output", str(target), str(source)]
    return cmd