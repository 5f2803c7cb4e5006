"""Upload step: push release files to HTTP endpoints."""

from __future__ import annotations

import os
from pathlib import Path

from jreleaser.core.context import ExecutionContext
from jreleaser.core.errors import StepError
from jreleaser.core.model import UploaderConfig
from jreleaser.core.result import Err, Ok, Result
from jreleaser.output.console import Style
from jreleaser.platform.http import HttpClient, RealHttpClient

from .base import StepResult, checksum_files, files_in, signature_files

__all__ = ["UploadStep", "upload_files"]


def upload_files(context: ExecutionContext) -> list[Path]:
    """Artifacts, checksums, signatures and packages, in that order.

    Files that do not exist (e.g. packages when package never ran) are
    left out.
    """
    candidates = [
        *context.artifact_paths(),
        *checksum_files(context),
        *signature_files(context),
        *files_in(context.package_dir),
    ]
    return [p for p in candidates if p.is_file()]


class UploadStep:
    """Sends each file to every configured uploader.

    The uploader URL is a template; ``{file_name}`` receives the file's
    name. When ``token_env`` is set the named environment variable must hold
    a token, sent as a bearer ``Authorization`` header.
    """

    name = "upload"

    def __init__(self, *, http: HttpClient | None = None) -> None:
        self._http = http

    def invoke(self, context: ExecutionContext) -> StepResult:
        console = context.logger
        uploaders = context.model.uploaders
        console.header("Uploading")

        if not uploaders:
            with console.indented():
                console.info("no uploaders configured, skipping")
            return Ok(None)

        files = upload_files(context)
        http = self._http or RealHttpClient()
        with console.indented():
            for uploader in uploaders:
                headers = _headers(uploader)
                if isinstance(headers, Err):
                    return headers
                console.info(f"uploading to {uploader.name}")
                with console.indented():
                    for path in files:
                        url = context.model.render(uploader.url, file_name=path.name)
                        if context.dry_run:
                            console.print(f"dryrun: {uploader.method} {url}", Style.DIM)
                            continue
                        result = http.upload(
                            url,
                            path,
                            method=uploader.method,
                            headers=headers.value,
                        )
                        if isinstance(result, Err):
                            message = f"upload of {path.name} failed: {result.error}"
                            return Err(StepError(self.name, f"{uploader.name}: {message}"))
                        console.print(path.name, Style.DIM)

        return Ok(None)


def _headers(uploader: UploaderConfig) -> Result[dict[str, str], StepError]:
    headers = dict(uploader.headers)
    if uploader.token_env:
        token = os.environ.get(uploader.token_env)
        if not token:
            return Err(
                StepError(
                    UploadStep.name,
                    f"{uploader.name}: environment variable {uploader.token_env} is not set",
                    hint=f"export {uploader.token_env} with an upload token",
                )
            )
        headers["Authorization"] = f"Bearer {token}"
    return Ok(headers)
