"""Announce step: post the release message to webhooks."""

from __future__ import annotations

from jreleaser.core.context import ExecutionContext
from jreleaser.core.errors import StepError
from jreleaser.core.result import Err, Ok
from jreleaser.output.console import Style
from jreleaser.platform.http import HttpClient, RealHttpClient

from .base import StepResult

__all__ = ["AnnounceStep"]


class AnnounceStep:
    name = "announce"

    def __init__(self, *, http: HttpClient | None = None) -> None:
        self._http = http

    def invoke(self, context: ExecutionContext) -> StepResult:
        console = context.logger
        webhooks = context.model.webhooks
        console.header("Announcing")

        if not webhooks:
            with console.indented():
                console.info("no announcers configured, skipping")
            return Ok(None)

        http = self._http or RealHttpClient()
        with console.indented():
            for webhook in webhooks:
                message = context.model.render(webhook.message)
                if context.dry_run:
                    console.print(f"dryrun: {webhook.name}: {message}", Style.DIM)
                    continue
                result = http.post_json(webhook.url, {webhook.message_property: message})
                if isinstance(result, Err):
                    return Err(
                        StepError(self.name, f"{webhook.name}: announcement failed: {result.error}")
                    )
                console.success(webhook.name)

        return Ok(None)
