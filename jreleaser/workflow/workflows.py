"""Named workflows and the steps they run.

This module is the single place that decides which workflows exist and in
which order their steps run. Adding a workflow means adding a factory here
and an entry in ``WORKFLOWS``.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from typing import TypeAlias

from jreleaser.core.context import ExecutionContext
from jreleaser.steps import (
    AnnounceStep,
    ChecksumStep,
    PackageStep,
    PrepareStep,
    ReleaseStep,
    SignStep,
    UploadStep,
)

from .pipeline import Pipeline

__all__ = [
    "WORKFLOWS",
    "WorkflowFactory",
    "announce",
    "checksum",
    "create",
    "full_release",
    "package",
    "prepare",
    "release",
    "sign",
    "upload",
]

WorkflowFactory: TypeAlias = Callable[[ExecutionContext], Pipeline]


def checksum(context: ExecutionContext) -> Pipeline:
    """Calculate checksums."""
    return Pipeline(context, [ChecksumStep()])


def sign(context: ExecutionContext) -> Pipeline:
    """Calculate checksums and sign release artifacts."""
    return Pipeline(context, [ChecksumStep(), SignStep()])


def prepare(context: ExecutionContext) -> Pipeline:
    """Calculate checksums and stage the distribution."""
    return Pipeline(context, [ChecksumStep(), PrepareStep()])


def package(context: ExecutionContext) -> Pipeline:
    """Package the staged distribution."""
    return Pipeline(context, [PackageStep()])


def release(context: ExecutionContext) -> Pipeline:
    """Calculate checksums, sign and create a release."""
    return Pipeline(context, [ChecksumStep(), SignStep(), ReleaseStep()])


def upload(context: ExecutionContext) -> Pipeline:
    """Upload release files."""
    return Pipeline(context, [UploadStep()])


def announce(context: ExecutionContext) -> Pipeline:
    """Announce a release."""
    return Pipeline(context, [AnnounceStep()])


def full_release(context: ExecutionContext) -> Pipeline:
    """Perform a full release: checksum, sign, release, prepare, package, upload, announce."""
    return Pipeline(
        context,
        [
            ChecksumStep(),
            SignStep(),
            ReleaseStep(),
            PrepareStep(),
            PackageStep(),
            UploadStep(),
            AnnounceStep(),
        ],
    )


WORKFLOWS: Mapping[str, WorkflowFactory] = {
    "checksum": checksum,
    "sign": sign,
    "prepare": prepare,
    "package": package,
    "release": release,
    "upload": upload,
    "announce": announce,
    "full-release": full_release,
}


def create(name: str, context: ExecutionContext) -> Pipeline:
    """Build the pipeline for a workflow name.

    Raises:
        KeyError: if no workflow has that name.
    """
    factory = WORKFLOWS.get(name)
    if factory is None:
        raise KeyError(f"unknown workflow: {name} (available: {', '.join(WORKFLOWS)})")
    return factory(context)
