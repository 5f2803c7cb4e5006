"""Workflow steps.

Each step is one named stage of a release:
- ChecksumStep: checksum listings for the artifacts
- SignStep: GnuPG detached signatures
- ReleaseStep: GitHub release via the gh CLI
- PrepareStep: staged distribution directory
- PackageStep: zip / tar.gz archives of the staged distribution
- UploadStep: HTTP uploads
- AnnounceStep: webhook announcements
"""

from jreleaser.steps.announce import AnnounceStep
from jreleaser.steps.base import Step, StepResult
from jreleaser.steps.checksum import ChecksumStep
from jreleaser.steps.package import PackageStep
from jreleaser.steps.prepare import PrepareStep
from jreleaser.steps.release import ReleaseStep
from jreleaser.steps.sign import SignStep
from jreleaser.steps.upload import UploadStep

__all__ = [
    "Step",
    "StepResult",
    "AnnounceStep",
    "ChecksumStep",
    "PackageStep",
    "PrepareStep",
    "ReleaseStep",
    "SignStep",
    "UploadStep",
]
