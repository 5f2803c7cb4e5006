"""Release orchestration: checksum, sign, release, package, upload, announce."""

__version__ = "0.1.0"
