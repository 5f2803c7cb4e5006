"""Typed release model.

The model mirrors the sections of a ``jreleaser.{toml,yml,json}`` file:

    [project]
    name = "app"
    version = "1.2.0"

    artifacts = ["build/app-1.2.0.jar"]

    [checksum]
    algorithms = ["sha256", "sha512"]

    [signing]
    enabled = true
    key_id = "ABCDEF12"

    [release]
    owner = "acme"
    name = "app"

    [packaging]
    formats = ["zip", "tar.gz"]

    [[upload]]
    name = "nexus"
    url = "https://repo.example.com/app/{project_version}/{file_name}"
    token_env = "NEXUS_TOKEN"

    [[announce]]
    name = "slack"
    url = "https://hooks.slack.com/services/T000/B000/XXX"

``from_dict`` is lenient: wrong types fall back to defaults or empty values.
``validate`` is where problems are reported.
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import PurePath

from .structured import (
    get_bool,
    get_str,
    get_str_list,
    get_str_map,
    get_table,
    get_tables,
)

__all__ = [
    "ProjectConfig",
    "ChecksumConfig",
    "SigningConfig",
    "ReleaseConfig",
    "PackagingConfig",
    "UploaderConfig",
    "WebhookConfig",
    "ReleaseModel",
    "CHECKSUM_ALGORITHMS",
    "PACKAGE_FORMATS",
    "UPLOAD_METHODS",
]

CHECKSUM_ALGORITHMS = ("md5", "sha1", "sha256", "sha512")
PACKAGE_FORMATS = ("zip", "tar.gz")
UPLOAD_METHODS = ("PUT", "POST")
RELEASE_PROVIDERS = ("github",)

DEFAULT_TAG_NAME = "v{project_version}"
DEFAULT_RELEASE_NAME = "{project_name} {project_version}"
DEFAULT_ANNOUNCE_MESSAGE = "{project_name} {project_version} has been released!"


_PLACEHOLDER = re.compile(r"\{(\w+)\}")


def _substitute(template: str, values: Mapping[str, str]) -> str:
    """Replace ``{name}`` references found in ``values``; leave all other text as is."""
    return _PLACEHOLDER.sub(lambda m: values.get(m.group(1), m.group(0)), template)


@dataclass(frozen=True, slots=True)
class ProjectConfig:
    name: str = ""
    version: str = ""
    description: str | None = None


@dataclass(frozen=True, slots=True)
class ChecksumConfig:
    algorithms: tuple[str, ...] = ("sha256",)
    individual: bool = False


@dataclass(frozen=True, slots=True)
class SigningConfig:
    enabled: bool = False
    key_id: str | None = None
    armored: bool = True

    @property
    def extension(self) -> str:
        return ".asc" if self.armored else ".sig"


@dataclass(frozen=True, slots=True)
class ReleaseConfig:
    """Git hosting release (only GitHub is supported)."""

    owner: str = ""
    name: str = ""
    provider: str = "github"
    tag_name: str = DEFAULT_TAG_NAME
    release_name: str = DEFAULT_RELEASE_NAME
    notes_file: str | None = None
    draft: bool = False
    prerelease: bool = False
    target: str | None = None

    @property
    def repository(self) -> str:
        return f"{self.owner}/{self.name}"


@dataclass(frozen=True, slots=True)
class PackagingConfig:
    formats: tuple[str, ...] = ("zip",)


@dataclass(frozen=True, slots=True)
class UploaderConfig:
    """HTTP uploader; ``url`` is a template receiving ``{file_name}``."""

    name: str
    url: str
    method: str = "PUT"
    headers: Mapping[str, str] = field(default_factory=dict)
    token_env: str | None = None


@dataclass(frozen=True, slots=True)
class WebhookConfig:
    """Announcement webhook receiving a JSON object with the message."""

    name: str
    url: str
    message: str = DEFAULT_ANNOUNCE_MESSAGE
    message_property: str = "text"


@dataclass(frozen=True, slots=True)
class ReleaseModel:
    """Main configuration container."""

    project: ProjectConfig = field(default_factory=ProjectConfig)
    artifacts: tuple[str, ...] = ()
    checksum: ChecksumConfig = field(default_factory=ChecksumConfig)
    signing: SigningConfig = field(default_factory=SigningConfig)
    release: ReleaseConfig | None = None
    packaging: PackagingConfig = field(default_factory=PackagingConfig)
    uploaders: tuple[UploaderConfig, ...] = ()
    webhooks: tuple[WebhookConfig, ...] = ()
    # Type problems seen by from_dict, reported by validate
    problems: tuple[str, ...] = ()

    @classmethod
    def from_dict(cls, data: Mapping[str, object]) -> ReleaseModel:
        """Create a model from a parsed config mapping."""
        project = get_table(data, "project") or {}
        checksum = get_table(data, "checksum") or {}
        signing = get_table(data, "signing") or {}
        release = get_table(data, "release")
        packaging = get_table(data, "packaging") or {}

        algorithms = get_str_list(checksum, "algorithms")
        if algorithms is None:
            algorithms = ["sha256"]
        formats = get_str_list(packaging, "formats")
        if formats is None:
            formats = ["zip"]

        problems: list[str] = []
        version = project.get("version")
        if isinstance(version, float):
            # YAML reads 1.10 as 1.1
            problems.append(
                f"project.version: {version!r} was read as a number, quote it to keep it exact"
            )

        return cls(
            project=ProjectConfig(
                name=get_str(project, "name") or "",
                version=get_str(project, "version") or "",
                description=get_str(project, "description"),
            ),
            artifacts=tuple(get_str_list(data, "artifacts") or ()),
            checksum=ChecksumConfig(
                algorithms=tuple(a.lower() for a in algorithms),
                individual=get_bool(checksum, "individual"),
            ),
            signing=SigningConfig(
                enabled=get_bool(signing, "enabled"),
                key_id=get_str(signing, "key_id"),
                armored=get_bool(signing, "armored", default=True),
            ),
            release=_release_from_dict(release) if release is not None else None,
            packaging=PackagingConfig(
                formats=tuple(f.lower() for f in formats),
            ),
            uploaders=tuple(
                UploaderConfig(
                    name=get_str(u, "name") or "",
                    url=get_str(u, "url") or "",
                    method=(get_str(u, "method") or "PUT").upper(),
                    headers=get_str_map(u, "headers"),
                    token_env=get_str(u, "token_env"),
                )
                for u in get_tables(data, "upload")
            ),
            webhooks=tuple(
                WebhookConfig(
                    name=get_str(w, "name") or "",
                    url=get_str(w, "url") or "",
                    message=get_str(w, "message") or DEFAULT_ANNOUNCE_MESSAGE,
                    message_property=get_str(w, "message_property") or "text",
                )
                for w in get_tables(data, "announce")
            ),
            problems=tuple(problems),
        )

    def validate(self) -> list[str]:
        """Return semantic validation errors; an empty list means valid."""
        errors: list[str] = list(self.problems)

        if not self.project.name:
            errors.append("project.name must not be blank")
        if not self.project.version:
            errors.append("project.version must not be blank")

        errors.extend(_validate_artifacts(self.artifacts))

        if not self.checksum.algorithms:
            errors.append("checksum.algorithms must not be empty")
        for algorithm in self.checksum.algorithms:
            if algorithm not in CHECKSUM_ALGORITHMS:
                errors.append(
                    f"checksum.algorithms: unsupported algorithm '{algorithm}' "
                    f"(expected one of {', '.join(CHECKSUM_ALGORITHMS)})"
                )

        if self.release is not None:
            if self.release.provider not in RELEASE_PROVIDERS:
                errors.append(f"release.provider: unsupported provider '{self.release.provider}'")
            if not self.release.owner:
                errors.append("release.owner must not be blank")
            if not self.release.name:
                errors.append("release.name must not be blank")

        for fmt in self.packaging.formats:
            if fmt not in PACKAGE_FORMATS:
                errors.append(
                    f"packaging.formats: unsupported format '{fmt}' "
                    f"(expected one of {', '.join(PACKAGE_FORMATS)})"
                )

        errors.extend(_validate_endpoints("upload", self.uploaders))
        for uploader in self.uploaders:
            if uploader.method not in UPLOAD_METHODS:
                errors.append(
                    f"upload.{uploader.name or '?'}.method: "
                    f"unsupported method '{uploader.method}'"
                )

        errors.extend(_validate_endpoints("announce", self.webhooks))
        return errors

    def render(self, template: str, **extra: str) -> str:
        """Expand ``{placeholder}`` references in a template.

        Only ``{word}`` references with a known name are replaced. Anything
        else, including stray braces and JSON, is kept verbatim.
        """
        values = {
            "project_name": self.project.name,
            "project_version": self.project.version,
            "tag_name": self.tag_name(),
            **extra,
        }
        return _substitute(template, values)

    def tag_name(self) -> str:
        template = self.release.tag_name if self.release is not None else DEFAULT_TAG_NAME
        return _substitute(
            template,
            {"project_name": self.project.name, "project_version": self.project.version},
        )


def _release_from_dict(data: Mapping[str, object]) -> ReleaseConfig:
    return ReleaseConfig(
        owner=get_str(data, "owner") or "",
        name=get_str(data, "name") or "",
        provider=(get_str(data, "provider") or "github").lower(),
        tag_name=get_str(data, "tag_name") or DEFAULT_TAG_NAME,
        release_name=get_str(data, "release_name") or DEFAULT_RELEASE_NAME,
        notes_file=get_str(data, "notes_file"),
        draft=get_bool(data, "draft"),
        prerelease=get_bool(data, "prerelease"),
        target=get_str(data, "target"),
    )


def _validate_endpoints(
    section: str, endpoints: tuple[UploaderConfig, ...] | tuple[WebhookConfig, ...]
) -> list[str]:
    errors: list[str] = []
    seen: set[str] = set()
    for index, endpoint in enumerate(endpoints):
        label = endpoint.name or f"[{index}]"
        if not endpoint.name:
            errors.append(f"{section}[{index}].name must not be blank")
        elif endpoint.name in seen:
            errors.append(f"{section}: duplicate name '{endpoint.name}'")
        seen.add(endpoint.name)
        if not endpoint.url.startswith(("http://", "https://")):
            errors.append(f"{section}.{label}.url must be an http(s) URL")
    return errors


def _validate_artifacts(artifacts: tuple[str, ...]) -> list[str]:
    # Outputs are named after the artifact's file name, so those must be unique.
    errors: list[str] = []
    seen: dict[str, str] = {}
    for artifact in artifacts:
        name = PurePath(artifact).name
        if not name:
            errors.append(f"artifacts: '{artifact}' is not a file path")
        elif name in seen:
            errors.append(
                f"artifacts: '{artifact}' and '{seen[name]}' share the file name '{name}'"
            )
        else:
            seen[name] = artifact
    return errors
