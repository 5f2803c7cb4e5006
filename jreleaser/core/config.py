"""Configuration file discovery and loading.

Config files are parsed by format-specific parsers kept in an explicit
registration table keyed by file extension. The registration order also
decides which ``jreleaser.<ext>`` file wins when several exist in the
working directory.
"""

from __future__ import annotations

import json
import os
import tomllib
from pathlib import Path
from typing import Protocol

import yaml

from .errors import ConfigurationError, OutputDirectoryError
from .model import ReleaseModel
from .result import Err, Ok, Result
from .structured import as_str_dict

__all__ = [
    "CONFIG_BASENAME",
    "ConfigParser",
    "TomlParser",
    "YamlParser",
    "JsonParser",
    "register_parser",
    "parser_for",
    "registered_parsers",
    "supported_extensions",
    "load_config",
    "resolve_config_file",
    "resolve_basedir",
    "output_directory",
]

CONFIG_BASENAME = "jreleaser"


class ConfigParser(Protocol):
    """Parses the text of a config file into an untyped mapping."""

    @property
    def preferred_extension(self) -> str:
        """Extension used when looking for ``jreleaser.<ext>``."""
        ...

    @property
    def extensions(self) -> tuple[str, ...]:
        """All extensions (without dot) this parser accepts."""
        ...

    def parse(self, text: str) -> object:
        """Parse text; raise ValueError on syntax errors."""
        ...


class TomlParser:
    preferred_extension = "toml"
    extensions = ("toml",)

    def parse(self, text: str) -> object:
        return tomllib.loads(text)


class YamlParser:
    preferred_extension = "yml"
    extensions = ("yml", "yaml")

    def parse(self, text: str) -> object:
        try:
            return yaml.safe_load(text) or {}
        except yaml.YAMLError as e:
            raise ValueError(str(e)) from e


class JsonParser:
    preferred_extension = "json"
    extensions = ("json",)

    def parse(self, text: str) -> object:
        return json.loads(text)


_PARSERS: list[ConfigParser] = []


def register_parser(parser: ConfigParser) -> None:
    """Add a parser to the registry.

    Raises:
        ValueError: if one of its extensions is already registered.
    """
    taken = {ext for p in _PARSERS for ext in p.extensions}
    clash = sorted(taken.intersection(parser.extensions))
    if clash:
        raise ValueError(f"config parser already registered for: {', '.join(clash)}")
    _PARSERS.append(parser)


def registered_parsers() -> tuple[ConfigParser, ...]:
    return tuple(_PARSERS)


def parser_for(path: Path) -> ConfigParser | None:
    """Find the parser registered for a file's extension."""
    name = path.name.lower()
    for parser in _PARSERS:
        if any(name.endswith(f".{ext}") for ext in parser.extensions):
            return parser
    return None


def supported_extensions() -> list[str]:
    return [f".{ext}" for p in _PARSERS for ext in p.extensions]


def load_config(path: Path) -> Result[ReleaseModel, ConfigurationError]:
    """Load a release model from a config file.

    The model is not validated here; see ``build_context``.

    Returns:
        Ok(ReleaseModel) on success, Err(ConfigurationError) when the file
        has an unknown extension, cannot be read, or does not parse.
    """
    parser = parser_for(path)
    if parser is None:
        return Err(
            ConfigurationError(
                f"Unsupported config format '{path.suffix}' "
                f"(supported: {', '.join(supported_extensions())})",
                path=path,
            )
        )

    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        return Err(ConfigurationError(f"Config file not found: {path}", path=path))
    except PermissionError:
        return Err(ConfigurationError(f"Permission denied reading: {path}", path=path))
    except (OSError, UnicodeDecodeError) as e:
        return Err(ConfigurationError(f"Error reading config: {e}", path=path))

    try:
        data_obj = parser.parse(text)
    except ValueError as e:
        return Err(
            ConfigurationError(
                f"Unexpected error when parsing configuration: {e}",
                path=path,
            )
        )

    data = as_str_dict(data_obj)
    if data is None:
        return Err(ConfigurationError("Config root must be a table/mapping", path=path))
    return Ok(ReleaseModel.from_dict(data))


def resolve_config_file(explicit: Path | None, cwd: Path) -> Result[Path, ConfigurationError]:
    """Pick the config file to use.

    An explicit path wins. Otherwise the first ``jreleaser.<ext>`` found in
    ``cwd`` (following registration order) is used.
    """
    candidate: Path | None = explicit
    if candidate is None:
        for parser in _PARSERS:
            local = cwd / f"{CONFIG_BASENAME}.{parser.preferred_extension}"
            if local.is_file():
                candidate = local
                break

    if candidate is None or not candidate.is_file():
        formats = "|".join(f".{p.preferred_extension}" for p in _PARSERS)
        return Err(
            ConfigurationError(
                "Missing required option: '--config-file=<configFile>' "
                f"or local file named {CONFIG_BASENAME}[{formats}]",
                path=candidate,
            )
        )
    return Ok(candidate)


def resolve_basedir(explicit: Path | None, config_file: Path) -> Result[Path, ConfigurationError]:
    """Base directory: explicit value, else the config file's directory."""
    basedir = explicit if explicit is not None else config_file.resolve().parent
    if not basedir.is_dir():
        return Err(
            ConfigurationError("Missing required option: '--basedir=<basedir>'", path=basedir)
        )
    return Ok(basedir.resolve())


def output_directory(basedir: Path) -> Path:
    """Root directory steps write their outputs to."""
    return basedir / "out" / CONFIG_BASENAME


def ensure_output_directory(path: Path) -> Result[Path, OutputDirectoryError]:
    """Create the output directory if needed and check that it is writable."""
    try:
        path.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        return Err(OutputDirectoryError(path, f"Cannot create output directory: {e.strerror or e}"))
    if not os.access(path, os.W_OK | os.X_OK):
        return Err(OutputDirectoryError(path, "Output directory is not writable"))
    return Ok(path)


for _parser in (TomlParser(), YamlParser(), JsonParser()):
    register_parser(_parser)
