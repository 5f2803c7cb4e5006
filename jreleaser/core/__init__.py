"""Core domain types: results, errors, the release model and its context."""

from .config import (
    ensure_output_directory,
    load_config,
    output_directory,
    resolve_basedir,
    resolve_config_file,
)
from .context import ExecutionContext, build_context
from .errors import ConfigurationError, ErrorCode, OutputDirectoryError, StepError
from .model import ReleaseModel
from .result import Err, Ok, Result

__all__ = [
    # config
    "ensure_output_directory",
    "load_config",
    "output_directory",
    "resolve_basedir",
    "resolve_config_file",
    # context
    "ExecutionContext",
    "build_context",
    # errors
    "ConfigurationError",
    "ErrorCode",
    "OutputDirectoryError",
    "StepError",
    # model
    "ReleaseModel",
    # result
    "Err",
    "Ok",
    "Result",
]
