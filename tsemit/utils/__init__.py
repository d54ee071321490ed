"""
Utils package for tsemit.

This module provides the ambient stack shared by the code generation
core: logging, exceptions, configuration, constants and string helpers.
"""

from .exceptions import (
    TsEmitError,
    FormatterError,
    MalformedTemplate,
    UnknownDirective,
    ArityMismatch,
    WriterStateError,
    ConfigError,
)
from .constants import *
from .string_utils import *

from .config import (
    TsEmitConfig,
    WriterConfig,
    ImportConfig,
    LoggingConfig,
    get_config,
    set_config,
    load_config,
)

from .logging import get_logger, setup_logging, EmitterLogger

__all__ = [
    # Exceptions
    "TsEmitError",
    "FormatterError",
    "MalformedTemplate",
    "UnknownDirective",
    "ArityMismatch",
    "WriterStateError",
    "ConfigError",

    # Constants (exported via *)
    # String utilities (exported via *)

    # Configuration
    "TsEmitConfig",
    "WriterConfig",
    "ImportConfig",
    "LoggingConfig",
    "get_config",
    "set_config",
    "load_config",

    # Logging
    "get_logger",
    "setup_logging",
    "EmitterLogger",
]
