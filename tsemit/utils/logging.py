"""
Logging configuration and utilities.

This module provides centralized logging configuration for the
tsemit package with appropriate formatting and levels.
"""

import logging
import os
from typing import Iterable, List, Optional

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logging(level: Optional[str] = None, log_file: Optional[str] = None) -> None:
    """
    Configure the ``tsemit`` logger.

    Calling this again replaces (and closes) the handlers installed by a
    previous call, so a configuration file can switch file logging on or
    off at runtime.

    Args:
        level: Level name; falls back to ``TSEMIT_LOG_LEVEL``, then INFO.
            Unknown names also mean INFO.
        log_file: Also write records to this file when given
    """
    level_name = level or os.environ.get("TSEMIT_LOG_LEVEL", "INFO")
    log_level = getattr(logging, level_name.upper(), logging.INFO)

    logger = logging.getLogger("tsemit")
    for stale in list(logger.handlers):
        logger.removeHandler(stale)
        stale.close()

    handlers: List[logging.Handler] = [logging.StreamHandler()]
    if log_file:
        handlers.append(logging.FileHandler(log_file, encoding="utf-8"))

    formatter = logging.Formatter(LOG_FORMAT)
    for handler in handlers:
        handler.setLevel(log_level)
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    logger.setLevel(log_level)
    logger.propagate = False


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger instance for the given module.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Logger instance
    """
    if name == "tsemit" or name.startswith("tsemit."):
        return logging.getLogger(name)
    return logging.getLogger(f"tsemit.{name}")


class EmitterLogger:
    """
    Component-scoped logging for the writer pipeline.

    Wraps a package logger with helpers for the events a writer
    produces while formatting, merging imports and rendering.
    """

    def __init__(self, name: str):
        """
        Initialize logger for specific component.

        Args:
            name: Component name for logging context
        """
        self.logger = get_logger(name)

    def log_render(self, module_name: str, import_count: int, body_length: int) -> None:
        """
        Log a completed render of one output unit.

        Args:
            module_name: Path of the file being generated
            import_count: Number of import statements emitted
            body_length: Length of the body text in characters
        """
        self.logger.debug(
            f"Rendered '{module_name}': {import_count} import statement(s), {body_length} body chars"
        )

    def log_import_merge(self, explicit: int, registered: int, merged: int) -> None:
        """
        Log the outcome of an import merge.

        Args:
            explicit: Entries parsed from hand-written import lines
            registered: Entries held by the symbol registry
            merged: Entries left after deduplication
        """
        self.logger.debug(
            f"Merged imports: explicit={explicit}, registered={registered}, unique={merged}"
        )

    def log_alias_collision(self, local_name: str, modules: Iterable[str]) -> None:
        """
        Log a local name bound by imports from more than one module.

        Args:
            local_name: The binding introduced in the generated file
            modules: Modules that each bind ``local_name``
        """
        self.logger.debug(f"Local name '{local_name}' is imported from {sorted(modules)}")

    def log_format_failure(self, template: str, error: Exception) -> None:
        """
        Log a template that could not be expanded.

        Args:
            template: The template passed by the caller
            error: The formatter error that aborted the write
        """
        preview = template if len(template) <= 60 else template[:57] + "..."
        self.logger.debug(f"Failed to format {preview!r}: {error}")


# Initialize logging on module import
setup_logging()
