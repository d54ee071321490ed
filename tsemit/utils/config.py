"""
Configuration System for tsemit.

This module provides a small, file-backed configuration interface for
writers: indentation, the provenance header, import rendering and
logging. Files may be YAML or JSON; environment variables override a
few frequently toggled values.
"""

import copy
import json
import os
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from .constants import (
    DEFAULT_INDENT_SIZE,
    DEFAULT_LOG_FILE,
    DEFAULT_MAX_IMPORT_LINE_LENGTH,
    DEFAULT_PROVENANCE_HEADER,
    DEFAULT_QUOTE,
)
from .exceptions import ConfigError
from .logging import get_logger, setup_logging

logger = get_logger(__name__)


@dataclass
class WriterConfig:
    """Writer buffer and header configuration."""

    indent_size: int = DEFAULT_INDENT_SIZE
    generated: bool = True
    provenance_header: str = DEFAULT_PROVENANCE_HEADER

    @property
    def indent_text(self) -> str:
        return " " * self.indent_size


@dataclass
class ImportConfig:
    """Import block rendering configuration."""

    max_line_length: int = DEFAULT_MAX_IMPORT_LINE_LENGTH
    quote: str = DEFAULT_QUOTE


@dataclass
class LoggingConfig:
    """Logging configuration."""

    level: str = "INFO"
    enable_file_logging: bool = False
    log_file: str = DEFAULT_LOG_FILE


class TsEmitConfig:
    """
    Unified configuration manager for tsemit.

    Loads a single YAML or JSON file into typed sections. A missing file
    is not an error: every section falls back to its defaults.
    """

    def __init__(self, config_file: Optional[str] = None):
        """
        Initialize configuration.

        Args:
            config_file: Path to configuration file. If None, uses default location.
        """
        self.config_file = self._get_config_file_path(config_file)
        self._config_data = self._load_config()

        self.writer = self._create_writer_config()
        self.imports = self._create_import_config()
        self.logging = self._create_logging_config()

        self.validate()

    def _get_config_file_path(self, config_file: Optional[str]) -> Path:
        """Get the configuration file path."""
        if config_file:
            return Path(config_file)

        # Default location: try YAML first, then JSON
        config_dir = Path.cwd()
        yaml_config = config_dir / "tsemit.yaml"
        json_config = config_dir / "tsemit.json"

        if yaml_config.exists():
            return yaml_config
        return json_config

    def _load_config(self) -> Dict[str, Any]:
        """Load configuration from file (JSON or YAML)."""
        if not self.config_file.exists():
            logger.debug(f"Configuration file {self.config_file} not found, using defaults")
            return {}

        with open(self.config_file, "r", encoding="utf-8") as f:
            if self.config_file.suffix.lower() in (".yaml", ".yml"):
                config_data = yaml.safe_load(f)
            else:
                config_data = json.load(f)
        logger.info(f"Loaded configuration from {self.config_file}")

        if config_data is None:
            return {}
        if not isinstance(config_data, dict):
            raise ConfigError(str(self.config_file), type(config_data).__name__, "top level must be a mapping")
        return config_data

    def _create_writer_config(self) -> WriterConfig:
        """Create writer configuration from loaded data."""
        writer_data = self._config_data.get("writer", {})

        indent_size = writer_data.get("indent_size", DEFAULT_INDENT_SIZE)
        env_indent = os.getenv("TSEMIT_INDENT_SIZE")
        if env_indent:
            try:
                indent_size = int(env_indent)
            except ValueError:
                raise ConfigError("TSEMIT_INDENT_SIZE", env_indent, "must be an integer")

        # Check environment variable override
        env_no_header = os.getenv("TSEMIT_NO_HEADER", "").lower() in ("1", "true", "yes")
        generated = not env_no_header and writer_data.get("generated", True)

        return WriterConfig(
            indent_size=indent_size,
            generated=generated,
            provenance_header=writer_data.get("provenance_header", DEFAULT_PROVENANCE_HEADER),
        )

    def _create_import_config(self) -> ImportConfig:
        """Create import configuration from loaded data."""
        import_data = self._config_data.get("imports", {})

        return ImportConfig(
            max_line_length=import_data.get("max_line_length", DEFAULT_MAX_IMPORT_LINE_LENGTH),
            quote=import_data.get("quote", DEFAULT_QUOTE),
        )

    def _create_logging_config(self) -> LoggingConfig:
        """Create logging configuration from loaded data."""
        log_data = self._config_data.get("logging", {})

        return LoggingConfig(
            level=log_data.get("level", "INFO"),
            enable_file_logging=log_data.get("enable_file_logging", False),
            log_file=log_data.get("log_file", DEFAULT_LOG_FILE),
        )

    def validate(self) -> None:
        """Validate section values, raising ConfigError on the first bad one."""
        if not isinstance(self.writer.indent_size, int) or self.writer.indent_size < 0:
            raise ConfigError("writer.indent_size", self.writer.indent_size, "must be a non-negative integer")

        if "\n" in self.writer.provenance_header:
            raise ConfigError("writer.provenance_header", self.writer.provenance_header, "must be a single line")

        if not isinstance(self.imports.max_line_length, int) or self.imports.max_line_length < 1:
            raise ConfigError("imports.max_line_length", self.imports.max_line_length, "must be a positive integer")

        if self.imports.quote not in ('"', "'"):
            raise ConfigError("imports.quote", self.imports.quote, "must be a single or double quote")

    def apply_logging(self) -> None:
        """Reconfigure the package logger from the logging section."""
        log_file = self.logging.log_file if self.logging.enable_file_logging else None
        setup_logging(level=self.logging.level, log_file=log_file)

    def copy(self) -> "TsEmitConfig":
        """Return an independent copy, so writers never share mutable sections."""
        return copy.deepcopy(self)

    def to_dict(self) -> Dict[str, Any]:
        """Convert the configuration to a plain dictionary."""
        return {
            "version": "1.0",
            "writer": asdict(self.writer),
            "imports": asdict(self.imports),
            "logging": asdict(self.logging),
        }

    def save_config(self) -> None:
        """Save current configuration to file."""
        config_data = self.to_dict()

        with open(self.config_file, "w", encoding="utf-8") as f:
            if self.config_file.suffix.lower() in (".yaml", ".yml"):
                yaml.safe_dump(config_data, f, sort_keys=False)
            else:
                json.dump(config_data, f, indent=2)
        logger.info(f"Configuration saved to {self.config_file}")


# Global configuration instance
_global_config: Optional[TsEmitConfig] = None


def get_config() -> TsEmitConfig:
    """Get the global configuration instance."""
    global _global_config
    if _global_config is None:
        _global_config = TsEmitConfig()
    return _global_config


def set_config(config: Optional[TsEmitConfig]) -> None:
    """Set the global configuration instance (None resets to lazy defaults)."""
    global _global_config
    _global_config = config


def load_config(config_file: str) -> TsEmitConfig:
    """Load configuration from a specific file and apply its logging section."""
    config = TsEmitConfig(config_file)
    config.apply_logging()
    return config
