"""
Configuration management for the UniProt header parser.

The parser functions themselves take no configuration; these settings drive
the batch tooling around them (the CLI and logging).
"""

import os
from dataclasses import dataclass, field, asdict
from typing import Optional
import json

from .errors import ConfigurationError


VALID_VARIANTS = ("auto", "canonical", "isoform")
VALID_OUTPUT_FORMATS = ("json", "text")
VALID_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass
class ParserConfig:
    """Batch parsing behaviour."""
    variant: str = "auto"
    output_format: str = "json"
    headers_only: bool = True
    strict: bool = False

    def validate(self) -> None:
        if self.variant not in VALID_VARIANTS:
            raise ConfigurationError(f"Invalid header variant: {self.variant}")
        if self.output_format not in VALID_OUTPUT_FORMATS:
            raise ConfigurationError(f"Invalid output format: {self.output_format}")


@dataclass
class LoggingConfig:
    """Logging system configuration."""
    level: str = "WARNING"
    format: str = "text"
    log_file: Optional[str] = None
    max_file_size_mb: int = 100
    backup_count: int = 5
    structured: bool = True
    include_performance: bool = False

    def validate(self) -> None:
        if self.level.upper() not in VALID_LOG_LEVELS:
            raise ConfigurationError(f"Invalid log level: {self.level}")


@dataclass
class SystemConfig:
    """Main configuration combining parser and logging settings."""
    parser: ParserConfig = field(default_factory=ParserConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    def validate(self) -> None:
        self.parser.validate()
        self.logging.validate()

    @classmethod
    def from_env(cls) -> "SystemConfig":
        """Create configuration from environment variables."""
        config = cls()

        if os.getenv("UNIPROT_HEADER_VARIANT"):
            config.parser.variant = os.getenv("UNIPROT_HEADER_VARIANT")
        if os.getenv("UNIPROT_HEADER_FORMAT"):
            config.parser.output_format = os.getenv("UNIPROT_HEADER_FORMAT")
        if os.getenv("UNIPROT_HEADER_STRICT"):
            config.parser.strict = os.getenv("UNIPROT_HEADER_STRICT").lower() == "true"

        if os.getenv("LOG_LEVEL"):
            config.logging.level = os.getenv("LOG_LEVEL")
        if os.getenv("LOG_FILE"):
            config.logging.log_file = os.getenv("LOG_FILE")
        if os.getenv("LOG_FORMAT"):
            config.logging.format = os.getenv("LOG_FORMAT")

        config.validate()
        return config

    @classmethod
    def from_file(cls, config_path: str) -> "SystemConfig":
        """Load configuration from JSON file."""
        try:
            with open(config_path, 'r') as f:
                config_data = json.load(f)
        except json.JSONDecodeError as e:
            raise ConfigurationError(f"Invalid configuration file {config_path}: {e}") from e

        config = cls()

        if "parser" in config_data:
            for key, value in config_data["parser"].items():
                if hasattr(config.parser, key):
                    setattr(config.parser, key, value)

        if "logging" in config_data:
            for key, value in config_data["logging"].items():
                if hasattr(config.logging, key):
                    setattr(config.logging, key, value)

        config.validate()
        return config

    def to_file(self, config_path: str) -> None:
        """Save configuration to JSON file."""
        config_data = {
            "parser": asdict(self.parser),
            "logging": asdict(self.logging),
        }

        with open(config_path, 'w') as f:
            json.dump(config_data, f, indent=2)


# Global configuration instance
_config: Optional[SystemConfig] = None


def get_config() -> SystemConfig:
    """Get the global configuration instance."""
    global _config
    if _config is None:
        _config = SystemConfig.from_env()
    return _config


def set_config(config: SystemConfig) -> None:
    """Set the global configuration instance."""
    global _config
    _config = config


def load_config_from_file(config_path: str) -> SystemConfig:
    """Load and set configuration from file."""
    config = SystemConfig.from_file(config_path)
    set_config(config)
    return config
