"""Configuration for buildstamp."""

from .config_loader import (
	ConfigError,
	ConfigFileNotFoundError,
	ConfigLoader,
	ConfigParsingError,
)
from .config_schema import BuildStampConfigSchema

__all__ = [
	"BuildStampConfigSchema",
	"ConfigError",
	"ConfigFileNotFoundError",
	"ConfigLoader",
	"ConfigParsingError",
]
