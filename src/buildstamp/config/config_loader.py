"""
Configuration loader for buildstamp.

This module provides functionality for loading and managing
configuration settings.

"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING, Any

import yaml
from pydantic import ValidationError
from xdg.BaseDirectory import xdg_config_home

from buildstamp.config.config_schema import BuildStampConfigSchema

if TYPE_CHECKING:
	from collections.abc import Mapping

logger = logging.getLogger(__name__)

CONFIG_FILE_NAME = ".buildstamp.yml"
ENV_PREFIX = "BUILDSTAMP_"
SOURCE_DATE_EPOCH_VAR = "SOURCE_DATE_EPOCH"


class ConfigError(Exception):
	"""Exception raised for configuration errors."""


class ConfigFileNotFoundError(ConfigError):
	"""Exception raised when configuration file is not found."""


class ConfigParsingError(ConfigError):
	"""Exception raised when configuration file cannot be parsed."""


class ConfigLoader:
	"""
	Loads buildstamp configuration into a :class:`BuildStampConfigSchema`.

	Values come from, lowest priority first: schema defaults, the
	configuration file, then the supplied environment mapping. The
	environment is never read implicitly; callers pass it in.

	"""

	def __init__(
		self,
		config_file: Path | None = None,
		manifest_dir: Path | None = None,
		environ: Mapping[str, str] | None = None,
	) -> None:
		"""
		Initialize the configuration loader.

		Args:
			config_file: Path to configuration file (optional)
			manifest_dir: Directory of the package being built (optional)
			environ: Environment variables to apply as overrides (optional)

		"""
		self.manifest_dir = manifest_dir
		self._environ = dict(environ or {})
		self._resolved_config_file = self._resolve_config_file(config_file)
		self._app_config = self._load_config()

	@property
	def config_file(self) -> Path | None:
		"""The configuration file that was used, if any."""
		return self._resolved_config_file

	def _resolve_config_file(self, config_file: Path | None = None) -> Path | None:
		"""
		Resolve the configuration file path.

		If a config file is specified, it must exist. Otherwise, look in standard locations:
		1. <manifest_dir>/.buildstamp.yml
		2. $XDG_CONFIG_HOME/buildstamp/config.yml

		Raises:
			ConfigFileNotFoundError: If an explicitly given file does not exist

		"""
		if config_file:
			path = config_file.expanduser().resolve()
			if not path.exists():
				msg = f"Config file not found: {path}"
				raise ConfigFileNotFoundError(msg)
			return path

		if self.manifest_dir is not None:
			local_config = self.manifest_dir / CONFIG_FILE_NAME
			if local_config.exists():
				return local_config

		xdg_config_file = Path(xdg_config_home) / "buildstamp" / "config.yml"
		if xdg_config_file.exists():
			return xdg_config_file

		return None

	@staticmethod
	def _parse_yaml_file(file_path: Path) -> dict[str, Any]:
		"""
		Parse a YAML file into a dictionary.

		Raises:
			yaml.YAMLError: If the file cannot be parsed as a YAML dictionary
		"""
		with file_path.open(encoding="utf-8") as f:
			content = yaml.safe_load(f)
			if content is None:  # Empty file
				return {}
			if not isinstance(content, dict):
				msg = f"File {file_path} does not contain a valid YAML dictionary"
				raise yaml.YAMLError(msg)
			return content

	def _env_overrides(self) -> dict[str, Any]:
		"""Collect ``BUILDSTAMP_*`` and ``SOURCE_DATE_EPOCH`` overrides."""
		overrides: dict[str, Any] = {}
		for field_name in BuildStampConfigSchema.model_fields:
			env_var = f"{ENV_PREFIX}{field_name.upper()}"
			if env_var in self._environ:
				overrides[field_name] = self._environ[env_var]
				logger.debug("Applied environment override %s", env_var)

		epoch = self._environ.get(SOURCE_DATE_EPOCH_VAR, "").strip()
		if epoch:
			if epoch.isascii() and epoch.isdigit():
				overrides["source_date_epoch"] = epoch
			else:
				logger.warning("Ignoring non-numeric %s: %r", SOURCE_DATE_EPOCH_VAR, epoch)
		return overrides

	def _load_config(self) -> BuildStampConfigSchema:
		"""
		Load the configuration file and environment overrides into the schema.

		Raises:
			ConfigParsingError: If the file cannot be read, parsed or validated

		"""
		file_config: dict[str, Any] = {}
		if self._resolved_config_file:
			try:
				file_config = self._parse_yaml_file(self._resolved_config_file)
				logger.info("Loaded configuration from %s", self._resolved_config_file)
			except yaml.YAMLError as e:
				msg = f"Configuration file {self._resolved_config_file} does not contain a valid YAML dictionary."
				logger.exception(msg)
				raise ConfigParsingError(msg) from e
			except OSError as e:
				msg = f"Error accessing configuration file {self._resolved_config_file}: {e}"
				logger.exception(msg)
				raise ConfigParsingError(msg) from e
		else:
			logger.debug("No configuration file found. Using default configuration.")

		merged = {**file_config, **self._env_overrides()}
		try:
			return BuildStampConfigSchema(**merged)
		except ValidationError as e:
			msg = f"Error parsing configuration into schema: {e}"
			logger.exception(msg)
			raise ConfigParsingError(msg) from e

	@property
	def get(self) -> BuildStampConfigSchema:
		"""The loaded configuration."""
		return self._app_config
