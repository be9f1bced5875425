"""Utilities for discovering the declared version of the package being built."""

from __future__ import annotations

import logging
import tomllib
from typing import TYPE_CHECKING

from packaging.version import InvalidVersion, Version

if TYPE_CHECKING:
	from pathlib import Path

logger = logging.getLogger(__name__)

PYPROJECT_FILE = "pyproject.toml"


def read_project_version(manifest_dir: Path) -> str | None:
	"""
	Read ``[project].version`` from ``pyproject.toml`` in ``manifest_dir``.

	Args:
	    manifest_dir: Directory holding the package manifest

	Returns:
	    The declared version, or None if it is missing or dynamic

	"""
	pyproject = manifest_dir / PYPROJECT_FILE
	if not pyproject.is_file():
		return None
	try:
		with pyproject.open("rb") as f:
			data = tomllib.load(f)
	except (OSError, tomllib.TOMLDecodeError) as e:
		logger.warning("Unable to read %s: %s", pyproject, e)
		return None

	project = data.get("project", {})
	if not isinstance(project, dict):
		logger.warning("Ignoring %s: [project] is not a table", pyproject)
		return None
	declared = project.get("version")
	if not isinstance(declared, str) or not declared.strip():
		logger.debug("No static version declared in %s", pyproject)
		return None
	declared = declared.strip()
	try:
		Version(declared)
	except InvalidVersion:
		logger.warning("Version %r in %s is not PEP 440 compliant", declared, pyproject)
	return declared


def resolve_package_version(
	manifest_dir: Path,
	explicit: str | None = None,
	configured: str | None = None,
) -> str | None:
	"""
	Pick the package version to render against.

	Precedence: explicit value, configured value, then ``pyproject.toml``.

	"""
	if explicit:
		return explicit
	if configured:
		return configured
	return read_project_version(manifest_dir)
