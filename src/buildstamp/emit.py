"""Generation of a Python module holding provenance constants."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING

from buildstamp.render import render_with_version

if TYPE_CHECKING:
	from buildstamp.git.acquire import InvocationInfo
	from buildstamp.git.models import Snapshot

logger = logging.getLogger(__name__)

DEFAULT_PREFIX = "BUILD"

MODULE_HEADER = '"""Build provenance. Generated by buildstamp; do not edit."""\n'


class EmitError(ValueError):
	"""Raised when constants cannot be generated."""


def normalize_prefix(prefix: str) -> str:
	"""
	Validate a constant prefix and upper-case it.

	Raises:
	    EmitError: If the prefix would not form valid identifiers

	"""
	candidate = prefix.strip().upper()
	if not candidate.isidentifier():
		msg = f"Invalid constant prefix: {prefix!r}"
		raise EmitError(msg)
	return candidate


def constant_values(
	snapshot: Snapshot,
	info: InvocationInfo,
	trusted_branch: str | None = None,
) -> dict[str, object]:
	"""Return the constant suffixes and their values, in emission order."""
	return {
		"TESTAMENT": render_with_version(snapshot, info.package_version, trusted_branch),
		"BRANCH": snapshot.branch,
		"REPO_PRESENT": snapshot.repo_present,
		"COMMIT_PRESENT": snapshot.commit_present,
		"TAG_PRESENT": snapshot.tag_present,
		"COMMIT_HASH": snapshot.commit_hash,
		"COMMIT_DATE": snapshot.commit_date,
		"TAG_NAME": snapshot.tag_name_or(info.package_version),
		"TAG_DISTANCE": snapshot.tag_distance,
	}


def emit_constants(
	snapshot: Snapshot,
	info: InvocationInfo,
	prefix: str = DEFAULT_PREFIX,
	trusted_branch: str | None = None,
) -> str:
	"""
	Render a Python module defining one constant per provenance field.

	Args:
	    snapshot: The captured provenance
	    info: Fallback version and date
	    prefix: Prefix for the constant names, e.g. ``BUILD`` gives ``BUILD_TESTAMENT``
	    trusted_branch: Branch whose clean builds may claim the package version

	Returns:
	    Module source text

	"""
	name = normalize_prefix(prefix)
	lines = [MODULE_HEADER]
	lines.extend(
		f"{name}_{suffix} = {value!r}"
		for suffix, value in constant_values(snapshot, info, trusted_branch).items()
	)
	return "\n".join(lines) + "\n"


def write_constants(
	output: Path | str,
	snapshot: Snapshot,
	info: InvocationInfo,
	prefix: str = DEFAULT_PREFIX,
	trusted_branch: str | None = None,
) -> Path:
	"""Write the generated constants module to ``output``, creating parent directories."""
	source = emit_constants(snapshot, info, prefix, trusted_branch)
	path = Path(output)
	path.parent.mkdir(parents=True, exist_ok=True)
	path.write_text(source, encoding="utf-8")
	logger.info("Wrote provenance constants to %s", path)
	return path
