"""Shared setup for CLI commands: configuration, invocation info and snapshot."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import TYPE_CHECKING

from buildstamp.config import BuildStampConfigSchema, ConfigLoader
from buildstamp.git import InvocationInfo, Snapshot, acquire_snapshot
from buildstamp.render import render_with_version
from buildstamp.utils.package_utils import resolve_package_version

if TYPE_CHECKING:
	from pathlib import Path

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StampContext:
	"""Everything a command needs to render or emit provenance."""

	config: BuildStampConfigSchema
	info: InvocationInfo
	snapshot: Snapshot
	trusted_branch: str | None

	@property
	def rendered(self) -> str:
		"""The canonical provenance string."""
		return render_with_version(self.snapshot, self.info.package_version, self.trusted_branch)


def build_context(
	manifest_dir: Path,
	config_file: Path | None = None,
	package_version: str | None = None,
	trusted_branch: str | None = None,
) -> StampContext:
	"""
	Load configuration and acquire a snapshot for ``manifest_dir``.

	This is the only place the process environment is read; everything
	below receives explicit values.

	"""
	manifest_dir = manifest_dir.resolve()
	config = ConfigLoader(config_file=config_file, manifest_dir=manifest_dir, environ=os.environ).get

	version = resolve_package_version(manifest_dir, explicit=package_version, configured=config.package_version)
	info = InvocationInfo.acquire(package_version=version, source_date_epoch=config.source_date_epoch)
	logger.debug("Invocation info: %s", info)

	snapshot = acquire_snapshot(manifest_dir, info, git_binary=config.git_binary)
	return StampContext(
		config=config,
		info=info,
		snapshot=snapshot,
		trusted_branch=trusted_branch or config.trusted_branch,
	)
