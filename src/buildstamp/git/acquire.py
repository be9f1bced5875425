"""
Snapshot acquisition.

Glues the individual queries together into a single :class:`Snapshot`,
degrading each failed query to its "absent" value so that a build never
fails just because provenance is incomplete. Only an undecodable byte
stream escapes as an error.

"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import TYPE_CHECKING

from buildstamp.git.models import NoCommit, NoRepository, Snapshot, Tagged, Untagged
from buildstamp.git.parsing import DATE_FORMAT
from buildstamp.git.queries import (
	current_branch,
	describe_tag,
	head_commit,
	resolve_repository_root,
	working_tree_status,
)
from buildstamp.utils.git_utils import (
	DEFAULT_GIT_BINARY,
	ExternalToolError,
	MalformedCommitRecordError,
	NoCommitError,
	NotARepositoryError,
	ToolLaunchError,
)

if TYPE_CHECKING:
	from pathlib import Path

logger = logging.getLogger(__name__)

UNKNOWN_VERSION = "?.?.?"


@dataclass(frozen=True)
class InvocationInfo:
	"""Fallback values used when the repository cannot supply them."""

	package_version: str
	build_date: str

	@classmethod
	def acquire(
		cls,
		package_version: str | None = None,
		source_date_epoch: str | int | None = None,
		now: datetime | None = None,
	) -> InvocationInfo:
		"""
		Build invocation info from explicit inputs.

		A parseable ``source_date_epoch`` (seconds since the epoch, as used
		for reproducible builds) wins over the wall clock.

		Args:
		    package_version: Declared version of the package being built
		    source_date_epoch: Reproducible-build timestamp, if set
		    now: Wall-clock time to use instead of the current time

		"""
		build_date = _epoch_to_date(source_date_epoch)
		if build_date is None:
			build_date = (now or datetime.now(tz=UTC)).strftime(DATE_FORMAT)
		return cls(package_version=package_version or UNKNOWN_VERSION, build_date=build_date)


def _epoch_to_date(source_date_epoch: str | int | None) -> str | None:
	if source_date_epoch is None:
		return None
	try:
		seconds = int(source_date_epoch)
		return datetime.fromtimestamp(seconds, tz=UTC).strftime(DATE_FORMAT)
	except (ValueError, OverflowError, OSError):
		logger.warning("Ignoring unusable source date epoch: %r", source_date_epoch)
		return None


def acquire_snapshot(
	manifest_dir: Path | str,
	info: InvocationInfo,
	*,
	git_binary: str = DEFAULT_GIT_BINARY,
) -> Snapshot:
	"""
	Capture the provenance of the working tree containing ``manifest_dir``.

	Args:
	    manifest_dir: Directory of the package being built
	    info: Fallback version and date
	    git_binary: Name or path of the git executable

	Returns:
	    The snapshot; never raises for missing repositories, commits or tags

	Raises:
	    UndecodableOutputError: If git output is not valid UTF-8

	"""
	try:
		root = resolve_repository_root(manifest_dir, git_binary=git_binary)
		return _acquire_from_root(root, info, git_binary)
	except (NotARepositoryError, ToolLaunchError) as e:
		logger.warning("Unable to open a repo at %s: %s", manifest_dir, e)
		return Snapshot(commit=NoRepository(info.package_version, info.build_date))


def _acquire_from_root(root: Path, info: InvocationInfo, git_binary: str) -> Snapshot:
	try:
		branch = current_branch(root, git_binary=git_binary)
	except ExternalToolError as e:
		logger.warning("Unable to determine branch name: %s", e)
		branch = None

	try:
		head = head_commit(root, git_binary=git_binary)
	except (NoCommitError, MalformedCommitRecordError, ExternalToolError) as e:
		logger.warning("No commit at HEAD: %s", e)
		return Snapshot(commit=NoCommit(info.package_version, info.build_date), branch=branch)

	described = describe_tag(root, head.commit_id, git_binary=git_binary)
	commit: Tagged | Untagged
	if described is None:
		commit = Untagged(commit_id=head.commit_id, commit_date=head.commit_date)
	else:
		tag, distance = described
		commit = Tagged(tag_name=tag, commit_id=head.commit_id, commit_date=head.commit_date, distance=distance)

	try:
		modifications = working_tree_status(root, git_binary=git_binary)
	except ExternalToolError as e:
		logger.warning("Unable to read working tree status: %s", e)
		modifications = ()

	logger.debug("Acquired snapshot: branch=%s commit=%s dirty=%d", branch, commit, len(modifications))
	return Snapshot(commit=commit, branch=branch, modifications=modifications)
