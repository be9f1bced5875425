"""Read-only queries against a git working tree."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path

from buildstamp.git.models import Modification
from buildstamp.git.parsing import (
	find_committer,
	format_commit_date,
	parse_describe,
	parse_status,
	strip_ref_prefix,
)
from buildstamp.utils.git_utils import (
	DEFAULT_GIT_BINARY,
	ExternalToolError,
	MalformedDescribeOutputError,
	NoCommitError,
	NotARepositoryError,
	run_git_text,
)

logger = logging.getLogger(__name__)

STATUS_ARGS = [
	"-c",
	"core.quotePath=false",
	"status",
	"--porcelain",
	"--untracked-files=all",
	"--ignore-submodules=all",
]


@dataclass(frozen=True)
class HeadCommit:
	"""The commit HEAD points at, with its committer time."""

	commit_id: str
	timestamp: int
	offset_minutes: int
	commit_date: str = field(init=False)

	def __post_init__(self) -> None:
		"""Compute the ``YYYY-MM-DD`` date in the committer's timezone."""
		object.__setattr__(self, "commit_date", format_commit_date(self.timestamp, self.offset_minutes))


def resolve_repository_root(manifest_dir: Path | str, *, git_binary: str = DEFAULT_GIT_BINARY) -> Path:
	"""
	Find the top level of the working tree containing ``manifest_dir``.

	Raises:
	    NotARepositoryError: If ``manifest_dir`` is not inside a working tree

	"""
	try:
		output = run_git_text(["rev-parse", "--show-toplevel"], manifest_dir, git_binary=git_binary)
	except ExternalToolError as e:
		msg = f"Not in a Git repository: {manifest_dir}"
		raise NotARepositoryError(msg) from e
	root = output.rstrip("\r\n")
	if not root:
		msg = f"Git reported an empty top-level directory for {manifest_dir}"
		raise NotARepositoryError(msg)
	return Path(root)


def current_branch(root: Path, *, git_binary: str = DEFAULT_GIT_BINARY) -> str | None:
	"""
	Return the checked-out branch name, or ``None``.

	On a detached HEAD the symbolic lookup fails and ``name-rev`` is used
	to describe HEAD instead.

	"""
	try:
		ref = run_git_text(["symbolic-ref", "-q", "HEAD"], root, git_binary=git_binary)
	except ExternalToolError:
		logger.debug("HEAD is not a symbolic ref, falling back to name-rev")
		ref = run_git_text(["name-rev", "--name-only", "HEAD"], root, git_binary=git_binary)
	return strip_ref_prefix(ref)


def head_commit(root: Path, *, git_binary: str = DEFAULT_GIT_BINARY) -> HeadCommit:
	"""
	Resolve HEAD and read its committer time.

	The committer line is used rather than the author line since it
	records when the commit entered history (after a rebase, say).

	Raises:
	    NoCommitError: If HEAD does not resolve to a commit
	    MalformedCommitRecordError: If the commit record cannot be parsed or
	        its time is out of range

	"""
	try:
		sha = run_git_text(["rev-parse", "--verify", "-q", "HEAD"], root, git_binary=git_binary).strip()
	except ExternalToolError as e:
		msg = "No commit at HEAD"
		raise NoCommitError(msg) from e
	if not sha:
		msg = "No commit at HEAD"
		raise NoCommitError(msg)

	record = run_git_text(["cat-file", "-p", sha], root, git_binary=git_binary)
	timestamp, offset = find_committer(record)
	return HeadCommit(commit_id=sha, timestamp=timestamp, offset_minutes=offset)


def describe_tag(root: Path, commit_id: str, *, git_binary: str = DEFAULT_GIT_BINARY) -> tuple[str, int] | None:
	"""
	Find the nearest tag reachable from ``commit_id``.

	Having no tag is a normal state, so failures are logged and reported
	as ``None`` rather than raised.

	Returns:
	    ``(tag_name, distance)`` or ``None`` if no tag could be determined

	"""
	try:
		output = run_git_text(["describe", "--tags", "--long", commit_id], root, git_binary=git_binary)
		return parse_describe(output)
	except ExternalToolError as e:
		logger.warning("No tag info found: %s", e)
	except MalformedDescribeOutputError as e:
		logger.warning("Ignoring unexpected describe output: %s", e)
	return None


def working_tree_status(root: Path, *, git_binary: str = DEFAULT_GIT_BINARY) -> tuple[Modification, ...]:
	"""List uncommitted changes, untracked files individually and submodules ignored."""
	output = run_git_text(STATUS_ARGS, root, git_binary=git_binary)
	return parse_status(output)
