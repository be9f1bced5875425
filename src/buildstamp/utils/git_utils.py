"""Git process runner and error types for buildstamp."""

from __future__ import annotations

import logging
import subprocess
from typing import TYPE_CHECKING

if TYPE_CHECKING:
	from collections.abc import Sequence
	from pathlib import Path

logger = logging.getLogger(__name__)

DEFAULT_GIT_BINARY = "git"


class GitError(Exception):
	"""Base exception for Git-related errors."""


class ToolLaunchError(GitError, OSError):
	"""Raised when the git binary cannot be started at all."""


class ExternalToolError(GitError):
	"""Raised when git ran but exited with a non-zero status."""

	def __init__(self, stderr: str, command: Sequence[str] = (), returncode: int | None = None) -> None:
		"""
		Initialize the error.

		Args:
		    stderr: Standard error text captured from git
		    command: The full command line that was run
		    returncode: Exit status of the process

		"""
		self.stderr = stderr
		self.command = list(command)
		self.returncode = returncode
		super().__init__(stderr.strip() or f"git exited with status {returncode}")


class NotARepositoryError(GitError):
	"""Raised when no working tree encloses the requested directory."""


class NoCommitError(GitError):
	"""Raised when HEAD does not resolve to any commit."""


class MalformedCommitRecordError(GitError):
	"""Raised when a raw commit record has no usable committer line."""


class MalformedDescribeOutputError(GitError):
	"""Raised when `git describe --long` output has an unexpected shape."""


class UndecodableOutputError(GitError):
	"""Raised when git output is not valid UTF-8."""


def run_git_command(
	args: Sequence[str],
	cwd: Path | str | None = None,
	*,
	git_binary: str = DEFAULT_GIT_BINARY,
) -> bytes:
	"""
	Run a Git command and return its raw standard output.

	The child never gets a stdin, so it can't block waiting for input.

	Args:
	    args: Arguments passed to git (without the binary itself)
	    cwd: Working directory (optional)
	    git_binary: Name or path of the git executable

	Returns:
	    Captured standard output as bytes

	Raises:
	    ToolLaunchError: If git cannot be launched
	    ExternalToolError: If git exits with a non-zero status

	"""
	command = [git_binary, *args]
	logger.debug("Running %s in %s", " ".join(command), cwd or ".")
	try:
		# Argument list, no shell, so nothing here is interpreted by a shell
		result = subprocess.run(  # noqa: S603
			command,
			cwd=cwd,
			stdin=subprocess.DEVNULL,
			capture_output=True,
			check=False,
		)
	except OSError as e:
		msg = f"Unable to launch {git_binary}: {e}"
		raise ToolLaunchError(msg) from e

	if result.returncode != 0:
		# Replacement only affects the error message; stdout goes through decode_output.
		stderr = result.stderr.decode("utf-8", errors="replace")
		logger.debug("Git command failed (%d): %s\nError: %s", result.returncode, " ".join(command), stderr.strip())
		raise ExternalToolError(stderr, command, result.returncode)
	return result.stdout


def decode_output(output: bytes) -> str:
	"""
	Decode git output as strict UTF-8.

	Raises:
	    UndecodableOutputError: If the bytes are not valid UTF-8

	"""
	try:
		return output.decode("utf-8")
	except UnicodeDecodeError as e:
		msg = f"Git produced output that is not valid UTF-8: {e}"
		raise UndecodableOutputError(msg) from e


def run_git_text(
	args: Sequence[str],
	cwd: Path | str | None = None,
	*,
	git_binary: str = DEFAULT_GIT_BINARY,
) -> str:
	"""Run a Git command and return its standard output decoded as UTF-8."""
	return decode_output(run_git_command(args, cwd, git_binary=git_binary))
