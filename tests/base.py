"""Shared base classes and helpers for buildstamp tests."""

from __future__ import annotations

import os
import shutil
import subprocess
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest

from buildstamp.utils.git_utils import ExternalToolError

FULL_SHA = "abcdef1234567890abcdef1234567890abcdef12"

COMMIT_RECORD = (
	"tree 4b825dc642cb6eb9a060e54bf8d69288fbee4904\n"
	"author Jane Q. Developer <jane@example.com> 1706745600 +0000\n"
	"committer Jane Q. Developer <jane@example.com> 1706832000 +0000\n"
	"\n"
	"Initial commit\n"
)


def git_failure(stderr: str = "fatal: something went wrong") -> ExternalToolError:
	"""Build the error the runner raises when git exits non-zero."""
	return ExternalToolError(stderr, ["git"], 128)


class GitTestBase:
	"""Base class for tests that fake git output by patching the runner."""

	_patchers: list

	def setup_method(self) -> None:
		"""Start with no active patchers."""
		self._patchers = []

	def teardown_method(self) -> None:
		"""Stop all patchers started by the test."""
		for patcher in self._patchers:
			patcher.stop()
		self._patchers = []

	def mock_git(self, target: str, responses: dict[str, str | Exception]) -> MagicMock:
		"""
		Patch ``target`` with a fake runner keyed by git subcommand.

		Args:
			target: Dotted path of the runner to patch
			responses: Maps the first non-option argument (e.g. ``"describe"``)
				to the output to return or an exception to raise

		"""

		def fake_run(args: list[str], *_args: object, **_kwargs: object) -> str:
			subcommand = next(a for a in args if not a.startswith("-") and "=" not in a)
			if subcommand not in responses:
				msg = f"Unexpected git invocation: {args}"
				raise AssertionError(msg)
			response = responses[subcommand]
			if isinstance(response, Exception):
				raise response
			return response

		patcher = patch(target, side_effect=fake_run)
		mock = patcher.start()
		self._patchers.append(patcher)
		return mock


class GitRepo:
	"""A throwaway git repository driven through the real git binary."""

	def __init__(self, path: Path) -> None:
		"""Remember where the repository lives."""
		self.path = path

	def git(self, *args: str) -> str:
		"""Run git in the repository and return its stdout."""
		result = subprocess.run(  # noqa: S603
			["git", "-c", "commit.gpgsign=false", "-c", "tag.gpgsign=false", *args],  # noqa: S607
			cwd=self.path,
			stdin=subprocess.DEVNULL,
			capture_output=True,
			text=True,
			check=True,
		)
		return result.stdout

	def init(self, branch: str = "main") -> GitRepo:
		"""Initialise the repository with ``branch`` as the unborn HEAD."""
		self.git("init", "-q")
		self.git("symbolic-ref", "HEAD", f"refs/heads/{branch}")
		return self

	def write(self, name: str, content: str = "content\n") -> Path:
		"""Create or overwrite a file in the working tree."""
		target = self.path / name
		target.parent.mkdir(parents=True, exist_ok=True)
		target.write_text(content, encoding="utf-8")
		return target

	def commit(self, message: str = "commit") -> str:
		"""Stage everything, commit, and return the new commit id."""
		self.git("add", "-A")
		self.git("commit", "-q", "-m", message)
		return self.head()

	def head(self) -> str:
		"""Return the full id of HEAD."""
		return self.git("rev-parse", "HEAD").strip()


requires_git = pytest.mark.skipif(shutil.which("git") is None, reason="git is not installed")


def isolated_git_env(monkeypatch: pytest.MonkeyPatch, workspace: Path) -> None:
	"""Keep git from reading user configuration or repositories above ``workspace``."""
	monkeypatch.setenv("GIT_CEILING_DIRECTORIES", str(workspace.parent))
	monkeypatch.setenv("GIT_CONFIG_NOSYSTEM", "1")
	monkeypatch.setenv("GIT_CONFIG_GLOBAL", os.devnull)
	monkeypatch.setenv("HOME", str(workspace))
	monkeypatch.setenv("GIT_AUTHOR_NAME", "Build Stamp Tests")
	monkeypatch.setenv("GIT_AUTHOR_EMAIL", "tests@example.com")
	monkeypatch.setenv("GIT_COMMITTER_NAME", "Build Stamp Tests")
	monkeypatch.setenv("GIT_COMMITTER_EMAIL", "tests@example.com")
	monkeypatch.setenv("GIT_COMMITTER_DATE", "1706832000 +0000")
	monkeypatch.setenv("GIT_AUTHOR_DATE", "1706745600 +0000")
