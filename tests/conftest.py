"""Global test fixtures and configuration."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from buildstamp.git import InvocationInfo
from tests.base import GitRepo, isolated_git_env

if TYPE_CHECKING:
	from pathlib import Path


@pytest.fixture
def invocation() -> InvocationInfo:
	"""Fallback version and date used throughout the tests."""
	return InvocationInfo(package_version="1.0.0", build_date="2024-01-01")


@pytest.fixture
def workspace(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
	"""An empty directory that git will not treat as part of any enclosing repository."""
	root = tmp_path / "workspace"
	root.mkdir()
	isolated_git_env(monkeypatch, root)
	return root


@pytest.fixture
def git_repo(workspace: Path) -> GitRepo:
	"""A freshly initialised repository on branch ``main`` with no commits."""
	return GitRepo(workspace).init()
