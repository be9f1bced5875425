"""Tests for rendering provenance strings."""

from __future__ import annotations

import pytest

from buildstamp.git.models import (
	CommitKind,
	Modification,
	ModificationKind,
	NoCommit,
	NoRepository,
	Snapshot,
	Tagged,
	Untagged,
)
from buildstamp.render import (
	dirty_suffix,
	is_trusted,
	render_commit,
	render_snapshot,
	render_with_version,
)

SHA = "abcdef1234567890abcdef1234567890abcdef12"
HASH9 = "abcdef123"
DATE = "2024-02-02"


def modifications(count: int) -> tuple[Modification, ...]:
	"""Build ``count`` distinct modifications."""
	return tuple(Modification(ModificationKind.MODIFIED, f"file{i}.py".encode()) for i in range(count))


@pytest.mark.unit
class TestRenderCommit:
	"""Test cases for the base rendering of each classification."""

	@pytest.mark.parametrize(
		("commit", "expected"),
		[
			(NoRepository("1.0.0", "2024-01-01"), "1.0.0 (2024-01-01)"),
			(NoCommit("1.0.0", "2024-01-01"), "1.0.0 (uncommitted 2024-01-01)"),
			(Untagged(SHA, DATE), f"unknown ({HASH9} {DATE})"),
			(Tagged("v1.0", SHA, DATE, 0), f"v1.0 ({HASH9} {DATE})"),
			(Tagged("v1.0", SHA, DATE, 14), f"v1.0+14 ({HASH9} {DATE})"),
		],
	)
	def test_variants(self, commit: CommitKind, expected: str) -> None:
		"""Every classification has a fixed rendered form."""
		assert render_commit(commit) == expected

	def test_unknown_kind(self) -> None:
		"""The bare base class is not renderable."""
		with pytest.raises(TypeError):
			render_commit(CommitKind())


@pytest.mark.unit
class TestDirtySuffix:
	"""Test cases for the modification count suffix."""

	@pytest.mark.parametrize(
		("count", "expected"),
		[
			(0, ""),
			(1, " dirty 1 modification"),
			(2, " dirty 2 modifications"),
			(17, " dirty 17 modifications"),
		],
	)
	def test_pluralization(self, count: int, expected: str) -> None:
		"""Exactly one modification is singular, zero has no suffix."""
		assert dirty_suffix(count) == expected

	def test_render_snapshot_appends_suffix(self) -> None:
		"""The suffix follows the commit part."""
		snapshot = Snapshot(commit=Untagged(SHA, DATE), modifications=modifications(1))
		assert render_snapshot(snapshot) == f"unknown ({HASH9} {DATE}) dirty 1 modification"


@pytest.mark.unit
class TestScenarios:
	"""End-to-end rendering scenarios."""

	def test_no_repository(self) -> None:
		"""Scenario A: no repository."""
		snapshot = Snapshot(commit=NoRepository("1.0.0", "2024-01-01"))
		assert render_with_version(snapshot, "1.0.0") == "1.0.0 (2024-01-01)"

	def test_untagged_commit(self) -> None:
		"""Scenario B: one commit, no tag."""
		snapshot = Snapshot(commit=Untagged(SHA, DATE), branch="main")
		assert render_with_version(snapshot, "1.0.0") == "unknown (abcdef123 2024-02-02)"

	def test_tag_at_head(self) -> None:
		"""Scenario C: tagged at the current commit, clean tree."""
		snapshot = Snapshot(commit=Tagged("v1.0", SHA, DATE, 0), branch="main")
		assert render_with_version(snapshot, "1.0") == f"v1.0 ({HASH9} {DATE})"

	def test_tag_distance_and_dirty(self) -> None:
		"""Scenario D: three commits past the tag, two dirty files."""
		snapshot = Snapshot(commit=Tagged("v1.0", SHA, DATE, 3), branch="main", modifications=modifications(2))
		assert render_with_version(snapshot, "1.0") == f"v1.0+3 ({HASH9} {DATE}) dirty 2 modifications"

	def test_trusted_branch(self) -> None:
		"""Scenario E: trusted branch, clean tree, version stands in for the tag."""
		snapshot = Snapshot(commit=Tagged("v1.0", SHA, DATE, 5), branch="release")
		assert render_with_version(snapshot, "1.0.0", trusted_branch="release") == f"1.0.0 ({HASH9} {DATE})"

	def test_no_commit_ignores_version_check(self) -> None:
		"""Only tagged commits are compared against the package version."""
		snapshot = Snapshot(commit=NoCommit("1.0.0", "2024-01-01"), branch="main")
		assert render_with_version(snapshot, "9.9.9", trusted_branch="main") == "1.0.0 (uncommitted 2024-01-01)"


@pytest.mark.unit
class TestTrustPolicy:
	"""Test cases for the trusted branch override and version mismatch flag."""

	TAGGED = Snapshot(commit=Tagged("v1.0", SHA, DATE, 2), branch="release")

	def test_requires_matching_branch(self) -> None:
		"""A different branch is not trusted."""
		snapshot = Snapshot(commit=self.TAGGED.commit, branch="feature")
		assert not is_trusted(snapshot, "release")
		assert render_with_version(snapshot, "1.0.0", "release") == f"1.0.0 :: v1.0+2 ({HASH9} {DATE})"

	def test_requires_clean_tree(self) -> None:
		"""A dirty tree on the trusted branch is not trusted."""
		snapshot = Snapshot(commit=self.TAGGED.commit, branch="release", modifications=modifications(1))
		assert not is_trusted(snapshot, "release")
		assert render_with_version(snapshot, "1.0.0", "release") == (
			f"1.0.0 :: v1.0+2 ({HASH9} {DATE}) dirty 1 modification"
		)

	def test_requires_a_trusted_branch(self) -> None:
		"""Without a trusted branch nothing is trusted, even with no branch checked out."""
		detached = Snapshot(commit=self.TAGGED.commit, branch=None)
		assert not is_trusted(self.TAGGED, None)
		assert not is_trusted(detached, None)

	def test_requires_a_tag(self) -> None:
		"""Untagged commits are never trusted."""
		snapshot = Snapshot(commit=Untagged(SHA, DATE), branch="release")
		assert not is_trusted(snapshot, "release")

	def test_trusted_discards_distance(self) -> None:
		"""A trusted render behaves as though the version were tagged at HEAD."""
		assert is_trusted(self.TAGGED, "release")
		assert render_with_version(self.TAGGED, "2.0.0", "release") == f"2.0.0 ({HASH9} {DATE})"

	def test_tag_containing_version_renders_as_is(self) -> None:
		"""A tag that mentions the version needs no prefix."""
		assert render_with_version(self.TAGGED, "1.0") == f"v1.0+2 ({HASH9} {DATE})"

	def test_mismatched_tag_is_prefixed(self) -> None:
		"""A tag that does not mention the version is flagged."""
		assert render_with_version(self.TAGGED, "1.1.0") == f"1.1.0 :: v1.0+2 ({HASH9} {DATE})"

	def test_rendering_is_deterministic(self) -> None:
		"""Identical inputs always render identically."""
		snapshot = Snapshot(commit=Tagged("v1.0", SHA, DATE, 3), branch="main", modifications=modifications(2))
		results = {render_with_version(snapshot, "1.0.0", "release") for _ in range(5)}
		assert len(results) == 1
