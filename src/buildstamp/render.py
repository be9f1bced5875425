"""
Rendering of provenance snapshots.

Clean build from a tag::

    1.0.0 (763aa159d 2019-04-02)

Dirty tree, some commits past the tag::

    1.0.0+14 (651af89ed 2019-04-02) dirty 4 modifications

A tag that does not mention the package version is flagged by prefixing
the version: ``2.0.0 :: 1.0.0+14 (651af89ed 2019-04-02)``.

A "trusted" branch lets release artifacts be built before the release tag
exists. On that branch, with a clean tree, the package version is rendered
as though it had been tagged at the built commit.

"""

from __future__ import annotations

from dataclasses import replace

from buildstamp.git.models import CommitKind, NoCommit, NoRepository, Snapshot, Tagged, Untagged

SHORT_HASH_LENGTH = 9
MISMATCH_SEPARATOR = " :: "


def short_hash(commit_id: str) -> str:
	"""Abbreviate a commit id for display."""
	return commit_id[:SHORT_HASH_LENGTH]


def render_commit(commit: CommitKind) -> str:
	"""Render the commit classification without any dirty suffix."""
	if isinstance(commit, NoRepository):
		return f"{commit.fallback_version} ({commit.fallback_date})"
	if isinstance(commit, NoCommit):
		return f"{commit.fallback_version} (uncommitted {commit.fallback_date})"
	if isinstance(commit, Untagged):
		return f"unknown ({short_hash(commit.commit_id)} {commit.commit_date})"
	if isinstance(commit, Tagged):
		label = f"{commit.tag_name}+{commit.distance}" if commit.distance > 0 else commit.tag_name
		return f"{label} ({short_hash(commit.commit_id)} {commit.commit_date})"
	msg = f"Unknown commit kind: {type(commit).__name__}"
	raise TypeError(msg)


def dirty_suffix(count: int) -> str:
	"""Return the `` dirty N modification(s)`` suffix, empty for a clean tree."""
	if count <= 0:
		return ""
	plural = "" if count == 1 else "s"
	return f" dirty {count} modification{plural}"


def render_snapshot(snapshot: Snapshot) -> str:
	"""Render a snapshot exactly as captured, without consulting the package version."""
	return render_commit(snapshot.commit) + dirty_suffix(len(snapshot.modifications))


def is_trusted(snapshot: Snapshot, trusted_branch: str | None) -> bool:
	"""
	Whether the package version may stand in for the snapshot's tag.

	Requires a tagged commit, a checked-out branch equal to
	``trusted_branch``, and a clean working tree.

	"""
	if trusted_branch is None or not isinstance(snapshot.commit, Tagged):
		return False
	return snapshot.branch == trusted_branch and not snapshot.modifications


def render_with_version(snapshot: Snapshot, package_version: str, trusted_branch: str | None = None) -> str:
	"""
	Render a snapshot against the declared package version.

	Args:
	    snapshot: The captured provenance
	    package_version: Version the package declares
	    trusted_branch: Branch whose clean builds may claim ``package_version``

	Returns:
	    The canonical provenance string

	"""
	commit = snapshot.commit
	if not isinstance(commit, Tagged):
		return render_snapshot(snapshot)

	if is_trusted(snapshot, trusted_branch):
		trusted_commit = Tagged(
			tag_name=package_version,
			commit_id=commit.commit_id,
			commit_date=commit.commit_date,
			distance=0,
		)
		return render_snapshot(replace(snapshot, commit=trusted_commit))

	rendered = render_snapshot(snapshot)
	if package_version in commit.tag_name:
		return rendered
	return f"{package_version}{MISMATCH_SEPARATOR}{rendered}"
