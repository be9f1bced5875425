"""Provenance models describing the state of a working tree at build time."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class ModificationKind(str, Enum):
	"""How a path differs from the committed tree."""

	ADDED = "added"
	REMOVED = "removed"
	MODIFIED = "modified"
	UNTRACKED = "untracked"


@dataclass(frozen=True)
class Modification:
	"""A single uncommitted change in the working tree."""

	kind: ModificationKind
	path: bytes
	"""Repository-relative path, as bytes."""

	@property
	def display_path(self) -> str:
		"""The path as text, with undecodable bytes preserved as surrogates."""
		return self.path.decode("utf-8", errors="surrogateescape")

	def to_dict(self) -> dict[str, str]:
		"""Convert to a dictionary."""
		return {"kind": self.kind.value, "path": self.display_path}


@dataclass(frozen=True)
class CommitKind:
	"""Base class for the commit classification of a snapshot."""

	def to_dict(self) -> dict[str, Any]:
		"""Convert to a dictionary."""
		raise NotImplementedError


@dataclass(frozen=True)
class NoRepository(CommitKind):
	"""No repository was found; the package version and build date stand in."""

	fallback_version: str
	fallback_date: str

	def to_dict(self) -> dict[str, Any]:
		"""Convert to a dictionary."""
		return {"kind": "no_repository", "version": self.fallback_version, "date": self.fallback_date}


@dataclass(frozen=True)
class NoCommit(CommitKind):
	"""A repository exists but HEAD has no commit yet."""

	fallback_version: str
	fallback_date: str

	def to_dict(self) -> dict[str, Any]:
		"""Convert to a dictionary."""
		return {"kind": "no_commit", "version": self.fallback_version, "date": self.fallback_date}


@dataclass(frozen=True)
class Untagged(CommitKind):
	"""A commit with no tag anywhere in its history."""

	commit_id: str
	commit_date: str

	def to_dict(self) -> dict[str, Any]:
		"""Convert to a dictionary."""
		return {"kind": "untagged", "commit_id": self.commit_id, "commit_date": self.commit_date}


@dataclass(frozen=True)
class Tagged(CommitKind):
	"""
	A commit with a reachable tag.

	``distance`` counts the commits since ``tag_name``; zero means the
	commit is the tagged one.

	"""

	tag_name: str
	commit_id: str
	commit_date: str
	distance: int = 0

	def __post_init__(self) -> None:
		"""Reject negative distances."""
		if self.distance < 0:
			msg = f"Tag distance must be non-negative, got {self.distance}"
			raise ValueError(msg)

	def to_dict(self) -> dict[str, Any]:
		"""Convert to a dictionary."""
		return {
			"kind": "tagged",
			"tag_name": self.tag_name,
			"commit_id": self.commit_id,
			"commit_date": self.commit_date,
			"distance": self.distance,
		}


@dataclass(frozen=True)
class Snapshot:
	"""
	Immutable provenance snapshot of a working tree.

	Built once per build invocation and never mutated afterwards. The
	scalar properties let callers compose their own strings instead of
	using the canonical renderer; where the classification has no real
	value they fall back to the package version and build date.

	"""

	commit: CommitKind
	branch: str | None = None
	modifications: tuple[Modification, ...] = field(default_factory=tuple)

	@property
	def is_dirty(self) -> bool:
		"""Whether the working tree has uncommitted changes."""
		return bool(self.modifications)

	@property
	def repo_present(self) -> bool:
		"""Whether a repository was found at all."""
		return not isinstance(self.commit, NoRepository)

	@property
	def commit_present(self) -> bool:
		"""Whether HEAD resolved to a commit."""
		return isinstance(self.commit, Untagged | Tagged)

	@property
	def tag_present(self) -> bool:
		"""Whether a tag is reachable from HEAD."""
		return isinstance(self.commit, Tagged)

	@property
	def commit_hash(self) -> str:
		"""The full commit id, or the fallback version when there is no commit."""
		if isinstance(self.commit, Untagged | Tagged):
			return self.commit.commit_id
		return self.commit.fallback_version  # type: ignore[attr-defined]

	@property
	def commit_date(self) -> str:
		"""The commit date, or the build date when there is no commit."""
		if isinstance(self.commit, Untagged | Tagged):
			return self.commit.commit_date
		return self.commit.fallback_date  # type: ignore[attr-defined]

	@property
	def tag_distance(self) -> int:
		"""Commits since the tag, zero when untagged."""
		if isinstance(self.commit, Tagged):
			return self.commit.distance
		return 0

	def tag_name_or(self, package_version: str) -> str:
		"""Return the tag name, or ``package_version`` when there is no tag."""
		if isinstance(self.commit, Tagged):
			return self.commit.tag_name
		return package_version

	def to_dict(self) -> dict[str, Any]:
		"""Convert to a dictionary."""
		return {
			"branch": self.branch,
			"commit": self.commit.to_dict(),
			"modifications": [m.to_dict() for m in self.modifications],
		}


EMPTY_SNAPSHOT = Snapshot(commit=NoRepository("unknown", "unknown"))
