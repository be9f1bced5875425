"""Git provenance acquisition for buildstamp."""

from .acquire import InvocationInfo, acquire_snapshot
from .models import (
	EMPTY_SNAPSHOT,
	CommitKind,
	Modification,
	ModificationKind,
	NoCommit,
	NoRepository,
	Snapshot,
	Tagged,
	Untagged,
)
from .queries import (
	HeadCommit,
	current_branch,
	describe_tag,
	head_commit,
	resolve_repository_root,
	working_tree_status,
)

__all__ = [
	"EMPTY_SNAPSHOT",
	"CommitKind",
	"HeadCommit",
	"InvocationInfo",
	"Modification",
	"ModificationKind",
	"NoCommit",
	"NoRepository",
	"Snapshot",
	"Tagged",
	"Untagged",
	"acquire_snapshot",
	"current_branch",
	"describe_tag",
	"head_commit",
	"resolve_repository_root",
	"working_tree_status",
]
