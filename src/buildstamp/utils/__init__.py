"""Utility module for buildstamp package."""

from .git_utils import (
	ExternalToolError,
	GitError,
	MalformedCommitRecordError,
	MalformedDescribeOutputError,
	NoCommitError,
	NotARepositoryError,
	ToolLaunchError,
	UndecodableOutputError,
	decode_output,
	run_git_command,
	run_git_text,
)

__all__ = [
	"ExternalToolError",
	"GitError",
	"MalformedCommitRecordError",
	"MalformedDescribeOutputError",
	"NoCommitError",
	"NotARepositoryError",
	"ToolLaunchError",
	"UndecodableOutputError",
	"decode_output",
	"run_git_command",
	"run_git_text",
]
