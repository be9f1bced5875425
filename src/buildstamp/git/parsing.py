"""
Parsers for the textual output of the git commands buildstamp runs.

Everything here is pure: it takes already-decoded text and returns model
values or raises one of the malformed-output errors. Splitting is anchored
at the end of lines because author names and tag names may contain the
delimiters being split on.

"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

from buildstamp.git.models import Modification, ModificationKind
from buildstamp.utils.git_utils import MalformedCommitRecordError, MalformedDescribeOutputError

HEADS_PREFIX = "refs/heads/"
COMMITTER_PREFIX = "committer "
TZ_OFFSET_LENGTH = 5
MIN_COMMITTER_TOKENS = 2
STATUS_PATH_START = 3
MAX_OFFSET_MINUTES = 24 * 60
DATE_FORMAT = "%Y-%m-%d"

# Checked in order; the first matching code wins.
_STATUS_PRECEDENCE: tuple[tuple[frozenset[str], ModificationKind], ...] = (
	(frozenset("?"), ModificationKind.UNTRACKED),
	(frozenset("A"), ModificationKind.ADDED),
	(frozenset("MT"), ModificationKind.MODIFIED),
	(frozenset("D"), ModificationKind.REMOVED),
)


def _is_ascii_digits(text: str) -> bool:
	return text.isascii() and text.isdigit()


def _git_lines(output: str) -> list[str]:
	"""Split git output on newlines only; paths and names may hold other separators."""
	return [line.removesuffix("\r") for line in output.split("\n")]


def parse_tz_offset(offset: str) -> int:
	"""
	Parse a ``+HHMM``/``-HHMM`` timezone offset into signed minutes.

	Args:
	    offset: Exactly five characters, sign first

	Returns:
	    Offset from UTC in minutes

	Raises:
	    MalformedCommitRecordError: If the offset is not in ``±HHMM`` form

	"""
	if len(offset) != TZ_OFFSET_LENGTH:
		msg = f"Insufficient/incorrect data in timezone offset: {offset!r}"
		raise MalformedCommitRecordError(msg)
	sign, hours, minutes = offset[0], offset[1:3], offset[3:5]
	if sign not in "+-" or not _is_ascii_digits(hours + minutes):
		msg = f"Invalid timezone offset: {offset!r}"
		raise MalformedCommitRecordError(msg)
	absolute = int(hours) * 60 + int(minutes)
	if absolute >= MAX_OFFSET_MINUTES:
		msg = f"Timezone offset out of range: {offset!r}"
		raise MalformedCommitRecordError(msg)
	return -absolute if sign == "-" else absolute


def parse_committer_line(line: str) -> tuple[int, int]:
	"""
	Extract the timestamp and timezone offset from a committer line.

	Returns:
	    ``(unix_timestamp, offset_minutes)``

	Raises:
	    MalformedCommitRecordError: If the line lacks the trailing fields

	"""
	parts = line.split()
	if len(parts) < MIN_COMMITTER_TOKENS:
		msg = f"Insufficient committer data in {line!r}"
		raise MalformedCommitRecordError(msg)
	try:
		timestamp = int(parts[-2])
	except ValueError as e:
		msg = f"Invalid committer timestamp in {line!r}"
		raise MalformedCommitRecordError(msg) from e
	return timestamp, parse_tz_offset(parts[-1])


def find_committer(record: str) -> tuple[int, int]:
	"""
	Find and parse the committer line of a raw commit record.

	Only the header is searched; it ends at the first blank line.

	Raises:
	    MalformedCommitRecordError: If no committer line is present

	"""
	for line in _git_lines(record):
		if not line:
			break
		if line.startswith(COMMITTER_PREFIX):
			return parse_committer_line(line)
	msg = "Unable to find committer information in commit record"
	raise MalformedCommitRecordError(msg)


def format_commit_date(timestamp: int, offset_minutes: int) -> str:
	"""
	Format a commit timestamp as ``YYYY-MM-DD`` in the commit's own timezone.

	Raises:
	    MalformedCommitRecordError: If the time cannot be represented as a date

	"""
	try:
		tz = timezone(timedelta(minutes=offset_minutes))
		return datetime.fromtimestamp(timestamp, tz=tz).strftime(DATE_FORMAT)
	except (ValueError, OverflowError, OSError) as e:
		msg = f"Commit time {timestamp} {offset_minutes:+d}min is out of range"
		raise MalformedCommitRecordError(msg) from e


def parse_describe(output: str) -> tuple[str, int]:
	"""
	Parse ``git describe --long`` output into a tag name and distance.

	The output looks like ``<tag>-<distance>-g<abbrev>``. Tag names may
	contain hyphens, so both splits are taken from the right.

	Returns:
	    ``(tag_name, distance)``

	Raises:
	    MalformedDescribeOutputError: If the output does not have that shape

	"""
	text = output.strip()
	head, sep, abbrev = text.rpartition("-")
	if not sep or not abbrev.startswith("g"):
		msg = f"No commit id in describe output: {text!r}"
		raise MalformedDescribeOutputError(msg)
	tag, sep, count = head.rpartition("-")
	if not sep or not tag:
		msg = f"No commit count in describe output: {text!r}"
		raise MalformedDescribeOutputError(msg)
	if not _is_ascii_digits(count):
		msg = f"Unable to parse commit count in describe output: {text!r}"
		raise MalformedDescribeOutputError(msg)
	return tag, int(count)


def classify_status_line(line: str) -> Modification | None:
	"""
	Classify one ``git status --porcelain`` line.

	Returns ``None`` for lines whose status codes are not recognised.

	"""
	if len(line) <= STATUS_PATH_START:
		return None
	codes = {line[0], line[1]}
	path = line[STATUS_PATH_START:].encode("utf-8")
	for wanted, kind in _STATUS_PRECEDENCE:
		if codes & wanted:
			return Modification(kind=kind, path=path)
	return None


def parse_status(output: str) -> tuple[Modification, ...]:
	"""Parse full porcelain status output, skipping unrecognised lines."""
	modifications = (classify_status_line(line) for line in _git_lines(output))
	return tuple(m for m in modifications if m is not None)


def strip_ref_prefix(name: str) -> str | None:
	"""Turn a ref such as ``refs/heads/main`` into a branch name, or ``None`` if empty."""
	name = name.strip()
	name = name.removeprefix(HEADS_PREFIX)
	return name or None
