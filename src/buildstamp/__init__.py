"""
buildstamp: record the state of a git working tree at build time.

Typical use from a build script::

    from buildstamp import InvocationInfo, acquire_snapshot, render_with_version

    info = InvocationInfo.acquire(package_version="1.0.0")
    snapshot = acquire_snapshot(".", info)
    print(render_with_version(snapshot, info.package_version))

"""

from buildstamp.emit import emit_constants, write_constants
from buildstamp.git import (
	EMPTY_SNAPSHOT,
	InvocationInfo,
	Modification,
	ModificationKind,
	NoCommit,
	NoRepository,
	Snapshot,
	Tagged,
	Untagged,
	acquire_snapshot,
)
from buildstamp.render import render_snapshot, render_with_version

__version__ = "0.1.0"

__all__ = [
	"EMPTY_SNAPSHOT",
	"InvocationInfo",
	"Modification",
	"ModificationKind",
	"NoCommit",
	"NoRepository",
	"Snapshot",
	"Tagged",
	"Untagged",
	"__version__",
	"acquire_snapshot",
	"emit_constants",
	"render_snapshot",
	"render_with_version",
	"write_constants",
]
