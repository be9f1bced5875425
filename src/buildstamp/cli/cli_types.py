"""Type definitions for CLI parameters."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer

# Type aliases for common CLI parameters
ManifestDirArg = Annotated[
	Path,
	typer.Argument(
		exists=True,
		file_okay=False,
		help="Directory of the package being built",
		show_default=True,
	),
]

ConfigOpt = Annotated[
	Path | None,
	typer.Option(
		"--config",
		"-c",
		help="Path to config file",
	),
]

PackageVersionOpt = Annotated[
	str | None,
	typer.Option(
		"--package-version",
		"-p",
		help="Declared package version (overrides config and pyproject.toml)",
	),
]

TrustedBranchOpt = Annotated[
	str | None,
	typer.Option(
		"--trusted-branch",
		"-t",
		help="Branch whose clean builds may claim the package version",
	),
]

JsonFlag = Annotated[bool, typer.Option("--json", help="Print the snapshot as JSON")]

PrefixOpt = Annotated[
	str | None,
	typer.Option(
		"--prefix",
		help="Prefix for generated constant names (overrides config)",
	),
]

OutputArg = Annotated[
	Path,
	typer.Argument(
		dir_okay=False,
		help="Python module to write the constants to",
	),
]
