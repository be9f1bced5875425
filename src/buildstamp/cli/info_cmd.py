"""Command for showing the individual provenance fields as a table."""

from __future__ import annotations

from pathlib import Path

import typer
from rich.console import Console
from rich.table import Table

from .cli_types import ConfigOpt, ManifestDirArg, PackageVersionOpt, TrustedBranchOpt

console = Console()


def register_command(app: typer.Typer) -> None:
	"""Register the info command with the CLI app."""

	@app.command(name="info")
	def info_command(
		manifest_dir: ManifestDirArg = Path(),
		config_file: ConfigOpt = None,
		package_version: PackageVersionOpt = None,
		trusted_branch: TrustedBranchOpt = None,
	) -> None:
		"""Show branch, commit, tag and working tree details for MANIFEST_DIR."""
		from buildstamp.config import ConfigError
		from buildstamp.utils.cli_utils import exit_with_error
		from buildstamp.utils.git_utils import GitError

		from .context import build_context

		try:
			ctx = build_context(manifest_dir, config_file, package_version, trusted_branch)
		except (ConfigError, GitError) as e:
			exit_with_error("Unable to collect provenance.", exception=e)
			return

		snapshot = ctx.snapshot
		table = Table(title="Build provenance", show_header=False)
		table.add_column("Field", style="bold cyan")
		table.add_column("Value")
		table.add_row("Testament", ctx.rendered)
		table.add_row("Package version", ctx.info.package_version)
		table.add_row("Build date", ctx.info.build_date)
		table.add_row("Repository", "yes" if snapshot.repo_present else "no")
		table.add_row("Branch", snapshot.branch or "-")
		table.add_row("Commit", snapshot.commit_hash if snapshot.commit_present else "-")
		table.add_row("Commit date", snapshot.commit_date)
		table.add_row("Tag", snapshot.tag_name_or("-"))
		table.add_row("Tag distance", str(snapshot.tag_distance))
		table.add_row("Trusted branch", ctx.trusted_branch or "-")
		console.print(table)

		if snapshot.modifications:
			changes = Table(title=f"{len(snapshot.modifications)} uncommitted change(s)")
			changes.add_column("Kind", style="yellow")
			changes.add_column("Path")
			for modification in snapshot.modifications:
				changes.add_row(modification.kind.value, modification.display_path)
			console.print(changes)
