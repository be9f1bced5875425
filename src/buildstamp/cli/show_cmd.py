"""Command for printing the provenance string of a working tree."""

from __future__ import annotations

import json
import logging
from pathlib import Path

import typer

from .cli_types import ConfigOpt, JsonFlag, ManifestDirArg, PackageVersionOpt, TrustedBranchOpt

logger = logging.getLogger(__name__)


def register_command(app: typer.Typer) -> None:
	"""Register the show command with the CLI app."""

	@app.command(name="show")
	def show_command(
		manifest_dir: ManifestDirArg = Path(),
		config_file: ConfigOpt = None,
		package_version: PackageVersionOpt = None,
		trusted_branch: TrustedBranchOpt = None,
		as_json: JsonFlag = False,
	) -> None:
		"""Print the provenance string for the package in MANIFEST_DIR."""
		_show_command_impl(manifest_dir, config_file, package_version, trusted_branch, as_json=as_json)


def _show_command_impl(
	manifest_dir: Path,
	config_file: Path | None,
	package_version: str | None,
	trusted_branch: str | None,
	*,
	as_json: bool,
) -> None:
	from buildstamp.config import ConfigError
	from buildstamp.utils.cli_utils import exit_with_error
	from buildstamp.utils.git_utils import GitError

	from .context import build_context

	try:
		ctx = build_context(manifest_dir, config_file, package_version, trusted_branch)
	except ConfigError as e:
		exit_with_error("Invalid configuration.", exception=e)
		return
	except GitError as e:
		exit_with_error("Unable to read repository state.", exception=e)
		return

	if as_json:
		payload = {
			"testament": ctx.rendered,
			"package_version": ctx.info.package_version,
			"build_date": ctx.info.build_date,
			"trusted_branch": ctx.trusted_branch,
			**ctx.snapshot.to_dict(),
		}
		typer.echo(json.dumps(payload, indent=2))
	else:
		typer.echo(ctx.rendered)
