"""Command for writing provenance constants into a Python module."""

from __future__ import annotations

from pathlib import Path

import typer

from .cli_types import ConfigOpt, ManifestDirArg, OutputArg, PackageVersionOpt, PrefixOpt, TrustedBranchOpt


def register_command(app: typer.Typer) -> None:
	"""Register the emit command with the CLI app."""

	@app.command(name="emit")
	def emit_command(
		output: OutputArg,
		manifest_dir: ManifestDirArg = Path(),
		config_file: ConfigOpt = None,
		package_version: PackageVersionOpt = None,
		trusted_branch: TrustedBranchOpt = None,
		prefix: PrefixOpt = None,
	) -> None:
		"""Write a module of provenance constants to OUTPUT."""
		from buildstamp.config import ConfigError
		from buildstamp.emit import EmitError, write_constants
		from buildstamp.utils.cli_utils import exit_with_error
		from buildstamp.utils.git_utils import GitError

		from .context import build_context

		try:
			ctx = build_context(manifest_dir, config_file, package_version, trusted_branch)
			path = write_constants(
				output,
				ctx.snapshot,
				ctx.info,
				prefix=prefix or ctx.config.constant_prefix,
				trusted_branch=ctx.trusted_branch,
			)
		except (ConfigError, GitError, EmitError) as e:
			exit_with_error("Unable to emit provenance constants.", exception=e)
			return
		except OSError as e:
			exit_with_error(f"Unable to write {output}.", exception=e)
			return

		typer.echo(f"{path}: {ctx.rendered}")
