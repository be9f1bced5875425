"""Command-line interface package for buildstamp."""

from __future__ import annotations

import datetime
import logging
import sys
from pathlib import Path
from typing import Annotated

import typer

from buildstamp import __version__
from buildstamp.utils.log_setup import setup_logging

from .emit_cmd import register_command as register_emit_command
from .info_cmd import register_command as register_info_command
from .show_cmd import register_command as register_show_command

logger = logging.getLogger(__name__)

app = typer.Typer(
	help=f"buildstamp - record the state of a git working tree at build time\n\nVersion: {__version__}",
	no_args_is_help=True,
	context_settings={"help_option_names": ["-h", "--help"]},
)


def _version_callback(value: bool) -> None:
	"""Callback for --version option."""
	if value:
		typer.echo(f"buildstamp version: {__version__}")
		raise typer.Exit


@app.callback()
def global_options(
	ctx: typer.Context,
	is_verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Enable verbose logging.")] = False,
	is_output_log: Annotated[
		bool,
		typer.Option(
			"--save-log",
			help="Enable logging to a file. Logs to logs/buildstamp_{datetime}.log.",
		),
	] = False,
	_version: Annotated[
		bool | None,
		typer.Option("--version", help="Show version and exit.", callback=_version_callback, is_eager=True),
	] = None,
) -> None:
	"""Global CLI options and logging setup."""
	ctx.meta["is_verbose"] = is_verbose

	log_file_path_to_use: Path | None = None
	if is_output_log:
		current_time = datetime.datetime.now(tz=datetime.UTC).strftime("%Y-%m-%d_%H-%M-%S")
		log_file_path_to_use = Path("logs") / f"buildstamp_{current_time}.log"

	setup_logging(is_verbose=is_verbose, log_file_path=log_file_path_to_use)


register_show_command(app)
register_info_command(app)
register_emit_command(app)


def main() -> int:
	"""Run the CLI application."""
	return app()


if __name__ == "__main__":
	sys.exit(main())
