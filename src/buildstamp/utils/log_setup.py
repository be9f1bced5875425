"""
Logging setup for buildstamp.

Warnings are the only visible signal of degraded provenance acquisition,
so the console handler defaults to WARNING.

"""

from __future__ import annotations

import logging
from pathlib import Path

from rich.console import Console
from rich.logging import RichHandler
from rich.rule import Rule
from rich.text import Text

# Diagnostics go to stderr so stdout stays clean for the rendered string
console = Console(stderr=True)

FILE_LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(module)s:%(lineno)d - %(message)s"


def setup_logging(
	is_verbose: bool = False,
	log_to_console: bool = True,
	log_file_path: Path | str | None = None,
) -> None:
	"""
	Configure the root logger for a buildstamp run.

	Verbose mode shows every git invocation at DEBUG; otherwise only
	degraded acquisition (missing repository, commit or tag) is reported.

	Args:
	    is_verbose: Log git invocations and acquisition details
	    log_to_console: Whether to log to stderr
	    log_file_path: Optional file that receives DEBUG output regardless of verbosity

	"""
	log_level = logging.DEBUG if is_verbose else logging.WARNING

	root_logger = logging.getLogger()
	root_logger.setLevel(logging.DEBUG if log_file_path else log_level)

	for handler in root_logger.handlers[:]:
		root_logger.removeHandler(handler)

	if log_to_console:
		root_logger.addHandler(
			RichHandler(
				console=console,
				level=log_level,
				rich_tracebacks=True,
				show_time=is_verbose,
				show_path=is_verbose,
			)
		)

	if log_file_path:
		file_path = Path(log_file_path)
		file_path.parent.mkdir(parents=True, exist_ok=True)

		file_handler = logging.FileHandler(file_path, mode="a", encoding="utf-8")
		file_handler.setLevel(logging.DEBUG)
		file_handler.setFormatter(logging.Formatter(FILE_LOG_FORMAT))
		root_logger.addHandler(file_handler)
		root_logger.debug("Logging to file: %s", file_path)


def display_error_summary(error_message: str, title: str = "buildstamp failed") -> None:
	"""Print ``error_message`` on stderr between red rules headed by ``title``."""
	console.print(Rule(Text(title, style="bold red"), style="red"))
	console.print(error_message, markup=False, highlight=False)
	console.print(Rule(style="red"))
