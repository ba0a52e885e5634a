"""Command-line interface for mailmarker.

Expand custom layout tags in email templates into table-based HTML.

Examples
--------
Expand one template to stdout::

    $ mailmarker welcome.html

Write to a file::

    $ mailmarker welcome.html --out dist/welcome.html

Expand a directory tree, mirroring its structure::

    $ mailmarker templates/ --recursive --output-dir dist/

Use a config file with custom templates::

    $ mailmarker templates/ --output-dir dist/ --config .mailmarker.yaml

"""

import argparse
import logging
import sys
from pathlib import Path
from typing import Any, Dict, Optional

from rich.console import Console
from rich.table import Table

from mailmarker.api import collect_input_files, mark_up_files, normalize_path, read_source
from mailmarker.cli.config import discover_config_file, load_config_file, merge_configs
from mailmarker.constants import EXIT_FILE_ERROR, EXIT_GENERAL_ERROR, EXIT_SUCCESS, EXIT_VALIDATION_ERROR
from mailmarker.exceptions import FileError, MarkerError, ValidationError
from mailmarker.logging_utils import configure_logging
from mailmarker.marker import Marker
from mailmarker.options.marker import MarkerOptions
from mailmarker.progress import ProgressEvent

logger = logging.getLogger(__name__)


def _get_version() -> str:
    """Get the version of the mailmarker package."""
    from mailmarker import __version__

    return __version__


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    config_keys = "\n".join(f"  {name:<28}{text}" for name, text in MarkerOptions.field_help().items())
    parser = argparse.ArgumentParser(
        prog="mailmarker",
        description="Expand custom layout tags into email-safe, table-based HTML.",
        epilog=f"configuration file keys:\n{config_keys}",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("input", nargs="+", help="HTML files or directories to process")

    destination = parser.add_mutually_exclusive_group()
    destination.add_argument("--out", "-o", help="Output file (single input only); stdout when omitted")
    destination.add_argument("--output-dir", help="Directory receiving one output file per input")

    parser.add_argument("--recursive", "-r", action="store_true", help="Process directories recursively")
    parser.add_argument("--config", help="Configuration file (TOML, YAML or JSON)")
    parser.add_argument("--no-config", action="store_true", help="Ignore discovered configuration files")
    parser.add_argument("--columns", type=_positive_int, help="Grid width (default 12)")
    parser.add_argument(
        "--formatter",
        choices=["minimal", "html", "html5"],
        help="Output formatter controlling entity escaping",
    )
    parser.add_argument("--rich", action="store_true", help="Enable rich terminal output")
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Logging level (default WARNING)",
    )
    parser.add_argument("--log-file", help="Also write log records to this file")
    parser.add_argument("--verbose", "-v", action="store_true", help="Shortcut for --log-level INFO")
    parser.add_argument("--trace", action="store_true", help="Debug logging with timestamps and logger names")
    parser.add_argument("--version", "-V", action="version", version=f"mailmarker {_get_version()}")
    return parser


def _positive_int(value: str) -> int:
    """Argparse type accepting only positive integers."""
    try:
        number = int(value)
    except ValueError as e:
        raise argparse.ArgumentTypeError(f"expected a positive integer, got '{value}'") from e
    if number <= 0:
        raise argparse.ArgumentTypeError(f"expected a positive integer, got {number}")
    return number


def _setup_logging(parsed_args: argparse.Namespace) -> None:
    # --trace takes precedence, then --verbose, then --log-level
    if parsed_args.trace:
        log_level = logging.DEBUG
    elif parsed_args.verbose and parsed_args.log_level == "WARNING":
        log_level = logging.INFO
    else:
        log_level = getattr(logging, parsed_args.log_level.upper())

    configure_logging(log_level, log_file=parsed_args.log_file, trace_mode=parsed_args.trace, use_rich=parsed_args.rich)


def build_options(parsed_args: argparse.Namespace) -> MarkerOptions:
    """Build engine options from config files and command-line flags.

    Priority, lowest to highest: discovered config file, ``--config`` file,
    command-line flags.

    Raises
    ------
    argparse.ArgumentTypeError
        If a config file cannot be loaded
    ValidationError
        If the resulting options are invalid

    """
    config: Dict[str, Any] = {}
    if parsed_args.config:
        config = load_config_file(parsed_args.config)
    elif not parsed_args.no_config:
        discovered = discover_config_file()
        if discovered is not None:
            logger.info(f"Using configuration from {discovered}")
            config = load_config_file(discovered)

    overrides: Dict[str, Any] = {}
    if parsed_args.columns is not None:
        overrides["columns"] = parsed_args.columns
    if parsed_args.formatter is not None:
        overrides["formatter"] = parsed_args.formatter

    return MarkerOptions.from_dict(merge_configs(config, overrides))


class _ProgressPrinter:
    """Print per-file progress messages, in color with ``--rich``."""

    def __init__(self, console: Optional[Console]):
        self.console = console

    def __call__(self, event: ProgressEvent) -> None:
        if event.event_type == "item_done":
            self._print(event.message, "green")
        elif event.event_type == "error":
            self._print(f"{event.message}: {event.metadata.get('error', 'unknown error')}", "red")

    def _print(self, message: str, color: str) -> None:
        if self.console is not None:
            self.console.print(f"[{color}]{message}[/{color}]", highlight=False)
        else:
            print(message, file=sys.stderr)


def _render_summary(console: Optional[Console], successful: int, failed: int) -> None:
    total = successful + failed
    if console is not None:
        table = Table(title="Mark-up Summary")
        table.add_column("Status", style="cyan", no_wrap=True)
        table.add_column("Count", style="magenta")
        table.add_row("+ Successful", str(successful))
        table.add_row("- Failed", str(failed))
        table.add_row("Total", str(total))
        console.print(table)
    else:
        print(f"\n{successful} of {total} file(s) done, {failed} failed", file=sys.stderr)


def main(args: Optional[list[str]] = None) -> int:
    """Run the mailmarker command line."""
    parser = create_parser()
    parsed_args = parser.parse_args(args)
    _setup_logging(parsed_args)

    try:
        options = build_options(parsed_args)
    except (argparse.ArgumentTypeError, ValidationError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_VALIDATION_ERROR

    try:
        items = collect_input_files(parsed_args.input, recursive=parsed_args.recursive)
    except FileError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_FILE_ERROR
    if not items:
        print("Error: No HTML input files found", file=sys.stderr)
        return EXIT_FILE_ERROR

    console = Console(stderr=True) if parsed_args.rich else None

    if parsed_args.output_dir is None:
        if len(items) > 1:
            print("Error: Several inputs need --output-dir", file=sys.stderr)
            return EXIT_VALIDATION_ERROR
        if parsed_args.out:
            results = mark_up_files(items, parsed_args.out, options, progress_callback=_ProgressPrinter(console))
            return EXIT_SUCCESS if results[0].success else EXIT_GENERAL_ERROR

        source = items[0][0]
        try:
            html = Marker(options).mark_up(read_source(source))
        except MarkerError as e:
            print(f"Error: {normalize_path(source)}: {e}", file=sys.stderr)
            return EXIT_GENERAL_ERROR
        sys.stdout.write(html)
        return EXIT_SUCCESS

    results = mark_up_files(
        items,
        Path(parsed_args.output_dir).as_posix() + "/",
        options,
        progress_callback=_ProgressPrinter(console),
    )
    failed = sum(1 for r in results if not r.success)
    _render_summary(console, len(results) - failed, failed)
    return EXIT_SUCCESS if failed == 0 else EXIT_GENERAL_ERROR


__all__ = ["build_options", "create_parser", "main"]
