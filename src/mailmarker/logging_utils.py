"""Centralized logging utilities for mailmarker entry points."""

from __future__ import annotations

import logging
import sys
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler

LIBRARY_LOGGER = "mailmarker"


def configure_logging(
    log_level: int | str,
    log_file: Optional[str] = None,
    trace_mode: bool = False,
    use_rich: bool = False,
) -> logging.Logger:
    """Configure root logging handlers for a CLI run.

    Parameters
    ----------
    log_level : int | str
        Numeric logging level or string name (e.g., "INFO").
    log_file : str, optional
        Path to a log file that receives a copy of every record.
    trace_mode : bool, default False
        Emit timestamps and logger names, useful when following a single
        expansion through the traversal loop.
    use_rich : bool, default False
        Render console records with rich's colorized handler.

    Returns
    -------
    logging.Logger
        The configured root logger instance.

    """
    resolved_level = log_level if isinstance(log_level, int) else getattr(logging, str(log_level).upper(), logging.INFO)

    root_logger = logging.getLogger()
    root_logger.setLevel(resolved_level)
    root_logger.handlers.clear()

    format_str = "[%(asctime)s] [%(levelname)s] [%(name)s] %(message)s" if trace_mode else "%(levelname)s: %(message)s"
    formatter = logging.Formatter(format_str, datefmt="%Y-%m-%d %H:%M:%S" if trace_mode else None)

    console_handler: logging.Handler
    if use_rich:
        console_handler = RichHandler(
            console=Console(stderr=True), show_time=trace_mode, show_path=trace_mode, markup=False
        )
    else:
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setFormatter(formatter)
    console_handler.setLevel(resolved_level)
    root_logger.addHandler(console_handler)

    if log_file:
        try:
            file_handler = logging.FileHandler(log_file, mode="a", encoding="utf-8")
        except OSError as exc:
            root_logger.warning("Could not create log file %s: %s", log_file, exc)
        else:
            file_handler.setLevel(resolved_level)
            file_handler.setFormatter(logging.Formatter("[%(asctime)s] [%(levelname)s] [%(name)s] %(message)s"))
            root_logger.addHandler(file_handler)
            root_logger.info("Logging to file: %s", log_file)

    # BeautifulSoup's parser chatter is not useful below trace level
    if not trace_mode:
        logging.getLogger("bs4").setLevel(max(resolved_level, logging.WARNING))

    return logging.getLogger(LIBRARY_LOGGER)
