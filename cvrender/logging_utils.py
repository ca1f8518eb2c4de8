"""
Logging helpers for cvrender.

Defines the package logger and simple utilities for configuring
console and optional file logging.
"""

from __future__ import annotations

import logging
from typing import List, Optional

LOG = logging.getLogger("cvrender")

# Verbosity levels
VERBOSITY_QUIET = 0    # Minimal output (default)
VERBOSITY_NORMAL = 1   # Standard output with level prefix
VERBOSITY_VERBOSE = 2  # Detailed debug output


def setup_logging(debug: bool, log_file: Optional[str] = None, verbosity: int = VERBOSITY_QUIET) -> None:
    """
    Setup logging with verbosity control.

    Args:
        debug: Debug flag (overrides verbosity to VERBOSITY_VERBOSE)
        log_file: Optional log file path
        verbosity: Verbosity level (0=quiet, 1=normal, 2=verbose)
    """
    if debug:
        verbosity = VERBOSITY_VERBOSE

    if verbosity >= VERBOSITY_VERBOSE:
        level = logging.DEBUG
    elif verbosity >= VERBOSITY_NORMAL:
        level = logging.INFO
    else:
        level = logging.WARNING

    console_format = "%(levelname)s: %(message)s" if verbosity >= VERBOSITY_NORMAL else "%(message)s"

    # Handlers may already be installed (e.g. by pytest); only retune them
    if logging.root.handlers:
        for handler in logging.root.handlers:
            if isinstance(handler, logging.StreamHandler) and not isinstance(handler, logging.FileHandler):
                handler.setLevel(level)
                handler.setFormatter(logging.Formatter(console_format))
        logging.root.setLevel(level)
    else:
        console = logging.StreamHandler()
        console.setLevel(level)
        console.setFormatter(logging.Formatter(console_format))
        logging.basicConfig(level=level, handlers=[console], force=True)

    if log_file:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(logging.DEBUG)  # always full detail in file
        file_handler.setFormatter(
            logging.Formatter(
                "%(asctime)s | %(levelname)s | %(message)s",
                datefmt="%Y-%m-%d %H:%M:%S",
            )
        )
        logging.root.addHandler(file_handler)

    # Suppress noisy third-party libraries
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("openai").setLevel(logging.WARNING)
    logging.getLogger("urllib3").setLevel(logging.WARNING)


def fmt_issues(errors: List[str], warnings: List[str]) -> str:
    """
    Compact error/warning string for one-line verification output.
    """
    parts: List[str] = []
    if errors:
        parts.append("errors: " + ", ".join(errors))
    if warnings:
        parts.append("warnings: " + ", ".join(warnings))
    return " | ".join(parts) if parts else "-"
