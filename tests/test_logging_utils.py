"""Tests for logging utilities."""

import logging
from pathlib import Path

from cvrender.logging_utils import LOG, VERBOSITY_NORMAL, fmt_issues, setup_logging


def test_fmt_issues_no_errors_or_warnings():
    """Test formatting with no issues."""
    assert fmt_issues([], []) == "-"


def test_fmt_issues_both_errors_and_warnings():
    """Test formatting with both errors and warnings."""
    result = fmt_issues(["error1", "error2"], ["warn1"])
    assert result == "errors: error1, error2 | warnings: warn1"


def test_setup_logging_levels():
    """Debug wins over verbosity; verbose maps to INFO."""
    setup_logging(debug=True)
    assert logging.root.level == logging.DEBUG
    setup_logging(debug=False, verbosity=VERBOSITY_NORMAL)
    assert logging.root.level == logging.INFO
    setup_logging(debug=False)
    assert logging.root.level == logging.WARNING


def test_setup_logging_with_file(tmp_path: Path):
    """Test logging setup with file handler."""
    log_file = tmp_path / "test.log"
    setup_logging(debug=False, log_file=str(log_file))
    try:
        LOG.warning("test message")
        for handler in logging.root.handlers:
            handler.flush()
        assert "test message" in log_file.read_text(encoding="utf-8")
    finally:
        for handler in list(logging.root.handlers):
            if isinstance(handler, logging.FileHandler) and handler.baseFilename == str(log_file):
                logging.root.removeHandler(handler)
                handler.close()
