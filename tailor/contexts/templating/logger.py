"""
Templating context logger.

Provides logging interface for templating context with automatic [template] prefix.
All templating modules should import from this module, not from utils.logger directly.
"""

from pathlib import Path

from loguru import logger

from tailor.utils.logger import setup_logger as _setup_logger

CONTEXT_PREFIX = "[template]"


def setup_templating_logger(log_dir: Path, phase: str = "template") -> Path:
    """
    Setup logger for templating context.

    Args:
        log_dir: Directory for this templating session
        phase: Phase name for provenance ("validate", "convert", "apply", ...)

    Returns:
        Path to log file
    """
    return _setup_logger(
        context_name="template",
        log_dir=log_dir,
        extra_provenance={"Phase": phase},
    )


# Wrapper functions with automatic [template] prefix


def _log_info(message: str) -> None:
    """Log info message with [template] prefix."""
    logger.info(f"{CONTEXT_PREFIX} {message}")


def _log_success(message: str) -> None:
    """Log success message with [template] prefix."""
    logger.success(f"{CONTEXT_PREFIX} {message}")


def _log_warning(message: str) -> None:
    """Log warning message with [template] prefix."""
    logger.warning(f"{CONTEXT_PREFIX} {message}")


def _log_debug(message: str) -> None:
    """Log debug message with [template] prefix."""
    logger.debug(f"{CONTEXT_PREFIX} {message}")


# High-level templating-specific logging helpers


def log_validation_report(report) -> None:
    """
    Log a LatexValidationReport. Issues are warnings, never errors.

    Args:
        report: LatexValidationReport from validate_latex()
    """
    if report.valid:
        _log_success("LaTeX structure looks well-formed")
        return

    _log_warning(f"{len(report.errors)} structural issue(s) found")
    for i, issue in enumerate(report.errors, 1):
        _log_warning(f"  Issue {i}: {issue}")


def log_document_update(bullets_requested: int, skills_requested: int, changed: bool) -> None:
    """Log the outcome of update_document()."""
    _log_info(
        f"Applied {bullets_requested} bullet replacement(s) and "
        f"{skills_requested} skill insertion(s)"
    )
    if not changed:
        _log_warning("Document unchanged after applying edits")
