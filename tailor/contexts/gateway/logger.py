"""
Gateway context logger.

Provides logging interface for gateway context with automatic [gateway] prefix.
All gateway modules should import from this module, not from utils.logger directly.
"""

from pathlib import Path

from loguru import logger

from tailor.utils.logger import setup_logger as _setup_logger

CONTEXT_PREFIX = "[gateway]"


def setup_gateway_logger(log_dir: Path, provider: str, model: str) -> Path:
    """
    Setup logger for gateway context.

    Args:
        log_dir: Directory for this optimization session
        provider: Provider identifier for provenance
        model: Model identifier for provenance

    Returns:
        Path to log file
    """
    return _setup_logger(
        context_name="gateway",
        log_dir=log_dir,
        extra_provenance={"Provider": provider, "Model": model},
    )


# Wrapper functions with automatic [gateway] prefix


def _log_info(message: str) -> None:
    """Log info message with [gateway] prefix."""
    logger.info(f"{CONTEXT_PREFIX} {message}")


def _log_success(message: str) -> None:
    """Log success message with [gateway] prefix."""
    logger.success(f"{CONTEXT_PREFIX} {message}")


def _log_error(message: str) -> None:
    """Log error message with [gateway] prefix."""
    logger.error(f"{CONTEXT_PREFIX} {message}")


def _log_warning(message: str) -> None:
    """Log warning message with [gateway] prefix."""
    logger.warning(f"{CONTEXT_PREFIX} {message}")


def _log_debug(message: str) -> None:
    """Log debug message with [gateway] prefix."""
    logger.debug(f"{CONTEXT_PREFIX} {message}")


# High-level gateway-specific logging helpers


def log_optimization_start(provider: str, model: str, is_latex: bool, prompt_chars: int) -> None:
    """Log start of an optimization request."""
    resume_format = "LaTeX" if is_latex else "plain text"
    _log_info(f"Requesting optimization from {provider} ({model})")
    _log_debug(f"  Resume format: {resume_format}")
    _log_debug(f"  Prompt length: {prompt_chars} chars")


def log_optimization_result(provider: str, result, elapsed_time: float) -> None:
    """
    Log optimization result summary.

    Args:
        provider: Provider identifier
        result: OptimizationResult from optimize()
        elapsed_time: Time taken for the provider round trip
    """
    if result.parse_failed:
        _log_warning(f"{provider}: reply could not be parsed ({elapsed_time:.2f}s)")
        return

    _log_success(
        f"{provider}: match score {result.match_score}, "
        f"{len(result.suggestions)} suggestions ({elapsed_time:.2f}s)"
    )
    if result.updated_resume_text is None:
        _log_debug("  No updated resume returned")


def log_reply_preview(text: str, limit: int = 500) -> None:
    """Log the head of a reply that failed to parse."""
    logger.opt(raw=True).debug(f"\n{'=' * 80}\nUNPARSEABLE REPLY:\n{'=' * 80}\n{text[:limit]}\n")
