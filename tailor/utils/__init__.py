"""
Shared utilities for resume-tailor.

Common functionality used across contexts:
- Logging setup
- Text processing
- Settings, local storage and session state
"""

from tailor.utils.timestamp import now

__all__ = ["now"]
