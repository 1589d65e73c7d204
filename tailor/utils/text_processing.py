"""Text processing utilities for formatting and display."""

import re
import unicodedata

# Unicode replacements: problematic char -> ASCII equivalent
UNICODE_REPLACEMENTS = {
    # Spaces
    "\u00a0": " ",  # non-breaking space
    "\u202f": " ",  # narrow no-break space
    # Zero-width characters -> remove
    "\u200b": "",  # zero-width space
    "\u200c": "",  # zero-width non-joiner
    "\u200d": "",  # zero-width joiner
    "\u2060": "",  # word joiner
    "\ufeff": "",  # BOM
    # Quotes
    "\u2018": "'",
    "\u2019": "'",
    "\u201c": '"',
    "\u201d": '"',
    # Dashes
    "\u2013": "-",  # en dash
    "\u2014": "--",  # em dash
    # Misc
    "\u2026": "...",  # ellipsis
    "\u00b7": "*",  # middle dot (used as bullet)
}


def normalize_unicode(text: str) -> str:
    """
    Normalize unicode characters that cause downstream issues.

    Applies NFKC normalization and replaces common problematic characters
    (non-breaking spaces, smart quotes, zero-width characters) with ASCII equivalents.
    The bullet character (U+2022) is left alone since plain-text resumes use it as
    a list marker.

    Args:
        text: Raw text possibly containing problematic unicode

    Returns:
        Text with normalized unicode
    """
    text = unicodedata.normalize("NFKC", text)

    for char, replacement in UNICODE_REPLACEMENTS.items():
        text = text.replace(char, replacement)

    return text


def truncate_display(text: str, max_len: int) -> str:
    """
    Truncate text for display with ellipsis if needed.

    Args:
        text: Text to truncate
        max_len: Maximum length including ellipsis

    Returns:
        Original text if within max_len, otherwise truncated with "..."

    Example:
        >>> truncate_display("short", 10)
        'short'
        >>> truncate_display("this is a very long string", 10)
        'this is...'
    """
    return text if len(text) <= max_len else text[: max_len - 3] + "..."


def set_max_consecutive_blank_lines(content: str, max_consecutive: int = 1) -> str:
    """
    Normalize consecutive blank lines to a maximum number.

    Args:
        content: The text content to normalize
        max_consecutive: Maximum number of consecutive blank lines to allow.
                        Use 0 to remove all blank lines, 1 for standard
                        normalization (default: 1)

    Returns:
        Content with normalized blank lines

    Example:
        >>> set_max_consecutive_blank_lines("text\\n\\n\\n\\nmore", max_consecutive=1)
        'text\\n\\nmore'
        >>> set_max_consecutive_blank_lines("text\\n\\n\\n\\nmore", max_consecutive=0)
        'text\\nmore'
    """
    if max_consecutive == 0:
        # Any blank line at all
        pattern = r"\n\s*\n(\s*\n)*"
    else:
        # Runs of 2+ blank lines only
        pattern = r"\n\s*\n(\s*\n)+"

    replacement = "\n" * (max_consecutive + 1)

    return re.sub(pattern, replacement, content)
