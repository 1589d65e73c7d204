"""
Templating Context

Responsibilities:
- Splits LaTeX resumes into sections and bullet points
- Rewrites bullets and inserts skills without disturbing unrelated markup
- Validates gross structural well-formedness (advisory only)
- Converts plain text to a minimal LaTeX document and LaTeX back to text

Owns: LaTeX structure representation, text <-> LaTeX conversion
Never: Talks to providers or decides which edits to make
"""

from tailor.contexts.templating.converter import (
    escape_latex,
    latex_to_plaintext,
    text_to_latex,
)
from tailor.contexts.templating.data_structures import (
    BulletChange,
    DocumentChanges,
    LatexBullet,
    LatexSection,
    LatexValidationReport,
)
from tailor.contexts.templating.latex_processor import (
    add_skill,
    clean_latex_text,
    extract_bullets,
    extract_sections,
    find_known_sections,
    format_for_display,
    replace_bullet,
    update_document,
)
from tailor.contexts.templating.validator import validate_latex

__all__ = [
    # Structure extraction
    "extract_sections",
    "extract_bullets",
    "clean_latex_text",
    "find_known_sections",
    # Rewriting
    "replace_bullet",
    "add_skill",
    "update_document",
    "format_for_display",
    # Validation
    "validate_latex",
    # Conversion
    "text_to_latex",
    "latex_to_plaintext",
    "escape_latex",
    # Data structure classes
    "LatexSection",
    "LatexBullet",
    "BulletChange",
    "DocumentChanges",
    "LatexValidationReport",
]
