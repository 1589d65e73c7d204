"""
Data structures for LaTeX structural processing.

All of these are transient views over a LaTeX string: they are rebuilt on every call
and never cached.
"""

from dataclasses import dataclass, field
from typing import List


@dataclass(frozen=True)
class LatexSection:
    """
    A \\section or \\subsection and the text that follows it.

    Attributes:
        name: Title as written (case preserved)
        normalized_key: Lowercased, trimmed title used as mapping key
        content: Raw LaTeX up to the next header or document end (trimmed)
        kind: "section" or "subsection"
    """

    name: str
    normalized_key: str
    content: str
    kind: str


@dataclass(frozen=True)
class LatexBullet:
    """
    A single \\item entry.

    Attributes:
        source_span: Exact matched text, starting at \\item; used verbatim as the
            substitution key (textually identical bullets are rewritten together)
        cleaned_text: Plain text with markup commands stripped
    """

    source_span: str
    cleaned_text: str


@dataclass(frozen=True)
class BulletChange:
    """Replace every occurrence of `original` (a bullet span) with `\\item new`."""

    original: str
    new: str


@dataclass
class DocumentChanges:
    """
    Ordered edits for update_document().

    Bullet replacements are applied first, in order, then skill insertions.
    """

    bullet_changes: List[BulletChange] = field(default_factory=list)
    skills: List[str] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not self.bullet_changes and not self.skills


@dataclass
class LatexValidationReport:
    """
    Advisory structural validation result.

    Attributes:
        valid: True when no issues were found
        errors: Human-readable issues, in detection order
    """

    valid: bool
    errors: List[str] = field(default_factory=list)
