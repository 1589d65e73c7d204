"""
LaTeX structural processing: sections, bullets and targeted rewrites.

Regex-based, not a TeX parser. Every function is a pure function of its inputs and
leaves markup it does not target byte-for-byte unchanged.
"""

import re
from typing import Dict, List

from tailor.contexts.templating.data_structures import (
    DocumentChanges,
    LatexBullet,
    LatexSection,
)
from tailor.contexts.templating.latex_patterns import (
    CleaningRegex,
    DocumentPatterns,
    FormattingCommands,
    ItemRegex,
    RESUME_SECTIONS,
    SectionRegex,
)
from tailor.contexts.templating.logger import _log_debug, log_document_update
from tailor.utils.text_processing import set_max_consecutive_blank_lines

_SECTION_BLOCK = re.compile(SectionRegex.SECTION_BLOCK, re.IGNORECASE)
_ITEM_SPAN = re.compile(ItemRegex.ITEM_SPAN, re.IGNORECASE)
_COMMENT = re.compile(CleaningRegex.COMMENT, re.MULTILINE)
_FORMATTING = [
    re.compile(CleaningRegex.FORMATTING_COMMAND.format(command=command))
    for command in FormattingCommands.all()
]


def extract_sections(latex: str) -> Dict[str, LatexSection]:
    """
    Split a document into its sections and subsections.

    Content runs from just after each header to the next section/subsection header,
    \\end{document}, or end of text. Sections are keyed by lowercased, trimmed title;
    a later section with the same key replaces the earlier one.

    Args:
        latex: LaTeX source

    Returns:
        Dict mapping normalized title -> LatexSection

    Example:
        >>> sections = extract_sections("\\\\section{Skills} Python \\\\section*{Education} BSc")
        >>> sections["skills"].content
        'Python'
        >>> sections["education"].name
        'Education'
    """
    sections: Dict[str, LatexSection] = {}

    for match in _SECTION_BLOCK.finditer(latex):
        kind, name, content = match.group(1), match.group(2), match.group(3)
        key = name.lower().strip()

        if key in sections:
            _log_debug(f"Duplicate section '{name}': keeping the later occurrence")

        sections[key] = LatexSection(
            name=name,
            normalized_key=key,
            content=content.strip(),
            kind=kind.lower(),
        )

    return sections


def find_known_sections(latex: str) -> List[str]:
    """Return the well-known resume sections (RESUME_SECTIONS order) present in a document."""
    keys = extract_sections(latex).keys()
    return [name for name in RESUME_SECTIONS if name in keys]


def clean_latex_text(latex: str) -> str:
    """
    Reduce a LaTeX fragment to plain text.

    Strips comments, unwraps formatting commands (\\textbf, \\textit, \\emph,
    \\underline, \\texttt) to their argument, collapses \\href{url}{text} to text,
    removes every other command with its optional [..] and {..} argument,
    removes braces and collapses whitespace.

    Example:
        >>> clean_latex_text("\\\\textbf{Built} a \\\\emph{scalable} system % note")
        'Built a scalable system'
        >>> clean_latex_text("See \\\\href{https://x.io}{my site}")
        'See my site'
    """
    text = _COMMENT.sub("", latex)

    for pattern in _FORMATTING:
        text = pattern.sub(r"\1", text)

    text = re.sub(CleaningRegex.HREF, r"\1", text)
    text = re.sub(CleaningRegex.ANY_COMMAND, "", text)
    text = re.sub(CleaningRegex.ESCAPED_SPECIAL, r"\1", text)
    text = re.sub(CleaningRegex.BRACES, "", text)
    text = re.sub(CleaningRegex.WHITESPACE, " ", text)

    return text.strip()


def extract_bullets(latex: str) -> List[LatexBullet]:
    """
    Extract \\item entries from itemize/enumerate environments.

    Each bullet's span runs to the next \\item or the list's end marker. Bullets whose
    cleaned text is empty are skipped.

    Args:
        latex: LaTeX source (whole document or a fragment)

    Returns:
        Bullets in document order
    """
    bullets = []

    for match in _ITEM_SPAN.finditer(latex):
        cleaned = clean_latex_text(match.group(1))
        if cleaned:
            bullets.append(LatexBullet(source_span=match.group(0), cleaned_text=cleaned))

    return bullets


def replace_bullet(latex: str, original_span: str, new_text: str) -> str:
    """
    Replace every literal occurrence of a bullet span with `\\item <new_text>`.

    Args:
        latex: LaTeX source
        original_span: Exact source text of the bullet (LatexBullet.source_span)
        new_text: Replacement bullet body

    Returns:
        Updated LaTeX (unchanged if original_span is empty or absent)
    """
    if not original_span:
        return latex

    replacement = f"{DocumentPatterns.ITEM} {new_text}"
    return re.sub(re.escape(original_span), lambda _: replacement, latex)


def add_skill(latex: str, skill: str, section_name: str = "skills") -> str:
    """
    Add a skill to a named section.

    The section (matched case-insensitively on its \\section title) runs to the next
    \\section or document end. If it contains an itemize environment, `\\item <skill>`
    is inserted before the first \\end{itemize}; otherwise `, <skill>` is appended
    to the section text.

    Args:
        latex: LaTeX source
        skill: Skill text (inserted verbatim)
        section_name: Section title to look for (default: "skills")

    Returns:
        Updated LaTeX (unchanged if the section is not found)

    Example:
        >>> doc = "\\\\section{Skills}\\nPython, SQL\\n\\\\end{document}"
        >>> add_skill(doc, "Docker")
        '\\\\section{Skills}\\nPython, SQL, Docker\\n\\\\end{document}'
    """
    pattern = SectionRegex.NAMED_SECTION.format(name=re.escape(section_name))
    match = re.search(pattern, latex, re.IGNORECASE)
    if not match:
        _log_debug(f"Section '{section_name}' not found; skill '{skill}' not added")
        return latex

    section = match.group(1)

    if DocumentPatterns.BEGIN_ITEMIZE in section:
        new_section = re.sub(
            ItemRegex.END_ITEMIZE,
            lambda _: f"{DocumentPatterns.ITEM} {skill}\n{DocumentPatterns.END_ITEMIZE}",
            section,
            count=1,
        )
    else:
        new_section = section.strip() + f", {skill}\n"

    return latex[: match.start(1)] + new_section + latex[match.end(1) :]


def update_document(latex: str, changes: DocumentChanges) -> str:
    """
    Apply ordered bullet replacements, then ordered skill insertions.

    Each step operates on the output of the previous one. Bullet changes missing
    either side are skipped.

    Args:
        latex: Original LaTeX source
        changes: Edits to apply

    Returns:
        Updated LaTeX
    """
    updated = latex

    for change in changes.bullet_changes:
        if change.original and change.new:
            updated = replace_bullet(updated, change.original, change.new)

    for skill in changes.skills:
        if skill:
            updated = add_skill(updated, skill)

    log_document_update(len(changes.bullet_changes), len(changes.skills), updated != latex)
    return updated


def format_for_display(latex: str) -> str:
    """Collapse runs of blank lines to a single blank line and trim."""
    return set_max_consecutive_blank_lines(latex, max_consecutive=1).strip()
