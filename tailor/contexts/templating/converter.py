"""
Conversions between plain text and LaTeX.

- text_to_latex(): plain-text resume -> minimal compilable LaTeX document
- latex_to_plaintext(): LaTeX resume -> readable text (for previews and PDF-less runs)
- escape_latex(): escape LaTeX metacharacters in free text
"""

import re
from typing import List

from tailor.contexts.templating.latex_patterns import (
    CleaningRegex,
    DocumentPatterns,
    FormattingCommands,
    PlainTextRegex,
)
from tailor.contexts.templating.logger import _log_debug
from tailor.contexts.templating.template_registry import TemplateRegistry

LATEX_ESCAPES = {
    "\\": r"\textbackslash{}",
    "&": r"\&",
    "%": r"\%",
    "$": r"\$",
    "#": r"\#",
    "_": r"\_",
    "{": r"\{",
    "}": r"\}",
    "~": r"\textasciitilde{}",
    "^": r"\textasciicircum{}",
}
_LATEX_SPECIALS = re.compile("[" + re.escape("".join(LATEX_ESCAPES)) + "]")

_registry = TemplateRegistry()


def escape_latex(text: str) -> str:
    """
    Escape LaTeX metacharacters in a single pass.

    Example:
        >>> escape_latex("R&D: 50% of $ budget_{x}")
        'R\\\\&D: 50\\\\% of \\\\$ budget\\\\_\\\\{x\\\\}'
        >>> escape_latex("C:\\\\path")
        'C:\\\\textbackslash{}path'
    """
    return _LATEX_SPECIALS.sub(lambda m: LATEX_ESCAPES[m.group(0)], text)


def is_section_header(line: str) -> bool:
    """All-caps line, or capitalized text ending in a colon."""
    return bool(
        re.match(PlainTextRegex.ALL_CAPS_HEADER, line)
        or re.match(PlainTextRegex.COLON_HEADER, line)
    )


def is_bullet(line: str) -> bool:
    """Line starting with '-', '•' or '*' followed by whitespace."""
    return bool(re.match(PlainTextRegex.BULLET_MARKER, line))


def text_to_latex(text: str, document_class: str = "article") -> str:
    """
    Convert a plain-text resume into a minimal LaTeX document.

    Lines are classified one at a time while tracking whether an itemize list is open:
    - Section header -> close any open list, emit \\section*{title} (trailing colon dropped)
    - Bullet line -> open a list if none is open, emit an escaped \\item
    - Other text -> close any open list, emit an escaped paragraph
    A list still open at the end of input is closed before \\end{document}.

    Args:
        text: Plain-text resume
        document_class: LaTeX document class (default: "article")

    Returns:
        Complete LaTeX document

    Example:
        >>> body = text_to_latex("EXPERIENCE\\n- Built a thing\\nDid other work")
        >>> "\\\\section*{EXPERIENCE}" in body
        True
    """
    lines = [line.strip() for line in text.split("\n") if line.strip()]

    body: List[str] = []
    in_list = False

    for line in lines:
        if is_section_header(line):
            if in_list:
                body.append(f"{DocumentPatterns.END_ITEMIZE}\n\n")
                in_list = False
            title = re.sub(r":$", "", line)
            body.append(f"\\section*{{{escape_latex(title)}}}\n")

        elif is_bullet(line):
            if not in_list:
                body.append(f"{DocumentPatterns.BEGIN_ITEMIZE}\n")
                in_list = True
            content = re.sub(PlainTextRegex.BULLET_MARKER, "", line)
            body.append(f"  {DocumentPatterns.ITEM} {escape_latex(content)}\n")

        else:
            if in_list:
                body.append(f"{DocumentPatterns.END_ITEMIZE}\n\n")
                in_list = False
            body.append(f"{escape_latex(line)}\n\n")

    if in_list:
        body.append(f"{DocumentPatterns.END_ITEMIZE}\n")

    _log_debug(f"Converted {len(lines)} line(s) of plain text to LaTeX")

    template = _registry.get_template("basic_document")
    return template.render(document_class=document_class, body="".join(body))


def latex_to_plaintext(latex: str) -> str:
    """
    Strip a LaTeX resume down to readable text.

    Section titles are placed on their own lines; formatting commands keep their
    argument; all other commands, environment markers and braces are removed.

    Example:
        >>> latex_to_plaintext("\\\\section{Skills}\\n\\\\textbf{Python} % main")
        'Skills\\nPython'
    """
    text = re.sub(CleaningRegex.COMMENT, "", latex, flags=re.MULTILINE)

    for command in FormattingCommands.all():
        text = re.sub(CleaningRegex.FORMATTING_COMMAND.format(command=command), r"\1", text)

    text = re.sub(CleaningRegex.SECTION_HEADER, r"\n\1\n", text)
    text = text.replace(r"\\", " ")
    text = re.sub(CleaningRegex.ANY_COMMAND, "", text)
    text = re.sub(CleaningRegex.BEGIN_ANY_ENV, "", text)
    text = re.sub(CleaningRegex.END_ANY_ENV, "", text)
    text = re.sub(CleaningRegex.ESCAPED_SPECIAL, r"\1", text)
    text = re.sub(CleaningRegex.BRACES, "", text)
    text = re.sub(r"\n\s*\n", "\n", text)

    return text.strip()
