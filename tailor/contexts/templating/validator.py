"""
Advisory structural validation for LaTeX documents.

Catches gross structural problems before a document is saved or compiled. Results are
purely diagnostic: nothing downstream refuses a document because of them.
"""

import re
from typing import Dict

from tailor.contexts.templating.data_structures import LatexValidationReport
from tailor.contexts.templating.latex_patterns import DocumentPatterns, ValidationRegex
from tailor.contexts.templating.logger import log_validation_report


def count_environments(latex: str) -> Dict[str, int]:
    """
    Net \\begin minus \\end count per environment name, in first-seen order.

    Example:
        >>> count_environments("\\\\begin{itemize}\\\\begin{itemize}\\\\end{itemize}")
        {'itemize': 1}
    """
    counts: Dict[str, int] = {}
    for name in re.findall(ValidationRegex.BEGIN_ENV_NAME, latex):
        counts[name] = counts.get(name, 0) + 1
    for name in re.findall(ValidationRegex.END_ENV_NAME, latex):
        counts[name] = counts.get(name, 0) - 1
    return counts


def validate_latex(latex: str, log: bool = True) -> LatexValidationReport:
    """
    Check a document for gross structural problems.

    Reports, in order:
    - Missing \\documentclass declaration
    - Missing \\begin{document} / \\end{document}
    - Unbalanced braces (escaped \\{ and \\} are not counted)
    - Environments whose \\begin and \\end counts differ

    Args:
        latex: LaTeX source
        log: Log the report through the templating logger (default: True)

    Returns:
        LatexValidationReport

    Example:
        >>> report = validate_latex("\\\\documentclass{article}\\\\begin{document}{\\\\end{document}")
        >>> report.errors
        ['Unmatched braces: 4 open, 3 close']
    """
    errors = []

    if DocumentPatterns.DOCUMENTCLASS not in latex:
        errors.append("Missing \\documentclass declaration")

    if DocumentPatterns.BEGIN_DOCUMENT not in latex:
        errors.append("Missing \\begin{document}")
    if DocumentPatterns.END_DOCUMENT not in latex:
        errors.append("Missing \\end{document}")

    open_braces = len(re.findall(ValidationRegex.OPEN_BRACE, latex))
    close_braces = len(re.findall(ValidationRegex.CLOSE_BRACE, latex))
    if open_braces != close_braces:
        errors.append(f"Unmatched braces: {open_braces} open, {close_braces} close")

    for name, count in count_environments(latex).items():
        if count != 0:
            direction = "missing \\end" if count > 0 else "extra \\end"
            errors.append(f"Unmatched environment: {name} ({direction})")

    report = LatexValidationReport(valid=not errors, errors=errors)
    if log:
        log_validation_report(report)
    return report
