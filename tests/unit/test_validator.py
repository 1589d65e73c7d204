"""Unit tests for advisory LaTeX structural validation."""

import pytest

from tailor.contexts.templating import validate_latex
from tailor.contexts.templating.validator import count_environments


@pytest.mark.unit
def test_well_formed_document_is_valid(sample_latex):
    report = validate_latex(sample_latex)
    assert report.valid
    assert report.errors == []


@pytest.mark.unit
def test_missing_one_closing_brace(sample_latex):
    broken = sample_latex.replace("\\textbf{Built}", "\\textbf{Built", 1)
    opens = sample_latex.count("{")

    report = validate_latex(broken)

    assert not report.valid
    assert report.errors == [f"Unmatched braces: {opens} open, {opens - 1} close"]


@pytest.mark.unit
def test_escaped_braces_are_not_counted(sample_latex):
    with_literal = sample_latex.replace("SQL", "SQL \\{literal", 1)
    assert validate_latex(with_literal).valid


@pytest.mark.unit
def test_unmatched_environment_direction(sample_latex):
    missing_end = sample_latex.replace("\\end{itemize}", "", 1)
    extra_end = sample_latex.replace("\\end{itemize}", "\\end{itemize}\\end{itemize}", 1)

    assert validate_latex(missing_end).errors == ["Unmatched environment: itemize (missing \\end)"]
    assert validate_latex(extra_end).errors == ["Unmatched environment: itemize (extra \\end)"]


@pytest.mark.unit
def test_missing_document_markers():
    report = validate_latex("\\section{Skills} Python", log=False)

    assert report.errors == [
        "Missing \\documentclass declaration",
        "Missing \\begin{document}",
        "Missing \\end{document}",
    ]


@pytest.mark.unit
def test_count_environments():
    latex = "\\begin{itemize}\\begin{itemize}\\end{itemize}\\begin{center}\\end{center}"
    assert count_environments(latex) == {"itemize": 1, "center": 0}
