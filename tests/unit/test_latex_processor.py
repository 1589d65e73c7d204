"""Unit tests for LaTeX section/bullet extraction and targeted rewrites."""

import pytest

from tailor.contexts.templating import (
    BulletChange,
    DocumentChanges,
    add_skill,
    clean_latex_text,
    extract_bullets,
    extract_sections,
    find_known_sections,
    format_for_display,
    replace_bullet,
    update_document,
)


@pytest.mark.unit
def test_extract_sections(sample_latex):
    sections = extract_sections(sample_latex)

    assert list(sections) == ["experience", "skills"]
    assert sections["experience"].name == "Experience"
    assert sections["experience"].kind == "section"
    assert sections["skills"].content.startswith("\\begin{itemize}")
    assert "\\end{document}" not in sections["skills"].content


@pytest.mark.unit
def test_duplicate_section_keeps_later_content():
    latex = "\\section{Skills}\nFirst\n\\subsection*{skills}\nSecond\n\\end{document}"
    sections = extract_sections(latex)

    assert len(sections) == 1
    assert sections["skills"].content == "Second"
    assert sections["skills"].kind == "subsection"


@pytest.mark.unit
def test_find_known_sections(sample_latex):
    assert find_known_sections(sample_latex) == ["experience", "skills"]


@pytest.mark.unit
def test_extract_bullets_cleans_markup(sample_latex):
    bullets = extract_bullets(sample_latex)

    assert [b.cleaned_text for b in bullets] == [
        "Built a data pipeline in Python",
        "Led a team of 4 engineers",
        "Python",
        "SQL",
    ]
    assert bullets[0].source_span.startswith("\\item \\textbf{Built}")


@pytest.mark.unit
def test_extract_bullets_skips_empty_items():
    latex = "\\begin{enumerate}\\item \\item Real one\\end{enumerate}"
    assert [b.cleaned_text for b in extract_bullets(latex)] == ["Real one"]


@pytest.mark.unit
def test_clean_latex_text():
    assert clean_latex_text("\\textbf{Cut} costs by 30\\% with \\emph{caching}") == (
        "Cut costs by 30% with caching"
    )
    assert clean_latex_text("See \\href{https://x.io}{my site} \\hfill 2024") == "See my site 2024"


@pytest.mark.unit
def test_replace_bullet_rewrites_every_identical_span():
    latex = "\\begin{itemize}\\item Same\\item Other\\item Same\\end{itemize}"
    updated = replace_bullet(latex, "\\item Same", "Changed")

    assert updated == "\\begin{itemize}\\item Changed\\item Other\\item Changed\\end{itemize}"


@pytest.mark.unit
def test_replace_bullet_is_literal_and_ignores_empty_span():
    latex = "\\item Saved $5 (50%)\\end{itemize}"
    assert replace_bullet(latex, "\\item Saved $5 (50%)", "Saved \\$10") == "\\item Saved \\$10\\end{itemize}"
    assert replace_bullet(latex, "", "anything") == latex


@pytest.mark.unit
def test_add_skill_inserts_before_end_itemize(sample_latex):
    updated = add_skill(sample_latex, "Docker")

    assert "\\item SQL\n\\item Docker\n\\end{itemize}" in updated
    # Experience list is untouched
    assert updated.count("\\item Docker") == 1
    assert updated.index("\\item Docker") > updated.index("\\section{Skills}")


@pytest.mark.unit
def test_add_skill_appends_to_comma_list():
    latex = "\\section{Skills}\nPython, SQL\n\n\\section{Education}\nBSc\n"
    updated = add_skill(latex, "Docker")

    assert updated == "\\section{Skills}\nPython, SQL, Docker\n\\section{Education}\nBSc\n"


@pytest.mark.unit
def test_add_skill_without_section_is_noop():
    latex = "\\section{Experience}\nStuff\n"
    assert add_skill(latex, "Docker") == latex


@pytest.mark.unit
def test_update_document_applies_bullets_then_skills(sample_latex):
    span = extract_bullets(sample_latex)[0].source_span
    changes = DocumentChanges(
        bullet_changes=[BulletChange(original=span, new="Built a Dockerized pipeline"), BulletChange("", "x")],
        skills=["Docker", "Airflow"],
    )
    updated = update_document(sample_latex, changes)

    assert "\\item Built a Dockerized pipeline" in updated
    assert "\\textbf{Built}" not in updated
    assert updated.index("\\item Docker\n") < updated.index("\\item Airflow\n")
    assert update_document(sample_latex, DocumentChanges()) == sample_latex


@pytest.mark.unit
def test_format_for_display():
    assert format_for_display("\n\na\n\n\n\nb\n\n") == "a\n\nb"
