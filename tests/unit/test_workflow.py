"""Unit tests for turning optimization results into document edits."""

import pytest

from tailor.contexts.gateway import OptimizationResult, Suggestion, SuggestionKind
from tailor.contexts.gateway.response_parser import normalize_result
from tailor.utils.session import SessionError, SessionState
from tailor.workflow import apply_suggestions, changes_from_result, tailored_latex


@pytest.mark.unit
def test_changes_match_cleaned_bullet_text_to_source_span(sample_latex, sample_result_data):
    changes = changes_from_result(normalize_result(sample_result_data), sample_latex)

    assert len(changes.bullet_changes) == 1
    assert changes.bullet_changes[0].original.startswith("\\item \\textbf{Built}")
    assert changes.bullet_changes[0].new == "Built an Airflow-orchestrated data pipeline in Python"
    assert changes.skills == ["Docker"]


@pytest.mark.unit
def test_changes_without_latex_use_original_text_literally():
    result = OptimizationResult(
        suggestions=[
            Suggestion(SuggestionKind.BULLET, "New", original_text="\\item Old"),
            Suggestion(SuggestionKind.BULLET, "No original"),
            Suggestion(SuggestionKind.SKILL, ""),
            Suggestion(SuggestionKind.ERROR, "Failed to parse AI response. Please try again."),
        ]
    )
    changes = changes_from_result(result)

    assert [(c.original, c.new) for c in changes.bullet_changes] == [("\\item Old", "New")]
    assert changes.skills == []


@pytest.mark.unit
def test_apply_suggestions(sample_latex, sample_result_data):
    updated = apply_suggestions(sample_latex, normalize_result(sample_result_data))

    assert "\\item Built an Airflow-orchestrated data pipeline in Python" in updated
    assert "\\item SQL\n\\item Docker\n\\end{itemize}" in updated
    assert "Led a team of 4 engineers % internal note" in updated


@pytest.mark.unit
def test_tailored_latex_requires_resume_and_result(sample_latex):
    with pytest.raises(SessionError):
        tailored_latex(SessionState())
    with pytest.raises(SessionError):
        tailored_latex(SessionState().with_latex_resume(sample_latex))
