"""
End-to-end resume tailoring workflow.

Connects the contexts without letting them depend on each other:
session state -> gateway.optimize -> OptimizationResult -> templating.update_document.
"""

import re
from typing import Dict, Optional

import httpx

from tailor.contexts.gateway import OptimizationResult, SuggestionKind, optimize
from tailor.contexts.templating import (
    BulletChange,
    DocumentChanges,
    clean_latex_text,
    extract_bullets,
    update_document,
)
from tailor.utils.session import MISSING_RESUME_MESSAGE, SessionError, SessionState, build_request


def _match_key(text: str) -> str:
    return re.sub(r"\s+", " ", clean_latex_text(text)).strip().lower()


def changes_from_result(result: OptimizationResult, latex: Optional[str] = None) -> DocumentChanges:
    """
    Turn provider suggestions into document edits.

    Bullet suggestions with an original text become bullet replacements; skill
    suggestions become skill insertions. When the LaTeX source is given, each
    original text is matched to the bullet whose cleaned text is the same, so the
    replacement targets the exact source span. Unmatched originals are used as
    literal spans (a no-op if they do not appear in the document).

    Args:
        result: Optimization result
        latex: LaTeX source the suggestions refer to (optional)

    Returns:
        DocumentChanges in suggestion order
    """
    spans: Dict[str, str] = {}
    if latex:
        for bullet in extract_bullets(latex):
            spans.setdefault(_match_key(bullet.cleaned_text), bullet.source_span)

    changes = DocumentChanges()

    for suggestion in result.suggestions_of_kind(SuggestionKind.BULLET):
        if not suggestion.original_text or not suggestion.suggested_text:
            continue
        span = spans.get(_match_key(suggestion.original_text), suggestion.original_text)
        changes.bullet_changes.append(BulletChange(original=span, new=suggestion.suggested_text))

    for suggestion in result.suggestions_of_kind(SuggestionKind.SKILL):
        if suggestion.suggested_text:
            changes.skills.append(suggestion.suggested_text)

    return changes


def apply_suggestions(latex: str, result: OptimizationResult) -> str:
    """Apply a result's bullet and skill suggestions to LaTeX source."""
    changes = changes_from_result(result, latex)
    if changes.is_empty:
        return latex
    return update_document(latex, changes)


async def run_optimization(
    state: SessionState,
    client: Optional[httpx.AsyncClient] = None,
) -> SessionState:
    """
    Optimize the session's resume against its job description.

    Returns:
        New state holding the result

    Raises:
        SessionError: If the job description, resume or API key is missing
        ProviderError: On provider failure
    """
    request = build_request(state)
    result = await optimize(request, client=client)
    return state.with_result(result)


def tailored_latex(state: SessionState) -> str:
    """
    LaTeX resume with the session's latest suggestions applied.

    Raises:
        SessionError: If there is no LaTeX resume or no result yet
    """
    if not state.resume_latex:
        raise SessionError(MISSING_RESUME_MESSAGE, missing="resumeLatex")
    if state.result is None:
        raise SessionError("Run an optimization first", missing="result")
    return apply_suggestions(state.resume_latex, state.result)
