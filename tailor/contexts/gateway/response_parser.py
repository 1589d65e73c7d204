"""
Reply parsing: provider reply text -> OptimizationResult.

All defensive coercion lives in normalize_result(), which takes whatever the reply
decoded to and produces a fully-defaulted OptimizationResult. parse_response() only
locates and decodes the JSON payload; when that fails the result is the recovered
ERROR form rather than an exception.
"""

import json
import math
import re
from typing import Any, List, Optional

from tailor.contexts.gateway.data_structures import (
    Analysis,
    OptimizationResult,
    Suggestion,
    SuggestionKind,
)
from tailor.contexts.gateway.logger import _log_warning, log_reply_preview

PARSE_FAILURE_MESSAGE = "Failed to parse AI response. Please try again."

FENCED_BLOCK = re.compile(r"```(?:json)?\s*([\s\S]*?)```")
LEADING_INTEGER = re.compile(r"^\s*([+-]?\d+)")


def extract_json_text(text: str) -> str:
    """
    Locate the JSON payload in a reply.

    Takes the contents of the first fenced block when there is one, then slices from
    the first '{' to the last '}' to drop any prose around the object.

    Example:
        >>> extract_json_text('Sure! ```json\\n{"a": 1}\\n``` Hope that helps')
        '{"a": 1}'
        >>> extract_json_text('Result: {"a": {"b": 2}} done')
        '{"a": {"b": 2}}'
    """
    json_text = text.strip()

    fenced = FENCED_BLOCK.search(text)
    if fenced:
        json_text = fenced.group(1).strip()

    start = json_text.find("{")
    end = json_text.rfind("}")
    if start != -1 and end != -1:
        json_text = json_text[start : end + 1]

    return json_text


def coerce_match_score(value: Any) -> int:
    """
    Coerce a reply's matchScore into [0, 100].

    Integers and floats are truncated, strings contribute their leading integer,
    anything else (including booleans and non-finite numbers) becomes 0.

    Example:
        >>> [coerce_match_score(v) for v in (-5, 0, 55, 100, 140, "abc", None)]
        [0, 0, 55, 100, 100, 0, 0]
        >>> coerce_match_score("87%")
        87
    """
    score = 0
    if isinstance(value, bool):
        score = 0
    elif isinstance(value, int):
        score = value
    elif isinstance(value, float):
        score = int(value) if math.isfinite(value) else 0
    elif isinstance(value, str):
        match = LEADING_INTEGER.match(value)
        score = int(match.group(1)) if match else 0

    return min(100, max(0, score))


def _string_list(value: Any) -> List[str]:
    """Coerce to a list of unique strings, keeping first-seen order."""
    if not isinstance(value, list):
        return []
    items = [str(item).strip() for item in value if item is not None]
    return list(dict.fromkeys(item for item in items if item))


def _text(value: Any) -> str:
    if value is None:
        return ""
    return value if isinstance(value, str) else str(value)


def _suggestion_kind(value: Any) -> SuggestionKind:
    try:
        return SuggestionKind(str(value).strip().lower())
    except ValueError:
        return SuggestionKind.GENERAL


def normalize_suggestion(raw: Any) -> Optional[Suggestion]:
    """Map a raw suggestion object permissively; non-objects are dropped."""
    if not isinstance(raw, dict):
        return None
    return Suggestion(
        kind=_suggestion_kind(raw.get("type")),
        suggested_text=_text(raw.get("text")),
        section=_text(raw.get("section")),
        original_text=_text(raw.get("original")),
    )


def normalize_result(data: Any) -> OptimizationResult:
    """
    Build a fully-defaulted OptimizationResult from a decoded reply.

    Args:
        data: Decoded JSON value (expected to be a dict)

    Returns:
        OptimizationResult; the ERROR form when data is not a JSON object
    """
    if not isinstance(data, dict):
        return parse_failure_result()

    raw_analysis = data.get("analysis")
    if not isinstance(raw_analysis, dict):
        raw_analysis = {}

    raw_suggestions = data.get("suggestions")
    if not isinstance(raw_suggestions, list):
        raw_suggestions = []

    suggestions = [normalize_suggestion(raw) for raw in raw_suggestions]

    updated = data.get("updatedResume")

    return OptimizationResult(
        match_score=coerce_match_score(data.get("matchScore")),
        analysis=Analysis(
            matching_skills=_string_list(raw_analysis.get("matchingSkills")),
            missing_skills=_string_list(raw_analysis.get("missingSkills")),
            keywords_found=_string_list(raw_analysis.get("keywordsFound")),
            keywords_missing=_string_list(raw_analysis.get("keywordsMissing")),
        ),
        suggestions=[s for s in suggestions if s is not None],
        updated_resume_text=updated if isinstance(updated, str) and updated else None,
    )


def parse_failure_result() -> OptimizationResult:
    """Recovered result for a reply that holds no usable JSON object."""
    return OptimizationResult(
        match_score=0,
        analysis=Analysis(),
        suggestions=[Suggestion(kind=SuggestionKind.ERROR, suggested_text=PARSE_FAILURE_MESSAGE)],
        updated_resume_text=None,
    )


def parse_response(text: str) -> OptimizationResult:
    """
    Parse a provider's reply text into an OptimizationResult.

    Never raises: malformed replies are logged and recovered into the ERROR form.

    Args:
        text: Raw reply text from ProviderAdapter.extract_reply_text()

    Returns:
        OptimizationResult
    """
    json_text = extract_json_text(text or "")

    try:
        data = json.loads(json_text)
    except json.JSONDecodeError as e:
        _log_warning(f"Error parsing reply: {e}")
        log_reply_preview(text or "")
        return parse_failure_result()

    if not isinstance(data, dict):
        _log_warning(f"Reply decoded to {type(data).__name__}, expected an object")
        log_reply_preview(text)
        return parse_failure_result()

    return normalize_result(data)
