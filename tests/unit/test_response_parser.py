"""Unit tests for reply parsing and normalization."""

import json

import pytest

from tailor.contexts.gateway import SuggestionKind, parse_response
from tailor.contexts.gateway.response_parser import (
    PARSE_FAILURE_MESSAGE,
    coerce_match_score,
    extract_json_text,
    normalize_result,
)


@pytest.mark.unit
def test_fenced_and_bare_replies_parse_identically(sample_result_data, sample_reply_text):
    fenced = parse_response(sample_reply_text)
    bare = parse_response(json.dumps(sample_result_data))

    assert fenced == bare
    assert fenced.match_score == 72
    assert fenced.analysis.missing_skills == ["Docker", "Airflow"]
    assert [s.kind for s in fenced.suggestions] == [
        SuggestionKind.BULLET,
        SuggestionKind.SKILL,
        SuggestionKind.KEYWORD,
    ]
    assert fenced.suggestions[0].original_text == "Built a data pipeline in Python"
    assert fenced.updated_resume_text == "\\documentclass{article}..."


@pytest.mark.unit
def test_to_dict_round_trips_through_parser(sample_result_data):
    result = parse_response(json.dumps(sample_result_data))
    assert parse_response(json.dumps(result.to_dict())) == result


@pytest.mark.unit
@pytest.mark.parametrize(
    "value, expected",
    [(-5, 0), (0, 0), (55, 55), (100, 100), (140, 100), ("abc", 0), (None, 0), (72.9, 72), (True, 0)],
)
def test_match_score_clamping(value, expected):
    assert coerce_match_score(value) == expected


@pytest.mark.unit
def test_missing_match_score_defaults_to_zero():
    assert parse_response('{"suggestions": []}').match_score == 0


@pytest.mark.unit
@pytest.mark.parametrize(
    "reply",
    ["Sorry, I can't help with that.", "{not json}", "[1, 2, 3]", ""],
)
def test_unparseable_reply_recovers_to_error_result(reply):
    result = parse_response(reply)

    assert result.match_score == 0
    assert result.analysis.to_dict() == {
        "matchingSkills": [],
        "missingSkills": [],
        "keywordsFound": [],
        "keywordsMissing": [],
    }
    assert len(result.suggestions) == 1
    assert result.suggestions[0].kind is SuggestionKind.ERROR
    assert result.suggestions[0].suggested_text == PARSE_FAILURE_MESSAGE
    assert result.updated_resume_text is None
    assert result.parse_failed


@pytest.mark.unit
def test_extract_json_text_strips_surrounding_prose():
    assert extract_json_text('Result: {"a": {"b": 2}} done') == '{"a": {"b": 2}}'
    assert extract_json_text('```\n{"a": 1}\n```') == '{"a": 1}'


@pytest.mark.unit
def test_normalize_result_defaults_and_coercion():
    result = normalize_result(
        {
            "matchScore": "80%",
            "analysis": {"matchingSkills": ["Python", "Python", "", "SQL"], "missingSkills": "Go"},
            "suggestions": [
                {"type": "BULLET", "text": "New bullet"},
                {"type": "mystery", "text": "Something"},
                "not an object",
            ],
        }
    )

    assert result.match_score == 80
    assert result.analysis.matching_skills == ["Python", "SQL"]
    assert result.analysis.missing_skills == []
    assert [s.kind for s in result.suggestions] == [SuggestionKind.BULLET, SuggestionKind.GENERAL]
    assert result.suggestions[0].section == ""
    assert result.suggestions[0].original_text == ""
    assert result.updated_resume_text is None
    assert not result.parse_failed
