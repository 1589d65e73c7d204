"""Unit tests for provider adapters (request shape, key placement, reply extraction)."""

import json
from urllib.parse import parse_qs, urlsplit

import pytest

from tailor.contexts.gateway import Provider, UnknownProviderError, get_adapter
from tailor.contexts.gateway.defaults import (
    ANTHROPIC_API_VERSION,
    MAX_TOKENS,
    PROBE_MAX_TOKENS,
    PROBE_MODEL_ANTHROPIC,
    TEMPERATURE,
)
from tailor.contexts.gateway.prompts import SYSTEM_PROMPT

KEY = "test-key/123"


@pytest.mark.unit
def test_openai_request_uses_bearer_and_json_mode():
    request = get_adapter("openai").build_http_request("PROMPT", KEY, "gpt-4o")

    assert request.url == "https://api.openai.com/v1/chat/completions"
    assert request.method == "POST"
    assert request.headers["Authorization"] == f"Bearer {KEY}"
    assert request.body["model"] == "gpt-4o"
    assert request.body["messages"] == [
        {"role": "system", "content": SYSTEM_PROMPT},
        {"role": "user", "content": "PROMPT"},
    ]
    assert request.body["temperature"] == TEMPERATURE
    assert request.body["max_tokens"] == MAX_TOKENS
    assert request.body["response_format"] == {"type": "json_object"}


@pytest.mark.unit
def test_cerebras_shares_openai_contract_without_json_mode():
    request = get_adapter(Provider.CEREBRAS).build_http_request("PROMPT", KEY, "llama-3.3-70b")

    assert request.url == "https://api.cerebras.ai/v1/chat/completions"
    assert request.headers["Authorization"] == f"Bearer {KEY}"
    assert "response_format" not in request.body


@pytest.mark.unit
def test_anthropic_request_uses_api_key_header():
    request = get_adapter("anthropic").build_http_request("PROMPT", KEY, "claude-sonnet-4-20250514")

    assert request.url == "https://api.anthropic.com/v1/messages"
    assert request.headers["x-api-key"] == KEY
    assert request.headers["anthropic-version"] == ANTHROPIC_API_VERSION
    assert "Authorization" not in request.headers
    assert request.body["messages"] == [{"role": "user", "content": "PROMPT"}]
    assert request.body["max_tokens"] == MAX_TOKENS


@pytest.mark.unit
def test_gemini_request_carries_key_in_query_and_prepends_system_prompt():
    request = get_adapter("gemini").build_http_request("PROMPT", KEY, "gemini-1.5-pro")

    assert request.url.startswith(
        "https://generativelanguage.googleapis.com/v1beta/models/gemini-1.5-pro:generateContent?key="
    )
    assert request.url.endswith("key=test-key%2F123")
    assert "Authorization" not in request.headers
    text = request.body["contents"][0]["parts"][0]["text"]
    assert text.startswith(SYSTEM_PROMPT)
    assert text.endswith("PROMPT")
    assert request.body["generationConfig"]["maxOutputTokens"] == MAX_TOKENS


@pytest.mark.unit
def test_cohere_request_uses_preamble():
    request = get_adapter("cohere").build_http_request("PROMPT", KEY, "command-r-plus")

    assert request.url == "https://api.cohere.com/v1/chat"
    assert request.headers["Authorization"] == f"Bearer {KEY}"
    assert request.body["message"] == "PROMPT"
    assert request.body["preamble"] == SYSTEM_PROMPT


@pytest.mark.unit
@pytest.mark.parametrize(
    "provider, body",
    [
        ("openai", {"choices": [{"message": {"content": "REPLY"}}]}),
        ("cerebras", {"choices": [{"message": {"content": "REPLY"}}]}),
        ("anthropic", {"content": [{"type": "text", "text": "REPLY"}]}),
        ("gemini", {"candidates": [{"content": {"parts": [{"text": "REPLY"}]}}]}),
        ("cohere", {"text": "REPLY"}),
    ],
)
def test_extract_reply_text(provider, body):
    assert get_adapter(provider).extract_reply_text(body) == "REPLY"


@pytest.mark.unit
def test_error_messages_follow_provider_envelope():
    openai = get_adapter("openai")
    cohere = get_adapter("cohere")

    assert openai.extract_error_message({"error": {"message": "Invalid key"}}) == "Invalid key"
    assert openai.extract_error_message({"message": "ignored"}) is None
    assert cohere.extract_error_message({"message": "invalid api token"}) == "invalid api token"
    assert openai.fallback_error_message(500) == "OpenAI API error: 500"


@pytest.mark.unit
def test_probe_requests():
    openai_probe = get_adapter("openai").build_probe_request(KEY)
    assert openai_probe.method == "GET"
    assert openai_probe.url == "https://api.openai.com/v1/models"

    anthropic_probe = get_adapter("anthropic").build_probe_request(KEY)
    assert anthropic_probe.method == "POST"
    assert anthropic_probe.body["model"] == PROBE_MODEL_ANTHROPIC
    assert anthropic_probe.body["max_tokens"] == PROBE_MAX_TOKENS

    gemini_probe = get_adapter("gemini").build_probe_request(KEY)
    assert gemini_probe.url.endswith("/models?key=test-key%2F123")


@pytest.mark.unit
def test_unknown_provider_rejected():
    with pytest.raises(UnknownProviderError, match="Unknown provider: mistral"):
        get_adapter("mistral")

    # Identifiers are case-insensitive
    assert get_adapter(" OpenAI ").provider is Provider.OPENAI


def key_locations(request, key):
    """Count occurrences of the key in the URL, header values and body."""
    return {
        "url": request.url.count(key),
        "headers": sum(value.count(key) for value in request.headers.values()),
        "body": json.dumps(request.body).count(key) if request.body is not None else 0,
    }


@pytest.mark.unit
@pytest.mark.parametrize("build", ["optimization", "probe"])
@pytest.mark.parametrize(
    "provider, header, expected_value",
    [
        ("openai", "Authorization", "Bearer {key}"),
        ("cerebras", "Authorization", "Bearer {key}"),
        ("anthropic", "x-api-key", "{key}"),
        ("cohere", "Authorization", "Bearer {key}"),
        ("gemini", None, None),
    ],
)
def test_api_key_appears_only_in_documented_location(provider, header, expected_value, build):
    key = "KEY-abc123XYZ"
    adapter = get_adapter(provider)
    if build == "optimization":
        request = adapter.build_http_request("PROMPT", key, "some-model")
    else:
        request = adapter.build_probe_request(key)

    locations = key_locations(request, key)

    if header is None:
        assert locations == {"url": 1, "headers": 0, "body": 0}
        assert parse_qs(urlsplit(request.url).query) == {"key": [key]}
        assert "Authorization" not in request.headers
        assert "x-api-key" not in request.headers
    else:
        assert locations == {"url": 0, "headers": 1, "body": 0}
        assert request.headers[header] == expected_value.format(key=key)
