"""
Provider adapters for chat-completion HTTP APIs.

Every provider differs in endpoint, auth header, body shape and reply envelope, but
each is reduced to the same small contract:

    build_http_request(prompt, api_key, model) -> HttpRequest
    extract_reply_text(body) -> str
    extract_error_message(body) -> Optional[str]
    build_probe_request(api_key) -> HttpRequest

Adapters are stateless and never touch the network; sending is done by optimizer.py.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, Optional, Union
from urllib.parse import quote

from tailor.contexts.gateway.data_structures import HttpRequest, Provider
from tailor.contexts.gateway.defaults import (
    ANTHROPIC_API_VERSION,
    MAX_TOKENS,
    PROBE_MAX_TOKENS,
    PROBE_MESSAGE,
    PROBE_MODEL_ANTHROPIC,
    TEMPERATURE,
)
from tailor.contexts.gateway.exceptions import UnknownProviderError
from tailor.contexts.gateway.prompts import SYSTEM_PROMPT

JSON_HEADERS = {"Content-Type": "application/json"}


def _bearer(api_key: str) -> Dict[str, str]:
    return {"Authorization": f"Bearer {api_key}"}


class ProviderAdapter(ABC):
    """
    Abstract base for provider adapters.

    Subclasses must:
    - Set provider and display_name class attributes
    - Implement build_http_request(), extract_reply_text() and build_probe_request()
    - Override extract_error_message() when errors are not under error.message
    """

    provider: Provider
    display_name: str

    @abstractmethod
    def build_http_request(self, prompt: str, api_key: str, model: str) -> HttpRequest:
        """Build the optimization request for this provider."""
        pass

    @abstractmethod
    def extract_reply_text(self, body: Dict[str, Any]) -> str:
        """Pull the assistant's raw text out of the provider envelope."""
        pass

    @abstractmethod
    def build_probe_request(self, api_key: str) -> HttpRequest:
        """Build a minimal low-cost request used to check credentials."""
        pass

    def extract_error_message(self, body: Any) -> Optional[str]:
        """Return the provider's own error message from an error body, if present."""
        if not isinstance(body, dict):
            return None
        error = body.get("error")
        if isinstance(error, dict) and error.get("message"):
            return str(error["message"])
        return None

    def fallback_error_message(self, status_code: int) -> str:
        return f"{self.display_name} API error: {status_code}"


class OpenAICompatibleAdapter(ProviderAdapter):
    """
    OpenAI chat-completions wire contract.

    Used by OpenAI itself and by Cerebras, which exposes the same contract under a
    different base URL.
    """

    def __init__(
        self,
        provider: Provider,
        display_name: str,
        base_url: str,
        json_mode: bool = False,
    ):
        self.provider = provider
        self.display_name = display_name
        self.base_url = base_url.rstrip("/")
        self.json_mode = json_mode

    def build_http_request(self, prompt: str, api_key: str, model: str) -> HttpRequest:
        body = {
            "model": model,
            "messages": [
                {"role": "system", "content": SYSTEM_PROMPT},
                {"role": "user", "content": prompt},
            ],
            "temperature": TEMPERATURE,
            "max_tokens": MAX_TOKENS,
        }
        if self.json_mode:
            body["response_format"] = {"type": "json_object"}

        return HttpRequest(
            url=f"{self.base_url}/chat/completions",
            headers={**JSON_HEADERS, **_bearer(api_key)},
            body=body,
        )

    def extract_reply_text(self, body: Dict[str, Any]) -> str:
        return body["choices"][0]["message"]["content"]

    def build_probe_request(self, api_key: str) -> HttpRequest:
        return HttpRequest(url=f"{self.base_url}/models", method="GET", headers=_bearer(api_key))


class AnthropicAdapter(ProviderAdapter):
    """Anthropic Messages API."""

    provider = Provider.ANTHROPIC
    display_name = "Anthropic"
    url = "https://api.anthropic.com/v1/messages"

    def _headers(self, api_key: str) -> Dict[str, str]:
        return {
            **JSON_HEADERS,
            "x-api-key": api_key,
            "anthropic-version": ANTHROPIC_API_VERSION,
        }

    def build_http_request(self, prompt: str, api_key: str, model: str) -> HttpRequest:
        return HttpRequest(
            url=self.url,
            headers=self._headers(api_key),
            body={
                "model": model,
                "max_tokens": MAX_TOKENS,
                "messages": [{"role": "user", "content": prompt}],
            },
        )

    def extract_reply_text(self, body: Dict[str, Any]) -> str:
        return body["content"][0]["text"]

    def build_probe_request(self, api_key: str) -> HttpRequest:
        return HttpRequest(
            url=self.url,
            headers=self._headers(api_key),
            body={
                "model": PROBE_MODEL_ANTHROPIC,
                "max_tokens": PROBE_MAX_TOKENS,
                "messages": [{"role": "user", "content": PROBE_MESSAGE}],
            },
        )


class GeminiAdapter(ProviderAdapter):
    """Google Gemini generateContent API (API key travels as the `key` query parameter)."""

    provider = Provider.GEMINI
    display_name = "Gemini"
    base_url = "https://generativelanguage.googleapis.com/v1beta/models"

    def build_http_request(self, prompt: str, api_key: str, model: str) -> HttpRequest:
        # Gemini has no system role in this API version, so the instruction is prepended
        return HttpRequest(
            url=f"{self.base_url}/{model}:generateContent?key={quote(api_key, safe='')}",
            headers=dict(JSON_HEADERS),
            body={
                "contents": [{"parts": [{"text": f"{SYSTEM_PROMPT}\n\n{prompt}"}]}],
                "generationConfig": {
                    "temperature": TEMPERATURE,
                    "maxOutputTokens": MAX_TOKENS,
                    "responseMimeType": "application/json",
                },
            },
        )

    def extract_reply_text(self, body: Dict[str, Any]) -> str:
        return body["candidates"][0]["content"]["parts"][0]["text"]

    def build_probe_request(self, api_key: str) -> HttpRequest:
        return HttpRequest(url=f"{self.base_url}?key={quote(api_key, safe='')}", method="GET")


class CohereAdapter(ProviderAdapter):
    """Cohere v1 chat API."""

    provider = Provider.COHERE
    display_name = "Cohere"
    base_url = "https://api.cohere.com/v1"

    def build_http_request(self, prompt: str, api_key: str, model: str) -> HttpRequest:
        return HttpRequest(
            url=f"{self.base_url}/chat",
            headers={**JSON_HEADERS, **_bearer(api_key)},
            body={
                "model": model,
                "message": prompt,
                "preamble": SYSTEM_PROMPT,
                "temperature": TEMPERATURE,
                "max_tokens": MAX_TOKENS,
            },
        )

    def extract_reply_text(self, body: Dict[str, Any]) -> str:
        return body["text"]

    def extract_error_message(self, body: Any) -> Optional[str]:
        # Cohere reports errors as a top-level message
        if isinstance(body, dict) and body.get("message"):
            return str(body["message"])
        return None

    def build_probe_request(self, api_key: str) -> HttpRequest:
        return HttpRequest(url=f"{self.base_url}/models", method="GET", headers=_bearer(api_key))


# --- Adapter Registry ---

ADAPTERS: Dict[Provider, ProviderAdapter] = {
    Provider.OPENAI: OpenAICompatibleAdapter(
        Provider.OPENAI, "OpenAI", "https://api.openai.com/v1", json_mode=True
    ),
    Provider.ANTHROPIC: AnthropicAdapter(),
    Provider.GEMINI: GeminiAdapter(),
    Provider.CEREBRAS: OpenAICompatibleAdapter(
        Provider.CEREBRAS, "Cerebras", "https://api.cerebras.ai/v1"
    ),
    Provider.COHERE: CohereAdapter(),
}


def resolve_provider(provider: Union[Provider, str]) -> Provider:
    """
    Convert a provider identifier to a Provider member.

    Raises:
        UnknownProviderError: If the identifier is not supported
    """
    if isinstance(provider, Provider):
        return provider
    try:
        return Provider(str(provider).lower().strip())
    except ValueError:
        raise UnknownProviderError(str(provider), Provider.values()) from None


def get_adapter(provider: Union[Provider, str]) -> ProviderAdapter:
    """
    Get the adapter for a provider.

    Args:
        provider: Provider member or identifier ("openai", "anthropic", ...)

    Returns:
        ProviderAdapter instance

    Raises:
        UnknownProviderError: If the provider is not supported
    """
    return ADAPTERS[resolve_provider(provider)]
