"""
Resume optimization through a chat-completion provider.

Orchestrates one provider round trip per request:
1. Build the prompt from the request
2. Let the provider adapter shape the HTTP request
3. Send it (exactly once: no retries, no core-imposed timeout)
4. Pull the reply text out of the envelope and normalize it

Network and HTTP failures propagate as ProviderError subclasses. A reply that is not
valid JSON is recovered by the response parser and returned as a normal result.
"""

import re
import time
from typing import Any, Optional, Union

import httpx

from tailor.contexts.gateway.data_structures import (
    HttpRequest,
    OptimizationRequest,
    OptimizationResult,
    Provider,
)
from tailor.contexts.gateway.exceptions import (
    NetworkError,
    ProviderHttpError,
    ProviderResponseError,
)
from tailor.contexts.gateway.logger import (
    _log_debug,
    _log_error,
    _log_warning,
    log_optimization_result,
    log_optimization_start,
)
from tailor.contexts.gateway.prompts import build_resume_prompt
from tailor.contexts.gateway.providers import ProviderAdapter, get_adapter
from tailor.contexts.gateway.response_parser import parse_response

_KEY_QUERY = re.compile(r"([?&]key=)[^&]*")


def redact_url(url: str) -> str:
    """Hide API keys carried in query strings before a URL is logged."""
    return _KEY_QUERY.sub(r"\1***", url)


def _decode_json(response: httpx.Response) -> Any:
    try:
        return response.json()
    except ValueError:
        return None


async def send_request(
    adapter: ProviderAdapter,
    http_request: HttpRequest,
    client: httpx.AsyncClient,
) -> Any:
    """
    Send a provider request and return the decoded JSON body.

    Args:
        adapter: Adapter that built the request (used for error messages)
        http_request: Request to send
        client: HTTP client to send it with

    Returns:
        Decoded JSON body of a 2xx response

    Raises:
        NetworkError: If the request could not be built or never reached the provider
        ProviderHttpError: If the provider answered with a non-2xx status
        ProviderResponseError: If a 2xx body is not JSON
    """
    provider = adapter.provider.value
    _log_debug(f"{http_request.method} {redact_url(http_request.url)}")

    try:
        response = await client.request(
            http_request.method,
            http_request.url,
            headers=http_request.headers,
            json=http_request.body,
        )
    except (httpx.InvalidURL, UnicodeEncodeError) as e:
        # Raised while building the request, e.g. a pasted key with a non-ASCII quote
        _log_error(f"{adapter.display_name} request could not be built: {type(e).__name__}")
        raise NetworkError(
            provider,
            "Request could not be sent: the API key or URL contains unsupported characters",
            original_error=e,
        ) from e
    except httpx.HTTPError as e:
        _log_error(f"{adapter.display_name} request failed: {e}")
        raise NetworkError(provider, str(e) or type(e).__name__, original_error=e) from e

    if not response.is_success:
        message = adapter.extract_error_message(_decode_json(response))
        message = message or adapter.fallback_error_message(response.status_code)
        _log_error(f"{adapter.display_name} returned {response.status_code}: {message}")
        raise ProviderHttpError(provider, message, http_status=response.status_code)

    body = _decode_json(response)
    if body is None:
        raise ProviderResponseError(provider, f"{adapter.display_name} returned a non-JSON body")
    return body


def extract_reply(adapter: ProviderAdapter, body: Any) -> str:
    """
    Pull reply text out of a provider envelope.

    Raises:
        ProviderResponseError: If the envelope does not hold reply text where expected
    """
    try:
        text = adapter.extract_reply_text(body)
    except (KeyError, IndexError, TypeError) as e:
        raise ProviderResponseError(
            adapter.provider.value,
            f"{adapter.display_name} response did not contain a reply ({type(e).__name__}: {e})",
        ) from e

    if not isinstance(text, str):
        raise ProviderResponseError(
            adapter.provider.value, f"{adapter.display_name} reply was not text"
        )
    return text


async def optimize(
    request: OptimizationRequest,
    client: Optional[httpx.AsyncClient] = None,
) -> OptimizationResult:
    """
    Run one optimization round trip.

    Args:
        request: Resume, job description and provider selection
        client: HTTP client to use (default: a new client without timeout)

    Returns:
        Normalized OptimizationResult (the ERROR form when the reply was unparseable)

    Raises:
        ProviderError: On network failure, non-2xx status or an unusable envelope
        UnknownProviderError: If request.provider is not supported

    Example:
        >>> request = OptimizationRequest(
        ...     resume_content=latex, job_description=job, is_latex_format=True,
        ...     provider=Provider.OPENAI, api_key=key, model="gpt-4o",
        ... )
        >>> result = asyncio.run(optimize(request))
        >>> result.match_score
        72
    """
    adapter = get_adapter(request.provider)
    prompt = build_resume_prompt(
        request.resume_content, request.job_description, request.is_latex_format
    )
    http_request = adapter.build_http_request(prompt, request.api_key, request.model)

    log_optimization_start(
        adapter.provider.value, request.model, request.is_latex_format, len(prompt)
    )
    start_time = time.time()

    if client is None:
        async with httpx.AsyncClient(timeout=None) as owned_client:
            body = await send_request(adapter, http_request, owned_client)
    else:
        body = await send_request(adapter, http_request, client)

    result = parse_response(extract_reply(adapter, body))

    log_optimization_result(adapter.provider.value, result, time.time() - start_time)
    return result


async def test_connection(
    provider: Union[Provider, str],
    api_key: str,
    client: Optional[httpx.AsyncClient] = None,
) -> bool:
    """
    Check that an API key is accepted by a provider.

    Issues the provider's probe request (list models, or a 10-token completion).

    Returns:
        True if the probe got a 2xx response; False on any network, HTTP or
        provider-selection failure (never raises)
    """
    try:
        adapter = get_adapter(provider)
    except ValueError as e:
        _log_warning(str(e))
        return False

    probe = adapter.build_probe_request(api_key)

    try:
        if client is None:
            async with httpx.AsyncClient(timeout=None) as owned_client:
                await send_request(adapter, probe, owned_client)
        else:
            await send_request(adapter, probe, client)
    except (NetworkError, ProviderHttpError) as e:
        _log_warning(f"Connection test failed for {adapter.display_name}: {e.message}")
        return False
    except ProviderResponseError:
        # Probe succeeded at the HTTP level; body shape is irrelevant here
        pass

    _log_debug(f"Connection test passed for {adapter.display_name}")
    return True

