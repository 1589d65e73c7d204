"""Custom exceptions for the gateway context with provider references."""

from typing import Optional


class ProviderError(Exception):
    """
    Exception raised when a provider call cannot produce a reply.

    Attributes:
        provider: Provider identifier (e.g., 'openai')
        message: User-facing error description
        http_status: HTTP status code, when the provider answered at all
    """

    def __init__(self, provider: str, message: str, http_status: Optional[int] = None):
        self.provider = provider
        self.message = message
        self.http_status = http_status

        parts = [message]
        if http_status is not None:
            parts.append(f"(provider: {provider}, status: {http_status})")
        else:
            parts.append(f"(provider: {provider})")

        super().__init__(" ".join(parts))


class NetworkError(ProviderError):
    """The request never reached the provider (DNS, connection, TLS, ...)."""

    def __init__(self, provider: str, message: str, original_error: Optional[Exception] = None):
        self.original_error = original_error
        super().__init__(provider, message)


class ProviderHttpError(ProviderError):
    """The provider answered with a non-2xx status."""

    def __init__(self, provider: str, message: str, http_status: int):
        super().__init__(provider, message, http_status=http_status)


class ProviderResponseError(ProviderError):
    """
    The provider answered 2xx but the envelope holds no reply text.

    Raised when the body is not JSON or the reply location is missing. A reply
    whose text is not valid JSON is NOT an error: it is recovered by the parser.
    """

    pass


class UnknownProviderError(ValueError):
    """Exception raised when a provider identifier is not supported."""

    def __init__(self, provider: str, known: Optional[list] = None):
        self.provider = provider
        message = f"Unknown provider: {provider}"
        if known:
            message += f". Use one of: {', '.join(known)}"
        super().__init__(message)
