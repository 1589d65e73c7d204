"""
Gateway Context

Responsibilities:
- Builds the optimization prompt
- Adapts requests and replies to each chat-completion provider
- Normalizes free-form replies into OptimizationResult
- Probes provider credentials

Owns: Provider wire contracts, reply normalization
Never: Modifies LaTeX or persists anything
"""

from tailor.contexts.gateway.data_structures import (
    Analysis,
    HttpRequest,
    OptimizationRequest,
    OptimizationResult,
    Provider,
    Suggestion,
    SuggestionKind,
)
from tailor.contexts.gateway.exceptions import (
    NetworkError,
    ProviderError,
    ProviderHttpError,
    ProviderResponseError,
    UnknownProviderError,
)
from tailor.contexts.gateway.optimizer import optimize, test_connection
from tailor.contexts.gateway.providers import get_adapter
from tailor.contexts.gateway.response_parser import parse_response

__all__ = [
    # Orchestrators
    "optimize",
    "test_connection",
    "parse_response",
    "get_adapter",
    # Data structures
    "Analysis",
    "HttpRequest",
    "OptimizationRequest",
    "OptimizationResult",
    "Provider",
    "Suggestion",
    "SuggestionKind",
    # Errors
    "ProviderError",
    "NetworkError",
    "ProviderHttpError",
    "ProviderResponseError",
    "UnknownProviderError",
]
