"""
Default values for provider requests.

Provides shared defaults used by:
- providers.py (request bodies, probe requests)
- tailor.utils.settings (model selection when the provider changes)
"""

from typing import Dict, List

# Model used when a provider is selected without a compatible model
DEFAULT_MODELS: Dict[str, str] = {
    "openai": "gpt-4o",
    "anthropic": "claude-sonnet-4-20250514",
    "gemini": "gemini-1.5-pro",
    "cerebras": "llama-3.3-70b",
    "cohere": "command-r-plus",
}

# Model name prefixes each provider accepts
MODEL_PREFIXES: Dict[str, List[str]] = {
    "openai": ["gpt"],
    "anthropic": ["claude"],
    "gemini": ["gemini"],
    "cerebras": ["llama"],
    "cohere": ["command"],
}

# Generation parameters shared by every provider
TEMPERATURE = 0.7
MAX_TOKENS = 4096

# Connectivity probe (Anthropic has no free list-models call, so a tiny completion is used)
PROBE_MODEL_ANTHROPIC = "claude-3-haiku-20240307"
PROBE_MAX_TOKENS = 10
PROBE_MESSAGE = "Hi"

ANTHROPIC_API_VERSION = "2023-06-01"


def model_matches_provider(model: str, provider: str) -> bool:
    """Check whether a model identifier carries one of the provider's known prefixes."""
    return any(model.startswith(prefix) for prefix in MODEL_PREFIXES.get(provider, []))
