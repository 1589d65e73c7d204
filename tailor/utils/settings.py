"""
User settings: selected provider, per-provider API keys and model.

Settings are stored as YAML (settings.yaml under TAILOR_HOME) and loaded with
OmegaConf. API keys left empty in the file are filled from the environment
(OPENAI_API_KEY, ANTHROPIC_API_KEY, ...), which python-dotenv loads from .env.

Usage:
    from tailor.utils.settings import load_settings, save_settings

    settings = load_settings()
    settings = settings.with_provider("anthropic")
    save_settings(settings)
"""

import os
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any, Dict, Optional, Union

from dotenv import load_dotenv
from omegaconf import OmegaConf

from tailor.contexts.gateway.data_structures import Provider
from tailor.contexts.gateway.defaults import DEFAULT_MODELS, model_matches_provider
from tailor.contexts.gateway.providers import resolve_provider

load_dotenv()
TAILOR_HOME = Path(os.getenv("TAILOR_HOME", str(Path.home() / ".resume-tailor"))).expanduser()
SETTINGS_PATH = TAILOR_HOME / "settings.yaml"

API_KEY_ENV_VARS = {
    Provider.OPENAI.value: "OPENAI_API_KEY",
    Provider.ANTHROPIC.value: "ANTHROPIC_API_KEY",
    Provider.GEMINI.value: "GEMINI_API_KEY",
    Provider.CEREBRAS.value: "CEREBRAS_API_KEY",
    Provider.COHERE.value: "COHERE_API_KEY",
}


@dataclass(frozen=True)
class Settings:
    """
    Provider selection and credentials.

    Attributes:
        provider: Selected provider identifier
        api_keys: Provider identifier -> API key (missing or empty when not configured)
        model: Selected model identifier
    """

    provider: str = Provider.OPENAI.value
    api_keys: Dict[str, str] = field(default_factory=dict)
    model: str = DEFAULT_MODELS[Provider.OPENAI.value]

    def api_key_for(self, provider: Optional[str] = None) -> str:
        """API key for a provider (default: the selected one), or "" if none."""
        key = resolve_provider(provider or self.provider).value
        return self.api_keys.get(key, "") or ""

    def with_provider(self, provider: Union[Provider, str]) -> "Settings":
        """
        Select a provider, keeping the model only if it belongs to that provider.

        Example:
            >>> Settings(model="gpt-4o").with_provider("anthropic").model
            'claude-sonnet-4-20250514'
            >>> Settings(model="gpt-4o-mini").with_provider("openai").model
            'gpt-4o-mini'
        """
        key = resolve_provider(provider).value
        model = self.model if model_matches_provider(self.model, key) else DEFAULT_MODELS[key]
        return replace(self, provider=key, model=model)

    def with_api_key(self, provider: Union[Provider, str], api_key: str) -> "Settings":
        key = resolve_provider(provider).value
        return replace(self, api_keys={**self.api_keys, key: api_key.strip()})

    def with_model(self, model: str) -> "Settings":
        return replace(self, model=model.strip())

    def to_dict(self) -> Dict[str, Any]:
        return {"provider": self.provider, "api_keys": dict(self.api_keys), "model": self.model}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Settings":
        defaults = cls()
        provider = resolve_provider(data.get("provider") or defaults.provider).value
        api_keys = {
            resolve_provider(name).value: str(value)
            for name, value in (data.get("api_keys") or {}).items()
            if value
        }
        return cls(provider=provider, api_keys=api_keys, model=data.get("model") or defaults.model)


def _fill_keys_from_env(settings: Settings) -> Settings:
    api_keys = dict(settings.api_keys)
    for provider, env_var in API_KEY_ENV_VARS.items():
        if not api_keys.get(provider) and os.getenv(env_var):
            api_keys[provider] = os.getenv(env_var)
    return replace(settings, api_keys=api_keys)


def load_settings(path: Path = None, use_env: bool = True) -> Settings:
    """
    Load settings from YAML.

    Args:
        path: Settings file (default: SETTINGS_PATH)
        use_env: Fill empty API keys from environment variables (default: True)

    Returns:
        Settings (defaults when the file does not exist)

    Raises:
        UnknownProviderError: If the file names an unsupported provider
    """
    if path is None:
        path = SETTINGS_PATH

    if path.exists():
        data = OmegaConf.to_container(OmegaConf.load(path), resolve=True) or {}
        settings = Settings.from_dict(data)
    else:
        settings = Settings()

    return _fill_keys_from_env(settings) if use_env else settings


def save_settings(settings: Settings, path: Path = None) -> Path:
    """
    Save settings to YAML.

    Args:
        settings: Settings to store
        path: Settings file (default: SETTINGS_PATH)

    Returns:
        Path written
    """
    if path is None:
        path = SETTINGS_PATH

    path.parent.mkdir(parents=True, exist_ok=True)
    OmegaConf.save(OmegaConf.create(settings.to_dict()), path)
    return path
