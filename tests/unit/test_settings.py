"""Unit tests for settings persistence and model selection."""

import pytest

from tailor.contexts.gateway import UnknownProviderError
from tailor.utils.settings import Settings, load_settings, save_settings


@pytest.mark.unit
def test_defaults():
    settings = Settings()
    assert settings.provider == "openai"
    assert settings.model == "gpt-4o"
    assert settings.api_key_for() == ""


@pytest.mark.unit
@pytest.mark.parametrize(
    "model, provider, expected",
    [
        ("gpt-4o", "anthropic", "claude-sonnet-4-20250514"),
        ("gpt-4o-mini", "openai", "gpt-4o-mini"),
        ("claude-3-opus", "gemini", "gemini-1.5-pro"),
        ("llama3.1-8b", "cerebras", "llama3.1-8b"),
        ("gpt-4o", "cohere", "command-r-plus"),
    ],
)
def test_with_provider_corrects_model(model, provider, expected):
    settings = Settings(model=model).with_provider(provider)
    assert settings.provider == provider
    assert settings.model == expected


@pytest.mark.unit
def test_with_provider_rejects_unknown():
    with pytest.raises(UnknownProviderError):
        Settings().with_provider("mistral")


@pytest.mark.unit
def test_save_and_load_round_trip(tmp_path, clean_env):
    path = tmp_path / "settings.yaml"
    settings = Settings().with_provider("anthropic").with_api_key("anthropic", " sk-ant-1 ")

    save_settings(settings, path)
    loaded = load_settings(path)

    assert loaded == settings
    assert loaded.api_key_for() == "sk-ant-1"
    assert loaded.api_key_for("openai") == ""


@pytest.mark.unit
def test_missing_file_gives_defaults(tmp_path, clean_env):
    assert load_settings(tmp_path / "absent.yaml") == Settings()


@pytest.mark.unit
def test_environment_fills_empty_keys(tmp_path, clean_env, monkeypatch):
    path = tmp_path / "settings.yaml"
    save_settings(Settings().with_api_key("openai", "from-file"), path)
    monkeypatch.setenv("OPENAI_API_KEY", "from-env")
    monkeypatch.setenv("COHERE_API_KEY", "cohere-env")

    loaded = load_settings(path)
    assert loaded.api_key_for("openai") == "from-file"
    assert loaded.api_key_for("cohere") == "cohere-env"

    assert load_settings(path, use_env=False).api_key_for("cohere") == ""
