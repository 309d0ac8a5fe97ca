import pytest
from pydantic import ValidationError

from coach_gateway.core.config import CompletionConfig, Settings, get_settings


def test_defaults_match_provider_contract(monkeypatch):
    monkeypatch.delenv("GROQ_API_KEY", raising=False)
    settings = Settings(_env_file=None)
    assert settings.groq_api_key is None
    assert settings.has_llm_credential is False
    assert settings.llm_model == "llama-3.3-70b-versatile"
    assert settings.llm_temperature == 0.7
    assert settings.llm_max_tokens == 2048
    assert settings.llm_max_retries == 0


def test_env_overrides(monkeypatch):
    monkeypatch.setenv("LLM_TEMPERATURE", "0.2")
    monkeypatch.setenv("LLM_MAX_RETRIES", "3")
    cfg = get_settings().completion_config()
    assert isinstance(cfg, CompletionConfig)
    assert cfg.api_key == "test-key"
    assert cfg.temperature == 0.2
    assert cfg.max_retries == 3


def test_settings_are_immutable():
    settings = get_settings()
    with pytest.raises(ValidationError):
        settings.groq_api_key = "other"


def test_completion_config_is_frozen():
    cfg = CompletionConfig(api_key="k")
    with pytest.raises(AttributeError):
        cfg.api_key = "other"


def test_empty_key_counts_as_missing(monkeypatch):
    monkeypatch.setenv("GROQ_API_KEY", "")
    assert Settings(_env_file=None).completion_config().api_key is None
