import pytest

from config import PipelineConfig


def test_from_env_defaults() -> None:
    config = PipelineConfig.from_env({})

    assert config.provider == "openai"
    assert config.max_attempts == 3
    assert config.nasa_api_key == "DEMO_KEY"
    assert config.use_noaa_feed is True
    assert config.provider_configured is False


def test_from_env_reads_overrides() -> None:
    config = PipelineConfig.from_env({
        "LLM_PROVIDER": "Anthropic",
        "ANTHROPIC_API_KEY": "sk-ant",
        "CLAUDE_MODEL": "claude-test",
        "MAX_ATTEMPTS": "5",
        "REQUEST_TIMEOUT_SECONDS": "7.5",
        "USE_NOAA_FEED": "false",
        "NASA_API_KEY": "nasa-key",
    })

    assert config.provider == "anthropic"
    assert config.provider_api_key == "sk-ant"
    assert config.provider_configured is True
    assert config.claude_model == "claude-test"
    assert config.max_attempts == 5
    assert config.request_timeout_seconds == 7.5
    assert config.use_noaa_feed is False
    assert config.nasa_api_key == "nasa-key"


def test_from_env_uses_process_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("OPENAI_API_KEY", "sk-test")
    monkeypatch.setenv("OPENAI_MODEL", "gpt-test")

    config = PipelineConfig.from_env()

    assert config.openai_api_key == "sk-test"
    assert config.openai_model == "gpt-test"


def test_unknown_provider_is_rejected() -> None:
    with pytest.raises(ValueError, match="gemini"):
        PipelineConfig.from_env({"LLM_PROVIDER": "gemini"})


def test_max_attempts_must_be_positive() -> None:
    with pytest.raises(ValueError):
        PipelineConfig(max_attempts=0)
