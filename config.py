"""Explicit per-call configuration for providers, feeds and retry bounds."""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass

SUPPORTED_PROVIDERS: frozenset[str] = frozenset({"openai", "anthropic"})

_DEFAULT_OPENAI_MODEL = "gpt-4o-mini"
_DEFAULT_CLAUDE_MODEL = "claude-3-5-haiku-latest"
_TRUE_VALUES = {"1", "true", "yes", "on"}


@dataclass(frozen=True, slots=True)
class PipelineConfig:
    """Everything a pipeline invocation needs; no process-wide client state."""

    provider: str = "openai"
    openai_api_key: str | None = None
    openai_model: str = _DEFAULT_OPENAI_MODEL
    temperature: float = 0.1
    anthropic_api_key: str | None = None
    claude_model: str = _DEFAULT_CLAUDE_MODEL
    max_tokens: int = 2048
    nasa_api_key: str = "DEMO_KEY"
    request_timeout_seconds: float = 30.0
    max_attempts: int = 3
    use_noaa_feed: bool = True

    def __post_init__(self) -> None:
        if self.provider not in SUPPORTED_PROVIDERS:
            raise ValueError(
                f"Unsupported LLM provider {self.provider!r}; expected one of {sorted(SUPPORTED_PROVIDERS)}"
            )
        if self.max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> PipelineConfig:
        """Build a config from environment variables, falling back to defaults."""
        env = os.environ if environ is None else environ
        return cls(
            provider=env.get("LLM_PROVIDER", "openai").strip().lower(),
            openai_api_key=env.get("OPENAI_API_KEY") or None,
            openai_model=env.get("OPENAI_MODEL", _DEFAULT_OPENAI_MODEL),
            temperature=float(env.get("OPENAI_TEMPERATURE", "0.1")),
            anthropic_api_key=env.get("ANTHROPIC_API_KEY") or None,
            claude_model=env.get("CLAUDE_MODEL", _DEFAULT_CLAUDE_MODEL),
            max_tokens=int(env.get("LLM_MAX_TOKENS", "2048")),
            nasa_api_key=env.get("NASA_API_KEY") or "DEMO_KEY",
            request_timeout_seconds=float(env.get("REQUEST_TIMEOUT_SECONDS", "30")),
            max_attempts=int(env.get("MAX_ATTEMPTS", "3")),
            use_noaa_feed=env.get("USE_NOAA_FEED", "true").strip().lower() in _TRUE_VALUES,
        )

    @property
    def provider_api_key(self) -> str | None:
        if self.provider == "anthropic":
            return self.anthropic_api_key
        return self.openai_api_key

    @property
    def provider_configured(self) -> bool:
        return bool(self.provider_api_key)
