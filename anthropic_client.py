"""Thin wrapper around the Anthropic Messages API."""

from __future__ import annotations

import logging
from typing import Any

import anthropic

from config import PipelineConfig
from errors import TransportError

LOGGER = logging.getLogger(__name__)


def claude_chat(messages: list[dict[str, str]], config: PipelineConfig) -> str:
    """Call the Claude API and return the assistant reply as a string.

    Args:
        messages: List of message dicts with "role" and "content" keys.
                  A "system" role message is extracted and passed via the
                  Anthropic API's dedicated system= parameter.
        config: Supplies the API key, model, token cap and timeout.
    """
    if not config.anthropic_api_key:
        raise TransportError("ANTHROPIC_API_KEY environment variable is required")

    client = anthropic.Anthropic(
        api_key=config.anthropic_api_key,
        timeout=config.request_timeout_seconds,
        max_retries=0,
    )

    system: str | None = None
    filtered: list[dict[str, Any]] = []
    for msg in messages:
        if msg["role"] == "system":
            system = msg["content"]
        else:
            filtered.append({"role": msg["role"], "content": msg["content"]})

    kwargs: dict[str, Any] = {
        "model": config.claude_model,
        "max_tokens": config.max_tokens,
        "messages": filtered,
    }
    if system:
        kwargs["system"] = system

    LOGGER.debug("Calling Claude model=%s max_tokens=%s", config.claude_model, config.max_tokens)
    try:
        response = client.messages.create(**kwargs)
    except anthropic.AnthropicError as exc:
        raise TransportError(f"Claude request failed: {exc}") from exc

    return "".join(block.text for block in response.content if getattr(block, "type", "") == "text")
