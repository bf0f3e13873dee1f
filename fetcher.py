"""Raw fetcher: exactly one network call per invocation, no retries."""

from __future__ import annotations

import logging
from typing import Callable

import requests

from config import PipelineConfig
from errors import TransportError
from models import RequestDescriptor
from prompts import SYSTEM_PROMPT

LOGGER = logging.getLogger(__name__)

Fetcher = Callable[[RequestDescriptor, PipelineConfig], str]


def fetch(descriptor: RequestDescriptor, config: PipelineConfig) -> str:
    """Return the raw payload for one request or raise TransportError."""
    if descriptor.is_feed:
        return _fetch_feed(descriptor, config)
    return _generate(descriptor.prompt, config)


def _fetch_feed(descriptor: RequestDescriptor, config: PipelineConfig) -> str:
    try:
        response = requests.get(
            descriptor.feed_url,
            params=descriptor.params or None,
            timeout=config.request_timeout_seconds,
        )
        response.raise_for_status()
    except requests.RequestException as exc:
        raise TransportError(f"Feed request to {descriptor.feed_url} failed: {exc}") from exc

    LOGGER.debug("Feed %s returned %s bytes", descriptor.feed_url, len(response.content))
    return response.text


def _generate(prompt: str, config: PipelineConfig) -> str:
    if config.provider == "anthropic":
        from anthropic_client import claude_chat  # noqa: PLC0415 - lazy import

        messages = [
            {"role": "system", "content": SYSTEM_PROMPT},
            {"role": "user", "content": prompt},
        ]
        return claude_chat(messages, config)

    from llm_client import generate_text  # noqa: PLC0415 - lazy import

    return generate_text(prompt, config)
