"""OpenAI GPT-based text client for astronomy content generation."""

from __future__ import annotations

import logging

from openai import OpenAI, OpenAIError

from config import PipelineConfig
from errors import TransportError
from prompts import SYSTEM_PROMPT

LOGGER = logging.getLogger(__name__)


def generate_text(prompt: str, config: PipelineConfig) -> str:
    """Send one prompt to OpenAI and return the raw reply text.

    The SDK's own retries are disabled; the retry coordinator owns the
    attempt budget. Any SDK failure is reported as a TransportError.
    """
    if not config.openai_api_key:
        raise TransportError("OPENAI_API_KEY environment variable is required")

    client = OpenAI(
        api_key=config.openai_api_key,
        timeout=config.request_timeout_seconds,
        max_retries=0,
    )

    LOGGER.debug("Calling OpenAI model=%s", config.openai_model)
    try:
        response = client.chat.completions.create(
            model=config.openai_model,
            temperature=config.temperature,
            max_tokens=config.max_tokens,
            response_format={"type": "json_object"},
            messages=[
                {"role": "system", "content": SYSTEM_PROMPT},
                {"role": "user", "content": prompt},
            ],
        )
    except OpenAIError as exc:
        raise TransportError(f"OpenAI request failed: {exc}") from exc

    try:
        content = response.choices[0].message.content
    except (AttributeError, IndexError) as exc:
        raise TransportError(f"Unexpected OpenAI response shape: {response}") from exc

    return content or ""
