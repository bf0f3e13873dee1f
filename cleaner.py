"""Turn noisy text-model output into a best-effort JSON string and parse it."""

from __future__ import annotations

import json
import re
from json import JSONDecodeError
from typing import Any

from errors import ParseError

_BOM = "\ufeff"
# Printable ASCII plus tab, newline and carriage return.
_DISALLOWED_CHARS = re.compile(r"[^\x20-\x7e\t\n\r]")
_FENCE = re.compile(r"`{3,}[ \t]*(?:json\b)?", re.IGNORECASE)
_LEADING_LABEL = re.compile(r"^json\b[ \t]*:?(?=\s*[\[{])", re.IGNORECASE)
_WHITESPACE_RUN = re.compile(r"\s+")


def clean(raw: str) -> str:
    """Strip BOM, control characters, code fences and redundant whitespace.

    Applied until nothing changes, so the result is a fixed point and
    `clean(clean(x)) == clean(x)` holds for every input.
    """
    text = raw
    while True:
        cleaned = _clean_once(text)
        if cleaned == text:
            return cleaned
        text = cleaned


def _clean_once(text: str) -> str:
    text = text.lstrip(_BOM)
    text = _DISALLOWED_CHARS.sub("", text)
    text = text.strip()
    text = _FENCE.sub(" ", text).strip()
    text = _LEADING_LABEL.sub("", text, count=1).strip()
    return _WHITESPACE_RUN.sub(" ", text)


def parse_json(text: str) -> Any:
    """Parse cleaned text, falling back to the first embedded JSON value."""
    try:
        return json.loads(text)
    except JSONDecodeError:
        return _extract_first_json_value(text)


def _extract_first_json_value(content: str) -> Any:
    """Extract the first decodable JSON object or array from an arbitrary string."""
    decoder = json.JSONDecoder()
    for index, char in enumerate(content):
        if char not in "{[":
            continue
        try:
            candidate, _ = decoder.raw_decode(content[index:])
        except JSONDecodeError:
            continue
        if isinstance(candidate, (dict, list)):
            return candidate
    raise ParseError("Could not extract valid JSON from model output")
