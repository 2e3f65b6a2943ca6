"""Helpers for pulling JSON out of free-form LLM replies."""

import json
import re
from typing import Any


# Regex pattern to strip markdown code fences (```json ... ```)
_FENCE_PATTERN = re.compile(r"```(?:json)?\s*\n?", re.IGNORECASE)

_decoder = json.JSONDecoder()


def strip_markdown_fences(text: str) -> str:
    """Remove markdown code fences around a JSON payload."""
    return _FENCE_PATTERN.sub("", text.strip()).strip()


def extract_first_json_object(text: str) -> dict[str, Any]:
    """Return the first JSON object embedded in ``text``.

    Raises:
        ValueError: If the text contains no decodable JSON object
    """
    start = text.find("{")
    while start != -1:
        try:
            value, _ = _decoder.raw_decode(text, start)
        except json.JSONDecodeError:
            start = text.find("{", start + 1)
            continue
        if isinstance(value, dict):
            return value
        start = text.find("{", start + 1)

    msg = "No JSON object found in reply"
    raise ValueError(msg)


def parse_json_array(text: str) -> list[Any]:
    """Parse a reply that must be a JSON array, tolerating markdown fences.

    Raises:
        ValueError: If the reply is not valid JSON or not an array
    """
    parsed = json.loads(strip_markdown_fences(text))
    if not isinstance(parsed, list):
        msg = "Reply is not a JSON array"
        raise ValueError(msg)
    return parsed
