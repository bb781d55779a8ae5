"""
Extraction of a JSON object from free-form chat completion text.

Models often wrap their answer in a ```json fenced block; the fenced body is
parsed when present, otherwise the whole text. Failures never raise: the
caller receives a Defaulted outcome and substitutes its own neutral payload.
"""

from __future__ import annotations

import json
import re
from dataclasses import dataclass
from typing import Any, Dict, Union

_FENCE_RE = re.compile(r"```(?:json)?\s*([\s\S]*?)```", re.IGNORECASE)


@dataclass(frozen=True)
class Parsed:
    value: Dict[str, Any]


@dataclass(frozen=True)
class Defaulted:
    reason: str


ParseOutcome = Union[Parsed, Defaulted]


def strip_code_fence(content: str) -> str:
    match = _FENCE_RE.search(content)
    body = match.group(1) if match else content
    return body.strip()


def parse_fenced_json(content: Any) -> ParseOutcome:
    if not isinstance(content, str) or not content.strip():
        return Defaulted("empty response")

    try:
        value = json.loads(strip_code_fence(content))
    except json.JSONDecodeError as e:
        return Defaulted(f"invalid JSON: {e.msg}")

    if not isinstance(value, dict):
        return Defaulted(f"expected JSON object, got {type(value).__name__}")
    return Parsed(value)
