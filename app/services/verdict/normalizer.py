from __future__ import annotations

from typing import Any, Dict, Mapping, Sequence, Tuple

from app.constants.config import (
    CITATION_FAKE_KEYWORDS,
    CITATION_VALID_KEYWORDS,
    CLAIM_FALSE_KEYWORDS,
    CLAIM_VERIFIED_KEYWORDS,
    DEFAULT_TRUST_SCORE,
    UNKNOWN_URL,
)
from app.core.schemas import CitationStatus, ClaimStatus

# Logical field -> (candidate upstream keys in priority order, default)
CLAIM_FIELDS: Dict[str, Tuple[Tuple[str, ...], Any]] = {
    "text": (("text", "claim"), ""),
    "status": (("status", "verdict", "verification_status"), ""),
    "note": (("note", "explanation", "reason"), ""),
}

CITATION_FIELDS: Dict[str, Tuple[Tuple[str, ...], Any]] = {
    "source": (("source", "name"), ""),
    "url": (("url",), UNKNOWN_URL),
    "status": (("status", "validity"), ""),
    "reason": (("reason", "explanation"), ""),
}

TRUST_SCORE_FIELDS: Tuple[Tuple[str, ...], Any] = (("trustScore", "trust_score"), DEFAULT_TRUST_SCORE)


def _is_empty(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def pick_field(raw: Mapping[str, Any], candidates: Sequence[str], default: Any = None) -> Any:
    """Return the first candidate key that is present and non-empty."""
    for key in candidates:
        value = raw.get(key)
        if not _is_empty(value):
            return value
    return default


def pick_fields(raw: Mapping[str, Any], table: Mapping[str, Tuple[Tuple[str, ...], Any]]) -> Dict[str, Any]:
    return {name: pick_field(raw, candidates, default) for name, (candidates, default) in table.items()}


def _lowered(raw: Any) -> str:
    if raw is None:
        return ""
    return str(raw).strip().lower()


def normalize_claim_status(raw: Any) -> ClaimStatus:
    text = _lowered(raw)
    if not text:
        return ClaimStatus.questionable
    if any(word in text for word in CLAIM_VERIFIED_KEYWORDS):
        return ClaimStatus.verified
    if any(word in text for word in CLAIM_FALSE_KEYWORDS):
        return ClaimStatus.false
    return ClaimStatus.questionable


def normalize_citation_status(raw: Any) -> CitationStatus:
    text = _lowered(raw)
    if not text:
        return CitationStatus.broken
    if any(word in text for word in CITATION_VALID_KEYWORDS):
        return CitationStatus.valid
    if any(word in text for word in CITATION_FAKE_KEYWORDS):
        return CitationStatus.fake
    return CitationStatus.broken
