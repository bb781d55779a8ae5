"""
Result merger: reconciles the fact-verification backend response with the
supplementary AI-insight response into one VerificationResult.

The backend is the only source of trust score, claims and citations. The AI
insight contributes hallucination risk, a summary and per-claim source
suggestions. When the backend failed the result is an AI-only fallback with a
zero trust score and no factual verdicts.
"""

from __future__ import annotations

from typing import Any, Dict, List, Mapping, Optional

from app.constants.config import (
    DEFAULT_RISK,
    DEFAULT_RISK_REASON,
    DEFAULT_SUMMARY,
    DEFAULT_TRUST_SCORE,
    FALLBACK_ERROR,
    FALLBACK_RISK,
    FALLBACK_RISK_REASON,
    FALLBACK_SUMMARY,
    SUGGESTION_MATCH_PREFIX,
)
from app.core.logger import get_logger
from app.core.schemas import Citation, Claim, HallucinationRisk, ResultSource, VerificationResult
from app.services.verdict.normalizer import (
    CITATION_FIELDS,
    CLAIM_FIELDS,
    TRUST_SCORE_FIELDS,
    normalize_citation_status,
    normalize_claim_status,
    pick_field,
    pick_fields,
)

logger = get_logger(__name__)


def _as_list(value: Any) -> List[Any]:
    return value if isinstance(value, list) else []


def _url_list(value: Any) -> List[str]:
    return [u for u in _as_list(value) if isinstance(u, str) and u.strip()]


def _coerce_trust_score(raw: Any) -> int:
    if isinstance(raw, bool):
        return DEFAULT_TRUST_SCORE
    try:
        score = int(round(float(raw)))
    except (TypeError, ValueError, OverflowError):
        logger.warning(f"[ResultMerger] Non-numeric trust score {raw!r}, using {DEFAULT_TRUST_SCORE}")
        return DEFAULT_TRUST_SCORE
    return max(0, min(100, score))


def _coerce_risk(raw: Any, default: str) -> HallucinationRisk:
    if isinstance(raw, str) and raw.strip():
        wanted = raw.strip().lower()
        for risk in HallucinationRisk:
            if risk.value.lower() == wanted:
                return risk
    return HallucinationRisk(default)


def _text_or(raw: Any, default: str) -> str:
    if isinstance(raw, str) and raw:
        return raw
    return default


def claims_overlap(claim_text: str, suggestion_text: str, prefix: int = SUGGESTION_MATCH_PREFIX) -> bool:
    """Bidirectional prefix containment test, case-insensitive."""
    if not claim_text or not suggestion_text:
        return False
    a = claim_text.lower()
    b = suggestion_text.lower()
    return b[:prefix] in a or a[:prefix] in b


def find_suggested_sources(claim_text: str, ai_result: Optional[Mapping[str, Any]]) -> Optional[List[str]]:
    """Sources from the first AI suggestion matching the claim, or None when nothing matches."""
    if not ai_result:
        return None
    for suggestion in _as_list(ai_result.get("sourceSuggestions")):
        if not isinstance(suggestion, Mapping):
            continue
        suggestion_text = suggestion.get("claimText")
        if isinstance(suggestion_text, str) and claims_overlap(claim_text, suggestion_text):
            sources = suggestion.get("suggestedSources")
            # a match without a source list defers to the backend sources
            return _url_list(sources) if isinstance(sources, list) else None
    return None


def build_claim(raw: Mapping[str, Any], ai_result: Optional[Mapping[str, Any]]) -> Claim:
    fields = pick_fields(raw, CLAIM_FIELDS)
    text = str(fields["text"])
    suggested = find_suggested_sources(text, ai_result)
    if suggested is None:
        suggested = _url_list(raw.get("suggestedSources"))
    return Claim(
        text=text,
        status=normalize_claim_status(fields["status"]),
        note=str(fields["note"]),
        suggestedSources=suggested,
    )


def build_citation(raw: Mapping[str, Any]) -> Citation:
    fields = pick_fields(raw, CITATION_FIELDS)
    return Citation(
        source=str(fields["source"]),
        url=str(fields["url"]),
        status=normalize_citation_status(fields["status"]),
        reason=str(fields["reason"]),
    )


def _mappings(items: Any, kind: str) -> List[Mapping[str, Any]]:
    out: List[Mapping[str, Any]] = []
    for item in _as_list(items):
        if isinstance(item, Mapping):
            out.append(item)
        else:
            logger.warning(f"[ResultMerger] Skipping non-object {kind} entry: {str(item)[:80]}")
    return out


def merge_results(
    backend_result: Optional[Mapping[str, Any]],
    ai_result: Optional[Mapping[str, Any]],
    backend_error: Optional[str] = None,
) -> VerificationResult:
    ai: Dict[str, Any] = dict(ai_result) if isinstance(ai_result, Mapping) else {}

    if not isinstance(backend_result, Mapping):
        logger.info("[ResultMerger] Backend unavailable, returning AI-only fallback")
        return VerificationResult(
            trustScore=0,
            claims=[],
            citations=[],
            hallucinationRisk=_coerce_risk(ai.get("hallucinationRisk"), FALLBACK_RISK),
            hallucinationRiskReason=_text_or(ai.get("hallucinationRiskReason"), FALLBACK_RISK_REASON),
            analysisSummary=_text_or(ai.get("analysisSummary"), FALLBACK_SUMMARY),
            source=ResultSource.ai_only_fallback,
            error=backend_error or FALLBACK_ERROR,
        )

    candidates, default = TRUST_SCORE_FIELDS
    trust_score = _coerce_trust_score(pick_field(backend_result, candidates, default))

    claims = [build_claim(raw, ai) for raw in _mappings(backend_result.get("claims"), "claim")]
    citations = [build_citation(raw) for raw in _mappings(backend_result.get("citations"), "citation")]

    logger.info(
        f"[ResultMerger] Merged backend result: trust={trust_score}, "
        f"claims={len(claims)}, citations={len(citations)}, ai_insight={'yes' if ai else 'no'}"
    )

    return VerificationResult(
        trustScore=trust_score,
        claims=claims,
        citations=citations,
        hallucinationRisk=_coerce_risk(ai.get("hallucinationRisk"), DEFAULT_RISK),
        hallucinationRiskReason=_text_or(ai.get("hallucinationRiskReason"), DEFAULT_RISK_REASON),
        analysisSummary=_text_or(ai.get("analysisSummary"), DEFAULT_SUMMARY),
        source=ResultSource.backend_ai,
    )
