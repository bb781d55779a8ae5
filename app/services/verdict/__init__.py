"""
Verdict services: status normalization and backend/AI result merging.
"""

from app.services.verdict.merger import merge_results
from app.services.verdict.normalizer import normalize_citation_status, normalize_claim_status

__all__ = ["merge_results", "normalize_claim_status", "normalize_citation_status"]
