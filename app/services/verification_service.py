"""
Verification orchestration.

verify() fans out to the fact backend and the AI-insight model at the same
time. Each call is wrapped so that its failure is captured on its own side of
the join; the merge always receives both outcomes and always produces a
well-formed VerificationResult.
"""

import asyncio
from typing import Any, Dict, Optional, Tuple

from app.core.logger import get_logger
from app.core.observability import stage_timer, verifier_fallback_total
from app.core.schemas import CompareResult, ResultSource, VerificationResult
from app.services.ai.insight import AiInsightService
from app.services.backend_client import BackendOutcome, FactBackendClient
from app.services.history.history_store import HistoryStore
from app.services.verdict.merger import merge_results

logger = get_logger(__name__)


class VerificationService:
    def __init__(
        self,
        backend: Optional[FactBackendClient] = None,
        insight: Optional[AiInsightService] = None,
        history: Optional[HistoryStore] = None,
    ) -> None:
        self.backend = backend or FactBackendClient()
        self.insight = insight or AiInsightService()
        self.history = history

    async def _call_backend(self, text: str) -> BackendOutcome:
        try:
            return await self.backend.verify(text)
        except Exception as e:
            logger.error(f"[VerificationService] Backend call raised: {e!r}")
            return None, str(e) or "Unknown backend error"

    async def _call_insight(self, text: str) -> Optional[Dict[str, Any]]:
        try:
            return await self.insight.analyze(text)
        except Exception as e:
            logger.error(f"[VerificationService] AI insight call raised: {e!r}")
            return None

    async def _run_upstreams(self, text: str) -> Tuple[BackendOutcome, Optional[Dict[str, Any]]]:
        with stage_timer("upstream_fanout"):
            backend_outcome, ai_result = await asyncio.gather(self._call_backend(text), self._call_insight(text))
        return backend_outcome, ai_result

    async def verify(self, text: str) -> VerificationResult:
        logger.info("[VerificationService] Starting hybrid verification...")
        (backend_result, backend_error), ai_result = await self._run_upstreams(text)

        with stage_timer("merge"):
            result = merge_results(backend_result, ai_result, backend_error)

        if result.source == ResultSource.ai_only_fallback:
            verifier_fallback_total.inc()
        else:
            await self._save_history(text, result)

        logger.info(
            f"[VerificationService] Final result: source={result.source.value}, "
            f"trust={result.trustScore}, claims={len(result.claims)}, citations={len(result.citations)}"
        )
        return result

    async def compare(self, text_a: str, text_b: str) -> CompareResult:
        result_a, result_b = await asyncio.gather(self.verify(text_a), self.verify(text_b))
        return CompareResult(a=result_a, b=result_b, scoreDiff=result_b.trustScore - result_a.trustScore)

    async def _save_history(self, text: str, result: VerificationResult) -> None:
        if self.history is None:
            return
        try:
            await self.history.insert(text, result)
        except Exception as e:
            logger.error(f"[VerificationService] Failed to save to history: {e}")
