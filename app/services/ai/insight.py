from typing import Any, Callable, Dict, Optional

from app.constants.llm_prompts import AI_INSIGHT_SYSTEM_PROMPT, AI_INSIGHT_USER_PROMPT
from app.core.logger import get_logger
from app.services.common.json_extract import Defaulted, parse_fenced_json
from app.services.llms.factory import get_groq_service
from app.services.llms.groq_service import GroqService, LLMServiceError

logger = get_logger(__name__)


class AiInsightService:
    """
    Supplementary AI analysis: hallucination risk, per-claim source suggestions
    and a short reliability summary. Every failure degrades to None.
    """

    def __init__(self, llm_factory: Callable[[], GroqService] = get_groq_service) -> None:
        self._llm_factory = llm_factory

    async def analyze(self, text: str) -> Optional[Dict[str, Any]]:
        try:
            llm = self._llm_factory()
            content = await llm.ainvoke(AI_INSIGHT_USER_PROMPT.format(text=text), system_prompt=AI_INSIGHT_SYSTEM_PROMPT)
        except LLMServiceError as e:
            logger.error(f"[AiInsight] AI insight call failed: {e}")
            return None

        if not content:
            logger.warning("[AiInsight] Empty AI insight response")
            return None

        logger.info(f"[AiInsight] AI response received: {content[:300]}")
        outcome = parse_fenced_json(content)
        if isinstance(outcome, Defaulted):
            logger.error(f"[AiInsight] Failed to parse AI response: {outcome.reason}")
            return None
        return outcome.value
