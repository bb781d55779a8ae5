"""
AI-authorship detection.

Asks the chat model whether the text reads as AI-generated. Rate limiting (429)
and exhausted credits (402) are surfaced to the caller as distinct errors;
output that cannot be parsed degrades to a neutral verdict.
"""

from typing import Callable

from pydantic import ValidationError

from app.constants.config import AI_DETECTION_MAX_CHARS
from app.constants.llm_prompts import AI_DETECTION_SYSTEM_PROMPT, AI_DETECTION_USER_PROMPT
from app.core.errors import AIGatewayError
from app.core.logger import get_logger
from app.core.schemas import AiDetection
from app.services.common.json_extract import Defaulted, parse_fenced_json
from app.services.llms.factory import get_groq_service
from app.services.llms.groq_service import GroqService, LLMServiceError

logger = get_logger(__name__)

RATE_LIMIT_MESSAGE = "Rate limit exceeded. Please try again in a moment."
CREDITS_EXHAUSTED_MESSAGE = "AI credits exhausted. Please add credits to continue."
PARSE_FAILURE_MESSAGE = "Failed to parse AI analysis"


def default_detection() -> AiDetection:
    return AiDetection(
        isAiGenerated=False,
        confidence=50,
        indicators=[],
        analysis="Unable to determine AI authorship",
        error=PARSE_FAILURE_MESSAGE,
    )


def _gateway_error(e: LLMServiceError) -> AIGatewayError:
    if e.status_code == 429:
        return AIGatewayError(429, RATE_LIMIT_MESSAGE)
    if e.status_code == 402:
        return AIGatewayError(402, CREDITS_EXHAUSTED_MESSAGE)
    if e.status_code:
        return AIGatewayError(500, f"AI gateway error: {e.status_code}")
    return AIGatewayError(500, str(e) or "AI gateway error")


class AiDetectionService:
    def __init__(self, llm_factory: Callable[[], GroqService] = get_groq_service) -> None:
        self._llm_factory = llm_factory

    async def detect(self, text: str) -> AiDetection:
        logger.info("[AiDetection] Detecting AI-generated content...")
        try:
            llm = self._llm_factory()
            content = await llm.ainvoke(
                AI_DETECTION_USER_PROMPT.format(text=text[:AI_DETECTION_MAX_CHARS]),
                system_prompt=AI_DETECTION_SYSTEM_PROMPT,
            )
        except LLMServiceError as e:
            raise _gateway_error(e) from e

        if not content:
            raise AIGatewayError(500, "No response from AI")

        outcome = parse_fenced_json(content)
        if isinstance(outcome, Defaulted):
            logger.error(f"[AiDetection] Failed to parse AI response: {outcome.reason}")
            return default_detection()

        try:
            return AiDetection.model_validate(outcome.value)
        except ValidationError as e:
            logger.error(f"[AiDetection] AI response has unexpected shape: {e.error_count()} errors")
            return default_detection()
