from typing import Any, Dict, Optional

import groq
from groq import AsyncGroq

from app.constants.config import LLM_TEMPERATURE
from app.core.config import settings
from app.core.logger import get_logger
from app.core.observability import verifier_external_calls_total

logger = get_logger(__name__)


class LLMServiceError(Exception):
    """Chat completion failed; status_code is the upstream HTTP status when there was one."""

    def __init__(self, message: str, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class GroqService:
    def __init__(self) -> None:
        api_key = settings.GROQ_API_KEY
        if not api_key:
            raise LLMServiceError("Missing GROQ_API_KEY")

        # No automatic retries: a failed call degrades to a fallback payload upstream
        self.client = AsyncGroq(
            api_key=api_key,
            base_url=settings.GROQ_BASE_URL,
            timeout=settings.GROQ_TIMEOUT_SECONDS,
            max_retries=0,
        )
        self.model = settings.LLM_MODEL_NAME

    async def ainvoke(self, prompt: str, system_prompt: Optional[str] = None) -> str:
        """
        Single chat completion call. Returns the message text ("" when the model
        returned no content). Upstream failures are raised as LLMServiceError.
        """
        messages = []
        if system_prompt:
            messages.append({"role": "system", "content": system_prompt})
        messages.append({"role": "user", "content": prompt})

        kwargs: Dict[str, Any] = {
            "model": self.model,
            "messages": messages,
            "temperature": LLM_TEMPERATURE,
        }

        try:
            response = await self.client.chat.completions.create(**kwargs)
        except groq.APIStatusError as e:
            verifier_external_calls_total.labels(provider="groq", status=str(e.status_code)).inc()
            logger.error(f"[GroqService] Groq call failed with HTTP {e.status_code}: {e}")
            raise LLMServiceError(str(e), status_code=e.status_code) from e
        except groq.APIError as e:
            verifier_external_calls_total.labels(provider="groq", status="error").inc()
            logger.error(f"[GroqService] Groq call failed: {e}")
            raise LLMServiceError(str(e)) from e

        verifier_external_calls_total.labels(provider="groq", status="ok").inc()
        if not response.choices:
            return ""
        return response.choices[0].message.content or ""
