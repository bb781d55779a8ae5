"""
LLM Service Factory

Lazily creates the shared Groq chat completion client.
"""

from app.core.logger import get_logger
from app.services.llms.groq_service import GroqService

logger = get_logger(__name__)

# Global service instance (lazy loaded)
_groq_service: GroqService | None = None


def get_groq_service() -> GroqService:
    """Get or create Groq service instance. Raises LLMServiceError when no API key is configured."""
    global _groq_service
    if _groq_service is None:
        _groq_service = GroqService()
        logger.info("[LLM Factory] Groq service initialized")
    return _groq_service


def reset_llm_services() -> None:
    global _groq_service
    _groq_service = None
