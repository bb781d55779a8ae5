"""
Service providers for the routers.

Instances are created lazily and shared across requests; tests replace them
through FastAPI's dependency_overrides.
"""

from typing import Optional

from app.core.config import settings
from app.core.logger import get_logger
from app.services.ai.detection import AiDetectionService
from app.services.citations.reverifier import CitationReverifier
from app.services.history.history_store import HistoryStore
from app.services.scraper.scraper import PageScraper
from app.services.verification_service import VerificationService

logger = get_logger(__name__)

_history_store: Optional[HistoryStore] = None
_verification_service: Optional[VerificationService] = None


def get_history_store() -> HistoryStore:
    global _history_store
    if _history_store is None:
        _history_store = HistoryStore(settings.HISTORY_DB_PATH)
    return _history_store


def get_verification_service() -> VerificationService:
    global _verification_service
    if _verification_service is None:
        history = get_history_store() if settings.HISTORY_ENABLED else None
        _verification_service = VerificationService(history=history)
        logger.info(f"[Deps] Verification service initialized (history={'on' if history else 'off'})")
    return _verification_service


def get_citation_reverifier() -> CitationReverifier:
    return CitationReverifier()


def get_ai_detection_service() -> AiDetectionService:
    return AiDetectionService()


def get_page_scraper() -> PageScraper:
    return PageScraper()
