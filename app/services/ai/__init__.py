from .detection import AiDetectionService
from .insight import AiInsightService

__all__ = ["AiDetectionService", "AiInsightService"]
