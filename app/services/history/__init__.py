"""Verification history persistence."""

from app.services.history.history_store import HistoryStore

__all__ = ["HistoryStore"]
