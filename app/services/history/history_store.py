"""
SQLite persistence layer for verification history.
Append-only: every verification inserts a new record, records are never updated.
"""

import json
import sqlite3
import uuid
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, List, Optional

from app.constants.config import HISTORY_MAX_PAGE_SIZE, HISTORY_PREVIEW_CHARS
from app.core.logger import get_logger
from app.core.schemas import HistoryRecord, VerificationResult

logger = get_logger(__name__)


def make_preview(text: str, limit: int = HISTORY_PREVIEW_CHARS) -> str:
    return text[:limit] + ("..." if len(text) > limit else "")


class HistoryStore:
    """SQLite-based verification history."""

    def __init__(self, db_path: str | Path):
        self.db_path = Path(db_path)
        self._ensure_db()

    def _ensure_db(self) -> None:
        """Create database and schema if not exists."""
        try:
            with sqlite3.connect(self.db_path) as conn:
                conn.execute(
                    """
                    CREATE TABLE IF NOT EXISTS verification_history (
                        seq INTEGER PRIMARY KEY AUTOINCREMENT,
                        id TEXT NOT NULL UNIQUE,
                        text_preview TEXT NOT NULL,
                        full_text TEXT NOT NULL,
                        trust_score INTEGER NOT NULL,
                        source TEXT NOT NULL,
                        claims TEXT NOT NULL DEFAULT '[]',
                        citations TEXT NOT NULL DEFAULT '[]',
                        created_at TEXT NOT NULL
                    )
                    """
                )
                conn.execute(
                    "CREATE INDEX IF NOT EXISTS idx_verification_history_created_at "
                    "ON verification_history(created_at DESC)"
                )
                conn.commit()
            logger.info(f"[HistoryStore] Database initialized at {self.db_path}")
        except Exception as e:
            logger.error(f"[HistoryStore] Failed to initialize database: {e}")
            raise

    async def insert(self, text: str, result: VerificationResult) -> HistoryRecord:
        record = HistoryRecord(
            id=uuid.uuid4().hex,
            text_preview=make_preview(text),
            full_text=text,
            trust_score=result.trustScore,
            source=result.source.value,
            claims=result.claims,
            citations=result.citations,
            created_at=datetime.now(timezone.utc).isoformat(),
        )
        with sqlite3.connect(self.db_path) as conn:
            conn.execute(
                """
                INSERT INTO verification_history
                (id, text_preview, full_text, trust_score, source, claims, citations, created_at)
                VALUES (?, ?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    record.id,
                    record.text_preview,
                    record.full_text,
                    record.trust_score,
                    record.source,
                    json.dumps([c.model_dump(mode="json", exclude_none=True) for c in record.claims]),
                    json.dumps([c.model_dump(mode="json", exclude_none=True) for c in record.citations]),
                    record.created_at,
                ),
            )
            conn.commit()
        logger.info(f"[HistoryStore] Saved verification {record.id} (trust={record.trust_score})")
        return record

    async def list_recent(self, limit: int = 20, offset: int = 0) -> List[HistoryRecord]:
        """Newest first."""
        limit = max(1, min(HISTORY_MAX_PAGE_SIZE, limit))
        offset = max(0, offset)
        with sqlite3.connect(self.db_path) as conn:
            conn.row_factory = sqlite3.Row
            rows = conn.execute(
                """
                SELECT * FROM verification_history
                ORDER BY created_at DESC, seq DESC
                LIMIT ? OFFSET ?
                """,
                (limit, offset),
            ).fetchall()
        return [self._row_to_record(row) for row in rows]

    async def get(self, record_id: str) -> Optional[HistoryRecord]:
        with sqlite3.connect(self.db_path) as conn:
            conn.row_factory = sqlite3.Row
            row = conn.execute("SELECT * FROM verification_history WHERE id = ?", (record_id,)).fetchone()
        return self._row_to_record(row) if row else None

    @staticmethod
    def _json_list(raw: Any) -> List[Any]:
        try:
            value = json.loads(raw) if raw else []
        except (TypeError, ValueError):
            return []
        return value if isinstance(value, list) else []

    def _row_to_record(self, row: sqlite3.Row) -> HistoryRecord:
        return HistoryRecord(
            id=row["id"],
            text_preview=row["text_preview"],
            full_text=row["full_text"],
            trust_score=row["trust_score"],
            source=row["source"],
            claims=self._json_list(row["claims"]),
            citations=self._json_list(row["citations"]),
            created_at=row["created_at"],
        )
