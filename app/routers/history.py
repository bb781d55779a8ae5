"""
History API routes.

Endpoints:
  GET /history        - Verification records, newest first (paginated)
  GET /history/{id}   - A single verification record
"""

from fastapi import APIRouter, Depends, Query

from app.constants.config import HISTORY_MAX_PAGE_SIZE
from app.core.deps import get_history_store
from app.core.logger import get_logger
from app.routers.verification import error_response
from app.services.history.history_store import HistoryStore

logger = get_logger(__name__)

router = APIRouter()


@router.get("/history", tags=["History"])
async def list_history(
    limit: int = Query(20, ge=1, le=HISTORY_MAX_PAGE_SIZE, description="Max results"),
    offset: int = Query(0, ge=0, description="Pagination offset"),
    store: HistoryStore = Depends(get_history_store),
):
    """
    Example:
        GET /history?limit=20&offset=0

    Returns:
        {"count": 20, "limit": 20, "offset": 0, "records": [...]}
    """
    try:
        records = await store.list_recent(limit=limit, offset=offset)
    except Exception as e:
        logger.error(f"[HistoryAPI] Error retrieving history: {e}")
        return error_response(str(e), 500)

    return {
        "count": len(records),
        "limit": limit,
        "offset": offset,
        "records": [r.model_dump(mode="json", exclude_none=True) for r in records],
    }


@router.get("/history/{record_id}", tags=["History"])
async def get_history_record(record_id: str, store: HistoryStore = Depends(get_history_store)):
    record = await store.get(record_id)
    if record is None:
        return error_response("Verification record not found", 404)
    return record.model_dump(mode="json", exclude_none=True)
