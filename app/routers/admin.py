"""
Admin API routes for health and monitoring.

Endpoints:
  GET /healthz - Liveness check
  GET /metrics - Prometheus metrics
"""

from fastapi import APIRouter
from fastapi.responses import Response

from app.core.observability import metrics_payload

router = APIRouter()


@router.get("/healthz", tags=["Admin"])
async def healthz():
    return {"ok": True}


@router.get("/metrics", tags=["Admin"])
async def metrics():
    payload, content_type = metrics_payload()
    return Response(content=payload, media_type=content_type)
