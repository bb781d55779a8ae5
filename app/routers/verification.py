"""
Verification API routes.

Endpoints:
  POST /verify            - Merge fact backend + AI insight into a VerificationResult
  POST /verify-citations  - Re-probe citation URLs and reconcile their status
  POST /detect-ai         - AI-authorship detection
  POST /compare           - Verify two texts side by side
"""

import json
from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from app.core.deps import get_ai_detection_service, get_citation_reverifier, get_verification_service
from app.core.errors import AIGatewayError
from app.core.logger import get_logger
from app.core.observability import verifier_requests_total
from app.core.schemas import Citation
from app.services.ai.detection import AiDetectionService
from app.services.citations.reverifier import CitationReverifier
from app.services.verdict.normalizer import normalize_citation_status
from app.services.verification_service import VerificationService

logger = get_logger(__name__)

router = APIRouter()

TEXT_REQUIRED = "Text is required"
CITATIONS_REQUIRED = "Citations array is required"
BOTH_TEXTS_REQUIRED = "Both texts required"


def error_response(message: str, status_code: int) -> JSONResponse:
    return JSONResponse({"error": message}, status_code=status_code)


async def read_json_object(request: Request) -> Optional[Dict[str, Any]]:
    """Request body as a dict, or None when it is missing, malformed or not an object."""
    try:
        body = await request.json()
    except (json.JSONDecodeError, UnicodeDecodeError):
        return None
    return body if isinstance(body, dict) else None


def _required_text(body: Optional[Dict[str, Any]], key: str) -> Optional[str]:
    value = body.get(key) if body else None
    return value if isinstance(value, str) and value else None


def parse_citation(raw: Dict[str, Any]) -> Citation:
    data = {key: value for key, value in raw.items() if value is not None}
    data["status"] = normalize_citation_status(raw.get("status"))
    return Citation.model_validate(data)


@router.post("/verify", tags=["Verification"])
async def verify_content(request: Request, service: VerificationService = Depends(get_verification_service)):
    verifier_requests_total.labels(endpoint="verify").inc()
    text = _required_text(await read_json_object(request), "text")
    if text is None:
        return error_response(TEXT_REQUIRED, 400)

    try:
        result = await service.verify(text)
        return result.model_dump(mode="json", exclude_none=True)
    except Exception as e:
        logger.error(f"[VerificationAPI] Error in verify: {e}")
        return error_response(str(e) or "Unknown error", 500)


@router.post("/verify-citations", tags=["Verification"])
async def verify_citations(request: Request, reverifier: CitationReverifier = Depends(get_citation_reverifier)):
    verifier_requests_total.labels(endpoint="verify_citations").inc()
    body = await read_json_object(request)
    raw_citations = body.get("citations") if body else None
    if not isinstance(raw_citations, list):
        return error_response(CITATIONS_REQUIRED, 400)
    if not all(isinstance(c, dict) for c in raw_citations):
        return error_response("Each citation must be an object", 400)

    try:
        citations = [parse_citation(c) for c in raw_citations]
    except ValidationError as e:
        return error_response(f"Invalid citation: {e.errors()[0].get('msg', 'validation error')}", 400)

    try:
        verified = await reverifier.reverify(citations)
        return {"citations": [c.model_dump(mode="json", exclude_none=True) for c in verified]}
    except Exception as e:
        logger.error(f"[VerificationAPI] Error verifying citations: {e}")
        return error_response(str(e) or "Unknown error", 500)


@router.post("/detect-ai", tags=["Verification"])
async def detect_ai(request: Request, service: AiDetectionService = Depends(get_ai_detection_service)):
    verifier_requests_total.labels(endpoint="detect_ai").inc()
    text = _required_text(await read_json_object(request), "text")
    if text is None:
        return error_response(TEXT_REQUIRED, 400)

    try:
        detection = await service.detect(text)
        return detection.model_dump(mode="json", exclude_none=True)
    except AIGatewayError as e:
        logger.error(f"[VerificationAPI] AI gateway error {e.status_code}: {e.message}")
        return error_response(e.message, e.status_code)
    except Exception as e:
        logger.error(f"[VerificationAPI] Error in detect-ai: {e}")
        return error_response(str(e) or "Unknown error", 500)


@router.post("/compare", tags=["Verification"])
async def compare_texts(request: Request, service: VerificationService = Depends(get_verification_service)):
    verifier_requests_total.labels(endpoint="compare").inc()
    body = await read_json_object(request)
    text_a = _required_text(body, "textA")
    text_b = _required_text(body, "textB")
    if text_a is None or text_b is None or not text_a.strip() or not text_b.strip():
        return error_response(BOTH_TEXTS_REQUIRED, 400)

    try:
        result = await service.compare(text_a, text_b)
        return result.model_dump(mode="json", exclude_none=True)
    except Exception as e:
        logger.error(f"[VerificationAPI] Error in compare: {e}")
        return error_response(str(e) or "Unknown error", 500)
