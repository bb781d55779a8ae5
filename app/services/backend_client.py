from typing import Any, Dict, Optional, Tuple

import httpx

from app.core.config import settings
from app.core.logger import get_logger
from app.core.observability import verifier_external_calls_total

logger = get_logger(__name__)

BackendOutcome = Tuple[Optional[Dict[str, Any]], Optional[str]]


class FactBackendClient:
    """
    Client for the third-party fact-verification backend.

    verify() never raises: it returns (result, None) on success and
    (None, error_message) on any network error, non-2xx status or
    unparsable body.
    """

    def __init__(
        self,
        url: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.url = url or settings.BACKEND_API_URL
        self.timeout = timeout if timeout is not None else settings.BACKEND_TIMEOUT_SECONDS
        self._transport = transport

    async def verify(self, text: str) -> BackendOutcome:
        logger.info("[FactBackend] Calling external backend for verification...")
        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
                response = await client.post(self.url, json={"text": text})
        except Exception as e:
            verifier_external_calls_total.labels(provider="backend", status="error").inc()
            logger.error(f"[FactBackend] Failed to call backend API: {e!r}")
            return None, str(e) or "Unknown backend error"

        if response.status_code // 100 != 2:
            verifier_external_calls_total.labels(provider="backend", status=str(response.status_code)).inc()
            logger.error(f"[FactBackend] Backend API error: {response.status_code} {response.text[:300]}")
            return None, f"Backend API error: {response.status_code}"

        try:
            body = response.json()
        except ValueError as e:
            verifier_external_calls_total.labels(provider="backend", status="unparsable").inc()
            logger.error(f"[FactBackend] Backend response is not JSON: {e}")
            return None, "Backend returned an unparsable response"

        if not isinstance(body, dict):
            verifier_external_calls_total.labels(provider="backend", status="unparsable").inc()
            logger.error(f"[FactBackend] Backend response is not an object: {type(body).__name__}")
            return None, "Backend returned an unparsable response"

        verifier_external_calls_total.labels(provider="backend", status="ok").inc()
        logger.info(f"[FactBackend] Backend response received: {str(body)[:500]}")
        return body, None
