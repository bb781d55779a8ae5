"""
URL probe used by citation re-verification.

A probe is a single bounded GET: it reports whether the URL answered with a
2xx status and, if so, the page title and a short text preview. Probes never
raise; every failure is reported as unreachable.
"""

import asyncio
import re
from typing import Optional

import httpx
from pydantic import BaseModel

from app.constants.config import PROBE_PREVIEW_CHARS, PROBE_USER_AGENT, UNKNOWN_URL
from app.core.config import settings
from app.core.logger import get_logger
from app.core.observability import verifier_citation_probes_total

logger = get_logger(__name__)

_TITLE_RE = re.compile(r"<title[^>]*>([^<]+)</title>", re.IGNORECASE)
_SCRIPT_RE = re.compile(r"<script[^>]*>[\s\S]*?</script>", re.IGNORECASE)
_STYLE_RE = re.compile(r"<style[^>]*>[\s\S]*?</style>", re.IGNORECASE)
_TAG_RE = re.compile(r"<[^>]+>")
_WS_RE = re.compile(r"\s+")


class ProbeResult(BaseModel):
    exists: bool
    http_status: int = 0
    title: Optional[str] = None
    preview: Optional[str] = None


def is_probeable(url: Optional[str]) -> bool:
    return bool(url) and url != UNKNOWN_URL and url.startswith("http")


def extract_title(html: str) -> Optional[str]:
    match = _TITLE_RE.search(html)
    if not match:
        return None
    return match.group(1).strip() or None


def extract_preview(html: str, limit: int = PROBE_PREVIEW_CHARS) -> str:
    text = _SCRIPT_RE.sub("", html)
    text = _STYLE_RE.sub("", text)
    text = _TAG_RE.sub(" ", text)
    text = _WS_RE.sub(" ", text).strip()
    return text[:limit]


class UrlProbe:
    DEFAULT_HEADERS = {"User-Agent": PROBE_USER_AGENT}

    def __init__(
        self,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.timeout = timeout if timeout is not None else settings.PROBE_TIMEOUT_SECONDS
        self._transport = transport

    def client(self) -> httpx.AsyncClient:
        """Client configured for probing; share one across a fan-out."""
        return httpx.AsyncClient(
            timeout=self.timeout,
            follow_redirects=True,
            headers=self.DEFAULT_HEADERS,
            transport=self._transport,
        )

    async def probe(self, url: Optional[str], client: Optional[httpx.AsyncClient] = None) -> ProbeResult:
        if not is_probeable(url):
            verifier_citation_probes_total.labels(outcome="skipped").inc()
            return ProbeResult(exists=False, http_status=0)

        try:
            if client is None:
                async with self.client() as own_client:
                    return await self._fetch(own_client, url)
            return await self._fetch(client, url)
        except Exception as e:
            verifier_citation_probes_total.labels(outcome="error").inc()
            logger.warning(f"[UrlProbe] Error checking URL {url}: {e!r}")
            return ProbeResult(exists=False, http_status=0)

    async def _fetch(self, client: httpx.AsyncClient, url: str) -> ProbeResult:
        # Hard cap on the whole exchange, not just each socket operation
        response = await asyncio.wait_for(client.get(url), timeout=self.timeout)

        if not response.is_success:
            verifier_citation_probes_total.labels(outcome="unreachable").inc()
            logger.info(f"[UrlProbe] {url} returned HTTP {response.status_code}")
            return ProbeResult(exists=False, http_status=response.status_code)

        html = response.text
        verifier_citation_probes_total.labels(outcome="reachable").inc()
        return ProbeResult(
            exists=True,
            http_status=response.status_code,
            title=extract_title(html),
            preview=extract_preview(html),
        )
