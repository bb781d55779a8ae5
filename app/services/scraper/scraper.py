from typing import Optional

import aiohttp
import trafilatura
from pydantic import BaseModel

from app.constants.config import PROBE_USER_AGENT
from app.core.config import settings
from app.core.errors import ScrapeError
from app.core.logger import get_logger
from app.core.observability import verifier_external_calls_total

logger = get_logger(__name__)


class ScrapedPage(BaseModel):
    url: str
    title: Optional[str] = None
    content: str


class PageScraper:
    """
    Fetches an article page so its text can be submitted for verification:
        1. aiohttp GET
        2. Trafilatura extraction (HTML → readable text + title)
    """

    DEFAULT_HEADERS = {
        "User-Agent": PROBE_USER_AGENT,
        "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
    }

    def __init__(self, timeout: Optional[float] = None):
        self.timeout = timeout if timeout is not None else settings.SCRAPE_TIMEOUT_SECONDS

    # ---------------------------------------------------------------------
    # HTTP Fetcher
    # ---------------------------------------------------------------------
    async def fetch_html(self, url: str) -> str:
        try:
            timeout = aiohttp.ClientTimeout(total=self.timeout)
            async with aiohttp.ClientSession(timeout=timeout, headers=self.DEFAULT_HEADERS) as session:
                async with session.get(url) as resp:
                    if resp.status != 200:
                        verifier_external_calls_total.labels(provider="scrape", status=str(resp.status)).inc()
                        logger.warning(f"[PageScraper] Non-200 status for {url}: {resp.status}")
                        raise ScrapeError(f"Failed to fetch URL: HTTP {resp.status}")
                    html = await resp.text()
        except ScrapeError:
            raise
        except Exception as e:
            verifier_external_calls_total.labels(provider="scrape", status="error").inc()
            logger.error(f"[PageScraper] HTTP fetch failed for {url}: {e!r}")
            raise ScrapeError(f"Failed to fetch URL: {e}") from e

        verifier_external_calls_total.labels(provider="scrape", status="ok").inc()
        return html

    # ---------------------------------------------------------------------
    # Trafilatura Extraction
    # ---------------------------------------------------------------------
    def extract_text(self, html: str) -> str | None:
        text = trafilatura.extract(html, include_comments=False)
        if text is None:
            return None
        return str(text).strip() or None

    def extract_title(self, html: str) -> str | None:
        metadata = trafilatura.extract_metadata(html)
        if metadata is None or not metadata.title:
            return None
        return str(metadata.title).strip() or None

    async def scrape(self, url: str) -> ScrapedPage:
        logger.info(f"[PageScraper] Scraping URL: {url}")
        html = await self.fetch_html(url)

        text = self.extract_text(html)
        if not text:
            logger.warning(f"[PageScraper] No extractable text for {url}")
            raise ScrapeError("No content extracted from URL", status_code=422)

        logger.info(f"[PageScraper] Extracted {len(text)} chars from {url}")
        return ScrapedPage(url=url, title=self.extract_title(html), content=text)
