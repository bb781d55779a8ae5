"""
Scraper API routes.

Endpoints:
  POST /scrape-url - Fetch an article and return its readable text for verification
"""

from fastapi import APIRouter, Depends, Request

from app.core.deps import get_page_scraper
from app.core.errors import ScrapeError
from app.core.logger import get_logger
from app.core.observability import verifier_requests_total
from app.core.schemas import ScrapeResponse
from app.routers.verification import error_response, read_json_object
from app.services.scraper.scraper import PageScraper

logger = get_logger(__name__)

router = APIRouter()


@router.post("/scrape-url", tags=["Scraper"])
async def scrape_url(request: Request, scraper: PageScraper = Depends(get_page_scraper)):
    """
    Scrape readable text from an article URL.

    Returns {"content", "title", "sourceUrl"}.
    """
    verifier_requests_total.labels(endpoint="scrape_url").inc()
    body = await read_json_object(request)
    url = body.get("url") if body else None
    if not isinstance(url, str) or not url.strip():
        return error_response("URL is required", 400)

    url = url.strip()
    if not url.startswith(("http://", "https://")):
        return error_response("URL must start with http:// or https://", 400)

    try:
        page = await scraper.scrape(url)
    except ScrapeError as e:
        return error_response(e.message, e.status_code)
    except Exception as e:
        logger.error(f"Scrape request failed for {url}: {e}")
        return error_response(f"Scraping failed: {e}", 500)

    return ScrapeResponse(content=page.content, title=page.title, sourceUrl=page.url).model_dump()
