import asyncio
from typing import List, Optional, Sequence

from app.core.logger import get_logger
from app.core.observability import stage_timer
from app.core.schemas import Citation, CitationStatus
from app.services.scraper.probe import ProbeResult, UrlProbe

logger = get_logger(__name__)

NOT_ACCESSIBLE_REASON = "URL is not accessible or does not exist"


def reconcile(citation: Citation, result: ProbeResult) -> Citation:
    """
    Apply a probe outcome to a citation. Only broken->valid and valid->broken
    transitions happen; fake citations are never touched.
    """
    status = citation.status
    reason = citation.reason

    if result.exists:
        if citation.status == CitationStatus.broken:
            status = CitationStatus.valid
            reason = f'URL is accessible. Page title: "{result.title or "Unknown"}"'
    elif citation.status == CitationStatus.valid:
        status = CitationStatus.broken
        reason = f"URL returned HTTP {result.http_status}" if result.http_status else NOT_ACCESSIBLE_REASON

    return citation.model_copy(
        update={
            "status": status,
            "reason": reason,
            "verified": True,
            "httpStatus": result.http_status,
            "pageTitle": result.title,
            "contentPreview": result.preview,
        }
    )


class CitationReverifier:
    def __init__(self, probe: Optional[UrlProbe] = None) -> None:
        self.probe = probe or UrlProbe()

    async def reverify(self, citations: Sequence[Citation]) -> List[Citation]:
        """Probe every citation URL concurrently; output keeps input length and order."""
        logger.info(f"[CitationReverifier] Verifying {len(citations)} citations...")
        if not citations:
            return []

        with stage_timer("citation_reverify"):
            async with self.probe.client() as client:
                results = await asyncio.gather(*(self.probe.probe(c.url, client=client) for c in citations))

        updated = [reconcile(citation, result) for citation, result in zip(citations, results)]
        changed = sum(1 for before, after in zip(citations, updated) if before.status != after.status)
        logger.info(f"[CitationReverifier] Citation verification complete, {changed} status changes")
        return updated
