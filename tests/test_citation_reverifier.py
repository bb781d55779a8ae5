import asyncio
import time

import httpx
import pytest

from app.core.schemas import Citation, CitationStatus
from app.services.citations.reverifier import CitationReverifier, reconcile
from app.services.scraper.probe import ProbeResult, UrlProbe


def _reverifier(transport) -> CitationReverifier:
    return CitationReverifier(probe=UrlProbe(transport=transport))


@pytest.mark.asyncio
async def test_broken_citation_becomes_valid_when_reachable(site_transport, make_html):
    transport = site_transport({"https://example.com": (200, make_html("Example Domain"))})
    citations = [Citation(source="Example", url="https://example.com", status="broken", reason="timed out")]

    [updated] = await _reverifier(transport).reverify(citations)

    assert updated.status == CitationStatus.valid
    assert "Example Domain" in updated.reason
    assert updated.reason == 'URL is accessible. Page title: "Example Domain"'
    assert updated.verified is True
    assert updated.httpStatus == 200
    assert updated.pageTitle == "Example Domain"


@pytest.mark.asyncio
async def test_valid_citation_with_unknown_url_becomes_broken_without_network(site_transport):
    transport = site_transport({})
    citations = [Citation(source="Mystery", url="unknown", status="valid", reason="")]

    [updated] = await _reverifier(transport).reverify(citations)

    assert transport.requested == []
    assert updated.status == CitationStatus.broken
    assert updated.reason == "URL is not accessible or does not exist"
    assert updated.verified is True
    assert updated.httpStatus == 0


@pytest.mark.asyncio
async def test_valid_citation_with_http_error_reports_code(site_transport):
    transport = site_transport({"https://example.com/missing": (404, "nope")})
    citations = [Citation(source="Ex", url="https://example.com/missing", status="valid")]

    [updated] = await _reverifier(transport).reverify(citations)

    assert updated.status == CitationStatus.broken
    assert updated.reason == "URL returned HTTP 404"


@pytest.mark.asyncio
async def test_fake_citation_is_never_changed(site_transport, make_html):
    transport = site_transport({"https://real.example": (200, make_html("Real"))})
    citations = [
        Citation(source="Fabricated Journal", url="https://real.example", status="fake", reason="no such journal"),
        Citation(source="Fabricated Book", url="unknown", status="fake", reason="no such book"),
    ]

    updated = await _reverifier(transport).reverify(citations)

    assert [c.status for c in updated] == [CitationStatus.fake, CitationStatus.fake]
    assert [c.reason for c in updated] == ["no such journal", "no such book"]
    assert all(c.verified for c in updated)


@pytest.mark.asyncio
async def test_order_and_length_preserved(site_transport, make_html):
    transport = site_transport(
        {
            "https://a.example": (200, make_html("A")),
            "https://c.example": (500, "err"),
        }
    )
    citations = [
        Citation(source="A", url="https://a.example", status="broken"),
        Citation(source="B", url="unknown", status="broken"),
        Citation(source="C", url="https://c.example", status="valid"),
        Citation(source="D", url="https://a.example", status="valid"),
    ]

    updated = await _reverifier(transport).reverify(citations)

    assert [c.source for c in updated] == ["A", "B", "C", "D"]
    assert [c.status for c in updated] == [
        CitationStatus.valid,
        CitationStatus.broken,
        CitationStatus.broken,
        CitationStatus.valid,
    ]
    # inputs are not mutated
    assert citations[0].status == CitationStatus.broken
    assert citations[0].verified is None


@pytest.mark.asyncio
async def test_reverification_is_idempotent(site_transport, make_html):
    transport = site_transport(
        {
            "https://up.example": (200, make_html("Up")),
            "https://down.example": (503, "down"),
        }
    )
    reverifier = _reverifier(transport)
    citations = [
        Citation(source="Up", url="https://up.example", status="broken"),
        Citation(source="Down", url="https://down.example", status="valid"),
        Citation(source="Fake", url="https://up.example", status="fake"),
    ]

    first = await reverifier.reverify(citations)
    second = await reverifier.reverify(first)

    assert [c.status for c in first] == [c.status for c in second]
    assert [c.reason for c in first] == [c.reason for c in second]


@pytest.mark.asyncio
async def test_probes_run_concurrently():
    async def handler(request: httpx.Request) -> httpx.Response:
        await asyncio.sleep(0.2)
        return httpx.Response(200, text="<title>t</title>")

    reverifier = _reverifier(httpx.MockTransport(handler))
    citations = [Citation(source=str(i), url=f"https://site{i}.example", status="broken") for i in range(8)]

    start = time.perf_counter()
    updated = await reverifier.reverify(citations)
    elapsed = time.perf_counter() - start

    assert all(c.status == CitationStatus.valid for c in updated)
    assert elapsed < 1.0


@pytest.mark.asyncio
async def test_empty_list():
    assert await CitationReverifier().reverify([]) == []


def test_reconcile_unknown_title():
    citation = Citation(source="x", url="https://x.example", status="broken")
    updated = reconcile(citation, ProbeResult(exists=True, http_status=200, title=None))

    assert updated.reason == 'URL is accessible. Page title: "Unknown"'


def test_reconcile_keeps_agreeing_statuses():
    valid = Citation(source="v", url="https://v.example", status="valid", reason="ok")
    broken = Citation(source="b", url="https://b.example", status="broken", reason="dead")

    assert reconcile(valid, ProbeResult(exists=True, http_status=200)).reason == "ok"
    assert reconcile(broken, ProbeResult(exists=False, http_status=0)).reason == "dead"
