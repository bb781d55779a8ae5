import pytest

from app.core.schemas import Citation, Claim, ResultSource, VerificationResult
from app.services.history.history_store import HistoryStore, make_preview


def _result(score: int) -> VerificationResult:
    return VerificationResult(
        trustScore=score,
        claims=[Claim(text=f"claim {score}", status="verified", note="n")],
        citations=[Citation(source="s", url="https://s.example", status="valid", reason="r")],
        source=ResultSource.backend_ai,
    )


@pytest.fixture
def store(tmp_path):
    return HistoryStore(tmp_path / "history.db")


@pytest.mark.asyncio
async def test_insert_and_get(store):
    record = await store.insert("full text", _result(70))

    loaded = await store.get(record.id)

    assert loaded is not None
    assert loaded.full_text == "full text"
    assert loaded.text_preview == "full text"
    assert loaded.trust_score == 70
    assert loaded.source == "backend+ai"
    assert loaded.claims[0].text == "claim 70"
    assert loaded.citations[0].url == "https://s.example"


@pytest.mark.asyncio
async def test_list_recent_is_newest_first_and_paginated(store):
    for score in (10, 20, 30, 40, 50):
        await store.insert(f"text {score}", _result(score))

    first_page = await store.list_recent(limit=2, offset=0)
    second_page = await store.list_recent(limit=2, offset=2)
    last_page = await store.list_recent(limit=2, offset=4)

    assert [r.trust_score for r in first_page] == [50, 40]
    assert [r.trust_score for r in second_page] == [30, 20]
    assert [r.trust_score for r in last_page] == [10]


@pytest.mark.asyncio
async def test_each_insert_is_a_new_record(store):
    a = await store.insert("same", _result(60))
    b = await store.insert("same", _result(60))

    assert a.id != b.id
    assert len(await store.list_recent()) == 2


@pytest.mark.asyncio
async def test_get_unknown_id(store):
    assert await store.get("missing") is None


def test_make_preview():
    assert make_preview("short") == "short"
    long_text = "x" * 250
    assert make_preview(long_text) == "x" * 200 + "..."
