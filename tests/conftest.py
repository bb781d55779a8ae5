"""
Pytest configuration and fixtures for test suite.

This module:
- Detects CI environment and skips tests requiring external services
- Provides fakes for the upstream LLM and fact backend
- Provides httpx mock transports for URL probing
"""

import os
import socket
from typing import Any, Callable, Dict, List, Optional

import httpx
import pytest

from app.services.llms.groq_service import LLMServiceError

# Detect CI environment
IS_CI = os.environ.get("CI") or os.environ.get("GITHUB_ACTIONS") or os.environ.get("GITLAB_CI")


def is_network_available():
    """Check if outbound network is reachable."""
    try:
        sock = socket.create_connection(("example.com", 80), timeout=1)
        sock.close()
        return True
    except OSError:
        return False


# Pytest markers for skipping
def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line("markers", "network_required: mark test as requiring outbound network access")


def pytest_collection_modifyitems(config, items):
    """Automatically skip tests based on environment."""
    for item in items:
        if "network_required" in item.keywords:
            if IS_CI and not os.environ.get("RUN_NETWORK_TESTS"):
                item.add_marker(pytest.mark.skip(reason="Network tests skipped in CI by default"))
            elif not is_network_available():
                item.add_marker(pytest.mark.skip(reason="Network not available"))


class FakeLLM:
    """Stand-in for GroqService: returns a canned completion or raises."""

    def __init__(self, content: str = "", error: Optional[Exception] = None) -> None:
        self.content = content
        self.error = error
        self.prompts: List[Dict[str, Any]] = []

    async def ainvoke(self, prompt: str, system_prompt: Optional[str] = None) -> str:
        self.prompts.append({"prompt": prompt, "system_prompt": system_prompt})
        if self.error is not None:
            raise self.error
        return self.content


class FakeBackend:
    """Stand-in for FactBackendClient."""

    def __init__(self, result: Optional[Dict[str, Any]] = None, error: Optional[str] = None) -> None:
        self.result = result
        self.error = error
        self.calls: List[str] = []

    async def verify(self, text: str):
        self.calls.append(text)
        return self.result, self.error


class FakeInsight:
    """Stand-in for AiInsightService."""

    def __init__(self, result: Optional[Dict[str, Any]] = None, exc: Optional[Exception] = None) -> None:
        self.result = result
        self.exc = exc
        self.calls: List[str] = []

    async def analyze(self, text: str):
        self.calls.append(text)
        if self.exc is not None:
            raise self.exc
        return self.result


@pytest.fixture
def make_llm() -> Callable[..., FakeLLM]:
    def _make(content: str = "", error: Optional[Exception] = None) -> FakeLLM:
        return FakeLLM(content=content, error=error)

    return _make


@pytest.fixture
def llm_status_error() -> Callable[[int], LLMServiceError]:
    def _make(status_code: int) -> LLMServiceError:
        return LLMServiceError(f"HTTP {status_code}", status_code=status_code)

    return _make


def html_page(title: str, body: str = "") -> str:
    return (
        f"<html><head><title>{title}</title><style>body {{ color: red; }}</style></head>"
        f"<body><script>var x = 1;</script><p>{body}</p></body></html>"
    )


@pytest.fixture
def site_transport() -> Callable[[Dict[str, Any]], httpx.MockTransport]:
    """
    Build an httpx.MockTransport from {url: (status, html) | Exception}.
    Unlisted URLs return 404. Requested URLs are recorded on transport.requested.
    """

    def _make(routes: Dict[str, Any]) -> httpx.MockTransport:
        requested: List[str] = []

        def handler(request: httpx.Request) -> httpx.Response:
            url = str(request.url)
            requested.append(url)
            route = routes.get(url)
            if route is None:
                route = routes.get(url.rstrip("/"))
            if isinstance(route, Exception):
                raise route
            if route is None:
                return httpx.Response(404, text="not found")
            status, html = route
            return httpx.Response(status, text=html, headers={"content-type": "text/html"})

        transport = httpx.MockTransport(handler)
        transport.requested = requested  # type: ignore[attr-defined]
        return transport

    return _make


@pytest.fixture
def make_html() -> Callable[..., str]:
    return html_page


@pytest.fixture
def make_backend() -> Callable[..., FakeBackend]:
    return FakeBackend


@pytest.fixture
def make_insight() -> Callable[..., FakeInsight]:
    return FakeInsight
