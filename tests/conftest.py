"""
Test configuration and fixtures for pytest.

Shared fixtures:
- Test client (FastAPI TestClient)
- Fake search service for the two secondary lookups
- AIResponse and HandlerContext factories

No test talks to the hosted model: provider calls are mocked.
"""

from typing import Generator, List, Optional

import pytest
from fastapi.testclient import TestClient

from nexus.main import app
from nexus.ai.monitoring import ai_monitor
from nexus.ai.providers.base import AIResponse, ProviderType
from nexus.ai.schemas.assistant_response import Source
from nexus.services.intent_handlers.base import HandlerContext
from nexus.services.search_service import GroundedAnswer, SearchServiceError


# ---------------------------------------------------------------------------
# FACTORIES
# ---------------------------------------------------------------------------

def make_ai_response(
    content: str = "",
    success: bool = True,
    error: Optional[str] = None,
    metadata: Optional[dict] = None,
) -> AIResponse:
    """Build an AIResponse as the Gemini provider would return it."""
    return AIResponse(
        content=content,
        provider=ProviderType.GEMINI,
        model="gemini-2.5-flash",
        success=success,
        error=error,
        metadata=metadata or {},
    )


class FakeSearchService:
    """
    Stand-in for SearchService.

    Records every call so tests can assert how many secondary lookups a
    turn made.
    """

    def __init__(
        self,
        video_url: str = "",
        answer_text: str = "",
        sources: Optional[List[Source]] = None,
        error: Optional[Exception] = None,
    ):
        self.video_url = video_url
        self.answer_text = answer_text
        self.sources = sources or []
        self.error = error
        self.video_queries: List[str] = []
        self.search_queries: List[str] = []

    async def find_video_url(self, query: str, request_id: str = "") -> str:
        self.video_queries.append(query)
        if self.error:
            raise self.error
        return self.video_url

    async def grounded_search(self, query: str, request_id: str = "") -> GroundedAnswer:
        self.search_queries.append(query)
        if self.error:
            raise self.error
        return GroundedAnswer(text=self.answer_text, sources=list(self.sources))

    @property
    def call_count(self) -> int:
        return len(self.video_queries) + len(self.search_queries)


def make_context(prompt: str = "", search: Optional[FakeSearchService] = None) -> HandlerContext:
    """HandlerContext with the search service overridden."""
    overrides = {"search": search} if search is not None else {}
    return HandlerContext(
        original_prompt=prompt,
        request_id="test-request",
        _service_overrides=overrides,
    )


# ---------------------------------------------------------------------------
# FIXTURES
# ---------------------------------------------------------------------------

@pytest.fixture(autouse=True)
def reset_monitor() -> Generator[None, None, None]:
    """Start every test with empty AI metrics."""
    ai_monitor.reset()
    yield
    ai_monitor.reset()


@pytest.fixture
def client() -> Generator[TestClient, None, None]:
    """FastAPI test client."""
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def search_failure() -> FakeSearchService:
    """A search service whose every call fails."""
    return FakeSearchService(error=SearchServiceError("grounded_search", "503 Service Unavailable"))
