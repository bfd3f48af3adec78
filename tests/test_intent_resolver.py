"""
Tests for IntentResolver - branch selection and dispatch.
"""

import pytest

from nexus.ai.intent.schemas import INTENT_PRIORITY, ClassifiedIntent
from nexus.services.intent_handlers import FallbackHandler, MapHandler
from nexus.services.intent_resolver import IntentResolver, default_handlers
from nexus.services.intent_handlers.search_handler import CLARIFICATION_TEXT

from conftest import FakeSearchService, make_context


def intent(**branches) -> ClassifiedIntent:
    return ClassifiedIntent.model_validate(branches)


@pytest.fixture
def resolver():
    return IntentResolver()


class TestHandlerOrder:
    """The handler chain follows INTENT_PRIORITY."""

    def test_default_handlers_follow_priority(self):
        handlers = default_handlers()

        assert [h.intent_kind for h in handlers[:-1]] == list(INTENT_PRIORITY)
        assert isinstance(handlers[-1], FallbackHandler)

    def test_select_handler_falls_through_to_fallback(self, resolver):
        handler = resolver.select_handler(intent(), make_context())

        assert isinstance(handler, FallbackHandler)


class TestResolve:
    """Tests for IntentResolver.resolve."""

    @pytest.mark.asyncio
    async def test_youtube_beats_music(self, resolver):
        search = FakeSearchService(video_url="https://youtu.be/dQw4w9WgXcQ")
        both = intent(
            music={"platform": "Spotify", "query": "never gonna give you up"},
            youtube={"query": "never gonna give you up"},
        )

        response = await resolver.resolve("play it", both, make_context("play it", search=search))

        assert response.video_reference == "dQw4w9WgXcQ"
        assert search.call_count == 1

    @pytest.mark.asyncio
    async def test_open_app_beats_website(self, resolver):
        both = intent(openApp={"appName": "facebook"}, website={"url": "facebook.com"})

        response = await resolver.resolve("open facebook", both, make_context("open facebook"))

        assert response.text == "Opening facebook..."
        assert response.actions[0].url == "fb://"

    @pytest.mark.asyncio
    async def test_sentinel_branch_is_skipped(self, resolver):
        classified = intent(call={"number": "null"}, map={"query": "Tokyo Tower"})

        response = await resolver.resolve("tokyo tower", classified, make_context("tokyo tower"))

        assert response.text == 'Finding "Tokyo Tower" on Google Maps.'

    @pytest.mark.asyncio
    async def test_at_most_one_secondary_call(self, resolver):
        search = FakeSearchService(
            video_url="https://youtu.be/dQw4w9WgXcQ",
            answer_text="An answer.",
        )
        classified = intent(youtube={"query": "cats"}, webSearch={"query": "cats"})

        await resolver.resolve("cats", classified, make_context("cats", search=search))

        assert search.call_count == 1
        assert search.search_queries == []

    @pytest.mark.asyncio
    async def test_resolution_is_repeatable(self, resolver):
        classified = intent(map={"query": "Eiffel Tower"})

        first = await resolver.resolve("eiffel tower", classified, make_context("eiffel tower"))
        second = await resolver.resolve("eiffel tower", classified, make_context("eiffel tower"))

        assert first == second

    @pytest.mark.asyncio
    async def test_empty_prompt_and_no_branch(self, resolver):
        response = await resolver.resolve("", intent(), make_context(""))

        assert response.text == CLARIFICATION_TEXT
        assert response.actions is None

    @pytest.mark.asyncio
    async def test_builds_context_when_missing(self, resolver):
        response = await resolver.resolve("where is paris", intent(map={"query": "Paris"}))

        assert response.actions[0].label == "Open in Google Maps"

    @pytest.mark.asyncio
    async def test_custom_chain_without_fallback(self):
        resolver = IntentResolver(handlers=[MapHandler()])

        response = await resolver.resolve("hello", intent(), make_context("hello"))

        assert response.actions[0].url == "https://www.google.com/search?q=hello"
