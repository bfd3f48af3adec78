"""
Tests for AssistantService - one user turn end to end.

The classifier provider and the search service singleton are mocked;
everything in between (parser, resolver, handlers) runs for real.
"""

import json
from unittest.mock import AsyncMock, patch

import pytest

from nexus.ai.intent.parser import IntentParser
from nexus.ai.monitoring import ai_monitor
from nexus.services.assistant_service import ERROR_TEXT, AssistantService
from nexus.services.intent_handlers.search_handler import CLARIFICATION_TEXT
from nexus.services.intent_resolver import IntentResolver
from nexus.services.search_service import search_service

from conftest import make_ai_response


@pytest.fixture
def service():
    return AssistantService(parser=IntentParser(), resolver=IntentResolver())


def classifier_returns(service, payload, **kwargs):
    content = payload if isinstance(payload, str) else json.dumps(payload)
    return patch.object(
        service.parser.provider,
        "generate_json",
        new_callable=AsyncMock,
        return_value=make_ai_response(content, **kwargs),
    )


class TestProcess:
    """Tests for AssistantService.process."""

    @pytest.mark.asyncio
    async def test_call(self, service):
        with classifier_returns(service, {"call": {"number": "555-123-4567"}}):
            response = await service.process("call mom at 555-123-4567")

        assert response.text == "Calling 555-123-4567."
        assert response.actions[0].label == "Call 555-123-4567"
        assert response.actions[0].url == "tel:555-123-4567"
        assert response.primary_action == response.actions[0]

    @pytest.mark.asyncio
    @pytest.mark.parametrize("noise", [{"map": ""}, {"youtube": "none"}, {"music": []}])
    async def test_malformed_extra_branch_still_resolves(self, service, noise):
        with classifier_returns(service, {"call": {"number": "555-123-4567"}, **noise}):
            response = await service.process("call mom at 555-123-4567")

        assert response.text == "Calling 555-123-4567."
        assert response.actions[0].url == "tel:555-123-4567"

    @pytest.mark.asyncio
    async def test_open_app(self, service):
        with classifier_returns(service, {"openApp": {"appName": "facebook"}}):
            response = await service.process("open facebook")

        assert response.text == "Opening facebook..."
        assert response.actions[0].url == "fb://"

    @pytest.mark.asyncio
    async def test_classifier_failure(self, service):
        with classifier_returns(service, "", success=False, error="Request timed out after 30s"):
            response = await service.process("open facebook", request_id="req-err")

        assert response.text == ERROR_TEXT
        assert response.actions is None
        assert ai_monitor.get_stats().intents_by_kind == {}

    @pytest.mark.asyncio
    async def test_malformed_json(self, service):
        with classifier_returns(service, "{not json"):
            response = await service.process("open facebook")

        assert response.text == ERROR_TEXT
        assert response.actions is None

    @pytest.mark.asyncio
    async def test_empty_prompt_and_empty_output(self, service):
        with classifier_returns(service, {}):
            response = await service.process("")

        assert response.text == CLARIFICATION_TEXT
        assert response.actions is None

    @pytest.mark.asyncio
    async def test_multiple_branches_logs_warning(self, service, caplog):
        payload = {"openApp": {"appName": "facebook"}, "website": {"url": "facebook.com"}}

        with classifier_returns(service, payload):
            with caplog.at_level("WARNING", logger="nexus.services.assistant"):
                response = await service.process("open facebook")

        assert response.actions[0].url == "fb://"
        assert "populated 2 branches" in caplog.text

    @pytest.mark.asyncio
    async def test_youtube_lookup_uses_search_service(self, service):
        with classifier_returns(service, {"youtube": {"query": "lofi beats"}}):
            with patch.object(
                search_service,
                "find_video_url",
                new_callable=AsyncMock,
                return_value="https://www.youtube.com/watch?v=jfKfPfyJRdk",
            ) as mock_lookup:
                response = await service.process("play lofi beats on youtube", request_id="req-yt")

        mock_lookup.assert_awaited_once_with("lofi beats", request_id="req-yt")
        assert response.video_reference == "jfKfPfyJRdk"
        assert response.primary_action is None

    @pytest.mark.asyncio
    async def test_handler_crash_returns_error_text(self, service):
        with classifier_returns(service, {"map": {"query": "Paris"}}):
            with patch.object(service.resolver, "resolve", new_callable=AsyncMock) as mock_resolve:
                mock_resolve.side_effect = RuntimeError("boom")
                response = await service.process("where is paris")

        assert response.text == ERROR_TEXT

    @pytest.mark.asyncio
    async def test_tracks_resolved_intent(self, service):
        with classifier_returns(service, {"map": {"query": "Paris"}}):
            await service.process("where is paris")

        assert ai_monitor.get_stats().intents_by_kind == {"map": 1}
