"""
Tests for GeminiProvider.

The SDK client is replaced with a fake exposing aio.models.generate_content,
so no request leaves the process.
"""

import asyncio
import base64
from types import SimpleNamespace
from unittest.mock import AsyncMock

import pytest
from google.genai import types

from nexus.ai.providers.base import ImagePayload, ProviderType
from nexus.ai.providers.gemini import GeminiProvider


def fake_response(text="", candidates=None, prompt_tokens=12, completion_tokens=4):
    return SimpleNamespace(
        text=text,
        usage_metadata=SimpleNamespace(
            prompt_token_count=prompt_tokens,
            candidates_token_count=completion_tokens,
        ),
        candidates=candidates or [],
    )


def grounded_candidate(chunks, queries=None):
    return SimpleNamespace(
        grounding_metadata=SimpleNamespace(
            web_search_queries=queries or [],
            grounding_chunks=chunks,
        )
    )


def web_chunk(uri, title=None):
    return SimpleNamespace(web=SimpleNamespace(uri=uri, title=title) if uri is not None else None)


@pytest.fixture
def provider():
    gemini = GeminiProvider(model="gemini-test", search_model="gemini-search-test", api_key="test-key", timeout=5)
    gemini._client = SimpleNamespace(
        aio=SimpleNamespace(models=SimpleNamespace(generate_content=AsyncMock()))
    )
    return gemini


def generate_content(provider) -> AsyncMock:
    return provider._client.aio.models.generate_content


class TestGenerateJson:
    """Tests for the classifier call shape."""

    @pytest.mark.asyncio
    async def test_success(self, provider):
        generate_content(provider).return_value = fake_response('{"call": {"number": "555"}}')

        response = await provider.generate_json(
            prompt="call 555",
            system_prompt="classify",
            response_schema={"type": "object"},
        )

        assert response.success is True
        assert response.content == '{"call": {"number": "555"}}'
        assert response.provider == ProviderType.GEMINI
        assert response.usage.prompt_tokens == 12

        kwargs = generate_content(provider).call_args.kwargs
        assert kwargs["model"] == "gemini-test"
        assert kwargs["config"].response_mime_type == "application/json"
        assert kwargs["config"].system_instruction == "classify"

    @pytest.mark.asyncio
    async def test_strips_json_fence(self, provider):
        generate_content(provider).return_value = fake_response('```json\n{"map": null}\n```')

        response = await provider.generate_json(prompt="x")

        assert response.content == '{"map": null}'

    @pytest.mark.asyncio
    async def test_image_is_sent_as_second_part(self, provider):
        generate_content(provider).return_value = fake_response("{}")
        image = ImagePayload(data=base64.b64encode(b"\x89PNG").decode(), mime_type="image/png")

        await provider.generate_json(prompt="Describe this image.", image=image)

        contents = generate_content(provider).call_args.kwargs["contents"]
        parts = contents[0].parts
        assert parts[0].text == "Describe this image."
        assert parts[1].inline_data.data == b"\x89PNG"
        assert parts[1].inline_data.mime_type == "image/png"

    @pytest.mark.asyncio
    async def test_invalid_image_is_an_error_response(self, provider):
        image = ImagePayload(data="not base64!!", mime_type="image/png")

        response = await provider.generate_json(prompt="x", image=image)

        assert response.success is False
        assert "Invalid base64" in response.error
        generate_content(provider).assert_not_called()

    @pytest.mark.asyncio
    async def test_sdk_exception_is_an_error_response(self, provider):
        generate_content(provider).side_effect = RuntimeError("503 UNAVAILABLE")

        response = await provider.generate_json(prompt="x")

        assert response.success is False
        assert response.error == "503 UNAVAILABLE"

    @pytest.mark.asyncio
    async def test_timeout(self, provider):
        async def never_returns(**kwargs):
            await asyncio.sleep(10)

        provider.timeout = 0.01
        generate_content(provider).side_effect = never_returns

        response = await provider.generate_json(prompt="x")

        assert response.success is False
        assert response.error == "Request timed out after 0.01s"


class TestGenerateWithGrounding:
    """Tests for grounded search calls."""

    @pytest.mark.asyncio
    async def test_enables_search_tool_on_search_model(self, provider):
        generate_content(provider).return_value = fake_response("answer")

        await provider.generate_with_grounding(prompt="who won")

        kwargs = generate_content(provider).call_args.kwargs
        assert kwargs["model"] == "gemini-search-test"
        assert kwargs["config"].tools[0].google_search is not None
        assert isinstance(kwargs["config"].tools[0], types.Tool)

    @pytest.mark.asyncio
    async def test_extracts_sources(self, provider):
        chunks = [
            web_chunk("https://a.example", "A"),
            web_chunk("", "No uri"),
            web_chunk(None),
            web_chunk("https://b.example"),
        ]
        generate_content(provider).return_value = fake_response(
            "The answer.",
            candidates=[grounded_candidate(chunks, queries=["who won"])],
        )

        response = await provider.generate_with_grounding(prompt="who won")

        assert response.content == "The answer."
        assert response.metadata["grounded"] is True
        assert response.metadata["search_queries"] == ["who won"]
        assert response.metadata["sources"] == [
            {"uri": "https://a.example", "title": "A"},
            {"uri": "https://b.example", "title": None},
        ]

    @pytest.mark.asyncio
    async def test_no_grounding_metadata(self, provider):
        generate_content(provider).return_value = fake_response(
            "plain", candidates=[SimpleNamespace(grounding_metadata=None)]
        )

        response = await provider.generate_with_grounding(prompt="x")

        assert response.metadata == {}


class TestMissingApiKey:
    """A provider without a key reports errors instead of raising."""

    @pytest.mark.asyncio
    async def test_every_call_fails_cleanly(self, monkeypatch):
        monkeypatch.setattr("nexus.ai.providers.gemini.settings.GEMINI_API_KEY", "")
        provider = GeminiProvider(api_key="")

        for response in (
            await provider.generate_json(prompt="x"),
            await provider.generate_with_grounding(prompt="x"),
        ):
            assert response.success is False
            assert response.error == "API key missing"
