"""
Gemini Provider - Google's GenAI SDK.

Two call shapes are used by the assistant:
- generate_json: intent classification, constrained to a response schema,
  optionally with an attached image
- generate_with_grounding: grounded search and video lookup, with the
  google_search tool enabled

Every call goes through the SDK's async client and is bounded by
settings.AI_REQUEST_TIMEOUT.
"""

import asyncio
import base64
import binascii
import logging
import time
from typing import Optional, Any, Dict, List

from google import genai
from google.genai import types

from nexus.core.config import settings
from nexus.ai.providers.base import (
    AIProvider,
    AIResponse,
    ImagePayload,
    ProviderType,
    TokenUsage,
)

logger = logging.getLogger("nexus.ai.gemini")


class GeminiProvider(AIProvider):
    provider_type = ProviderType.GEMINI

    def __init__(
        self,
        model: str = None,
        search_model: str = None,
        api_key: str = None,
        timeout: float = None,
    ):
        self.model = model or settings.GEMINI_MODEL
        self.search_model = search_model or settings.GEMINI_SEARCH_MODEL
        self.api_key = api_key or settings.GEMINI_API_KEY
        self.timeout = timeout or settings.AI_REQUEST_TIMEOUT

        if self.api_key:
            self._client = genai.Client(api_key=self.api_key)
            logger.info(f"Gemini provider initialized with model: {self.model}")
        else:
            self._client = None
            logger.warning("Gemini API key not configured")

    async def generate_json(
        self,
        prompt: str,
        system_prompt: Optional[str] = None,
        response_schema: Optional[Any] = None,
        image: Optional[ImagePayload] = None,
        **kwargs
    ) -> AIResponse:
        start_time = time.time()
        if not self._client:
            return self._error("API key missing", start_time, self.model)

        try:
            config = types.GenerateContentConfig(
                temperature=kwargs.get("temperature", 0.2),
                response_mime_type="application/json",
                response_schema=response_schema,
                system_instruction=system_prompt,
            )

            parts = [types.Part.from_text(text=prompt)]
            if image is not None:
                parts.append(self._image_part(image))
            contents = [types.Content(role="user", parts=parts)]

            response = await self._call(self.model, contents, config)

            content = (response.text or "").strip()
            if content.startswith("```json"):
                content = content[7:-3].strip()

            return AIResponse(
                content=content,
                provider=self.provider_type,
                model=self.model,
                usage=self._extract_usage(response),
                latency_ms=self._measure_latency(start_time),
                success=True,
            )

        except asyncio.TimeoutError:
            return self._error(f"Request timed out after {self.timeout}s", start_time, self.model)
        except Exception as e:
            return self._error(str(e), start_time, self.model)

    async def generate_with_grounding(
        self,
        prompt: str,
        system_prompt: Optional[str] = None,
        use_search: bool = True,
        temperature: float = 0.7,
        max_tokens: Optional[int] = None,
        **kwargs
    ) -> AIResponse:
        start_time = time.time()
        model = self.search_model
        if not self._client:
            return self._error("API key missing", start_time, model)

        try:
            tools_list = []
            if use_search:
                tools_list.append(types.Tool(google_search=types.GoogleSearch()))

            config = types.GenerateContentConfig(
                temperature=temperature,
                max_output_tokens=max_tokens,
                system_instruction=system_prompt,
                tools=tools_list,
            )

            response = await self._call(model, prompt, config)

            return AIResponse(
                content=response.text or "",
                provider=self.provider_type,
                model=model,
                usage=self._extract_usage(response),
                latency_ms=self._measure_latency(start_time),
                success=True,
                raw_response=response,
                metadata=self._extract_grounding_metadata(response),
            )

        except asyncio.TimeoutError:
            return self._error(f"Request timed out after {self.timeout}s", start_time, model)
        except Exception as e:
            return self._error(str(e), start_time, model)

    # --- PRIVATE HELPERS ---

    async def _call(self, model: str, contents: Any, config: types.GenerateContentConfig):
        return await asyncio.wait_for(
            self._client.aio.models.generate_content(
                model=model,
                contents=contents,
                config=config,
            ),
            timeout=self.timeout,
        )

    @staticmethod
    def _image_part(image: ImagePayload) -> types.Part:
        try:
            data = base64.b64decode(image.data, validate=True)
        except (binascii.Error, ValueError) as e:
            raise ValueError(f"Invalid base64 image payload: {e}") from e
        return types.Part.from_bytes(data=data, mime_type=image.mime_type)

    def _extract_usage(self, response) -> TokenUsage:
        # The SDK returns None when no usage is reported
        usage = response.usage_metadata
        prompt_t = (usage.prompt_token_count or 0) if usage else 0
        comp_t = (usage.candidates_token_count or 0) if usage else 0
        return TokenUsage(prompt_tokens=prompt_t, completion_tokens=comp_t)

    def _extract_grounding_metadata(self, response) -> Dict[str, Any]:
        metadata: Dict[str, Any] = {}
        if not response.candidates or not response.candidates[0].grounding_metadata:
            return metadata

        gm = response.candidates[0].grounding_metadata
        metadata['grounded'] = True
        metadata['search_queries'] = list(gm.web_search_queries or [])

        # Chunks without a usable web URI are dropped
        sources: List[Dict[str, Optional[str]]] = []
        for chunk in gm.grounding_chunks or []:
            if chunk.web and chunk.web.uri:
                sources.append({'uri': chunk.web.uri, 'title': chunk.web.title})
        if sources:
            metadata['sources'] = sources
        return metadata

    def _error(self, msg: str, start_time: float, model: str) -> AIResponse:
        return self._create_error_response(
            error=msg, model=model, latency_ms=self._measure_latency(start_time)
        )


# Singleton instance
gemini_provider = GeminiProvider()
