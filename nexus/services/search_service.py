"""
Search Service - Grounded search and video lookup through Gemini.

Both calls are the same pattern with different prompts: a single prompt
sent with the google_search tool enabled, read back as free text.

- grounded_search(query): the answer text plus cited web sources
- find_video_url(query): raw text that should contain one YouTube URL

A failed call (transport error, timeout, missing key) raises
SearchServiceError. Handlers catch it and degrade their own branch;
it never ends the turn.
"""

import logging
from dataclasses import dataclass, field
from typing import List, Optional

from nexus.ai.monitoring import ai_monitor
from nexus.ai.providers import AIProvider, gemini_provider
from nexus.ai.prompts.intent_prompts import build_video_lookup_prompt
from nexus.ai.schemas.assistant_response import Source

logger = logging.getLogger("nexus.services.search")


class SearchServiceError(Exception):
    """A grounded model call failed."""

    def __init__(self, stage: str, message: str):
        self.stage = stage
        super().__init__(f"{stage} failed: {message}")


@dataclass
class GroundedAnswer:
    """Free-text answer and the sources it cites."""
    text: str
    sources: List[Source] = field(default_factory=list)


class SearchService:
    """
    Secondary model calls made while resolving an intent.

    Usage:
        answer = await search_service.grounded_search("who won the last super bowl")
        answer.text, answer.sources
    """

    def __init__(self, provider: Optional[AIProvider] = None):
        self.provider = provider or gemini_provider

    async def grounded_search(self, query: str, request_id: str = "") -> GroundedAnswer:
        """
        Answer a query with live web retrieval.

        Raises:
            SearchServiceError: if the model call failed
        """
        response = await self.provider.generate_with_grounding(prompt=query, use_search=True)
        ai_monitor.track_response_from_ai_response(request_id, response, stage="grounded_search")

        if not response.success:
            raise SearchServiceError("grounded_search", response.error or "unknown error")

        sources = [
            Source(uri=item["uri"], title=item.get("title") or item["uri"])
            for item in (response.metadata or {}).get("sources", [])
            if item.get("uri")
        ]
        logger.info(f"[{request_id}] Grounded search returned {len(sources)} sources")
        return GroundedAnswer(text=(response.content or "").strip(), sources=sources)

    async def find_video_url(self, query: str, request_id: str = "") -> str:
        """
        Ask the grounded model for the top YouTube result for a query.

        Returns the raw model text (expected to be a single URL).

        Raises:
            SearchServiceError: if the model call failed
        """
        response = await self.provider.generate_with_grounding(
            prompt=build_video_lookup_prompt(query),
            use_search=True,
        )
        ai_monitor.track_response_from_ai_response(request_id, response, stage="video_lookup")

        if not response.success:
            raise SearchServiceError("video_lookup", response.error or "unknown error")

        return (response.content or "").strip()


# Singleton instance
search_service = SearchService()
