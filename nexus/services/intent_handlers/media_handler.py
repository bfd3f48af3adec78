"""
Media Handler - Music and YouTube intents.

- MusicHandler: Spotify gets a native spotify:search: URI; any other
  platform gets a Google search for "play {query} on {platform}".
- YouTubeHandler: asks the grounded model for a real video URL, extracts
  the video id and embeds it. Any lookup failure falls back to a YouTube
  search results link without surfacing the error.
"""

import logging

from nexus.ai.actions import links
from nexus.ai.intent.schemas import ClassifiedIntent, IntentKind
from nexus.ai.monitoring import ai_monitor
from nexus.ai.schemas.assistant_response import AssistantResponse, ResponseAction
from nexus.services.intent_handlers.base import IntentHandler, HandlerContext
from nexus.services.search_service import search_service


logger = logging.getLogger("nexus.services.intent_handlers.media")


class MusicHandler(IntentHandler):
    """Handler for music playback on a named platform."""

    @property
    def handler_name(self) -> str:
        return "music"

    @property
    def intent_kind(self) -> IntentKind:
        return IntentKind.MUSIC

    async def handle(self, intent: ClassifiedIntent, context: HandlerContext) -> AssistantResponse:
        self._log_entry(context)
        platform = intent.music.platform
        query = intent.music.query

        if "spotify" in platform.lower():
            response = AssistantResponse.build(
                text=f'Playing "{query}" on Spotify.',
                actions=[ResponseAction(label="Play on Spotify", url=links.spotify_search_uri(query))],
            )
        else:
            url = links.google_search_url(f"play {query} on {platform}")
            response = AssistantResponse.build(
                text=f'Playing "{query}" on {platform}.',
                actions=[ResponseAction(label=f"Play on {platform}", url=url)],
            )

        self._log_exit(context, response)
        return response


class YouTubeHandler(IntentHandler):
    """
    Handler for YouTube video requests.

    Makes the turn's single secondary call: a grounded lookup for the top
    video URL. The id is pulled out with links.extract_video_id().
    """

    @property
    def handler_name(self) -> str:
        return "youtube"

    @property
    def intent_kind(self) -> IntentKind:
        return IntentKind.YOUTUBE

    async def handle(self, intent: ClassifiedIntent, context: HandlerContext) -> AssistantResponse:
        self._log_entry(context)
        query = intent.youtube.query
        search = context.get_service("search", lambda: search_service)

        try:
            raw_url = await search.find_video_url(query, request_id=context.request_id)
        except Exception as e:
            ai_monitor.track_error(context.request_id, str(e), stage="video_lookup")
            response = AssistantResponse.build(
                text="I had trouble finding a specific video, but you can see the search results here.",
                actions=[self._search_action(query)],
            )
            self._log_exit(context, response)
            return response

        video_id = links.extract_video_id(raw_url)
        if video_id:
            response = AssistantResponse.build(
                text=f'Here is the video for "{query}".',
                actions=[ResponseAction(label="Watch on YouTube Website", url=links.youtube_watch_url(video_id))],
                video_reference=video_id,
            )
        else:
            logger.warning(
                f"[{context.request_id}] Could not extract YouTube video id, "
                f"falling back to search: {raw_url[:100]!r}"
            )
            response = AssistantResponse.build(
                text=f"I couldn't find a specific video to play, but here are the search results for \"{query}\".",
                actions=[self._search_action(query)],
            )

        self._log_exit(context, response)
        return response

    @staticmethod
    def _search_action(query: str) -> ResponseAction:
        return ResponseAction(label="Search on YouTube", url=links.youtube_search_url(query))
