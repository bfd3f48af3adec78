"""
Intent Handlers Package - One strategy per ClassifiedIntent branch.

The resolver (nexus.services.intent_resolver) evaluates these in
priority order and uses the first whose can_handle() returns True:

    youtube -> music -> call -> openApp -> website -> map
            -> webSearch -> generalResponse -> fallback

Usage:
    from nexus.services.intent_handlers import IntentHandler, HandlerContext

    class MyHandler(IntentHandler):
        @property
        def handler_name(self) -> str:
            return "my_handler"

        @property
        def intent_kind(self) -> IntentKind:
            return IntentKind.MAP

        async def handle(self, intent, context) -> AssistantResponse:
            ...
"""

from nexus.services.intent_handlers.base import (
    IntentHandler,
    HandlerContext,
)
from nexus.services.intent_handlers.media_handler import MusicHandler, YouTubeHandler
from nexus.services.intent_handlers.navigation_handler import (
    CallHandler,
    MapHandler,
    OpenAppHandler,
    WebsiteHandler,
)
from nexus.services.intent_handlers.search_handler import (
    FallbackHandler,
    GeneralResponseHandler,
    WebSearchHandler,
)

__all__ = [
    "IntentHandler",
    "HandlerContext",
    "MusicHandler",
    "YouTubeHandler",
    "CallHandler",
    "WebsiteHandler",
    "MapHandler",
    "OpenAppHandler",
    "WebSearchHandler",
    "GeneralResponseHandler",
    "FallbackHandler",
]
