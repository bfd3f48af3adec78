"""
Intent Resolver - Turns a ClassifiedIntent into an AssistantResponse.

The resolver is an ordered list of handlers evaluated first-match-wins:

    youtube -> music -> call -> openApp -> website -> map
            -> webSearch -> generalResponse -> fallback

Only the first handler whose branch is populated runs; later branches
are ignored for the turn even if the model filled them in too. The
fallback handler always matches, so every intent resolves.
"""

import logging
import time
import uuid
from typing import Dict, List, Optional, Sequence, Type

from nexus.ai.intent.schemas import INTENT_PRIORITY, ClassifiedIntent, IntentKind
from nexus.ai.schemas.assistant_response import AssistantResponse
from nexus.services.intent_handlers import (
    CallHandler,
    FallbackHandler,
    GeneralResponseHandler,
    HandlerContext,
    IntentHandler,
    MapHandler,
    MusicHandler,
    OpenAppHandler,
    WebSearchHandler,
    WebsiteHandler,
    YouTubeHandler,
)

logger = logging.getLogger("nexus.services.intent_resolver")


_HANDLER_TYPES: Dict[IntentKind, Type[IntentHandler]] = {
    IntentKind.YOUTUBE: YouTubeHandler,
    IntentKind.MUSIC: MusicHandler,
    IntentKind.CALL: CallHandler,
    IntentKind.OPEN_APP: OpenAppHandler,
    IntentKind.WEBSITE: WebsiteHandler,
    IntentKind.MAP: MapHandler,
    IntentKind.WEB_SEARCH: WebSearchHandler,
    IntentKind.GENERAL_RESPONSE: GeneralResponseHandler,
}


def default_handlers() -> List[IntentHandler]:
    """Handlers in INTENT_PRIORITY order, then the fallback."""
    handlers: List[IntentHandler] = [_HANDLER_TYPES[kind]() for kind in INTENT_PRIORITY]
    handlers.append(FallbackHandler())
    return handlers


class IntentResolver:
    """
    Dispatches a classified intent to exactly one handler.

    Usage:
        resolver = IntentResolver()
        response = await resolver.resolve("open facebook", intent)
    """

    def __init__(self, handlers: Optional[Sequence[IntentHandler]] = None):
        self.handlers: List[IntentHandler] = list(handlers) if handlers is not None else default_handlers()

    def select_handler(self, intent: ClassifiedIntent, context: HandlerContext) -> Optional[IntentHandler]:
        """First handler in order that can handle the intent."""
        for handler in self.handlers:
            if handler.can_handle(intent, context):
                return handler
        return None

    async def resolve(
        self,
        original_prompt: str,
        intent: ClassifiedIntent,
        context: Optional[HandlerContext] = None,
    ) -> AssistantResponse:
        """
        Resolve an intent for one turn.

        Args:
            original_prompt: The user's text as submitted
            intent: Output of the classifier
            context: Optional prebuilt context (request id, service overrides)

        Returns:
            AssistantResponse for the winning branch
        """
        if context is None:
            context = HandlerContext(
                original_prompt=original_prompt,
                request_id=str(uuid.uuid4()),
                start_time=time.time(),
            )

        handler = self.select_handler(intent, context)
        if handler is None:
            # Only reachable with a custom handler list that has no fallback
            handler = FallbackHandler()

        logger.info(f"[{context.request_id}] Resolving with handler: {handler.handler_name}")
        return await handler.handle(intent, context)


# Singleton instance
intent_resolver = IntentResolver()
