"""
Assistant Service - Runs one user turn end to end.

Flow:
    prompt (+ image) -> IntentParser.classify -> IntentResolver.resolve
                     -> AssistantResponse

Two failure tiers:
- Turn-fatal: classification fails. The reply is the fixed error message
  with no actions; nothing is retried.
- Branch-local: a secondary lookup fails inside a handler. The handler
  degrades on its own and the turn completes normally.
"""

import logging
import time
import uuid
from typing import Optional

from nexus.core.config import settings
from nexus.ai.intent.parser import IntentClassificationError, IntentParser, intent_parser
from nexus.ai.monitoring import ai_monitor
from nexus.ai.providers import ImagePayload
from nexus.ai.schemas.assistant_response import AssistantResponse
from nexus.services.intent_handlers.base import HandlerContext
from nexus.services.intent_resolver import IntentResolver, intent_resolver

logger = logging.getLogger("nexus.services.assistant")


ERROR_TEXT = "Sorry, I encountered an error. Please try again."


class AssistantService:
    """
    Business logic for a single assistant turn.

    Usage:
        response = await assistant_service.process("call mom at 555-123-4567")
        response.text  # "Calling 555-123-4567."
    """

    def __init__(
        self,
        parser: Optional[IntentParser] = None,
        resolver: Optional[IntentResolver] = None,
    ):
        self.parser = parser or intent_parser
        self.resolver = resolver or intent_resolver
        logger.info("Assistant service initialized")

    async def process(
        self,
        text: str,
        image: Optional[ImagePayload] = None,
        request_id: Optional[str] = None,
    ) -> AssistantResponse:
        """
        Process one user turn.

        Args:
            text: The user's prompt (may be empty when an image is attached)
            image: Optional encoded image
            request_id: Correlation id; generated when omitted

        Returns:
            AssistantResponse, never raises
        """
        start_time = time.time()
        request_id = request_id or str(uuid.uuid4())

        ai_monitor.track_request(
            request_id=request_id,
            prompt=text,
            provider="gemini",
            model=settings.GEMINI_MODEL,
            has_image=image is not None,
        )

        try:
            intent = await self.parser.classify(text, image=image, request_id=request_id)
        except IntentClassificationError as e:
            ai_monitor.track_error(request_id=request_id, error=str(e), stage="classification")
            return AssistantResponse.build(text=ERROR_TEXT)

        populated = intent.populated_branches()
        if len(populated) > 1:
            logger.warning(
                f"[{request_id}] Classifier populated {len(populated)} branches "
                f"({', '.join(kind.value for kind in populated)}); using {populated[0].value}"
            )

        context = HandlerContext(
            original_prompt=text,
            request_id=request_id,
            start_time=start_time,
        )

        try:
            response = await self.resolver.resolve(text, intent, context)
        except Exception as e:
            logger.error(f"[{request_id}] Intent resolution failed: {e}", exc_info=True)
            ai_monitor.track_error(request_id=request_id, error=str(e), stage="resolution")
            return AssistantResponse.build(text=ERROR_TEXT)

        ai_monitor.track_intent(
            request_id=request_id,
            original_text=text,
            intent_kind=intent.primary_kind.value,
            populated_branches=[kind.value for kind in populated],
            processing_time_ms=(time.time() - start_time) * 1000,
        )
        return response


# Singleton instance
assistant_service = AssistantService()
