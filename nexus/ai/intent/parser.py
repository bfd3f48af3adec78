"""
Intent Parser - Classifies a user turn into a ClassifiedIntent.

This is the intent classifier adapter. It:
1. Sends the prompt (plus optional image) with the fixed system
   instruction, constrained to INTENT_RESPONSE_SCHEMA
2. Parses the returned text as JSON
3. Validates it into a ClassifiedIntent

Any failure along the way (transport error, timeout, empty output,
malformed JSON, schema violation) raises IntentClassificationError.
The caller turns that into the generic error reply; nothing is retried.
A malformed branch inside a valid object is not a failure: it is
normalized to an unpopulated branch and resolution falls through.
"""

import json
import logging
import time
from typing import Optional

from pydantic import ValidationError

from nexus.ai.monitoring import ai_monitor
from nexus.ai.providers import AIProvider, ImagePayload, gemini_provider
from nexus.ai.prompts.intent_prompts import INTENT_SYSTEM_PROMPT, INTENT_RESPONSE_SCHEMA
from nexus.ai.intent.schemas import ClassifiedIntent

logger = logging.getLogger("nexus.ai.intent")


class IntentClassificationError(Exception):
    """The classifier call failed or returned something unusable."""


class IntentParser:
    """
    Parses a user prompt into a ClassifiedIntent.

    Usage:
        parser = IntentParser()
        intent = await parser.classify("open facebook")
        intent.primary_kind  # IntentKind.OPEN_APP
    """

    def __init__(self, provider: Optional[AIProvider] = None):
        self.provider = provider or gemini_provider
        logger.info("Intent parser initialized")

    async def classify(
        self,
        prompt: str,
        image: Optional[ImagePayload] = None,
        request_id: str = "",
    ) -> ClassifiedIntent:
        """
        Classify a prompt.

        Args:
            prompt: The user's text (may be empty)
            image: Optional encoded image attached to the turn
            request_id: Correlation id for monitoring

        Returns:
            ClassifiedIntent with sentinel values already normalized

        Raises:
            IntentClassificationError: on any transport or parsing failure
        """
        start_time = time.time()
        logger.info(f"Classifying intent: {prompt[:50]}...")

        response = await self.provider.generate_json(
            prompt=prompt,
            system_prompt=INTENT_SYSTEM_PROMPT,
            response_schema=INTENT_RESPONSE_SCHEMA,
            image=image,
        )
        ai_monitor.track_response_from_ai_response(request_id, response, stage="classification")
        logger.debug(f"Classifier response: {response.to_dict()}")

        if not response.success:
            raise IntentClassificationError(f"Classifier call failed: {response.error}")

        content = (response.content or "").strip()
        if not content:
            raise IntentClassificationError("Classifier returned an empty response")

        try:
            data = json.loads(content)
        except json.JSONDecodeError as e:
            raise IntentClassificationError(f"Classifier returned invalid JSON: {e}") from e

        if not isinstance(data, dict):
            raise IntentClassificationError(
                f"Classifier returned {type(data).__name__}, expected a JSON object"
            )

        try:
            intent = ClassifiedIntent.model_validate(data)
        except ValidationError as e:
            raise IntentClassificationError(f"Classifier output violates schema: {e}") from e

        processing_time = (time.time() - start_time) * 1000
        logger.info(f"Classified intent in {processing_time:.0f}ms: {intent.primary_kind.value}")
        return intent


# Singleton instance
intent_parser = IntentParser()
