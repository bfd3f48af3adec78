"""
Prompts Module - Fixed prompt text sent to the hosted model.

Kept in one place so prompt changes are reviewed as content changes.
"""

from nexus.ai.prompts.intent_prompts import (
    INTENT_SYSTEM_PROMPT,
    INTENT_RESPONSE_SCHEMA,
    VIDEO_LOOKUP_PROMPT,
    build_video_lookup_prompt,
)

__all__ = [
    "INTENT_SYSTEM_PROMPT",
    "INTENT_RESPONSE_SCHEMA",
    "VIDEO_LOOKUP_PROMPT",
    "build_video_lookup_prompt",
]
