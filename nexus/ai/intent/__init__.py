"""
Intent Module - Classification of a user turn.

Example Flow:
============
User says: "call mom at 555-123-4567"

IntentParser.classify() returns:
    ClassifiedIntent(call=CallIntent(number="555-123-4567"))

The resolver (nexus.services.intent_resolver) then turns it into an
AssistantResponse with a tel: action.
"""

from nexus.ai.intent.schemas import (
    INTENT_PRIORITY,
    CallIntent,
    ClassifiedIntent,
    IntentKind,
    MapIntent,
    MusicIntent,
    OpenAppIntent,
    WebSearchIntent,
    WebsiteIntent,
    YouTubeIntent,
)
from nexus.ai.intent.parser import IntentClassificationError, IntentParser, intent_parser

__all__ = [
    "INTENT_PRIORITY",
    "CallIntent",
    "ClassifiedIntent",
    "IntentKind",
    "MapIntent",
    "MusicIntent",
    "OpenAppIntent",
    "WebSearchIntent",
    "WebsiteIntent",
    "YouTubeIntent",
    "IntentClassificationError",
    "IntentParser",
    "intent_parser",
]
