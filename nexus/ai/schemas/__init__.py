"""
Schemas Module - Response models shared with the presentation layer.
"""

from nexus.ai.schemas.assistant_response import AssistantResponse, ResponseAction, Source

__all__ = [
    "AssistantResponse",
    "ResponseAction",
    "Source",
]
