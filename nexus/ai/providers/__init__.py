"""
AI Providers Module - Client for the hosted LLM.

The assistant talks to Google Gemini only. Callers depend on the
AIProvider interface so the provider can be replaced with a mock in tests:
    response = await provider.generate_json(prompt, system_prompt=..., response_schema=...)
"""

from nexus.ai.providers.base import AIProvider, AIResponse, ImagePayload, ProviderType, TokenUsage
from nexus.ai.providers.gemini import GeminiProvider, gemini_provider

__all__ = [
    "AIProvider",
    "AIResponse",
    "ImagePayload",
    "ProviderType",
    "TokenUsage",
    "GeminiProvider",
    "gemini_provider",
]
