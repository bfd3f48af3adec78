"""
Base AI Provider - Abstract interface for LLM providers.

This module defines the contract that providers must follow.
It ensures consistent behavior regardless of which provider is used.

Design Pattern: Strategy Pattern
================================
The base class defines the interface, and each provider implements it.
Services depend on AIProvider, so tests can swap in a mock without
touching the network.

Example:
    provider = GeminiProvider()
    response = await provider.generate_json("open facebook", response_schema=schema)
    print(response.content)
"""

import time
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Optional, Any, Dict
from enum import Enum
import logging

logger = logging.getLogger("nexus.ai")


class ProviderType(str, Enum):
    """Enum of supported AI providers."""
    GEMINI = "gemini"


@dataclass
class ImagePayload:
    """
    An encoded image attached to a user turn.

    Attributes:
        data: Base64-encoded image bytes (no data: URL prefix)
        mime_type: Image MIME type, e.g. "image/png"
    """
    data: str
    mime_type: str


@dataclass
class TokenUsage:
    """
    Token usage statistics for an AI request.

    Used for cost tracking in the AI monitor.
    """
    prompt_tokens: int = 0
    completion_tokens: int = 0
    total_tokens: int = 0

    def __post_init__(self):
        """Calculate total if not provided."""
        if self.total_tokens == 0:
            self.total_tokens = self.prompt_tokens + self.completion_tokens


@dataclass
class AIResponse:
    """
    Standardized response from an AI provider.

    Attributes:
        content: The generated text response
        provider: Which provider generated this response
        model: The specific model used
        usage: Token usage statistics
        latency_ms: How long the request took
        success: Whether the request succeeded
        error: Error message if failed
        raw_response: Original provider response (for debugging)
        metadata: Provider-specific data (grounding sources live here)
        created_at: Timestamp of the response
    """
    content: str
    provider: ProviderType
    model: str
    usage: TokenUsage = field(default_factory=TokenUsage)
    latency_ms: float = 0.0
    success: bool = True
    error: Optional[str] = None
    raw_response: Optional[Any] = None
    metadata: Dict[str, Any] = field(default_factory=dict)
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for logging/serialization."""
        return {
            "content": self.content[:100] + "..." if len(self.content) > 100 else self.content,
            "provider": self.provider.value,
            "model": self.model,
            "tokens": {
                "prompt": self.usage.prompt_tokens,
                "completion": self.usage.completion_tokens,
                "total": self.usage.total_tokens,
            },
            "latency_ms": self.latency_ms,
            "success": self.success,
            "error": self.error,
            "created_at": self.created_at.isoformat(),
        }


class AIProvider(ABC):
    """
    Abstract base class for AI providers.

    Responsibilities:
    - Generate schema-constrained JSON and grounded answers
    - Bound every call with a timeout
    - Capture errors in AIResponse instead of raising
    """

    provider_type: ProviderType

    @abstractmethod
    async def generate_json(
        self,
        prompt: str,
        system_prompt: Optional[str] = None,
        response_schema: Optional[Any] = None,
        image: Optional[ImagePayload] = None,
        **kwargs
    ) -> AIResponse:
        """
        Generate a JSON response constrained to response_schema.

        Used for intent classification. The optional image is sent as an
        extra content part after the prompt text.
        """
        pass

    @abstractmethod
    async def generate_with_grounding(
        self,
        prompt: str,
        system_prompt: Optional[str] = None,
        use_search: bool = True,
        **kwargs
    ) -> AIResponse:
        """
        Generate a response with real-time web retrieval enabled.

        Cited sources are returned in AIResponse.metadata["sources"] as
        a list of {"uri": ..., "title": ...} dicts.
        """
        pass

    def _measure_latency(self, start_time: float) -> float:
        """Calculate latency in milliseconds."""
        return (time.time() - start_time) * 1000

    def _create_error_response(
        self,
        error: str,
        model: str,
        latency_ms: float = 0.0
    ) -> AIResponse:
        """Create a standardized error response."""
        logger.error(f"AI Provider Error [{self.provider_type.value}]: {error}")
        return AIResponse(
            content="",
            provider=self.provider_type,
            model=model,
            latency_ms=latency_ms,
            success=False,
            error=error,
        )
