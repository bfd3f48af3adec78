"""
Base Intent Handler - Abstract interface for all intent handlers.

Each handler resolves one branch of ClassifiedIntent into an
AssistantResponse. The resolver walks an ordered list of handlers and
uses the first one whose can_handle() returns True.

Design Pattern: Strategy Pattern
================================
The base class defines the interface, and each handler implements it.
The resolver owns the ordering; handlers never look at other branches.

Example:
    handler = CallHandler()
    if handler.can_handle(intent, context):
        response = await handler.handle(intent, context)
"""

import logging
import time
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Optional

from nexus.ai.intent.schemas import ClassifiedIntent, IntentKind
from nexus.ai.schemas.assistant_response import AssistantResponse

logger = logging.getLogger("nexus.services.intent_handlers")


@dataclass
class HandlerContext:
    """
    Per-turn context shared by all handlers.

    Attributes:
        original_prompt: The user's text exactly as submitted
        request_id: Unique identifier for this turn (for logging/tracing)
        start_time: Turn start time for latency tracking

    Usage:
        context = HandlerContext(
            original_prompt="open facebook",
            request_id=str(uuid4()),
            start_time=time.time(),
        )
    """

    original_prompt: str
    request_id: str = ""
    start_time: float = field(default_factory=time.time)

    # Optional service overrides (for testing)
    _service_overrides: Dict[str, Any] = field(default_factory=dict)

    @property
    def trimmed_prompt(self) -> str:
        return self.original_prompt.strip()

    def get_service(self, name: str, default_factory: Optional[Callable[[], Any]] = None) -> Any:
        """
        Get a service with optional override for testing.

        Args:
            name: Service identifier (e.g., 'search')
            default_factory: Callable that returns the default service

        Raises:
            ValueError: If service not found and no default provided
        """
        if name in self._service_overrides:
            return self._service_overrides[name]
        if default_factory is not None:
            return default_factory()
        raise ValueError(f"Service '{name}' not found and no default provided")


class IntentHandler(ABC):
    """
    Abstract base class for intent handlers.

    Responsibilities:
    - Decide whether the intent's branch is resolvable (can_handle)
    - Build the AssistantResponse, including any secondary lookup (handle)
    - Degrade to a search link when a secondary lookup fails

    NOT Responsible For:
    - Classifying text (IntentParser's job)
    - Choosing between branches (IntentResolver's job)
    - HTTP request/response handling (router's job)
    """

    @property
    @abstractmethod
    def handler_name(self) -> str:
        """Unique lowercase identifier, used in logs."""
        pass

    @property
    @abstractmethod
    def intent_kind(self) -> IntentKind:
        """The branch this handler resolves."""
        pass

    def can_handle(self, intent: ClassifiedIntent, context: HandlerContext) -> bool:
        """
        Whether this handler's branch is populated.

        The default checks that every required field of the branch is
        present and not the "null" sentinel.
        """
        return intent.is_populated(self.intent_kind)

    @abstractmethod
    async def handle(self, intent: ClassifiedIntent, context: HandlerContext) -> AssistantResponse:
        """
        Resolve the intent into a response.

        Note:
            Secondary lookups must not raise out of this method;
            their failures degrade to a fallback response.
        """
        pass

    def _log_entry(self, context: HandlerContext) -> None:
        logger.info(
            f"[{context.request_id}] {self.handler_name}.handle() called",
            extra={"handler": self.handler_name},
        )

    def _log_exit(self, context: HandlerContext, response: AssistantResponse) -> None:
        processing_time = (time.time() - context.start_time) * 1000
        logger.info(
            f"[{context.request_id}] {self.handler_name}.handle() completed",
            extra={
                "handler": self.handler_name,
                "has_actions": bool(response.actions),
                "processing_time_ms": processing_time,
            },
        )
