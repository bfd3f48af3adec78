"""
Assistant Router - API endpoint for chat turns.

This router only handles HTTP concerns. All business logic lives in
AssistantService.

Architecture:
=============
```
┌─────────────────┐
│ "play lofi on   │
│  youtube"       │
└────────┬────────┘
         │
         ▼
┌─────────────────┐
│ Assistant Router│  ← HTTP handling only (this file)
└────────┬────────┘
         │
         ▼
┌─────────────────┐
│AssistantService │  ← classify, then resolve
└────────┬────────┘
         │
   ┌─────┴─────┐
   ▼           ▼
┌───────┐  ┌────────┐
│Gemini │  │Handlers│
└───────┘  └────────┘
```
"""

import logging
import uuid
from typing import Any, Dict, List, Optional

from fastapi import APIRouter
from pydantic import BaseModel, Field, model_validator

from nexus.ai.monitoring import ai_monitor
from nexus.ai.providers import ImagePayload
from nexus.ai.schemas.assistant_response import ResponseAction, Source
from nexus.services.assistant_service import assistant_service


# ---------------------------------------------------------------------------
# LOGGER SETUP
# ---------------------------------------------------------------------------
logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# ROUTER SETUP
# ---------------------------------------------------------------------------
router = APIRouter(prefix="/assistant", tags=["assistant"])

IMAGE_ONLY_PROMPT = "Describe this image."


# ---------------------------------------------------------------------------
# REQUEST/RESPONSE SCHEMAS
# ---------------------------------------------------------------------------

class ImageAttachment(BaseModel):
    """An image attached to the turn, already base64-encoded by the client."""
    data: str = Field(min_length=1, description="Base64 image bytes without the data: URL prefix")
    mime_type: str = Field(pattern=r"^image/[\w.+-]+$", description="e.g. image/png")


class AssistantRequest(BaseModel):
    """
    Request schema for the /assistant endpoint.

    Example:
    {
        "text": "call mom at 555-123-4567"
    }
    """
    text: str = Field(default="", max_length=2000, description="The user's message")
    image: Optional[ImageAttachment] = Field(default=None, description="Optional attached image")

    @model_validator(mode="after")
    def require_text_or_image(self) -> "AssistantRequest":
        if not self.text.strip() and self.image is None:
            raise ValueError("Either text or an image is required")
        return self

    @property
    def prompt(self) -> str:
        """Text sent to the classifier; image-only turns get a default prompt."""
        if self.image is not None and not self.text.strip():
            return IMAGE_ONLY_PROMPT
        return self.text


class AssistantReply(BaseModel):
    """
    Response schema for the /assistant endpoint.

    Example:
    {
        "text": "Opening facebook...",
        "actions": [{"label": "Open facebook", "url": "fb://"}],
        "sources": null,
        "video_reference": null,
        "primary_action": {"label": "Open facebook", "url": "fb://"},
        "request_id": "..."
    }
    """
    text: str
    actions: Optional[List[ResponseAction]] = None
    sources: Optional[List[Source]] = None
    video_reference: Optional[str] = None
    primary_action: Optional[ResponseAction] = Field(
        default=None,
        description="Action the client may open automatically; never set when a video is embedded",
    )
    request_id: str


class AIStatsResponse(BaseModel):
    """Response schema for /assistant/stats endpoint."""
    total_requests: int
    successful_requests: int
    failed_requests: int
    success_rate: str
    total_tokens: int
    prompt_tokens: int
    completion_tokens: int
    avg_latency_ms: float
    estimated_total_cost: str
    requests_by_stage: Dict[str, int]
    intents_by_kind: Dict[str, int]


# ---------------------------------------------------------------------------
# ENDPOINTS
# ---------------------------------------------------------------------------

@router.post("", response_model=AssistantReply)
async def ask_assistant(request: AssistantRequest) -> Any:
    """
    Process one chat turn.

    The reply is always a 200 with a plain-sentence message; model and
    lookup failures are reported in the text, never as HTTP errors.

    **Examples:**
    - "play never gonna give you up on youtube"
    - "call mom at 555-123-4567"
    - "open facebook"
    - "who won the last super bowl?"
    """
    request_id = str(uuid.uuid4())
    image = None
    if request.image is not None:
        image = ImagePayload(data=request.image.data, mime_type=request.image.mime_type)

    response = await assistant_service.process(
        text=request.prompt,
        image=image,
        request_id=request_id,
    )
    return AssistantReply(**response.model_dump(), request_id=request_id)


@router.get("/stats", response_model=AIStatsResponse)
async def get_ai_stats():
    """
    Get AI usage statistics.

    Aggregated since process start: model calls per stage, success rate,
    token usage, estimated cost and resolved intents per branch.
    """
    return AIStatsResponse(**ai_monitor.get_stats().to_dict())
