"""
Assistant Response Schemas - The contract between the resolver and the UI.

One AssistantResponse is built per user turn and never modified after
it is returned:

```json
{
  "text": "Calling 555-123-4567.",
  "actions": [{"label": "Call 555-123-4567", "url": "tel:555-123-4567"}],
  "sources": null,
  "video_reference": null,
  "primary_action": {"label": "Call 555-123-4567", "url": "tel:555-123-4567"}
}
```

The front end renders every action as a button and may auto-open
primary_action. Responses that embed a video have no primary action.
"""

from typing import Any, Optional, Sequence, Tuple

from pydantic import BaseModel, ConfigDict, Field, computed_field, model_validator


class ResponseAction(BaseModel):
    """A labeled URL offered to the user as a next step."""

    model_config = ConfigDict(frozen=True)

    label: str = Field(description="Button text, e.g. 'Open in Google Maps'")
    url: str = Field(description="URL or app scheme to open")


class Source(BaseModel):
    """
    A web page cited by a grounded search answer.

    The title falls back to the URI when the model omits it.
    """

    model_config = ConfigDict(frozen=True)

    uri: str
    title: str = ""

    @model_validator(mode="before")
    @classmethod
    def default_title_to_uri(cls, data: Any) -> Any:
        if isinstance(data, dict):
            title = data.get("title")
            if not title or not str(title).strip():
                data = {**data, "title": data.get("uri")}
        return data


class AssistantResponse(BaseModel):
    """
    Reply for a single user turn.

    Attributes:
        text: Message shown (and spoken) to the user
        actions: Suggested actions, None when there are none
        sources: Citations for grounded answers, None otherwise
        video_reference: 11-character YouTube id to embed, if any
    """

    model_config = ConfigDict(frozen=True)

    text: str
    actions: Optional[Tuple[ResponseAction, ...]] = None
    sources: Optional[Tuple[Source, ...]] = None
    video_reference: Optional[str] = None

    @computed_field
    @property
    def primary_action(self) -> Optional[ResponseAction]:
        """First action, unless the reply embeds a video."""
        if self.video_reference or not self.actions:
            return None
        return self.actions[0]

    @classmethod
    def build(
        cls,
        text: str,
        actions: Optional[Sequence[ResponseAction]] = None,
        sources: Optional[Sequence[Source]] = None,
        video_reference: Optional[str] = None,
    ) -> "AssistantResponse":
        """Build a response, collapsing empty action/source lists to None."""
        return cls(
            text=text,
            actions=tuple(actions) if actions else None,
            sources=tuple(sources) if sources else None,
            video_reference=video_reference,
        )
