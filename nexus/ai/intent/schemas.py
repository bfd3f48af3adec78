"""
Intent Schemas - Pydantic models for the classifier's structured output.

The classifier returns one JSON object with eight optional branches.
The model is asked to populate exactly one, but nullability is only
enforced by instruction, so this module normalizes what comes back:

- Missing values, blank strings and the literal "null" (any case)
  become None in every branch sub-field.
- A branch that is not an object (the string "null", "", a list, a
  number) is treated as absent, as is any non-string sub-field.
- generalResponse keeps a blank string (it still selects the branch)
  and only drops non-strings and "null".

Branch selection order lives in INTENT_PRIORITY; see
ClassifiedIntent.primary_kind.
"""

from enum import Enum
from typing import Any, ClassVar, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator


NULL_SENTINEL = "null"


class IntentKind(str, Enum):
    """
    Branches of the classification schema, plus UNRECOGNIZED.

    Values are the wire names used in the model's JSON output.
    """
    MUSIC = "music"
    YOUTUBE = "youtube"
    CALL = "call"
    WEBSITE = "website"
    MAP = "map"
    OPEN_APP = "openApp"
    WEB_SEARCH = "webSearch"
    GENERAL_RESPONSE = "generalResponse"
    UNRECOGNIZED = "unrecognized"


# First populated branch in this order wins. youtube outranks music and
# openApp outranks website, mirroring the rules in the system instruction.
INTENT_PRIORITY: Tuple[IntentKind, ...] = (
    IntentKind.YOUTUBE,
    IntentKind.MUSIC,
    IntentKind.CALL,
    IntentKind.OPEN_APP,
    IntentKind.WEBSITE,
    IntentKind.MAP,
    IntentKind.WEB_SEARCH,
    IntentKind.GENERAL_RESPONSE,
)


def is_null_sentinel(value: Any) -> bool:
    """True for the literal string "null" in any case."""
    return isinstance(value, str) and value.strip().lower() == NULL_SENTINEL


def normalize_field(value: Any) -> Optional[str]:
    """
    Normalize a branch sub-field.

    Returns None for missing, blank, sentinel or non-string values.
    Numbers are turned into strings (phone numbers sometimes come back
    numeric).
    Otherwise the original string is returned untouched.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        value = str(value)
    if not isinstance(value, str):
        return None
    if not value.strip() or is_null_sentinel(value):
        return None
    return value


# ---------------------------------------------------------------------------
# BRANCHES
# ---------------------------------------------------------------------------

class IntentBranch(BaseModel):
    """Base class for a branch; complete when every required field is set."""

    model_config = ConfigDict(frozen=True, extra="ignore", populate_by_name=True)

    required_fields: ClassVar[Tuple[str, ...]] = ()

    @field_validator("*", mode="before")
    @classmethod
    def normalize_blank_and_sentinel(cls, value: Any) -> Any:
        return normalize_field(value)

    @property
    def is_complete(self) -> bool:
        return all(getattr(self, name) is not None for name in self.required_fields)


class MusicIntent(IntentBranch):
    """Play music on a platform other than YouTube."""
    required_fields: ClassVar[Tuple[str, ...]] = ("platform", "query")

    platform: Optional[str] = Field(default=None, description="Music platform, e.g. Spotify")
    query: Optional[str] = Field(default=None, description="Song and/or artist")


class YouTubeIntent(IntentBranch):
    """Watch a video on YouTube."""
    required_fields: ClassVar[Tuple[str, ...]] = ("query",)

    query: Optional[str] = None


class CallIntent(IntentBranch):
    """Place a phone call."""
    required_fields: ClassVar[Tuple[str, ...]] = ("number",)

    number: Optional[str] = None


class WebsiteIntent(IntentBranch):
    """Open a specific website."""
    required_fields: ClassVar[Tuple[str, ...]] = ("url",)

    url: Optional[str] = None


class MapIntent(IntentBranch):
    """Find a location or directions."""
    required_fields: ClassVar[Tuple[str, ...]] = ("query",)

    query: Optional[str] = None


class OpenAppIntent(IntentBranch):
    """Open a native application."""
    required_fields: ClassVar[Tuple[str, ...]] = ("app_name",)

    app_name: Optional[str] = Field(default=None, alias="appName")


class WebSearchIntent(IntentBranch):
    """Answer that needs live, grounded data."""
    required_fields: ClassVar[Tuple[str, ...]] = ("query",)

    query: Optional[str] = None


# ---------------------------------------------------------------------------
# CLASSIFIED INTENT
# ---------------------------------------------------------------------------

class ClassifiedIntent(BaseModel):
    """
    Parsed output of the intent classifier.

    Example (wire format):
        {"music": null, "youtube": {"query": "lofi beats"}, "call": null, ...}

    Usage:
        intent = ClassifiedIntent.model_validate(json.loads(text))
        intent.primary_kind          # IntentKind.YOUTUBE
        intent.populated_branches()  # [IntentKind.YOUTUBE]
    """

    model_config = ConfigDict(frozen=True, extra="ignore", populate_by_name=True)

    music: Optional[MusicIntent] = None
    youtube: Optional[YouTubeIntent] = None
    call: Optional[CallIntent] = None
    website: Optional[WebsiteIntent] = None
    map: Optional[MapIntent] = None
    open_app: Optional[OpenAppIntent] = Field(default=None, alias="openApp")
    web_search: Optional[WebSearchIntent] = Field(default=None, alias="webSearch")
    general_response: Optional[str] = Field(default=None, alias="generalResponse")

    @field_validator(
        "music", "youtube", "call", "website", "map", "open_app", "web_search",
        mode="before",
    )
    @classmethod
    def drop_sentinel_branch(cls, value: Any) -> Any:
        # Anything other than an object ("", "none", [], 5) is an unpopulated branch
        if not isinstance(value, (dict, IntentBranch)):
            return None
        return value

    @field_validator("general_response", mode="before")
    @classmethod
    def drop_sentinel_response(cls, value: Any) -> Any:
        if not isinstance(value, str) or is_null_sentinel(value):
            return None
        return value

    def branch(self, kind: IntentKind) -> Any:
        """Return the raw value stored for a branch (None when absent)."""
        return {
            IntentKind.MUSIC: self.music,
            IntentKind.YOUTUBE: self.youtube,
            IntentKind.CALL: self.call,
            IntentKind.WEBSITE: self.website,
            IntentKind.MAP: self.map,
            IntentKind.OPEN_APP: self.open_app,
            IntentKind.WEB_SEARCH: self.web_search,
            IntentKind.GENERAL_RESPONSE: self.general_response,
        }.get(kind)

    def is_populated(self, kind: IntentKind) -> bool:
        """
        True when the branch can be resolved.

        For generalResponse any non-None string counts, including a
        blank one; other branches need every required field.
        """
        value = self.branch(kind)
        if value is None:
            return False
        if kind == IntentKind.GENERAL_RESPONSE:
            return True
        return value.is_complete

    def populated_branches(self) -> List[IntentKind]:
        """All resolvable branches, in priority order."""
        return [kind for kind in INTENT_PRIORITY if self.is_populated(kind)]

    @property
    def primary_kind(self) -> IntentKind:
        """The branch that wins under the fixed priority order."""
        populated = self.populated_branches()
        return populated[0] if populated else IntentKind.UNRECOGNIZED
