"""
App Scheme Registry - Native URL schemes for common applications.

Maps a normalized application name ("instagram", "google maps") to the
URL scheme that opens the native app ("instagram://"). Opening an app
this way is best-effort: the resolver always offers the scheme as an
action and leaves it to the client whether anything launches.

Usage:
======
```python
from nexus.ai.actions.app_schemes import app_scheme_registry, normalize_app_name

scheme = app_scheme_registry.lookup(normalize_app_name("  Instagram "))
# "instagram://"
```

Lookups are exact on the normalized key. Adding an app is a content
change: register another AppScheme below.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Optional, Set


logger = logging.getLogger("nexus.ai.actions.app_schemes")


# ---------------------------------------------------------------------------
# APP CATEGORIES
# ---------------------------------------------------------------------------

class AppCategory(str, Enum):
    """Categories used to organize the registry."""
    SOCIAL = "social"
    MEDIA = "media"
    NAVIGATION = "navigation"
    PRODUCTIVITY = "productivity"
    SHOPPING = "shopping"
    FINANCE = "finance"
    OTHER = "other"


@dataclass
class AppScheme:
    """
    A native application and the scheme that opens it.

    Attributes:
        name: Canonical normalized name (lowercase, trimmed)
        scheme: URL scheme, e.g. "fb://"
        category: Registry category
        aliases: Other normalized names for the same app
    """
    name: str
    scheme: str
    category: AppCategory
    aliases: Set[str] = field(default_factory=set)


def normalize_app_name(app_name: str) -> str:
    """Lowercase and trim an app name as spoken by the user."""
    return app_name.strip().lower()


# ---------------------------------------------------------------------------
# REGISTRY
# ---------------------------------------------------------------------------

class AppSchemeRegistry:
    """
    Read-only mapping from normalized app names to URL schemes.

    Built once at import time; nothing mutates it afterwards, so it is
    safe to share across concurrent turns.
    """

    def __init__(self):
        self._apps: Dict[str, AppScheme] = {}
        self._index: Dict[str, AppScheme] = {}
        self._register_builtin_apps()
        logger.info(f"App scheme registry initialized with {len(self._apps)} apps")

    def register(self, app: AppScheme) -> None:
        """Register an app under its name and every alias."""
        self._apps[app.name] = app
        self._index[app.name] = app
        for alias in app.aliases:
            self._index[alias] = app

    def lookup(self, normalized_name: str) -> Optional[str]:
        """
        Get the URL scheme for a normalized app name.

        Returns:
            The scheme, or None when the app is unknown
        """
        app = self._index.get(normalized_name)
        return app.scheme if app else None

    def _register_builtin_apps(self) -> None:
        # -------------------------------------------------------------------
        # SOCIAL & COMMUNICATION
        # -------------------------------------------------------------------
        social = AppCategory.SOCIAL
        self.register(AppScheme("instagram", "instagram://", social))
        self.register(AppScheme("facebook", "fb://", social))
        self.register(AppScheme("twitter", "twitter://", social, aliases={"x"}))
        self.register(AppScheme("whatsapp", "whatsapp://", social))
        self.register(AppScheme("snapchat", "snapchat://", social))
        self.register(AppScheme("tiktok", "tiktok://", social))
        self.register(AppScheme("linkedin", "linkedin://", social))
        self.register(AppScheme("pinterest", "pinterest://", social))
        self.register(AppScheme("slack", "slack://", social))
        self.register(AppScheme("discord", "discord://", social))
        self.register(AppScheme("telegram", "tg://", social))
        self.register(AppScheme("zoom", "zoomus://", social))
        self.register(AppScheme("reddit", "reddit://", social))

        # -------------------------------------------------------------------
        # MUSIC, VIDEO & ENTERTAINMENT
        # -------------------------------------------------------------------
        media = AppCategory.MEDIA
        self.register(AppScheme("spotify", "spotify:", media))
        self.register(AppScheme("youtube", "youtube://", media))
        self.register(AppScheme("netflix", "nflx://", media))
        self.register(AppScheme("soundcloud", "soundcloud://", media))
        self.register(AppScheme("pandora", "pandora://", media))
        self.register(AppScheme("apple music", "music://", media))

        # -------------------------------------------------------------------
        # NAVIGATION & TRAVEL
        # -------------------------------------------------------------------
        navigation = AppCategory.NAVIGATION
        self.register(AppScheme("google maps", "googlemaps://", navigation, aliases={"maps"}))
        self.register(AppScheme("waze", "waze://", navigation))
        self.register(AppScheme("uber", "uber://", navigation))
        self.register(AppScheme("lyft", "lyft://", navigation))
        self.register(AppScheme("airbnb", "airbnb://", navigation))

        # -------------------------------------------------------------------
        # PRODUCTIVITY (Google suite and others)
        # -------------------------------------------------------------------
        productivity = AppCategory.PRODUCTIVITY
        self.register(AppScheme("gmail", "googlegmail://", productivity))
        self.register(AppScheme("google drive", "googledrive://", productivity, aliases={"drive"}))
        self.register(AppScheme("google photos", "googlephotos://", productivity, aliases={"photos"}))
        self.register(AppScheme("google calendar", "googlecalendar://", productivity, aliases={"calendar"}))
        self.register(AppScheme("google docs", "googledocs://", productivity, aliases={"docs"}))
        self.register(AppScheme("google sheets", "googlesheets://", productivity, aliases={"sheets"}))
        self.register(AppScheme("google slides", "googleslides://", productivity, aliases={"slides"}))
        self.register(AppScheme("evernote", "evernote://", productivity))
        self.register(AppScheme("trello", "trello://", productivity))
        self.register(AppScheme("asana", "asana://", productivity))
        self.register(AppScheme("outlook", "ms-outlook://", productivity))
        self.register(AppScheme("microsoft teams", "msteams://", productivity, aliases={"teams"}))
        self.register(AppScheme("dropbox", "dbx-dropbox://", productivity))

        # -------------------------------------------------------------------
        # SHOPPING & FOOD
        # -------------------------------------------------------------------
        shopping = AppCategory.SHOPPING
        self.register(AppScheme("amazon", "amazon://", shopping))
        self.register(AppScheme("ebay", "ebay://", shopping))
        self.register(AppScheme("etsy", "etsy://", shopping))
        self.register(AppScheme("walmart", "walmart://", shopping))
        self.register(AppScheme("doordash", "doordash://", shopping))
        self.register(AppScheme("grubhub", "grubhub://", shopping))
        self.register(AppScheme("uber eats", "ubereats://", shopping))

        # -------------------------------------------------------------------
        # FINANCE
        # -------------------------------------------------------------------
        finance = AppCategory.FINANCE
        self.register(AppScheme("paypal", "paypal://", finance))
        self.register(AppScheme("venmo", "venmo://", finance))
        self.register(AppScheme("cash app", "cashapp://", finance))

        # -------------------------------------------------------------------
        # OTHER
        # -------------------------------------------------------------------
        self.register(AppScheme("duolingo", "duolingo://", AppCategory.OTHER))


# ---------------------------------------------------------------------------
# SINGLETON INSTANCE
# ---------------------------------------------------------------------------

app_scheme_registry = AppSchemeRegistry()
