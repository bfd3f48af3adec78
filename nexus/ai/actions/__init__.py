"""
Actions Module - Where resolved intents turn into URLs.

- app_schemes: native app URL schemes, looked up by normalized name
- links: outbound URL builders and the YouTube video-id extractor
"""

from nexus.ai.actions.app_schemes import (
    AppCategory,
    AppScheme,
    AppSchemeRegistry,
    app_scheme_registry,
    normalize_app_name,
)
from nexus.ai.actions.links import extract_video_id

__all__ = [
    "AppCategory",
    "AppScheme",
    "AppSchemeRegistry",
    "app_scheme_registry",
    "normalize_app_name",
    "extract_video_id",
]
