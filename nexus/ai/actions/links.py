"""
Action Links - Outbound URL formats and the video-reference extractor.

Every URL an AssistantResponse can carry is built here, so the exact
formats stay in one place:

    spotify:search:{query}
    https://www.google.com/search?q={query}
    https://www.google.com/maps/search/?api=1&query={query}
    https://www.youtube.com/watch?v={id}
    https://www.youtube.com/results?search_query={query}
    tel:{number without whitespace}

Query components are percent-encoded the way browsers'
encodeURIComponent does it, so links match what the front end expects.
"""

import re
from typing import Optional
from urllib.parse import quote, urlparse


# Characters encodeURIComponent leaves alone, besides letters, digits and "_.-~"
_URI_COMPONENT_SAFE = "!*'()"

GOOGLE_SEARCH_URL = "https://www.google.com/search?q={query}"
GOOGLE_MAPS_SEARCH_URL = "https://www.google.com/maps/search/?api=1&query={query}"
YOUTUBE_WATCH_URL = "https://www.youtube.com/watch?v={video_id}"
YOUTUBE_SEARCH_URL = "https://www.youtube.com/results?search_query={query}"
SPOTIFY_SEARCH_URI = "spotify:search:{query}"

DEFAULT_WEBSITE_LABEL = "the website"

# Long form (watch?v=), short form (youtu.be/), embed and /v/ forms.
_VIDEO_ID_PATTERN = re.compile(
    r"(?:https?://)?(?:www\.)?"
    r"(?:youtube\.com/(?:[^/\s]+/\S+/|(?:v|e(?:mbed)?)/|\S*?[?&]v=)|youtu\.be/)"
    r"([a-zA-Z0-9_-]{11})"
)
_WHITESPACE = re.compile(r"\s")


def encode_component(value: str) -> str:
    """Percent-encode a URL component like encodeURIComponent."""
    return quote(value, safe=_URI_COMPONENT_SAFE)


def google_search_url(query: str) -> str:
    return GOOGLE_SEARCH_URL.format(query=encode_component(query))


def google_maps_url(query: str) -> str:
    return GOOGLE_MAPS_SEARCH_URL.format(query=encode_component(query))


def spotify_search_uri(query: str) -> str:
    return SPOTIFY_SEARCH_URI.format(query=encode_component(query))


def youtube_watch_url(video_id: str) -> str:
    return YOUTUBE_WATCH_URL.format(video_id=video_id)


def youtube_search_url(query: str) -> str:
    return YOUTUBE_SEARCH_URL.format(query=encode_component(query))


def tel_url(number: str) -> str:
    """tel: link with all whitespace removed from the number."""
    return f"tel:{_WHITESPACE.sub('', number)}"


def ensure_scheme(url: str) -> str:
    """Prefix https:// unless the URL already starts with "http"."""
    url = url.strip()
    if not url.startswith("http"):
        url = f"https://{url}"
    return url


def website_label(url: str) -> str:
    """
    Hostname to show in the confirmation message.

    Falls back to "the website" when the URL has no parseable host
    or the host contains whitespace.
    """
    try:
        hostname = urlparse(url).hostname
    except ValueError:
        return DEFAULT_WEBSITE_LABEL
    if not hostname or _WHITESPACE.search(hostname):
        return DEFAULT_WEBSITE_LABEL
    return hostname


def extract_video_id(text: Optional[str]) -> Optional[str]:
    """
    Extract an 11-character YouTube video id from arbitrary text.

    A longer id-like run yields its first 11 characters.

    Returns None on empty input or when no recognized link is present.
    Never raises.
    """
    if not text or not isinstance(text, str) or not text.strip():
        return None
    match = _VIDEO_ID_PATTERN.search(text)
    return match.group(1) if match else None
