"""
Intent Prompts - System instruction and response schema for classification.

The classifier makes a single call: the user's prompt (and optional image)
plus INTENT_SYSTEM_PROMPT, with the output constrained to
INTENT_RESPONSE_SCHEMA. The schema has eight mutually exclusive branches;
the model is told to populate exactly one and set the rest to null, but
that is only enforced by instruction. The resolver re-checks every field.
"""

from google.genai import types

# ---------------------------------------------------------------------------
# INTENT SYSTEM PROMPT
# ---------------------------------------------------------------------------
# Reproduced verbatim: classification quality depends on the exact wording.

INTENT_SYSTEM_PROMPT = """You are a powerful and helpful multipurpose assistant.
Analyze the user's prompt and determine their primary intent. Your response must be in JSON format conforming to the provided schema.
Based on the intent, populate ONLY ONE of the fields in the JSON. All other fields must be null.

IMPORTANT RULE: If a user asks to play something and mentions 'YouTube', you MUST use the 'youtube' intent.
IMPORTANT RULE: When a user's request could be both an app and a website (e.g., "open facebook"), you MUST prioritize the 'openApp' intent.

Here are the intents:
- youtube: User wants to watch a video on YouTube. Prioritize this if 'youtube' is mentioned in a media request.
- music: User wants to play music on a platform OTHER THAN YouTube.
- openApp: User wants to open a native application on their device. Prioritize this over 'website' for ambiguous names.
- website: User wants to open a specific website. Use for clear domain names (e.g., 'espn.com').
- call: User wants to make a phone call.
- map: User wants to find a location or directions.
- webSearch: Use this for any question that requires up-to-date, real-time, or factual information (e.g., "Who won the last Super Bowl?", "What is the capital of France?", "What is the weather like?"). Also use for explicit search commands like "google...".
- generalResponse: Use this to answer general knowledge questions that do not require real-time data (e.g., "Why is the sky blue?", "Tell me a joke"). It is also used for simple greetings, conversation, or when analyzing an attached image."""


# ---------------------------------------------------------------------------
# RESPONSE SCHEMA
# ---------------------------------------------------------------------------

def _string(description: str) -> types.Schema:
    return types.Schema(type=types.Type.STRING, description=description)


def _branch(**properties: types.Schema) -> types.Schema:
    return types.Schema(type=types.Type.OBJECT, properties=properties, nullable=True)


INTENT_RESPONSE_SCHEMA = types.Schema(
    type=types.Type.OBJECT,
    properties={
        "music": _branch(
            platform=_string("The music platform, e.g., Spotify, Apple Music."),
            query=_string("The song and/or artist to search for"),
        ),
        "youtube": _branch(
            query=_string("The video to search for on YouTube"),
        ),
        "call": _branch(
            number=_string("The phone number to call"),
        ),
        "website": _branch(
            url=_string("The full URL of the website to open, ensuring it starts with http:// or https://"),
        ),
        "map": _branch(
            query=_string("The location or directions to search on Google Maps"),
        ),
        "openApp": _branch(
            appName=_string("The name of the application to open, e.g., 'Instagram', 'Calculator', 'WhatsApp'."),
        ),
        "webSearch": _branch(
            query=_string("The user's original query for a web search"),
        ),
        "generalResponse": types.Schema(
            type=types.Type.STRING,
            nullable=True,
            description=(
                "A direct answer for general conversation, a question that doesn't need "
                "a web search, or if the intent is unclear."
            ),
        ),
    },
)


# ---------------------------------------------------------------------------
# SECONDARY VIDEO LOOKUP
# ---------------------------------------------------------------------------

VIDEO_LOOKUP_PROMPT = (
    'Search for a YouTube video about "{query}". Return ONLY the full raw URL of the top '
    'video result, like "https://www.youtube.com/watch?v=...". Do not add any other text.'
)


def build_video_lookup_prompt(query: str) -> str:
    """Prompt asking the grounded model for a single raw video URL."""
    return VIDEO_LOOKUP_PROMPT.format(query=query)
