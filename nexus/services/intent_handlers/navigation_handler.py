"""
Navigation Handler - Intents that resolve to a single link, no lookups.

- CallHandler: tel: link
- WebsiteHandler: the URL itself, https:// added when missing
- MapHandler: Google Maps search
- OpenAppHandler: native app scheme from the registry, or a Google
  search for the app when the registry has no entry
"""

import logging

from nexus.ai.actions import links
from nexus.ai.actions.app_schemes import app_scheme_registry, normalize_app_name
from nexus.ai.intent.schemas import ClassifiedIntent, IntentKind
from nexus.ai.schemas.assistant_response import AssistantResponse, ResponseAction
from nexus.services.intent_handlers.base import IntentHandler, HandlerContext


logger = logging.getLogger("nexus.services.intent_handlers.navigation")


class CallHandler(IntentHandler):
    """Handler for phone calls."""

    @property
    def handler_name(self) -> str:
        return "call"

    @property
    def intent_kind(self) -> IntentKind:
        return IntentKind.CALL

    async def handle(self, intent: ClassifiedIntent, context: HandlerContext) -> AssistantResponse:
        self._log_entry(context)
        number = intent.call.number
        response = AssistantResponse.build(
            text=f"Calling {number}.",
            actions=[ResponseAction(label=f"Call {number}", url=links.tel_url(number))],
        )
        self._log_exit(context, response)
        return response


class WebsiteHandler(IntentHandler):
    """Handler for opening a website."""

    @property
    def handler_name(self) -> str:
        return "website"

    @property
    def intent_kind(self) -> IntentKind:
        return IntentKind.WEBSITE

    async def handle(self, intent: ClassifiedIntent, context: HandlerContext) -> AssistantResponse:
        self._log_entry(context)
        url = links.ensure_scheme(intent.website.url)
        hostname = links.website_label(url)
        if hostname == links.DEFAULT_WEBSITE_LABEL:
            logger.warning(f"[{context.request_id}] Could not parse URL for label: {url}")

        response = AssistantResponse.build(
            text=f"Opening {hostname}.",
            actions=[ResponseAction(label=f"Open {hostname}", url=url)],
        )
        self._log_exit(context, response)
        return response


class MapHandler(IntentHandler):
    """Handler for locations and directions."""

    @property
    def handler_name(self) -> str:
        return "map"

    @property
    def intent_kind(self) -> IntentKind:
        return IntentKind.MAP

    async def handle(self, intent: ClassifiedIntent, context: HandlerContext) -> AssistantResponse:
        self._log_entry(context)
        query = intent.map.query
        response = AssistantResponse.build(
            text=f'Finding "{query}" on Google Maps.',
            actions=[ResponseAction(label="Open in Google Maps", url=links.google_maps_url(query))],
        )
        self._log_exit(context, response)
        return response


class OpenAppHandler(IntentHandler):
    """
    Handler for opening native apps.

    Registry hit: the app scheme is the action URL (best-effort launch).
    Registry miss: a Google search for "open {app} app".
    """

    @property
    def handler_name(self) -> str:
        return "open_app"

    @property
    def intent_kind(self) -> IntentKind:
        return IntentKind.OPEN_APP

    async def handle(self, intent: ClassifiedIntent, context: HandlerContext) -> AssistantResponse:
        self._log_entry(context)
        app_name = intent.open_app.app_name
        registry = context.get_service("app_schemes", lambda: app_scheme_registry)
        scheme = registry.lookup(normalize_app_name(app_name))

        if scheme:
            response = AssistantResponse.build(
                text=f"Opening {app_name}...",
                actions=[ResponseAction(label=f"Open {app_name}", url=scheme)],
            )
        else:
            logger.info(f"[{context.request_id}] No URL scheme known for app: {app_name!r}")
            url = links.google_search_url(f"open {app_name} app")
            response = AssistantResponse.build(
                text=f'I can\'t open "{app_name}" directly, but this link might help you find it.',
                actions=[ResponseAction(label=f"Find {app_name}", url=url)],
            )

        self._log_exit(context, response)
        return response
