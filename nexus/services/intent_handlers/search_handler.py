"""
Search Handler - Web search, direct answers and the catch-all fallback.

- WebSearchHandler: grounded answer with sources, plus a plain Google
  search link that is always attached
- GeneralResponseHandler: the classifier's own answer, plus a Google
  search for what the user actually typed
- FallbackHandler: nothing usable came back; ask the user to rephrase,
  or offer a Google search for their prompt
"""

import logging
from typing import List

from nexus.ai.actions import links
from nexus.ai.intent.schemas import ClassifiedIntent, IntentKind
from nexus.ai.monitoring import ai_monitor
from nexus.ai.schemas.assistant_response import AssistantResponse, ResponseAction, Source
from nexus.services.intent_handlers.base import IntentHandler, HandlerContext
from nexus.services.search_service import search_service


logger = logging.getLogger("nexus.services.intent_handlers.search")


SEARCH_RESULTS_TEXT = "Here are some search results for your query."
NO_DIRECT_ANSWER_TEXT = "I couldn't answer that directly, so here are some Google search results for you."
UNHANDLED_TEXT = "I wasn't sure how to handle that. Here are the Google search results for you."
CLARIFICATION_TEXT = "Sorry, I didn't understand that. Could you please rephrase?"


def google_search_action(query: str) -> ResponseAction:
    return ResponseAction(label=f'Search Google for "{query}"', url=links.google_search_url(query))


class WebSearchHandler(IntentHandler):
    """
    Handler for queries that need live data.

    Makes the turn's single secondary call: a grounded search with the
    intent's query as the prompt.
    """

    @property
    def handler_name(self) -> str:
        return "web_search"

    @property
    def intent_kind(self) -> IntentKind:
        return IntentKind.WEB_SEARCH

    async def handle(self, intent: ClassifiedIntent, context: HandlerContext) -> AssistantResponse:
        self._log_entry(context)
        query = intent.web_search.query
        search = context.get_service("search", lambda: search_service)

        text = ""
        sources: List[Source] = []
        try:
            answer = await search.grounded_search(query, request_id=context.request_id)
            text = answer.text
            sources = answer.sources
        except Exception as e:
            ai_monitor.track_error(context.request_id, str(e), stage="grounded_search")

        response = AssistantResponse.build(
            text=text or SEARCH_RESULTS_TEXT,
            actions=[google_search_action(query)],
            sources=sources,
        )
        self._log_exit(context, response)
        return response


class GeneralResponseHandler(IntentHandler):
    """
    Handler for answers the classifier gave directly.

    A blank answer still selects this branch and degrades to a search link.
    """

    @property
    def handler_name(self) -> str:
        return "general_response"

    @property
    def intent_kind(self) -> IntentKind:
        return IntentKind.GENERAL_RESPONSE

    async def handle(self, intent: ClassifiedIntent, context: HandlerContext) -> AssistantResponse:
        self._log_entry(context)
        answer = intent.general_response or ""

        response = AssistantResponse.build(
            text=answer if answer.strip() else NO_DIRECT_ANSWER_TEXT,
            actions=[google_search_action(context.trimmed_prompt)],
        )
        self._log_exit(context, response)
        return response


class FallbackHandler(IntentHandler):
    """Catch-all for output with no resolvable branch. Always matches."""

    @property
    def handler_name(self) -> str:
        return "fallback"

    @property
    def intent_kind(self) -> IntentKind:
        return IntentKind.UNRECOGNIZED

    def can_handle(self, intent: ClassifiedIntent, context: HandlerContext) -> bool:
        return True

    async def handle(self, intent: ClassifiedIntent, context: HandlerContext) -> AssistantResponse:
        self._log_entry(context)
        logger.warning(
            f"[{context.request_id}] Falling back to web search, no usable branch in: "
            f"{intent.model_dump(by_alias=True, exclude_none=True)}"
        )

        if not context.trimmed_prompt:
            response = AssistantResponse.build(text=CLARIFICATION_TEXT)
        else:
            response = AssistantResponse.build(
                text=UNHANDLED_TEXT,
                actions=[google_search_action(context.trimmed_prompt)],
            )

        self._log_exit(context, response)
        return response
