from langgraph.graph import StateGraph, END
from typing import Callable, Dict, Literal, Optional
from datetime import datetime
import asyncio
import traceback

from .state import ConversationState, ConversationPhase, OFFER_PHASES
from .nodes import SchedulingNodes, assistant_message, is_affirmative, latest_user_message
from .prompts import APOLOGY_MESSAGE, FALLBACK_MESSAGE
from .store import InMemoryConversationStore
from ..tools.calendar import CalendarSource, HttpCalendarSource, StaticCalendarSource
from ..tools.date_extractor import DateExtractor, GeminiDateExtractor
from ..tools.resolver import ResolverConfig, SlotResolver
from ..tools.timezone import TimezoneManager
from ..utils.config import Settings
from ..utils.logger import logger


TRANSIENT_FIELDS = ("busy_intervals", "requested_date", "resolution", "now")


def route_inbound(state: ConversationState) -> Literal["load_calendar", "confirm", "decline"]:
    if state.get("phase") in OFFER_PHASES and state.get("desired_date"):
        if is_affirmative(latest_user_message(state)):
            logger.info("Routing: inbound -> confirm")
            return "confirm"
        logger.info("Routing: inbound -> decline")
        return "decline"

    logger.info("Routing: inbound -> load_calendar")
    return "load_calendar"


def after_resolution(state: ConversationState) -> Literal["respond", END]:
    if state.get("resolution"):
        logger.info("Routing: resolve_slot -> respond")
        return "respond"

    logger.info("Routing: resolve_slot -> END")
    return END


def create_scheduling_graph(nodes: SchedulingNodes):
    workflow = StateGraph(ConversationState)

    workflow.add_node("load_calendar", nodes.load_calendar)
    workflow.add_node("extract_desired_time", nodes.extract_desired_time)
    workflow.add_node("resolve_slot", nodes.resolve_slot)
    workflow.add_node("respond", nodes.respond)
    workflow.add_node("confirm", nodes.confirm)
    workflow.add_node("decline", nodes.decline)

    workflow.set_conditional_entry_point(
        route_inbound,
        {
            "load_calendar": "load_calendar",
            "confirm": "confirm",
            "decline": "decline"
        }
    )

    workflow.add_edge("load_calendar", "extract_desired_time")
    workflow.add_edge("extract_desired_time", "resolve_slot")

    workflow.add_conditional_edges(
        "resolve_slot",
        after_resolution,
        {
            "respond": "respond",
            END: END
        }
    )

    workflow.add_edge("respond", END)
    workflow.add_edge("confirm", END)
    workflow.add_edge("decline", END)

    app = workflow.compile()
    logger.info("Compiled scheduling agent workflow")
    return app


class SchedulingAgent:
    """
    Runs one customer message through the graph and persists the outcome.

    This is the orchestration boundary: any failure inside the graph is
    logged and answered with a generic apology, never a raw error.
    Messages for the same conversation are handled one at a time.
    """

    def __init__(
        self,
        resolver: SlotResolver,
        calendar_source: CalendarSource,
        date_extractor: DateExtractor,
        store: Optional[InMemoryConversationStore] = None,
        clock: Callable[[], datetime] = datetime.now,
        calendar_timeout: float = 10.0,
        extractor_timeout: float = 20.0
    ):
        self.store = store or InMemoryConversationStore()
        self._locks: Dict[str, asyncio.Lock] = {}
        self.nodes = SchedulingNodes(
            resolver=resolver,
            calendar_source=calendar_source,
            date_extractor=date_extractor,
            clock=clock,
            calendar_timeout=calendar_timeout,
            extractor_timeout=extractor_timeout
        )
        self.graph = create_scheduling_graph(self.nodes)

    async def run(self, conversation_id: str, user_message: str) -> str:
        async with self._locks.setdefault(conversation_id, asyncio.Lock()):
            return await self._run(conversation_id, user_message)

    async def _run(self, conversation_id: str, user_message: str) -> str:
        state = self.store.get_or_create(conversation_id)
        state["messages"] = state["messages"] + [{"role": "user", "content": user_message}]

        try:
            result = await self.graph.ainvoke(state)
        except Exception as e:
            logger.error(f"Error handling message for conversation {conversation_id}: {e}")
            logger.error(traceback.format_exc())
            result = dict(state)
            result["messages"] = state["messages"] + [assistant_message(APOLOGY_MESSAGE)]
            result["phase"] = ConversationPhase.AWAITING_DESIRED_TIME
            result["desired_date"] = None

        for field in TRANSIENT_FIELDS:
            result[field] = None
        self.store.save(result)

        for msg in reversed(result["messages"]):
            if msg["role"] == "assistant":
                return msg["content"]

        return FALLBACK_MESSAGE


def build_default_agent(settings: Settings) -> SchedulingAgent:
    resolver = SlotResolver(ResolverConfig.from_settings(settings))

    if settings.calendar_url:
        calendar_source = HttpCalendarSource(settings.calendar_url, timeout=settings.calendar_timeout_seconds)
    else:
        logger.warning("CALENDAR_URL is not set; treating the calendar as empty")
        calendar_source = StaticCalendarSource([])

    return SchedulingAgent(
        resolver=resolver,
        calendar_source=calendar_source,
        date_extractor=GeminiDateExtractor(api_key=settings.gemini_api_key, model=settings.gemini_model),
        clock=TimezoneManager.business_clock(settings.business_timezone),
        calendar_timeout=settings.calendar_timeout_seconds,
        extractor_timeout=settings.extractor_timeout_seconds
    )
