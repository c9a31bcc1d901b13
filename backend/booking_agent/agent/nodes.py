"""
LangGraph agent nodes - the steps that turn one customer message into a reply.
Each node reads the conversation state and returns the fields it updates.
"""

from typing import Any, Callable, Dict, List
from datetime import datetime
import re

from .state import ConversationState, ConversationPhase
from .prompts import (
    AVAILABLE_MESSAGE,
    ALTERNATIVE_MESSAGE,
    OUTSIDE_HOURS_MESSAGE,
    WEEKEND_MESSAGE,
    SEARCH_EXHAUSTED_MESSAGE,
    DECLINED_MESSAGE,
    CONFIRMING_MESSAGE
)
from ..tools.calendar import CalendarSource, load_calendar
from ..tools.date_extractor import DateExtractor, extract_desired_date
from ..tools.errors import SearchExhausted
from ..tools.models import RejectionReason, Resolution, ResolutionKind
from ..tools.resolver import SlotResolver
from ..utils.time_utils import TimeFormat, format_timestamp
from ..utils.logger import logger


AFFIRMATIVE_PATTERN = re.compile(r"\b(yes|yeah|yep|sure|ok|okay|confirm|confirmed|si|sí)\b", re.IGNORECASE)

SPEAKER_LABELS = {
    "user": "Customer",
    "assistant": "Assistant",
}


def is_affirmative(reply: str) -> bool:
    return bool(AFFIRMATIVE_PATTERN.search(reply or ""))


def render_transcript(messages: List[Dict[str, str]]) -> str:
    lines = []
    for message in messages:
        speaker = SPEAKER_LABELS.get(message.get("role"), message.get("role", "unknown").title())
        lines.append(f"{speaker}: {message.get('content', '')}")
    return "\n".join(lines)


def latest_user_message(state: ConversationState) -> str:
    for message in reversed(state.get("messages") or []):
        if message.get("role") == "user":
            return message.get("content", "")
    return ""


def assistant_message(content: str) -> Dict[str, str]:
    return {"role": "assistant", "content": content}


def render_resolution(resolution: Resolution) -> str:
    if resolution.kind is ResolutionKind.AVAILABLE:
        return AVAILABLE_MESSAGE.format(date=TimeFormat.format(resolution.timestamp))
    if resolution.kind is ResolutionKind.ALTERNATIVE:
        return ALTERNATIVE_MESSAGE.format(date=TimeFormat.format(resolution.timestamp))
    if resolution.reason is RejectionReason.WEEKEND:
        return WEEKEND_MESSAGE
    return OUTSIDE_HOURS_MESSAGE


RESOLUTION_PHASES = {
    ResolutionKind.AVAILABLE: ConversationPhase.AVAILABLE,
    ResolutionKind.ALTERNATIVE: ConversationPhase.ALTERNATIVE,
    ResolutionKind.REJECTED: ConversationPhase.REJECTED,
}


class SchedulingNodes:
    """
    Graph nodes bound to their collaborators.

    Calendar loading and date extraction are the only awaits; everything
    after them is the synchronous slot resolution.
    """

    def __init__(
        self,
        resolver: SlotResolver,
        calendar_source: CalendarSource,
        date_extractor: DateExtractor,
        clock: Callable[[], datetime] = datetime.now,
        calendar_timeout: float = 10.0,
        extractor_timeout: float = 20.0
    ):
        self.resolver = resolver
        self.calendar_source = calendar_source
        self.date_extractor = date_extractor
        self.clock = clock
        self.calendar_timeout = calendar_timeout
        self.extractor_timeout = extractor_timeout

    async def load_calendar(self, state: ConversationState) -> Dict[str, Any]:
        logger.info("Node: load_calendar")
        records = await load_calendar(self.calendar_source, self.calendar_timeout)
        busy_intervals = self.resolver.parse_calendar(records)
        return {"busy_intervals": busy_intervals, "now": self.clock()}

    async def extract_desired_time(self, state: ConversationState) -> Dict[str, Any]:
        logger.info("Node: extract_desired_time")
        now = state.get("now") or self.clock()
        transcript = render_transcript(state.get("messages") or [])
        desired = await extract_desired_date(self.date_extractor, transcript, now, self.extractor_timeout)
        logger.info(f"Customer wants {TimeFormat.format(desired)}")
        return {"requested_date": TimeFormat.format(desired)}

    def resolve_slot(self, state: ConversationState) -> Dict[str, Any]:
        logger.info("Node: resolve_slot")
        desired = TimeFormat.parse(state["requested_date"])
        now = state.get("now") or self.clock()

        try:
            resolution = self.resolver.resolve(desired, state.get("busy_intervals") or [], now)
        except SearchExhausted as e:
            logger.warning(f"No alternative found: {e}")
            return {
                "resolution": None,
                "desired_date": None,
                "phase": ConversationPhase.AWAITING_DESIRED_TIME,
                "messages": [assistant_message(SEARCH_EXHAUSTED_MESSAGE)]
            }

        return {"resolution": resolution.model_dump(mode="json")}

    def respond(self, state: ConversationState) -> Dict[str, Any]:
        logger.info("Node: respond")
        resolution = Resolution.model_validate(state["resolution"])
        message = render_resolution(resolution)

        if resolution.is_offer:
            return {
                "phase": RESOLUTION_PHASES[resolution.kind],
                "desired_date": format_timestamp(resolution.timestamp),
                "messages": [assistant_message(message)]
            }

        # A rejected request sends the customer straight back to picking a time.
        return {
            "phase": ConversationPhase.AWAITING_DESIRED_TIME,
            "desired_date": None,
            "messages": [assistant_message(message)]
        }

    def confirm(self, state: ConversationState) -> Dict[str, Any]:
        logger.info(f"Node: confirm ({state['desired_date']})")
        confirmed = TimeFormat.parse(state["desired_date"])
        message = CONFIRMING_MESSAGE.format(
            friendly=TimeFormat.to_friendly(confirmed),
            date=state["desired_date"]
        )
        return {
            "phase": ConversationPhase.CONFIRMING,
            "messages": [assistant_message(message)]
        }

    def decline(self, state: ConversationState) -> Dict[str, Any]:
        logger.info("Node: decline")
        return {
            "phase": ConversationPhase.AWAITING_DESIRED_TIME,
            "desired_date": None,
            "messages": [assistant_message(DECLINED_MESSAGE)]
        }

