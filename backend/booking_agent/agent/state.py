from typing import TypedDict, Optional, List, Dict, Any, Annotated
from datetime import datetime
from enum import Enum
import operator

from ..tools.models import BusyInterval


class ConversationPhase(str, Enum):
    AWAITING_DESIRED_TIME = "awaiting_desired_time"
    AVAILABLE = "available"
    ALTERNATIVE = "alternative"
    REJECTED = "rejected"
    CONFIRMING = "confirming"


OFFER_PHASES = (ConversationPhase.AVAILABLE, ConversationPhase.ALTERNATIVE)


class ConversationState(TypedDict):
    messages: Annotated[List[Dict[str, str]], operator.add]
    conversation_id: str
    phase: ConversationPhase
    desired_date: Optional[str]
    requested_date: Optional[str]
    busy_intervals: Optional[List[BusyInterval]]
    resolution: Optional[Dict[str, Any]]
    now: Optional[datetime]


def create_initial_state(conversation_id: str) -> ConversationState:
    return ConversationState(
        messages=[],
        conversation_id=conversation_id,
        phase=ConversationPhase.AWAITING_DESIRED_TIME,
        desired_date=None,
        requested_date=None,
        busy_intervals=None,
        resolution=None,
        now=None
    )
