"""LangGraph booking dialog."""

from .graph import SchedulingAgent, build_default_agent, create_scheduling_graph
from .state import ConversationState, ConversationPhase, create_initial_state
from .store import InMemoryConversationStore

__all__ = [
    "SchedulingAgent",
    "build_default_agent",
    "create_scheduling_graph",
    "ConversationState",
    "ConversationPhase",
    "create_initial_state",
    "InMemoryConversationStore"
]
