from typing import Dict, Optional
import copy

from .state import ConversationState, create_initial_state
from ..utils.logger import logger


class InMemoryConversationStore:
    """Conversation history and dialog state keyed by conversation id."""

    def __init__(self):
        self._states: Dict[str, ConversationState] = {}

    def get(self, conversation_id: str) -> Optional[ConversationState]:
        state = self._states.get(conversation_id)
        return copy.deepcopy(state) if state is not None else None

    def get_or_create(self, conversation_id: str) -> ConversationState:
        state = self.get(conversation_id)
        if state is None:
            logger.info(f"Starting conversation {conversation_id}")
            state = create_initial_state(conversation_id)
        return state

    def save(self, state: ConversationState) -> None:
        self._states[state["conversation_id"]] = copy.deepcopy(state)

    def delete(self, conversation_id: str) -> bool:
        return self._states.pop(conversation_id, None) is not None
