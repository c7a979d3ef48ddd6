"""
Host collaborators for the npc session.

Re-exports the in-memory chat state and the debounced saver.
"""

from .chat_state import ChatState, PersonaNoteBook
from .debounce import DebouncedSaver

__all__ = [
    "ChatState",
    "DebouncedSaver",
    "PersonaNoteBook",
]
