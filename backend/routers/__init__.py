"""FastAPI routers for modular endpoint organization."""

from . import chats, npc, personas

__all__ = [
    "chats",
    "npc",
    "personas",
]
