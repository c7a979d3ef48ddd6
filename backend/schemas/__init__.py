"""
Pydantic schemas for API request/response models.

This package organizes schemas by resource type:
- chats.py: Chat, message and prompt schemas
- npc.py: npc command and record listing schemas
- personas.py: Persona note schemas
"""

from schemas.chats import (
    Chat,
    ChatBase,
    ChatCreate,
    ExtensionPrompt,
    GenerationResponse,
    Message,
    MessageCreate,
    MessageReceived,
)
from schemas.npc import NpcCommandRequest, NpcCommandResponse, RecordsResponse
from schemas.personas import PersonaNote, PersonaNoteUpdate

__all__ = [
    # Chats
    "Chat",
    "ChatBase",
    "ChatCreate",
    "ExtensionPrompt",
    "GenerationResponse",
    "Message",
    "MessageCreate",
    "MessageReceived",
    # NPC
    "NpcCommandRequest",
    "NpcCommandResponse",
    "RecordsResponse",
    # Personas
    "PersonaNote",
    "PersonaNoteUpdate",
]
