"""
CRUD operations module.

This module provides database operations organized by domain aggregate.
All CRUD functions are exported at the package level.
"""

# Chat operations
from .chats import create_chat, get_chat, get_chats

# Message operations
from .messages import create_message, get_messages, update_message_content

# Metadata operations
from .metadata import get_chat_metadata, set_chat_metadata

# Persona note operations
from .persona_notes import get_persona_note, get_persona_notes, upsert_persona_note

__all__ = [
    # Chats
    "create_chat",
    "get_chat",
    "get_chats",
    # Messages
    "create_message",
    "get_messages",
    "update_message_content",
    # Metadata
    "get_chat_metadata",
    "set_chat_metadata",
    # Persona notes
    "get_persona_note",
    "get_persona_notes",
    "upsert_persona_note",
]
