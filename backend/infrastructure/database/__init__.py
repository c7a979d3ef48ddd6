"""
Database infrastructure package.

Re-exports commonly used database components for convenient imports.
"""

from .connection import (
    Base,
    async_session_maker,
    get_database_type,
    get_db,
    init_db,
    serialized_write,
)
from .models import Chat, ChatMetadataEntry, Message, PersonaNote

__all__ = [
    # Connection
    "Base",
    "async_session_maker",
    "get_database_type",
    "get_db",
    "init_db",
    "serialized_write",
    # Models
    "Chat",
    "ChatMetadataEntry",
    "Message",
    "PersonaNote",
]
