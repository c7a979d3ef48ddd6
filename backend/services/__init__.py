"""
Services layer for business logic.

This package contains the npc session and the pieces it is built from, plus
the chat host that connects a session to the database and the HTTP layer.
"""

from .chat_host import ChatHost
from .chat_persistence import ChatPersistence
from .message_rewriter import ingest_message
from .npc_command import NpcCommand, NpcCommandArgs
from .npc_session import NpcSession
from .prompt_sync import PromptSync
from .record_store import CategoryStore, RecordStore
from .rules_service import RulesPromptService, render_rules

__all__ = [
    "CategoryStore",
    "ChatHost",
    "ChatPersistence",
    "NpcCommand",
    "NpcCommandArgs",
    "NpcSession",
    "PromptSync",
    "RecordStore",
    "RulesPromptService",
    "ingest_message",
    "render_rules",
]
