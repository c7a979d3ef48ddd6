"""
Domain entities - core data models for business logic.
"""

from .npc_models import (
    BlockOutcome,
    CategorySpec,
    ChatEntry,
    ExtensionPrompt,
    IngestResult,
    Parsed,
    ParseOutcome,
    PersonaNote,
    Record,
    Skipped,
    TagBlock,
    UpsertResult,
)

__all__ = [
    # npc_models.py
    "Record",
    "CategorySpec",
    "TagBlock",
    "Parsed",
    "Skipped",
    "ParseOutcome",
    "UpsertResult",
    "BlockOutcome",
    "IngestResult",
    "ChatEntry",
    "ExtensionPrompt",
    "PersonaNote",
]
