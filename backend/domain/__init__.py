"""
Domain layer for internal business logic data structures.

This package contains the record models and the pure functions that find,
parse and serialize record blocks.

Structure:
- entities/: Core data models (CategorySpec, TagBlock, parse outcomes, etc.)
- value_objects/: Enums and the host collaborator protocols
- services/: Pure domain logic (block extraction, parsing, serialization)
"""

# Re-export from entities
from .entities import (
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

# Re-export from services
from .services import (
    dump_record,
    extract_blocks,
    normalize_id,
    parse_record,
    replace_blocks,
    serialize_categories,
)

# Re-export from value_objects
from .value_objects import (
    ListScope,
    MessageRole,
    PromptPosition,
    PromptRole,
    SkipReason,
    UpsertStatus,
)

__all__ = [
    # Entities
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
    # Services
    "extract_blocks",
    "replace_blocks",
    "parse_record",
    "normalize_id",
    "dump_record",
    "serialize_categories",
    # Value objects - enums
    "ListScope",
    "MessageRole",
    "PromptPosition",
    "PromptRole",
    "SkipReason",
    "UpsertStatus",
]
