"""
Domain enums for type-safe constants.
"""

from enum import Enum


class MessageRole(str, Enum):
    """Message role in chat conversations."""

    USER = "user"  # Human user message
    ASSISTANT = "assistant"  # AI response, scanned for record blocks
    SYSTEM = "system"  # Host/system notices (command output)

    def __str__(self) -> str:
        return self.value


class UpsertStatus(str, Enum):
    """Outcome of merging a record into a category store."""

    ADDED = "added"
    UPDATED = "updated"

    def __str__(self) -> str:
        return self.value


class SkipReason(str, Enum):
    """Why a tagged block did not produce a record."""

    PARSE_ERROR = "parse_error"  # YAML could not be parsed
    NOT_A_MAPPING = "not_a_mapping"  # Parsed, but not a key-value document
    MISSING_ID = "missing_id"  # No usable id field

    def __str__(self) -> str:
        return self.value


class ListScope(str, Enum):
    """Values accepted by the npc command's list option."""

    ALL = "all"
    LOCATION = "location"
    CHARACTER = "character"
    CLEAR = "clear"

    def __str__(self) -> str:
        return self.value


class PromptPosition(str, Enum):
    """Where an extension prompt is placed relative to the main prompt."""

    BEFORE_PROMPT = "before_prompt"
    IN_PROMPT = "in_prompt"
    IN_CHAT = "in_chat"

    def __str__(self) -> str:
        return self.value


class PromptRole(str, Enum):
    """Role an extension prompt is injected as."""

    SYSTEM = "system"
    USER = "user"
    ASSISTANT = "assistant"

    def __str__(self) -> str:
        return self.value
