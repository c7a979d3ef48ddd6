"""
Domain value objects - immutable types and enums.

Note: The host collaborator protocols live in contexts.py and reference the
entities package; import them directly from there to avoid circular imports.
"""

from .enums import (
    ListScope,
    MessageRole,
    PromptPosition,
    PromptRole,
    SkipReason,
    UpsertStatus,
)

__all__ = [
    # enums.py
    "ListScope",
    "MessageRole",
    "PromptPosition",
    "PromptRole",
    "SkipReason",
    "UpsertStatus",
]
