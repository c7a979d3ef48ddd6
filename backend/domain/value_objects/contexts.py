"""
Host collaborator interfaces.

The npc session never talks to storage or rendering directly; it goes through
these small protocols so the same core runs against the in-memory chat state,
the database-backed host or a test double.
"""

from typing import Any, Optional, Protocol

from domain.entities.npc_models import ChatEntry, PersonaNote
from domain.value_objects.enums import PromptPosition, PromptRole


class ChatMessages(Protocol):
    """Indexable message store of the active chat."""

    def get_message(self, position: int) -> Optional[ChatEntry]: ...

    def update_message(self, position: int, text: str) -> None:
        """Replace a message's text, persist it and re-render it."""
        ...

    def send_system_message(self, text: str) -> None: ...


class ChatMetadata(Protocol):
    """Chat-scoped key/value metadata, persisted by the host."""

    def get(self, key: str) -> Any: ...

    def set(self, key: str, value: Any) -> None: ...

    def save_debounced(self) -> None: ...


class PromptSink(Protocol):
    """Accepts extension prompts; a new value replaces the old one under the same key."""

    def set_extension_prompt(
        self,
        key: str,
        text: str,
        position: PromptPosition,
        priority: int,
        scan: bool = False,
        role: PromptRole = PromptRole.SYSTEM,
    ) -> None: ...


class PersonaNotes(Protocol):
    """Notes keyed by persona filename."""

    def get(self, persona: str) -> Optional[PersonaNote]: ...

    def upsert(self, note: PersonaNote) -> None: ...

    def save_debounced(self) -> None: ...
