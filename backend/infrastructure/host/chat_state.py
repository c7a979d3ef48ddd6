"""
In-memory host state for the active chat.

ChatState implements the ChatMessages, ChatMetadata and PromptSink protocols;
PersonaNoteBook implements PersonaNotes. Both track what changed so a
persistence callback (see services.chat_host) can write only that, and both
hand save requests to a DebouncedSaver when one is attached.
"""

import copy
import logging
from typing import Any, Dict, List, Optional, Set

from domain.entities.npc_models import ChatEntry, ExtensionPrompt, PersonaNote
from domain.value_objects.enums import MessageRole, PromptPosition, PromptRole

from infrastructure.host.debounce import DebouncedSaver

logger = logging.getLogger("ChatState")


class ChatState:
    """Messages, metadata and extension prompts of one chat."""

    def __init__(
        self,
        chat_id: Optional[int] = None,
        persona: Optional[str] = None,
        messages: Optional[List[ChatEntry]] = None,
        metadata: Optional[Dict[str, Any]] = None,
        saver: Optional[DebouncedSaver] = None,
    ):
        self.chat_id = chat_id
        self.persona = persona
        self.messages: List[ChatEntry] = messages or []
        self.metadata: Dict[str, Any] = metadata or {}
        self.prompts: Dict[str, ExtensionPrompt] = {}
        self.saver = saver

        # Positions whose text changed since the last save
        self.edited_positions: Set[int] = set()
        # Positions the UI was asked to redraw
        self.rendered_positions: List[int] = []
        self.metadata_dirty = False
        self.metadata_writes = 0
        self.prompt_writes = 0

    # ------------------------------------------------------------------
    # ChatMessages
    # ------------------------------------------------------------------

    def get_message(self, position: int) -> Optional[ChatEntry]:
        if 0 <= position < len(self.messages):
            return self.messages[position]
        return None

    def update_message(self, position: int, text: str) -> None:
        message = self.get_message(position)
        if message is None:
            logger.warning(f"Cannot update missing message {position}")
            return
        message.content = text
        self.edited_positions.add(position)
        self.rendered_positions.append(position)
        self._schedule_save()

    def send_system_message(self, text: str) -> None:
        self.append(MessageRole.SYSTEM, text, is_system=True)
        self._schedule_save()

    def append(self, role: MessageRole, content: str, is_system: bool = False, id: Optional[int] = None) -> ChatEntry:
        entry = ChatEntry(position=len(self.messages), role=role, content=content, is_system=is_system, id=id)
        self.messages.append(entry)
        return entry

    def unsaved_messages(self) -> List[ChatEntry]:
        return [m for m in self.messages if m.id is None]

    def take_edited_messages(self) -> List[ChatEntry]:
        """Saved messages edited since the last call."""
        edited = [self.messages[p] for p in sorted(self.edited_positions) if self.messages[p].id is not None]
        self.edited_positions.clear()
        return edited

    # ------------------------------------------------------------------
    # ChatMetadata
    # ------------------------------------------------------------------

    def get(self, key: str) -> Any:
        return copy.deepcopy(self.metadata.get(key))

    def set(self, key: str, value: Any) -> None:
        self.metadata[key] = value
        self.metadata_dirty = True
        self.metadata_writes += 1

    def save_debounced(self) -> None:
        self._schedule_save()

    # ------------------------------------------------------------------
    # PromptSink
    # ------------------------------------------------------------------

    def set_extension_prompt(
        self,
        key: str,
        text: str,
        position: PromptPosition,
        priority: int,
        scan: bool = False,
        role: PromptRole = PromptRole.SYSTEM,
    ) -> None:
        self.prompts[key] = ExtensionPrompt(
            key=key, text=text, position=position, priority=priority, scan=scan, role=role
        )
        self.prompt_writes += 1

    def ordered_prompts(self) -> List[ExtensionPrompt]:
        """Prompts in injection order (priority, then key)."""
        return sorted(self.prompts.values(), key=lambda p: (p.priority, p.key))

    def _schedule_save(self) -> None:
        if self.saver is not None:
            self.saver.schedule()


class PersonaNoteBook:
    """Persona notes keyed by persona filename."""

    def __init__(self, notes: Optional[List[PersonaNote]] = None, saver: Optional[DebouncedSaver] = None):
        self._notes: Dict[str, PersonaNote] = {note.persona: note for note in notes or []}
        self._dirty: Set[str] = set()
        self.saver = saver

    def get(self, persona: str) -> Optional[PersonaNote]:
        return self._notes.get(persona)

    def upsert(self, note: PersonaNote) -> None:
        self._notes[note.persona] = note
        self._dirty.add(note.persona)

    def save_debounced(self) -> None:
        if self.saver is not None:
            self.saver.schedule()

    def take_dirty(self) -> List[PersonaNote]:
        dirty = [self._notes[p] for p in sorted(self._dirty)]
        self._dirty.clear()
        return dirty

    def __len__(self) -> int:
        return len(self._notes)
