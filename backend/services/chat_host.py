"""
Chat host - owns the active chat and its npc session.

Exactly one chat is active at a time. Any operation on another chat first
opens it, which is the chat-changed event: pending saves are flushed, the new
chat is loaded and a fresh NpcSession is created for it.
"""

import logging
from typing import Callable, Dict, List, Optional, Tuple

import httpx
from core.settings import Settings, get_settings
from domain.entities.npc_models import ChatEntry, ExtensionPrompt, IngestResult, PersonaNote, Record
from domain.exceptions import ChatNotFoundError, MessageNotFoundError
from domain.value_objects.enums import MessageRole
from infrastructure.host import ChatState, DebouncedSaver, PersonaNoteBook
from sqlalchemy.ext.asyncio import AsyncSession

from services.chat_persistence import ChatPersistence
from services.npc_command import NpcCommandArgs
from services.npc_session import NpcSession
from services.rules_service import RulesPromptService

logger = logging.getLogger("ChatHost")


class ChatHost:
    """Active chat, its npc session and the debounced persistence behind them."""

    def __init__(
        self,
        session_factory: Callable[[], AsyncSession],
        rules_client: httpx.AsyncClient,
        settings: Optional[Settings] = None,
    ):
        self.settings = settings or get_settings()
        self.persistence = ChatPersistence(session_factory)
        self.rules = RulesPromptService(
            rules_client,
            self.settings.default_rules_url,
            timeout=self.settings.rules_fetch_timeout,
        )
        self.saver = DebouncedSaver(self._save, delay=self.settings.metadata_save_delay)

        self.state: Optional[ChatState] = None
        self.session: Optional[NpcSession] = None
        self._notes: Optional[PersonaNoteBook] = None

    @property
    def active_chat_id(self) -> Optional[int]:
        return self.state.chat_id if self.state is not None else None

    async def notes(self) -> PersonaNoteBook:
        """Persona notes, loaded from the database on first use."""
        if self._notes is None:
            self._notes = await self.persistence.load_notes(saver=self.saver)
        return self._notes

    async def open_chat(self, chat_id: int) -> NpcSession:
        """
        Make a chat active (the chat-changed event).

        Raises:
            ChatNotFoundError: If the chat does not exist
        """
        await self.flush()

        state = await self.persistence.load_chat(chat_id, saver=self.saver)
        if state is None:
            raise ChatNotFoundError(chat_id)

        notes = await self.notes()
        self.state = state
        self.session = NpcSession(
            chat=state,
            metadata=state,
            prompts=state,
            rules=self.rules,
            notes=notes,
            persona=state.persona,
            collapse_tag_status=self.settings.npc_collapse_tag_status,
            line_width=self.settings.yaml_line_width,
        )
        await self.session.on_chat_changed()
        logger.info(f"Opened chat {chat_id} (persona={state.persona})")
        return self.session

    async def activate(self, chat_id: int) -> NpcSession:
        """Return the session for a chat, opening the chat if it is not active."""
        if self.session is None or self.active_chat_id != chat_id:
            return await self.open_chat(chat_id)
        return self.session

    async def receive_message(
        self, chat_id: int, role: MessageRole, content: str
    ) -> Tuple[ChatEntry, Optional[IngestResult]]:
        """
        Append a message; assistant messages go through record ingestion.

        Returns:
            The stored message and the ingest result (None for non-assistant messages)
        """
        session = await self.activate(chat_id)
        entry = self.state.append(role, content)
        self.saver.schedule()

        result = None
        if role == MessageRole.ASSISTANT:
            result = session.on_message_received(entry.position)
        return entry, result

    async def start_generation(self, chat_id: int) -> List[ExtensionPrompt]:
        """Run the generation-started handlers and return the prompts to inject."""
        session = await self.activate(chat_id)
        await session.on_generation_started()
        return self.state.ordered_prompts()

    async def run_npc_command(self, chat_id: int, args: NpcCommandArgs) -> str:
        session = await self.activate(chat_id)
        return session.run_command(args)

    async def messages(self, chat_id: int) -> List[ChatEntry]:
        await self.activate(chat_id)
        return list(self.state.messages)

    async def message(self, chat_id: int, position: int) -> ChatEntry:
        """
        Raises:
            MessageNotFoundError: If the chat has no message at that position
        """
        await self.activate(chat_id)
        entry = self.state.get_message(position)
        if entry is None:
            raise MessageNotFoundError(chat_id, position)
        return entry

    async def records(self, chat_id: int) -> Dict[str, List[Record]]:
        """Records of a chat grouped by category name, in category order."""
        session = await self.activate(chat_id)
        return {category.name: category.snapshot() for category in session.store.categories}

    async def get_note(self, persona: str) -> Optional[PersonaNote]:
        notes = await self.notes()
        return notes.get(persona)

    async def set_note(self, persona: str, prompt: str, use_chara: bool = False) -> PersonaNote:
        """Replace a persona's rules note; the active chat republishes it right away."""
        notes = await self.notes()
        note = PersonaNote(persona=persona, prompt=prompt, use_chara=use_chara)
        notes.upsert(note)
        notes.save_debounced()

        if self.session is not None and self.session.persona == persona:
            await self.session.publish_rules()
        return note

    async def flush(self) -> None:
        """Write pending changes now."""
        await self.saver.flush()

    async def _save(self) -> None:
        await self.persistence.save(self.state, self._notes)
