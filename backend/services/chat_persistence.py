"""
Chat persistence - loads the active chat into memory and writes it back.

The npc session works on in-memory ChatState/PersonaNoteBook objects. This
class moves them between those objects and the database:
1. Loading a chat (messages + metadata) when it is opened
2. Loading persona notes once per process
3. Saving whatever changed, called by the DebouncedSaver
"""

import logging
from typing import Callable, List, Optional

import crud
from domain.entities.npc_models import ChatEntry, PersonaNote
from infrastructure.host import ChatState, DebouncedSaver, PersonaNoteBook
from sqlalchemy.ext.asyncio import AsyncSession

logger = logging.getLogger("ChatPersistence")


class ChatPersistence:
    """Moves chat state between memory and the database."""

    def __init__(self, session_factory: Callable[[], AsyncSession]):
        """
        Initialize the persistence helper.

        Args:
            session_factory: Callable returning an AsyncSession context manager
                (an async_sessionmaker)
        """
        self.session_factory = session_factory

    async def load_chat(self, chat_id: int, saver: Optional[DebouncedSaver] = None) -> Optional[ChatState]:
        """
        Load a chat's messages and metadata.

        Returns:
            ChatState, or None if the chat does not exist
        """
        async with self.session_factory() as db:
            db_chat = await crud.get_chat(db, chat_id)
            if db_chat is None:
                return None

            db_messages = await crud.get_messages(db, chat_id)
            metadata = await crud.get_chat_metadata(db, chat_id)

        state = ChatState(chat_id=db_chat.id, persona=db_chat.persona, metadata=metadata, saver=saver)
        for db_message in db_messages:
            state.append(db_message.role, db_message.content, is_system=db_message.is_system, id=db_message.id)

        logger.info(f"Loaded chat {chat_id}: {len(state.messages)} messages, metadata keys {sorted(metadata)}")
        return state

    async def load_notes(self, saver: Optional[DebouncedSaver] = None) -> PersonaNoteBook:
        async with self.session_factory() as db:
            db_notes = await crud.get_persona_notes(db)

        notes = [PersonaNote(persona=n.persona, prompt=n.prompt or "", use_chara=bool(n.use_chara)) for n in db_notes]
        return PersonaNoteBook(notes, saver=saver)

    async def save(self, state: Optional[ChatState], notes: Optional[PersonaNoteBook]) -> None:
        """Write new messages, edited messages, dirty metadata and dirty notes."""
        async with self.session_factory() as db:
            if state is not None:
                await self._save_chat(db, state)

            if notes is not None:
                for note in notes.take_dirty():
                    await crud.upsert_persona_note(db, note.persona, note.prompt, note.use_chara)
                    logger.debug(f"Saved note for persona '{note.persona}'")

    async def _save_chat(self, db: AsyncSession, state: ChatState) -> None:
        # Edits are collected first so messages inserted below are not also updated
        edited = state.take_edited_messages()
        try:
            await self._write_chat(db, state, edited)
        except Exception:
            # Changes stay marked so the next save writes them again
            state.edited_positions.update(m.position for m in edited)
            raise

    async def _write_chat(self, db: AsyncSession, state: ChatState, edited: List[ChatEntry]) -> None:
        for message in state.unsaved_messages():
            db_message = await crud.create_message(
                db,
                state.chat_id,
                message.position,
                message.content,
                role=message.role,
                is_system=message.is_system,
            )
            message.id = db_message.id

        for message in edited:
            await crud.update_message_content(db, message.id, message.content)

        if state.metadata_dirty:
            writes = state.metadata_writes
            await crud.set_chat_metadata(db, state.chat_id, state.metadata)
            # A set() made while the commit was awaited keeps the flag for the next save
            if state.metadata_writes == writes:
                state.metadata_dirty = False

        logger.debug(f"Saved chat {state.chat_id}")
