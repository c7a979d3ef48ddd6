"""
NPC session: the per-chat owner of the record store.

One session exists for the active chat. The host creates it when a chat is
opened and drops it when another chat is opened; the event handlers below are
what the host calls on message-received, generation-started and chat-changed.
"""

import logging
from typing import Optional

from domain.entities.npc_models import IngestResult
from domain.value_objects.contexts import ChatMessages, ChatMetadata, PersonaNotes, PromptSink
from domain.value_objects.enums import MessageRole

from services.message_rewriter import ingest_message
from services.npc_command import NpcCommand, NpcCommandArgs
from services.prompt_sync import PromptSync
from services.record_store import RecordStore
from services.rules_service import RulesPromptService

logger = logging.getLogger("NpcSession")


class NpcSession:
    """Record store, prompt sync and command surface for one chat."""

    def __init__(
        self,
        chat: ChatMessages,
        metadata: ChatMetadata,
        prompts: PromptSink,
        rules: Optional[RulesPromptService] = None,
        notes: Optional[PersonaNotes] = None,
        persona: Optional[str] = None,
        collapse_tag_status: bool = False,
        line_width: Optional[int] = None,
        store: Optional[RecordStore] = None,
    ):
        self.chat = chat
        self.prompts = prompts
        self.rules = rules
        self.notes = notes
        self.persona = persona
        self.collapse_tag_status = collapse_tag_status
        self.store = store if store is not None else RecordStore()
        self.sync = PromptSync(self.store, metadata, prompts, line_width=line_width)
        self.command = NpcCommand(self.sync, chat)

    def on_message_received(self, position: int) -> Optional[IngestResult]:
        """
        Scan a received message for record blocks and rewrite it.

        Returns:
            The ingest result, or None if there is no such message
        """
        message = self.chat.get_message(position)
        if message is None or not message.content:
            return None
        if message.is_system or message.role == MessageRole.USER:
            return None

        result = ingest_message(message.content, self.store, collapse_tag_status=self.collapse_tag_status)
        if result.changed:
            self.store.mark_dirty()
            self.chat.update_message(position, result.text)
            consumed = len(result.outcomes) - len(result.skipped)
            logger.info(f"Message {position}: merged {consumed} record block(s)")
        if result.skipped:
            logger.debug(f"Message {position}: skipped {len(result.skipped)} block(s)")
        return result

    async def on_generation_started(self) -> None:
        """Refresh the data prompt if needed and publish the rules prompt."""
        self.sync.sync()
        await self.publish_rules()

    async def on_chat_changed(self) -> None:
        """Start from an empty store; the next sync reloads from metadata."""
        self.store.reset()
        self.sync.sync()
        await self.publish_rules()

    async def publish_rules(self) -> bool:
        if self.rules is None:
            return False
        return await self.rules.publish(self.notes, self.persona, self.prompts)

    def run_command(self, args: NpcCommandArgs) -> str:
        return self.command.run(args)
