"""
Prompt synchronization.

Keeps the data prompt and the chat metadata mirror in step with the record
store. Publishing only happens when the store is dirty, so repeated syncs
without changes are free.
"""

import logging
from typing import Optional

from core.settings import DATA_PROMPT_KEY, DATA_PROMPT_PRIORITY
from domain.services.record_serializer import serialize_categories
from domain.value_objects.contexts import ChatMetadata, PromptSink
from domain.value_objects.enums import PromptPosition, PromptRole

from services.record_store import RecordStore

logger = logging.getLogger("PromptSync")


class PromptSync:
    """Publishes the serialized store and mirrors it into chat metadata."""

    def __init__(
        self,
        store: RecordStore,
        metadata: ChatMetadata,
        prompts: PromptSink,
        line_width: Optional[int] = None,
    ):
        self.store = store
        self.metadata = metadata
        self.prompts = prompts
        self.line_width = line_width

    def render(self, only: Optional[str] = None) -> str:
        """Serialize the store (or one category of it)."""
        return serialize_categories(self.store.serializable(), only=only, line_width=self.line_width)

    def load_pending(self) -> None:
        """Hydrate every category that has not been loaded from metadata yet."""
        for category in self.store.categories:
            if not category.loaded:
                category.load_from_metadata(self.metadata.get(category.name))

    def sync(self) -> bool:
        """
        Republish the data prompt if the store changed.

        Returns:
            True if the prompt and metadata were written
        """
        self.load_pending()

        if not self.store.dirty:
            return False

        text = self.render()
        self._publish(text)

        for category in self.store.categories:
            self.metadata.set(category.name, category.snapshot())
        self.metadata.save_debounced()

        self.store.mark_clean()
        logger.info(f"Published data prompt ({len(self.store)} records, {len(text)} chars)")
        return True

    def clear(self) -> None:
        """
        Empty every category, reset its metadata mirror and the prompt.

        Cleared categories count as loaded, so later syncs do not pull the
        old records back in from metadata.
        """
        for category in self.store.categories:
            category.clear()
            self.metadata.set(category.name, [])

        self._publish("")
        self.metadata.save_debounced()
        self.store.mark_clean()
        logger.info("Cleared all records")

    def _publish(self, text: str) -> None:
        self.prompts.set_extension_prompt(
            DATA_PROMPT_KEY,
            text,
            PromptPosition.BEFORE_PROMPT,
            DATA_PROMPT_PRIORITY,
            False,
            PromptRole.SYSTEM,
        )
