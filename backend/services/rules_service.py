"""
Rules prompt service.

The rules prompt tells the model how to emit record blocks. It lives in the
active persona's note so it can be edited; when the note is empty the bundled
default rules document is fetched once and cached into the note.
"""

import logging
from typing import Any, Optional

import httpx
import yaml
from core.settings import RULES_PROMPT_KEY, RULES_PROMPT_PRIORITY
from domain.entities.npc_models import PersonaNote
from domain.exceptions import RulesFetchError
from domain.value_objects.contexts import PersonaNotes, PromptSink
from domain.value_objects.enums import PromptPosition, PromptRole

logger = logging.getLogger("RulesService")


def render_rules(document: Any) -> str:
    """Dump the rules document as block-style YAML."""
    return yaml.dump(document, allow_unicode=True, sort_keys=False, default_flow_style=False)


class RulesPromptService:
    """Loads the default rules document and publishes the rules prompt."""

    def __init__(self, client: httpx.AsyncClient, url: str, timeout: float = 10.0):
        self.client = client
        self.url = url
        self.timeout = timeout

    async def fetch_default_rules(self) -> Any:
        """
        Fetch and decode the default rules JSON document.

        Raises:
            RulesFetchError: On transport errors, bad status or invalid JSON
        """
        try:
            response = await self.client.get(self.url, timeout=self.timeout)
            response.raise_for_status()
            return response.json()
        except httpx.HTTPError as e:
            raise RulesFetchError(self.url, str(e)) from e
        except ValueError as e:
            raise RulesFetchError(self.url, f"invalid JSON: {e}") from e

    async def ensure_note(self, notes: PersonaNotes, persona: str) -> Optional[PersonaNote]:
        """
        Return the persona's note, filling it with the default rules if blank.

        Returns:
            The note, or None if the default rules could not be fetched
        """
        note = notes.get(persona)
        if note is not None and note.prompt and note.prompt.strip():
            return note

        try:
            document = await self.fetch_default_rules()
        except RulesFetchError as e:
            logger.warning(f"{e}; rules prompt left unset for '{persona}'")
            return None

        if note is None:
            note = PersonaNote(persona=persona)
        note.prompt = render_rules(document)
        # The note is only storage for the rules, it is not used as a character note
        note.use_chara = False
        notes.upsert(note)
        notes.save_debounced()
        logger.info(f"Stored default rules in note for '{persona}'")
        return note

    async def publish(self, notes: Optional[PersonaNotes], persona: Optional[str], prompts: PromptSink) -> bool:
        """
        Publish the rules prompt for the active persona.

        Returns:
            True if a rules prompt was published
        """
        if notes is None or not persona:
            return False

        note = await self.ensure_note(notes, persona)
        if note is None:
            return False

        prompts.set_extension_prompt(
            RULES_PROMPT_KEY,
            note.prompt,
            PromptPosition.BEFORE_PROMPT,
            RULES_PROMPT_PRIORITY,
            False,
            PromptRole.SYSTEM,
        )
        return True
