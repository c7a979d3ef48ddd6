"""
The `npc` command.

Options (first match wins, in this order):
    delete=<id>                              remove a record
    update=<id> property=<name> value=<val>  set one attribute
    list=all|location|character|clear        show records, or clear them all

Delete and update act on the first category, in configured order, that holds
the id. Results are sent to the chat as system messages and returned as text.
"""

import logging
from dataclasses import dataclass
from typing import Optional

from core.settings import MODULE_NAME
from domain.exceptions import RecordNotFoundError
from domain.value_objects.contexts import ChatMessages
from domain.value_objects.enums import ListScope

from services.prompt_sync import PromptSync

logger = logging.getLogger("NpcCommand")

# list scope -> category name
SCOPE_CATEGORIES = {
    ListScope.ALL: None,
    ListScope.CHARACTER: "characters",
    ListScope.LOCATION: "locations",
}


@dataclass
class NpcCommandArgs:
    """Named options of the npc command."""

    list_scope: ListScope = ListScope.ALL
    delete: Optional[str] = None
    update: Optional[str] = None
    property: Optional[str] = None
    value: Optional[str] = None


class NpcCommand:
    """Runs npc commands against one chat's store."""

    def __init__(self, sync: PromptSync, chat: ChatMessages):
        self.sync = sync
        self.store = sync.store
        self.chat = chat

    def run(self, args: NpcCommandArgs) -> str:
        if args.delete:
            return self.delete(args.delete)
        if args.update:
            if not args.property or args.value is None:
                return self._report(f"{MODULE_NAME}: update requires both property and value")
            return self.update(args.update, args.property, args.value)
        if args.list_scope == ListScope.CLEAR:
            return self.clear()
        return self.list(args.list_scope)

    def list(self, scope: ListScope = ListScope.ALL) -> str:
        """Send the serialized records as a preformatted system message."""
        text = self.sync.render(only=SCOPE_CATEGORIES.get(scope))
        self.chat.send_system_message('<pre style="text-wrap: wrap">\n' + text + "</pre>")
        return text

    def clear(self) -> str:
        self.sync.clear()
        return ""

    def delete(self, record_id: str) -> str:
        category = self.store.find_category(record_id)
        if category is None:
            logger.info(f"Delete ignored, no record with id {record_id}")
            return self._report(f"{MODULE_NAME}: No object with id {record_id} found")

        category.delete(record_id)
        message = self._report(f"{MODULE_NAME}: Deleted object with id {record_id} from {category.name}")
        self.sync.sync()
        return message

    def update(self, record_id: str, prop: str, value: str) -> str:
        category = self.store.find_category(record_id)
        if category is None:
            logger.info(f"Update ignored, no record with id {record_id}")
            return self._report(f"{MODULE_NAME}: No object with id {record_id} found")

        try:
            category.update_property(record_id, prop, value)
        except RecordNotFoundError as e:
            logger.warning(f"Update failed: {e}")
            return self._report(f"{MODULE_NAME}: No object with id {record_id} found")

        message = self._report(
            f"{MODULE_NAME}: Updated object with id {record_id} property {prop} to value {value} in {category.name}"
        )
        self.sync.sync()
        return message

    def _report(self, message: str) -> str:
        self.chat.send_system_message(message)
        return message
