"""
Per-chat record storage.

A RecordStore owns one CategoryStore per configured category plus the dirty
flag that tells PromptSync the published prompt is stale. Stores are created
with the chat session and discarded when the chat changes.
"""

import json
import logging
from typing import Any, Callable, Dict, Iterator, List, Optional, Tuple

from core.settings import CATEGORY_DEFINITIONS
from domain.entities.npc_models import CategorySpec, Record, UpsertResult
from domain.exceptions import ConfigurationError, RecordNotFoundError
from domain.services.record_parser import normalize_ids
from domain.value_objects.enums import UpsertStatus

logger = logging.getLogger("RecordStore")


def _noop() -> None:
    return None


def _check_specs(specs: List[CategorySpec]) -> None:
    """
    Raises:
        ConfigurationError: On duplicate category names or a tag routed to two categories
    """
    names = set()
    tags: Dict[str, str] = {}
    for spec in specs:
        if spec.name in names:
            raise ConfigurationError(f"duplicate category '{spec.name}'")
        names.add(spec.name)
        for tag in spec.tags:
            tag = tag.lower()
            if tag in tags:
                raise ConfigurationError(f"tag '{tag}' is used by both '{tags[tag]}' and '{spec.name}'")
            tags[tag] = spec.name


class CategoryStore:
    """Mapping of record id to record for a single category."""

    def __init__(self, spec: CategorySpec, on_change: Callable[[], None] = _noop):
        self.spec = spec
        self._records: Dict[str, Record] = {}
        self._on_change = on_change
        # True once hydrated from metadata or intentionally cleared
        self.loaded = False

    @property
    def name(self) -> str:
        return self.spec.name

    def __len__(self) -> int:
        return len(self._records)

    def __contains__(self, record_id: object) -> bool:
        return record_id in self._records

    def __iter__(self) -> Iterator[Record]:
        return iter(self._records.values())

    def get(self, record_id: str) -> Optional[Record]:
        return self._records.get(record_id)

    def records(self) -> List[Record]:
        """Records in insertion order."""
        return list(self._records.values())

    def snapshot(self) -> List[Record]:
        """
        Deep, JSON-compatible copy of the records for the metadata mirror.

        Values JSON cannot hold (sets, binary data) are stored as their string form.
        """
        return json.loads(json.dumps(self.records(), ensure_ascii=False, default=str))

    def upsert(self, record: Record) -> UpsertResult:
        """
        Insert a record or shallow-merge it onto the existing one.

        Fields present in the incoming record overwrite, all others are kept.
        """
        record_id = record["id"]
        existing = self._records.get(record_id)
        if existing is not None:
            existing.update(record)
            status = UpsertStatus.UPDATED
            name = existing.get("name")
        else:
            self._records[record_id] = dict(record)
            status = UpsertStatus.ADDED
            name = record.get("name")

        self._on_change()
        logger.info(f"{status.value.capitalize()} {self.spec.noun} {record_id} ({name})")
        return UpsertResult(status=status, record_id=record_id, name=name)

    def delete(self, record_id: str) -> bool:
        """Remove a record. Returns False (and changes nothing) when absent."""
        if record_id not in self._records:
            return False
        del self._records[record_id]
        self._on_change()
        logger.info(f"Deleted {self.spec.noun} {record_id}")
        return True

    def update_property(self, record_id: str, prop: str, value: Any) -> Record:
        """
        Set one attribute on an existing record (stored as a string).

        Raises:
            RecordNotFoundError: If the id is not in this category
        """
        record = self._records.get(record_id)
        if record is None:
            raise RecordNotFoundError(self.name, record_id)
        record[str(prop)] = str(value)
        self._on_change()
        logger.info(f"Set {prop} on {self.spec.noun} {record_id}")
        return record

    def clear(self) -> None:
        """Empty the store; it counts as loaded so metadata is not reloaded."""
        self._records.clear()
        self.loaded = True

    def reset(self) -> None:
        """Forget everything, including whether metadata was loaded."""
        self._records.clear()
        self.loaded = False

    def load_from_metadata(self, items: Any) -> int:
        """
        Populate from a persisted record list.

        Entries that are not mappings or lack an id are skipped. Marks the
        store loaded and signals a change so the prompt is rebuilt once.

        Returns:
            Number of records loaded
        """
        loaded = 0
        if isinstance(items, list):
            for item in items:
                if not isinstance(item, dict):
                    continue
                record = normalize_ids(item)
                if not record.get("id"):
                    continue
                self._records[record["id"]] = record
                loaded += 1

        self.loaded = True
        self._on_change()
        logger.debug(f"Loaded {loaded} {self.name} from metadata")
        return loaded


class RecordStore:
    """All category stores of one chat, plus the dirty flag."""

    def __init__(self, specs: Optional[List[CategorySpec]] = None):
        if specs is None:
            specs = [CategorySpec.from_dict(d) for d in CATEGORY_DEFINITIONS]
        _check_specs(specs)
        self.dirty = False
        self.categories: List[CategoryStore] = [CategoryStore(spec, on_change=self.mark_dirty) for spec in specs]

    def mark_dirty(self) -> None:
        self.dirty = True

    def mark_clean(self) -> None:
        self.dirty = False

    def category(self, name: str) -> Optional[CategoryStore]:
        for category in self.categories:
            if category.name == name:
                return category
        return None

    def find_category(self, record_id: str) -> Optional[CategoryStore]:
        """First category, in configured order, that holds the id."""
        for category in self.categories:
            if record_id in category:
                return category
        return None

    def tag_routes(self) -> Iterator[Tuple[CategoryStore, str]]:
        """(category, tag) pairs in processing order."""
        for category in self.categories:
            for tag in category.spec.tags:
                yield category, tag

    def serializable(self) -> List[Tuple[CategorySpec, List[Record]]]:
        return [(category.spec, category.records()) for category in self.categories]

    def reset(self) -> None:
        """Return to the freshly created state (used on chat change)."""
        for category in self.categories:
            category.reset()
        self.dirty = False

    def __len__(self) -> int:
        return sum(len(category) for category in self.categories)
