"""
Record and category models for named-character tracking.

Records themselves are plain dicts (free-form YAML attributes); the dataclasses
here describe what surrounds them: categories, matched tag blocks, parse
outcomes and merge results.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple, Union

from domain.value_objects.enums import MessageRole, PromptPosition, PromptRole, SkipReason, UpsertStatus

# A record is a mapping of attribute name to value, always holding "id" and usually "name"
Record = Dict[str, Any]


@dataclass(frozen=True)
class CategorySpec:
    """Static description of a record category."""

    name: str  # Metadata key and partition name, e.g. "characters"
    header: str  # Line emitted before each serialized record
    noun: str  # Used in status lines, e.g. "named character"
    tags: Tuple[str, ...]  # Tags in message text that route to this category

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "CategorySpec":
        return cls(
            name=data["name"],
            header=data["header"],
            noun=data["noun"],
            tags=tuple(data["tags"]),
        )


@dataclass(frozen=True)
class TagBlock:
    """One <tag>...</tag> region found in message text."""

    tag: str
    span: Tuple[int, int]  # (start, end) of the full match
    raw: str  # Full matched text including the tags
    content: str  # Inner text between the tags


@dataclass(frozen=True)
class Parsed:
    """A block that produced a usable record."""

    record: Record


@dataclass(frozen=True)
class Skipped:
    """A block that was discarded, with the reason."""

    reason: SkipReason
    detail: Optional[str] = None


ParseOutcome = Union[Parsed, Skipped]


@dataclass(frozen=True)
class UpsertResult:
    """Result of merging one record into a category store."""

    status: UpsertStatus
    record_id: str
    name: Optional[str]

    def status_line(self, noun: str) -> str:
        """Human readable replacement for the consumed block."""
        verb = "Added" if self.status == UpsertStatus.ADDED else "Updated"
        return f"{verb} {noun} - {self.name if self.name is not None else self.record_id}"


@dataclass
class BlockOutcome:
    """What happened to a single tag block during message ingestion."""

    category: str
    block: TagBlock
    outcome: ParseOutcome
    result: Optional[UpsertResult] = None
    status_line: Optional[str] = None  # Text that replaced the block, when consumed

    @property
    def consumed(self) -> bool:
        return self.result is not None


@dataclass
class IngestResult:
    """Result of scanning one message for record blocks."""

    text: str
    changed: bool = False
    outcomes: List[BlockOutcome] = field(default_factory=list)

    @property
    def skipped(self) -> List[BlockOutcome]:
        return [o for o in self.outcomes if not o.consumed]


@dataclass
class ChatEntry:
    """A message in the active chat, as seen by the session."""

    position: int
    role: MessageRole
    content: str
    is_system: bool = False
    id: Optional[int] = None  # Database id, None until persisted


@dataclass
class ExtensionPrompt:
    """A named prompt fragment injected into the generation context."""

    key: str
    text: str
    position: PromptPosition
    priority: int
    scan: bool = False
    role: PromptRole = PromptRole.SYSTEM


@dataclass
class PersonaNote:
    """Per-persona note; its prompt holds the rules document."""

    persona: str
    prompt: str = ""
    use_chara: bool = False
