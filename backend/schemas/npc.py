"""Schemas for the npc command and record listings."""

from typing import Any, Dict, List, Optional

from domain.value_objects.enums import ListScope
from pydantic import BaseModel, ConfigDict, Field, field_validator


class NpcCommandRequest(BaseModel):
    """Named options of the npc command."""

    model_config = ConfigDict(populate_by_name=True)

    list_scope: ListScope = Field(ListScope.ALL, alias="list", description="Records to list, or 'clear'")
    delete: Optional[str] = Field(None, description="Identifier of the record to delete")
    update: Optional[str] = Field(None, description="Identifier of the record to update")
    property: Optional[str] = Field(None, description="Name of the property to update")
    value: Optional[str] = Field(None, description="The value to set the property to")

    @field_validator("delete", "update", "property", "value", mode="before")
    @classmethod
    def coerce_to_string(cls, v: Any) -> Optional[str]:
        """Command arguments are strings; accept bare numbers too."""
        if v is None or isinstance(v, str):
            return v
        return str(v)


class NpcCommandResponse(BaseModel):
    """Text output of the npc command."""

    output: str


class RecordsResponse(BaseModel):
    """Records of the active chat grouped by category."""

    chat_id: int
    dirty: bool
    categories: Dict[str, List[Dict[str, Any]]]
