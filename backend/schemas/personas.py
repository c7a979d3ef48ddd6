"""Persona note schemas."""

from pydantic import BaseModel, ConfigDict


class PersonaNoteUpdate(BaseModel):
    """Schema for editing a persona's rules note."""

    prompt: str
    use_chara: bool = False


class PersonaNote(PersonaNoteUpdate):
    """Schema for persona note responses."""

    model_config = ConfigDict(from_attributes=True)

    persona: str
