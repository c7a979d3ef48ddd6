"""Chat and message schemas."""

from datetime import datetime
from typing import List, Optional

from domain.value_objects.enums import MessageRole, PromptPosition, PromptRole
from pydantic import BaseModel, ConfigDict, Field

# =============================================================================
# Chat Schemas
# =============================================================================


class ChatBase(BaseModel):
    """Base schema for chat data."""

    name: str = Field(..., min_length=1)
    persona: str = Field(..., min_length=1, description="Persona filename the rules note belongs to")


class ChatCreate(ChatBase):
    """Schema for creating a new chat."""

    pass


class Chat(ChatBase):
    """Schema for chat responses."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    created_at: Optional[datetime] = None


# =============================================================================
# Message Schemas
# =============================================================================


class MessageCreate(BaseModel):
    """Schema for appending a message to a chat."""

    role: MessageRole = MessageRole.ASSISTANT
    content: str


class Message(BaseModel):
    """Schema for message responses."""

    model_config = ConfigDict(from_attributes=True)

    position: int
    role: MessageRole
    content: str
    is_system: bool = False


class MessageReceived(Message):
    """A received message after record blocks were taken out of it."""

    updated: bool = False
    added: List[str] = Field(default_factory=list, description="Status lines of merged records")
    skipped: int = 0


# =============================================================================
# Prompt Schemas
# =============================================================================


class ExtensionPrompt(BaseModel):
    """A published prompt fragment."""

    model_config = ConfigDict(from_attributes=True)

    key: str
    text: str
    position: PromptPosition
    priority: int
    role: PromptRole


class GenerationResponse(BaseModel):
    """Prompt fragments to inject for the upcoming generation."""

    chat_id: int
    prompts: List[ExtensionPrompt]
