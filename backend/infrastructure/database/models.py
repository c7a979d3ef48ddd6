from datetime import datetime, timezone

from domain.value_objects.enums import MessageRole
from sqlalchemy import JSON, Boolean, Column, DateTime, Enum, ForeignKey, Index, Integer, String, Text, text
from sqlalchemy.orm import relationship

from .connection import Base


class Chat(Base):
    __tablename__ = "chats"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False)
    persona = Column(String, nullable=False, index=True)  # Persona filename the rules note is keyed by
    created_at = Column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))

    messages = relationship(
        "Message", back_populates="chat", cascade="all, delete-orphan", order_by="Message.position"
    )
    metadata_entries = relationship("ChatMetadataEntry", back_populates="chat", cascade="all, delete-orphan")


class Message(Base):
    __tablename__ = "chat_messages"
    __table_args__ = (Index("ux_chat_messages_chat_position", "chat_id", "position", unique=True),)

    id = Column(Integer, primary_key=True, index=True)
    chat_id = Column(Integer, ForeignKey("chats.id", ondelete="CASCADE"), nullable=False, index=True)
    position = Column(Integer, nullable=False)  # Index of the message within its chat
    role = Column(Enum(MessageRole), nullable=False, default=MessageRole.ASSISTANT)
    content = Column(Text, nullable=False, default="")
    is_system = Column(Boolean, default=False, server_default=text("0"))  # Host notices such as command output
    created_at = Column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))

    chat = relationship("Chat", back_populates="messages")


class ChatMetadataEntry(Base):
    """One chat metadata key; the npc records live under "characters" and "locations"."""

    __tablename__ = "chat_metadata"
    __table_args__ = (Index("ux_chat_metadata_chat_key", "chat_id", "key", unique=True),)

    id = Column(Integer, primary_key=True, index=True)
    chat_id = Column(Integer, ForeignKey("chats.id", ondelete="CASCADE"), nullable=False, index=True)
    key = Column(String, nullable=False)
    value = Column(JSON, nullable=True)
    updated_at = Column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )

    chat = relationship("Chat", back_populates="metadata_entries")


class PersonaNote(Base):
    __tablename__ = "persona_notes"

    id = Column(Integer, primary_key=True, index=True)
    persona = Column(String, nullable=False, unique=True, index=True)
    prompt = Column(Text, nullable=False, default="")
    use_chara = Column(Boolean, default=False, server_default=text("0"))
    updated_at = Column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )
