"""
CRUD operations for Message entities.
"""

from typing import List, Optional

from domain.value_objects.enums import MessageRole
from infrastructure.database import models, serialized_write
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select


async def create_message(
    db: AsyncSession,
    chat_id: int,
    position: int,
    content: str,
    role: MessageRole = MessageRole.ASSISTANT,
    is_system: bool = False,
) -> models.Message:
    """
    Create a new message in the database.

    Args:
        db: Database session
        chat_id: Chat ID
        position: Index of the message within the chat
        content: Message text
        role: Message role
        is_system: Whether this is a host notice

    Returns:
        Created message
    """
    db_message = models.Message(
        chat_id=chat_id,
        position=position,
        role=role,
        content=content,
        is_system=is_system,
    )
    db.add(db_message)
    async with serialized_write():
        await db.commit()
    await db.refresh(db_message)
    return db_message


async def get_messages(db: AsyncSession, chat_id: int) -> List[models.Message]:
    """Get all messages of a chat in position order."""
    result = await db.execute(
        select(models.Message).where(models.Message.chat_id == chat_id).order_by(models.Message.position)
    )
    return list(result.scalars().all())


async def update_message_content(db: AsyncSession, message_id: int, content: str) -> Optional[models.Message]:
    """Replace a message's text. Returns None if the message does not exist."""
    db_message = await db.get(models.Message, message_id)
    if db_message is None:
        return None
    db_message.content = content
    async with serialized_write():
        await db.commit()
    return db_message
