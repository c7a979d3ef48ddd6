"""
CRUD operations for Chat entities.
"""

import logging
from typing import List, Optional

import schemas
from infrastructure.database import models, serialized_write
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select

logger = logging.getLogger("ChatCRUD")


async def create_chat(db: AsyncSession, chat: schemas.ChatCreate) -> models.Chat:
    """Create a new chat bound to a persona."""
    db_chat = models.Chat(name=chat.name, persona=chat.persona)
    db.add(db_chat)
    async with serialized_write():
        await db.commit()
    await db.refresh(db_chat)
    logger.info(f"Created chat {db_chat.id} '{db_chat.name}' (persona={db_chat.persona})")
    return db_chat


async def get_chat(db: AsyncSession, chat_id: int) -> Optional[models.Chat]:
    result = await db.execute(select(models.Chat).where(models.Chat.id == chat_id))
    return result.scalar_one_or_none()


async def get_chats(db: AsyncSession) -> List[models.Chat]:
    result = await db.execute(select(models.Chat).order_by(models.Chat.id))
    return list(result.scalars().all())
