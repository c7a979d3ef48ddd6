"""
CRUD operations for chat metadata.

Metadata is stored one row per (chat, key) with a JSON value.
"""

import logging
from typing import Any, Dict

from infrastructure.database import models, serialized_write
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select

logger = logging.getLogger("MetadataCRUD")


async def get_chat_metadata(db: AsyncSession, chat_id: int) -> Dict[str, Any]:
    """Load every metadata key of a chat."""
    result = await db.execute(select(models.ChatMetadataEntry).where(models.ChatMetadataEntry.chat_id == chat_id))
    return {entry.key: entry.value for entry in result.scalars().all()}


async def set_chat_metadata(db: AsyncSession, chat_id: int, values: Dict[str, Any]) -> None:
    """Insert or replace the given metadata keys; other keys are left alone."""
    if not values:
        return

    result = await db.execute(
        select(models.ChatMetadataEntry).where(
            models.ChatMetadataEntry.chat_id == chat_id,
            models.ChatMetadataEntry.key.in_(list(values.keys())),
        )
    )
    existing = {entry.key: entry for entry in result.scalars().all()}

    for key, value in values.items():
        entry = existing.get(key)
        if entry is None:
            db.add(models.ChatMetadataEntry(chat_id=chat_id, key=key, value=value))
        else:
            entry.value = value

    async with serialized_write():
        await db.commit()
    logger.debug(f"Saved metadata keys {sorted(values)} for chat {chat_id}")
