"""
CRUD operations for persona notes.
"""

from typing import List, Optional

from infrastructure.database import models, serialized_write
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select


async def get_persona_notes(db: AsyncSession) -> List[models.PersonaNote]:
    result = await db.execute(select(models.PersonaNote).order_by(models.PersonaNote.persona))
    return list(result.scalars().all())


async def get_persona_note(db: AsyncSession, persona: str) -> Optional[models.PersonaNote]:
    result = await db.execute(select(models.PersonaNote).where(models.PersonaNote.persona == persona))
    return result.scalar_one_or_none()


async def upsert_persona_note(db: AsyncSession, persona: str, prompt: str, use_chara: bool) -> models.PersonaNote:
    """Create the note for a persona or overwrite its fields."""
    db_note = await get_persona_note(db, persona)
    if db_note is None:
        db_note = models.PersonaNote(persona=persona, prompt=prompt, use_chara=use_chara)
        db.add(db_note)
    else:
        db_note.prompt = prompt
        db_note.use_chara = use_chara

    async with serialized_write():
        await db.commit()
    await db.refresh(db_note)
    return db_note
