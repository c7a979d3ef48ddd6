"""Persona note routes (the editable rules prompt)."""

import schemas
from core.dependencies import get_chat_host
from fastapi import APIRouter, Depends, HTTPException
from services.chat_host import ChatHost

router = APIRouter()


@router.get("/{persona}/note", response_model=schemas.PersonaNote)
async def get_persona_note(persona: str, host: ChatHost = Depends(get_chat_host)):
    """Get the rules note of a persona."""
    note = await host.get_note(persona)
    if note is None:
        raise HTTPException(status_code=404, detail=f"No note for persona '{persona}'")
    return note


@router.put("/{persona}/note", response_model=schemas.PersonaNote)
async def update_persona_note(
    persona: str,
    update: schemas.PersonaNoteUpdate,
    host: ChatHost = Depends(get_chat_host),
):
    """Replace the rules note of a persona. An empty prompt is refilled with the default rules."""
    return await host.set_note(persona, update.prompt, use_chara=update.use_chara)
