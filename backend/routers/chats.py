"""Chat routes: creating chats, receiving messages and starting generations."""

from typing import List

import crud
import schemas
from core.dependencies import get_chat_host
from domain.exceptions import ChatNotFoundError
from fastapi import APIRouter, Depends
from infrastructure.database import get_db
from services.chat_host import ChatHost
from sqlalchemy.ext.asyncio import AsyncSession

router = APIRouter()


@router.get("", response_model=List[schemas.Chat])
async def list_chats(db: AsyncSession = Depends(get_db)):
    """List all chats."""
    return await crud.get_chats(db)


@router.post("", response_model=schemas.Chat)
async def create_chat(chat: schemas.ChatCreate, db: AsyncSession = Depends(get_db)):
    """Create a new chat bound to a persona."""
    return await crud.create_chat(db, chat)


@router.get("/{chat_id}", response_model=schemas.Chat)
async def get_chat(chat_id: int, db: AsyncSession = Depends(get_db)):
    """Get a specific chat by ID."""
    chat = await crud.get_chat(db, chat_id)
    if chat is None:
        raise ChatNotFoundError(chat_id)
    return chat


@router.post("/{chat_id}/open", response_model=schemas.GenerationResponse)
async def open_chat(chat_id: int, host: ChatHost = Depends(get_chat_host)):
    """
    Make a chat the active one.

    Loads its records from metadata and republishes the prompts, even when the
    chat is already active.
    """
    await host.open_chat(chat_id)
    return {"chat_id": chat_id, "prompts": host.state.ordered_prompts()}


@router.get("/{chat_id}/messages", response_model=List[schemas.Message])
async def get_messages(chat_id: int, host: ChatHost = Depends(get_chat_host)):
    """Get all messages of a chat, including unsaved ones."""
    return await host.messages(chat_id)


@router.get("/{chat_id}/messages/{position}", response_model=schemas.Message)
async def get_message(chat_id: int, position: int, host: ChatHost = Depends(get_chat_host)):
    """Get one message by its position in the chat."""
    return await host.message(chat_id, position)


@router.post("/{chat_id}/messages", response_model=schemas.MessageReceived)
async def receive_message(chat_id: int, message: schemas.MessageCreate, host: ChatHost = Depends(get_chat_host)):
    """
    Append a message to a chat.

    Assistant messages are scanned for record blocks; merged blocks are
    replaced by status lines in the stored text.
    """
    entry, result = await host.receive_message(chat_id, message.role, message.content)

    added: List[str] = []
    skipped = 0
    if result is not None:
        added = [o.status_line for o in result.outcomes if o.consumed]
        skipped = len(result.skipped)

    return schemas.MessageReceived(
        position=entry.position,
        role=entry.role,
        content=entry.content,
        is_system=entry.is_system,
        updated=bool(result and result.changed),
        added=added,
        skipped=skipped,
    )


@router.post("/{chat_id}/generation", response_model=schemas.GenerationResponse)
async def start_generation(chat_id: int, host: ChatHost = Depends(get_chat_host)):
    """Refresh the record and rules prompts before a generation turn."""
    prompts = await host.start_generation(chat_id)
    return {"chat_id": chat_id, "prompts": prompts}
