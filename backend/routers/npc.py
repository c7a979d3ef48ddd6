"""Routes for the npc command and record listings."""

import schemas
from core.dependencies import get_chat_host
from fastapi import APIRouter, Depends
from services.chat_host import ChatHost
from services.npc_command import NpcCommandArgs

router = APIRouter()


@router.post("/{chat_id}/npc", response_model=schemas.NpcCommandResponse)
async def run_npc_command(
    chat_id: int,
    command: schemas.NpcCommandRequest,
    host: ChatHost = Depends(get_chat_host),
):
    """
    Run the npc command against a chat.

    Options are applied with the precedence delete, update, list. The text
    output is also posted to the chat as a system message (except for clear).
    """
    args = NpcCommandArgs(
        list_scope=command.list_scope,
        delete=command.delete,
        update=command.update,
        property=command.property,
        value=command.value,
    )
    output = await host.run_npc_command(chat_id, args)
    return schemas.NpcCommandResponse(output=output)


@router.get("/{chat_id}/records", response_model=schemas.RecordsResponse)
async def get_records(chat_id: int, host: ChatHost = Depends(get_chat_host)):
    """Get the records of a chat grouped by category."""
    categories = await host.records(chat_id)
    return schemas.RecordsResponse(chat_id=chat_id, dirty=host.session.store.dirty, categories=categories)
