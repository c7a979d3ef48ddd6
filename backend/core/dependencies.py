"""Shared dependencies for FastAPI endpoints."""

from fastapi import Request
from services.chat_host import ChatHost


def get_chat_host(request: Request) -> ChatHost:
    """
    Dependency to get the chat host instance from app state.

    The instance is created during application startup in the lifespan context.
    """
    return request.app.state.chat_host
