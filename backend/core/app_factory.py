"""
Application factory for creating FastAPI app instances.

This module provides functions for creating and configuring the FastAPI application
with all necessary routers, static files and the chat host.
"""

import logging
from contextlib import asynccontextmanager

import httpx
from fastapi import FastAPI
from fastapi.staticfiles import StaticFiles
from infrastructure.database import async_session_maker, init_db
from services.chat_host import ChatHost

from core import get_settings

logger = logging.getLogger("AppFactory")


def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.

    Returns:
        Configured FastAPI application instance
    """
    from routers import chats, npc, personas

    settings = get_settings()

    # Create lifespan context manager
    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Lifespan context manager for application startup and shutdown."""
        # Startup
        logger.info("🚀 Application startup...")

        # Initialize database
        await init_db()

        # The rules client outlives requests; it is closed on shutdown
        rules_client = httpx.AsyncClient()
        chat_host = ChatHost(async_session_maker, rules_client, settings=settings)

        # Store in app state for dependency injection
        app.state.chat_host = chat_host

        logger.info(f"📜 Default rules URL: {settings.default_rules_url}")
        logger.info("✅ Application startup complete")

        yield

        # Shutdown
        logger.info("🛑 Application shutdown...")
        await chat_host.flush()
        await rules_client.aclose()
        logger.info("✅ Application shutdown complete")

    # Create app with lifespan
    app = FastAPI(title="NPC Memory API", lifespan=lifespan)

    # Register routers
    # npc routes share the /chats prefix with the chat routes
    app.include_router(chats.router, prefix="/chats", tags=["Chats"])
    app.include_router(npc.router, prefix="/chats", tags=["NPC"])
    app.include_router(personas.router, prefix="/personas", tags=["Personas"])

    # Bundled resources, including the default rules document
    if settings.static_dir.exists():
        app.mount("/static", StaticFiles(directory=str(settings.static_dir)), name="static")
        logger.info(f"📁 Serving static files from: {settings.static_dir}")
    else:
        logger.warning(f"Static directory not found: {settings.static_dir}")

    return app
