"""
Unit tests for CRUD operations.

Tests database operations for chats, messages, metadata and persona notes.
"""

import crud
import pytest
import schemas
from domain.value_objects.enums import MessageRole


class TestChatCRUD:
    """Tests for chat CRUD operations."""

    @pytest.mark.unit
    async def test_create_and_get_chat(self, test_db):
        chat = await crud.create_chat(test_db, schemas.ChatCreate(name="adventure", persona="hero.png"))

        fetched = await crud.get_chat(test_db, chat.id)

        assert fetched.name == "adventure"
        assert fetched.persona == "hero.png"
        assert fetched.created_at is not None

    @pytest.mark.unit
    async def test_get_missing_chat(self, test_db):
        assert await crud.get_chat(test_db, 999) is None

    @pytest.mark.unit
    async def test_get_chats(self, test_db, sample_chat, other_chat):
        chats = await crud.get_chats(test_db)

        assert [c.id for c in chats] == [sample_chat.id, other_chat.id]


class TestMessageCRUD:
    """Tests for message CRUD operations."""

    @pytest.mark.unit
    async def test_messages_in_position_order(self, test_db, sample_chat):
        await crud.create_message(test_db, sample_chat.id, 1, "second")
        await crud.create_message(test_db, sample_chat.id, 0, "first", role=MessageRole.USER)

        messages = await crud.get_messages(test_db, sample_chat.id)

        assert [m.content for m in messages] == ["first", "second"]
        assert messages[0].role == MessageRole.USER

    @pytest.mark.unit
    async def test_update_message_content(self, test_db, sample_chat):
        message = await crud.create_message(test_db, sample_chat.id, 0, "old")

        await crud.update_message_content(test_db, message.id, "new")

        messages = await crud.get_messages(test_db, sample_chat.id)
        assert messages[0].content == "new"

    @pytest.mark.unit
    async def test_update_missing_message(self, test_db):
        assert await crud.update_message_content(test_db, 999, "x") is None


class TestMetadataCRUD:
    """Tests for chat metadata CRUD operations."""

    @pytest.mark.unit
    async def test_set_and_get(self, test_db, sample_chat):
        await crud.set_chat_metadata(test_db, sample_chat.id, {"characters": [{"id": "0001", "name": "Bob"}]})

        metadata = await crud.get_chat_metadata(test_db, sample_chat.id)

        assert metadata == {"characters": [{"id": "0001", "name": "Bob"}]}

    @pytest.mark.unit
    async def test_set_replaces_only_given_keys(self, test_db, sample_chat):
        await crud.set_chat_metadata(test_db, sample_chat.id, {"characters": [], "locations": [{"id": "0001"}]})
        await crud.set_chat_metadata(test_db, sample_chat.id, {"characters": [{"id": "0002"}]})

        metadata = await crud.get_chat_metadata(test_db, sample_chat.id)

        assert metadata == {"characters": [{"id": "0002"}], "locations": [{"id": "0001"}]}

    @pytest.mark.unit
    async def test_metadata_is_per_chat(self, test_db, sample_chat, other_chat):
        await crud.set_chat_metadata(test_db, sample_chat.id, {"characters": [{"id": "0001"}]})

        assert await crud.get_chat_metadata(test_db, other_chat.id) == {}


class TestPersonaNoteCRUD:
    """Tests for persona note CRUD operations."""

    @pytest.mark.unit
    async def test_upsert_creates_then_updates(self, test_db):
        await crud.upsert_persona_note(test_db, "hero.png", "rules", False)
        await crud.upsert_persona_note(test_db, "hero.png", "new rules", True)

        notes = await crud.get_persona_notes(test_db)

        assert len(notes) == 1
        assert notes[0].prompt == "new rules"
        assert notes[0].use_chara is True
