"""
Unit tests for the in-memory chat state and persona note book.
"""

import pytest
from domain.entities.npc_models import PersonaNote
from domain.value_objects.enums import MessageRole, PromptPosition
from infrastructure.host import ChatState, DebouncedSaver, PersonaNoteBook


class TestChatState:
    """Tests for ChatState."""

    @pytest.mark.unit
    def test_append_assigns_positions(self, in_memory_chat):
        first = in_memory_chat.append(MessageRole.USER, "hi")
        second = in_memory_chat.append(MessageRole.ASSISTANT, "hello")

        assert (first.position, second.position) == (0, 1)
        assert in_memory_chat.get_message(1) is second
        assert in_memory_chat.get_message(2) is None
        assert in_memory_chat.get_message(-1) is None

    @pytest.mark.unit
    def test_update_message_tracks_edit(self, in_memory_chat):
        in_memory_chat.append(MessageRole.ASSISTANT, "old", id=10)

        in_memory_chat.update_message(0, "new")

        assert in_memory_chat.messages[0].content == "new"
        assert [m.id for m in in_memory_chat.take_edited_messages()] == [10]
        assert in_memory_chat.take_edited_messages() == []

    @pytest.mark.unit
    def test_unsaved_edits_are_not_reported_as_edits(self, in_memory_chat):
        in_memory_chat.append(MessageRole.ASSISTANT, "old")

        in_memory_chat.update_message(0, "new")

        assert in_memory_chat.take_edited_messages() == []
        assert [m.content for m in in_memory_chat.unsaved_messages()] == ["new"]

    @pytest.mark.unit
    def test_system_message(self, in_memory_chat):
        in_memory_chat.send_system_message("notice")

        message = in_memory_chat.messages[0]
        assert message.is_system is True
        assert message.role == MessageRole.SYSTEM

    @pytest.mark.unit
    def test_metadata_get_returns_copy(self, in_memory_chat):
        in_memory_chat.set("characters", [{"id": "0001"}])

        value = in_memory_chat.get("characters")
        value.append({"id": "0002"})

        assert in_memory_chat.metadata["characters"] == [{"id": "0001"}]
        assert in_memory_chat.metadata_dirty is True
        assert in_memory_chat.get("missing") is None

    @pytest.mark.unit
    def test_extension_prompt_replaced(self, in_memory_chat):
        in_memory_chat.set_extension_prompt("k", "one", PromptPosition.BEFORE_PROMPT, 1)
        in_memory_chat.set_extension_prompt("k", "two", PromptPosition.IN_CHAT, 1)

        assert len(in_memory_chat.prompts) == 1
        assert in_memory_chat.prompts["k"].text == "two"
        assert in_memory_chat.prompt_writes == 2

    @pytest.mark.unit
    async def test_save_requests_go_to_saver(self):
        calls = []

        async def save():
            calls.append(1)

        saver = DebouncedSaver(save, delay=60)
        chat = ChatState(chat_id=1, saver=saver)

        chat.save_debounced()
        assert saver.pending is True

        await saver.flush()
        assert calls == [1]


class TestPersonaNoteBook:
    """Tests for PersonaNoteBook."""

    @pytest.mark.unit
    def test_upsert_and_dirty_tracking(self):
        notes = PersonaNoteBook([PersonaNote(persona="a.png", prompt="x")])

        notes.upsert(PersonaNote(persona="b.png", prompt="y"))

        assert len(notes) == 2
        assert notes.get("a.png").prompt == "x"
        assert [n.persona for n in notes.take_dirty()] == ["b.png"]
        assert notes.take_dirty() == []
