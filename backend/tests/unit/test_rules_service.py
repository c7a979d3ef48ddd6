"""
Unit tests for the rules prompt service.
"""

import httpx
import pytest
import yaml
from core.settings import RULES_PROMPT_KEY, RULES_PROMPT_PRIORITY
from domain.entities.npc_models import PersonaNote
from domain.exceptions import RulesFetchError
from infrastructure.host import ChatState, PersonaNoteBook
from services.rules_service import RulesPromptService, render_rules

RULES_URL = "http://rules.test/static/defaultrules.json"


class TestRenderRules:
    """Tests for render_rules."""

    @pytest.mark.unit
    def test_block_style_yaml(self):
        text = render_rules({"rules": {"ids": "four digits", "tags": ["location"]}})

        assert text == "rules:\n  ids: four digits\n  tags:\n  - location\n"


class TestFetchDefaultRules:
    """Tests for fetching the default rules document."""

    @pytest.mark.unit
    async def test_fetch(self, rules_client, default_rules, rules_requests):
        service = RulesPromptService(rules_client, RULES_URL)

        assert await service.fetch_default_rules() == default_rules
        assert str(rules_requests[0].url) == RULES_URL

    @pytest.mark.unit
    async def test_bad_status_raises(self, failing_rules_client):
        service = RulesPromptService(failing_rules_client, RULES_URL)

        with pytest.raises(RulesFetchError) as exc_info:
            await service.fetch_default_rules()

        assert exc_info.value.url == RULES_URL

    @pytest.mark.unit
    async def test_invalid_json_raises(self):
        transport = httpx.MockTransport(lambda request: httpx.Response(200, text="not json"))
        async with httpx.AsyncClient(transport=transport) as client:
            service = RulesPromptService(client, RULES_URL)

            with pytest.raises(RulesFetchError, match="invalid JSON"):
                await service.fetch_default_rules()

    @pytest.mark.unit
    async def test_transport_error_raises(self):
        def handler(request):
            raise httpx.ConnectError("refused", request=request)

        async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
            service = RulesPromptService(client, RULES_URL)

            with pytest.raises(RulesFetchError):
                await service.fetch_default_rules()


class TestPublish:
    """Tests for publishing the rules prompt."""

    @pytest.mark.unit
    async def test_blank_note_is_filled_once(self, rules_client, default_rules, rules_requests):
        service = RulesPromptService(rules_client, RULES_URL)
        notes = PersonaNoteBook()
        chat = ChatState(chat_id=1, persona="hero.png")

        assert await service.publish(notes, "hero.png", chat) is True
        assert await service.publish(notes, "hero.png", chat) is True

        assert len(rules_requests) == 1
        note = notes.get("hero.png")
        assert yaml.safe_load(note.prompt) == default_rules
        assert note.use_chara is False
        prompt = chat.prompts[RULES_PROMPT_KEY]
        assert prompt.text == note.prompt
        assert prompt.priority == RULES_PROMPT_PRIORITY
        assert [n.persona for n in notes.take_dirty()] == ["hero.png"]

    @pytest.mark.unit
    async def test_existing_note_used_as_is(self, rules_client, rules_requests):
        service = RulesPromptService(rules_client, RULES_URL)
        notes = PersonaNoteBook([PersonaNote(persona="hero.png", prompt="custom rules")])
        chat = ChatState(chat_id=1)

        await service.publish(notes, "hero.png", chat)

        assert rules_requests == []
        assert chat.prompts[RULES_PROMPT_KEY].text == "custom rules"

    @pytest.mark.unit
    async def test_fetch_failure_leaves_prompt_unset(self, failing_rules_client, caplog):
        service = RulesPromptService(failing_rules_client, RULES_URL)
        notes = PersonaNoteBook()
        chat = ChatState(chat_id=1)

        with caplog.at_level("WARNING", logger="RulesService"):
            assert await service.publish(notes, "hero.png", chat) is False

        assert RULES_PROMPT_KEY not in chat.prompts
        assert notes.get("hero.png") is None
        assert "rules prompt left unset" in caplog.text

    @pytest.mark.unit
    async def test_no_persona(self, rules_client):
        service = RulesPromptService(rules_client, RULES_URL)
        chat = ChatState(chat_id=1)

        assert await service.publish(PersonaNoteBook(), None, chat) is False
        assert await service.publish(None, "hero.png", chat) is False
