"""
Integration tests for persona note endpoints.
"""

import crud
import pytest
import yaml
from core.settings import RULES_PROMPT_KEY


class TestPersonaNoteEndpoints:
    """Tests for GET/PUT /personas/{persona}/note."""

    @pytest.mark.integration
    @pytest.mark.api
    async def test_missing_note_is_404(self, client):
        response = await client.get("/personas/nobody.png/note")

        assert response.status_code == 404

    @pytest.mark.integration
    @pytest.mark.api
    async def test_opening_chat_fills_note(self, client, default_rules):
        response = await client.post("/chats", json={"name": "adventure", "persona": "hero.png"})
        await client.post(f"/chats/{response.json()['id']}/open")

        note = (await client.get("/personas/hero.png/note")).json()

        assert yaml.safe_load(note["prompt"]) == default_rules
        assert note["use_chara"] is False

    @pytest.mark.integration
    @pytest.mark.api
    async def test_put_note_republishes_rules(self, client, rules_requests):
        response = await client.post("/chats", json={"name": "adventure", "persona": "hero.png"})
        chat_id = response.json()["id"]
        await client.post(f"/chats/{chat_id}/open")

        response = await client.put("/personas/hero.png/note", json={"prompt": "Only talk like a pirate."})
        assert response.status_code == 200
        assert response.json()["persona"] == "hero.png"

        generation = (await client.post(f"/chats/{chat_id}/generation")).json()
        prompts = {p["key"]: p["text"] for p in generation["prompts"]}
        assert prompts[RULES_PROMPT_KEY] == "Only talk like a pirate."
        assert len(rules_requests) == 1

    @pytest.mark.integration
    @pytest.mark.api
    async def test_note_is_persisted(self, client, chat_host):
        await client.put("/personas/rogue.png/note", json={"prompt": "stay quiet", "use_chara": True})
        await chat_host.flush()

        async with chat_host.persistence.session_factory() as db:
            note = await crud.get_persona_note(db, "rogue.png")

        assert note.prompt == "stay quiet"
        assert note.use_chara is True
