"""Tests for the AI chat session and the symptom checker."""

import pytest

from smarthealth.api.health import CHAT_APOLOGY
from smarthealth.core.exceptions import APIError, ValidationError
from smarthealth.dashboard import ChatSession, Sender, SymptomChecker
from smarthealth.dashboard.chat import DEFAULT_SUGGESTIONS, GREETING
from smarthealth.dashboard.symptoms import DEFAULT_ACTIONS, DEFAULT_ADVICE, DEFAULT_BODY_PARTS, DISCLAIMER


class TestChatSession:
    def test_starts_with_greeting(self, api, clock):
        session = ChatSession(api, clock=clock)
        assert len(session.messages) == 1
        assert session.messages[0].sender == Sender.AI
        assert session.messages[0].text == GREETING
        assert session.suggestions == list(DEFAULT_SUGGESTIONS)

    @pytest.mark.asyncio
    async def test_send_appends_question_and_reply(self, api, fake_client, clock):
        fake_client.on("POST", "/ai/chat", {"response": "About two litres a day."})
        session = ChatSession(api, clock=clock)

        reply = await session.send("  How much water?  ")

        assert reply.text == "About two litres a day."
        assert [m.sender for m in session.messages] == [Sender.AI, Sender.USER, Sender.AI]
        assert session.messages[1].text == "How much water?"
        assert fake_client.calls_to("POST", "/ai/chat")[0][3] == {"message": "How much water?"}
        assert not session.typing

    @pytest.mark.asyncio
    async def test_blank_message_ignored(self, api, fake_client, clock):
        session = ChatSession(api, clock=clock)
        assert await session.send("   ") is None
        assert len(session.messages) == 1
        assert fake_client.calls == []

    @pytest.mark.asyncio
    async def test_unavailable_assistant_apologises(self, api, fake_client, clock):
        fake_client.on("POST", "/ai/chat", APIError("timeout"))
        session = ChatSession(api, clock=clock)
        reply = await session.send("Hello")
        assert reply.text == CHAT_APOLOGY
        assert len(session.messages) == 3

    @pytest.mark.asyncio
    async def test_server_suggestions_replace_defaults(self, api, fake_client, clock):
        fake_client.on("GET", "/ai/suggestions", [{"text": "Sleep tips"}, "Hydration"])
        session = ChatSession(api, clock=clock)
        assert await session.load_suggestions() == ["Sleep tips", "Hydration"]

    @pytest.mark.asyncio
    async def test_empty_suggestions_keep_defaults(self, api, fake_client, clock):
        fake_client.on("GET", "/ai/suggestions", [])
        session = ChatSession(api, clock=clock)
        assert await session.load_suggestions() == list(DEFAULT_SUGGESTIONS)


class TestSymptomChecker:
    @pytest.mark.asyncio
    async def test_body_parts_fall_back_to_defaults(self, api):
        checker = SymptomChecker(api)
        parts = await checker.load_body_parts()
        assert [p.id for p in parts] == [p.id for p in DEFAULT_BODY_PARTS]

    @pytest.mark.asyncio
    async def test_server_body_parts(self, api, fake_client):
        fake_client.on(
            "GET",
            "/symptoms/body-parts",
            [{"id": "back", "name": "Back", "symptoms": [{"id": 9, "name": "Back pain"}]}],
        )
        parts = await SymptomChecker(api).load_body_parts()
        assert len(parts) == 1
        assert parts[0].symptoms[0].name == "Back pain"

    @pytest.mark.asyncio
    async def test_check_requires_a_symptom(self, api, fake_client):
        checker = SymptomChecker(api)
        with pytest.raises(ValidationError):
            await checker.check([" ", ""])
        assert fake_client.calls == []

    @pytest.mark.asyncio
    async def test_check(self, api, fake_client):
        fake_client.on("POST", "/symptoms/check", {"severity": "medium", "recommendations": ["Drink water"]})

        result = await SymptomChecker(api).check(["Headache", " "], duration_days=2)

        assert result.severity == "medium"
        assert result.actions == ["Drink water"]
        assert result.advice == DEFAULT_ADVICE
        assert result.disclaimer == DISCLAIMER
        assert fake_client.calls_to("POST", "/symptoms/check")[0][3] == {
            "symptoms": ["Headache"],
            "duration_days": 2,
            "severity": "moderate",
        }

    @pytest.mark.asyncio
    async def test_sparse_result_uses_defaults(self, api, fake_client):
        fake_client.on("POST", "/symptoms/check", {})
        result = await SymptomChecker(api).check(["Fever"])
        assert result.severity == "low"
        assert result.actions == list(DEFAULT_ACTIONS)

    @pytest.mark.asyncio
    async def test_check_failure_propagates(self, api, fake_client):
        fake_client.on("POST", "/symptoms/check", APIError("down", status=503))
        with pytest.raises(APIError):
            await SymptomChecker(api).check(["Fever"])
