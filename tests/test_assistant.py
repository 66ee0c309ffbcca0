"""Tests for the construction assistant - prompt building, task helpers, replies."""

import pytest
from unittest.mock import AsyncMock, MagicMock

from brixem_ai.adapters.schema import CompletionResult
from brixem_ai.assistant import (
    DEFAULT_PROJECT_CONTEXT,
    ConstructionAssistant,
    UIMessage,
    build_system_prompt,
    detect_task_creation,
    extract_task_details,
    to_chat_turns,
)
from brixem_ai.errors import ResponseShapeError


class TestSystemPrompt:
    def test_default_context(self):
        assert f"Current project context: {DEFAULT_PROJECT_CONTEXT}" in build_system_prompt()

    def test_custom_context(self):
        prompt = build_system_prompt("Loft conversion in Leeds, budget £40k")
        assert "Loft conversion in Leeds, budget £40k" in prompt
        assert prompt.startswith("You are Brixem AI")


class TestToChatTurns:
    def test_prepends_system_and_maps_roles(self):
        turns = to_chat_turns([
            {"role": "user", "text": "Add a task for plastering"},
            {"role": "ai", "text": "Sure, what date?"},
            UIMessage(role="user", text="Next Monday"),
        ])

        assert [t.role for t in turns] == ["system", "user", "assistant", "user"]
        assert turns[1].content == "Add a task for plastering"
        assert turns[3].content == "Next Monday"

    def test_context_flows_into_system_turn(self):
        turns = to_chat_turns([{"role": "user", "text": "hi"}], "Bathroom refit")
        assert "Bathroom refit" in turns[0].content


class TestDetectTaskCreation:
    @pytest.mark.parametrize("message,expected", [
        ("Please create task order windows", "order windows"),
        ("ADD TASK Book the electrician", "Book the electrician"),
        ("can you add card: skip hire", ": skip hire"),
        ("new card   tile grout  ", "tile grout"),
    ])
    def test_extracts_tail(self, message, expected):
        assert detect_task_creation(message) == expected

    def test_no_keyword(self):
        assert detect_task_creation("What does a structural engineer cost?") is None

    def test_keyword_without_tail(self):
        assert detect_task_creation("please create task") is None

    def test_later_keyword_used_when_earlier_has_no_tail(self):
        assert detect_task_creation("new card please create task") == "please create task"


class TestExtractTaskDetails:
    def test_created_task_straight_quotes(self):
        details = extract_task_details('I have created a new task "Order roof tiles" for you.')
        assert details is not None
        assert details.title == "Order roof tiles"
        assert details.priority == "medium"
        assert details.description == "Task created via AI chat"

    def test_added_task_curly_quotes(self):
        details = extract_task_details("Added the task “Install downlights ” to your board.")
        assert details.title == "Install downlights"

    def test_no_task_announced(self):
        assert extract_task_details("Plastering usually takes two days.") is None


class TestConstructionAssistant:
    @pytest.fixture
    def client(self):
        client = MagicMock()
        client.provider.name = "Groq"
        client.chat_completion = AsyncMock(
            return_value=CompletionResult(content="Book a survey first.", usage={"total_tokens": 5})
        )
        return client

    @pytest.mark.asyncio
    async def test_reply(self, client):
        assistant = ConstructionAssistant(client)

        reply = await assistant.reply([{"role": "user", "text": "Where do I start?"}], "Extension")

        assert reply.message == "Book a survey first."
        assert reply.usage == {"total_tokens": 5}
        turns = client.chat_completion.call_args.args[0]
        assert turns[0].role == "system"
        assert "Extension" in turns[0].content
        assert turns[-1].content == "Where do I start?"

    @pytest.mark.asyncio
    async def test_empty_messages_rejected(self, client):
        with pytest.raises(ValueError):
            await ConstructionAssistant(client).reply([])
        client.chat_completion.assert_not_called()

    @pytest.mark.asyncio
    async def test_empty_completion_raises(self, client):
        client.chat_completion.return_value = CompletionResult(content="", usage={})
        with pytest.raises(ResponseShapeError, match="No response from Groq"):
            await ConstructionAssistant(client).reply([{"role": "user", "text": "hi"}])
