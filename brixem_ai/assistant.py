"""
Construction assistant - the conversational feature built on AIClient.

UI messages arrive as {"role": "user" | "ai", "text": ...}; they are mapped
to chat turns behind a construction-specific system prompt.
"""

import logging
import re
from typing import Any, Literal, Optional, Sequence

from pydantic import BaseModel, Field

from brixem_ai.adapters.schema import ChatOptions, ChatTurn
from brixem_ai.client import AIClient
from brixem_ai.errors import ResponseShapeError

logger = logging.getLogger(__name__)

DEFAULT_PROJECT_CONTEXT = "General construction project management"

SYSTEM_PROMPT_TEMPLATE = """You are Brixem AI, a specialized AI assistant for construction and renovation project management. You help homeowners and contractors manage their projects effectively.

Your capabilities include:
- Creating and managing tasks
- Providing project advice and best practices
- Helping with project planning and scheduling
- Answering questions about construction processes
- Suggesting improvements to project workflows

Current project context: {project_context}

Always be helpful, professional, and construction-focused. When users ask to create tasks, extract the task details and confirm before creating. Keep responses concise but informative."""

TASK_KEYWORDS: list[str] = [
    "create task",
    "add task",
    "new task",
    "make task",
    "add card",
    "create card",
    "new card",
]

_QUOTE = "\"“”"
TASK_PATTERNS: list[re.Pattern] = [
    re.compile(rf"created.*task.*[{_QUOTE}]([^{_QUOTE}]+)[{_QUOTE}]", re.IGNORECASE),
    re.compile(rf"added.*task.*[{_QUOTE}]([^{_QUOTE}]+)[{_QUOTE}]", re.IGNORECASE),
    re.compile(rf"new task.*[{_QUOTE}]([^{_QUOTE}]+)[{_QUOTE}]", re.IGNORECASE),
]


class UIMessage(BaseModel):
    """Chat message as the product UI stores it."""
    role: str  # "user" or "ai"
    text: str


class TaskDetails(BaseModel):
    title: str
    description: Optional[str] = "Task created via AI chat"
    priority: Literal["high", "medium", "low"] = "medium"


class AssistantReply(BaseModel):
    message: str
    usage: dict[str, Any] = Field(default_factory=dict)


def build_system_prompt(project_context: Optional[str] = None) -> str:
    return SYSTEM_PROMPT_TEMPLATE.format(
        project_context=project_context or DEFAULT_PROJECT_CONTEXT
    )


def to_chat_turns(
    messages: Sequence[UIMessage | dict],
    project_context: Optional[str] = None,
) -> list[ChatTurn]:
    """Prepend the system prompt and map UI roles ("ai" and anything else -> assistant)."""
    turns = [ChatTurn(role="system", content=build_system_prompt(project_context))]
    for raw in messages:
        msg = raw if isinstance(raw, UIMessage) else UIMessage.model_validate(raw)
        role = "user" if msg.role == "user" else "assistant"
        turns.append(ChatTurn(role=role, content=msg.text))
    return turns


def detect_task_creation(message: str) -> Optional[str]:
    """
    Return the task description following a task-creation keyword.

    Keywords are checked in order; the first one followed by non-empty
    text wins. Case-insensitive, original casing of the tail is kept.
    """
    lowered = message.lower()
    for keyword in TASK_KEYWORDS:
        index = lowered.find(keyword)
        if index == -1:
            continue
        tail = message[index + len(keyword):].strip()
        if tail:
            return tail
    return None


def extract_task_details(reply: str) -> Optional[TaskDetails]:
    """Pull a quoted task title out of an assistant reply, if it announces one."""
    for pattern in TASK_PATTERNS:
        match = pattern.search(reply)
        if match and match.group(1).strip():
            return TaskDetails(title=match.group(1).strip())
    return None


class ConstructionAssistant:
    """Answers UI chat messages through an injected AIClient."""

    def __init__(self, client: AIClient, options: Optional[ChatOptions] = None):
        self._client = client
        self._options = options

    async def reply(
        self,
        messages: Sequence[UIMessage | dict],
        project_context: Optional[str] = None,
    ) -> AssistantReply:
        if not messages:
            raise ValueError("At least one message is required")

        turns = to_chat_turns(messages, project_context)
        result = await self._client.chat_completion(turns, self._options)
        if not result.content:
            raise ResponseShapeError(
                f"No response from {self._client.provider.name}"
            )

        logger.debug("Assistant reply: %d chars", len(result.content))
        return AssistantReply(message=result.content, usage=result.usage)
