"""
brixem-ai: provider-agnostic chat completions for construction projects.

AIClient hides the request/response differences between hosted LLM APIs;
the assistant and documents modules build on it.
"""

from brixem_ai.adapters.schema import ChatOptions, ChatTurn, CompletionResult, ProviderKind
from brixem_ai.client import AIClient, create_client

__all__ = [
    "AIClient",
    "ChatOptions",
    "ChatTurn",
    "CompletionResult",
    "ProviderKind",
    "create_client",
]
