"""
Request families for hosted LLM chat APIs.

Provider-agnostic architecture: Protocol defines WHAT, families define HOW.
"""

from .anthropic import AnthropicFamily
from .base import RequestFamily
from .gemini import GeminiFamily
from .huggingface import HuggingFaceFamily
from .openai import OpenAIFamily
from .schema import ProviderKind

FAMILIES: dict[ProviderKind, RequestFamily] = {
    ProviderKind.OPENAI: OpenAIFamily(),
    ProviderKind.GROQ: OpenAIFamily(),
    ProviderKind.ANTHROPIC: AnthropicFamily(),
    ProviderKind.GOOGLE: GeminiFamily(),
    ProviderKind.HUGGINGFACE: HuggingFaceFamily(),
}

__all__ = [
    "FAMILIES",
    "RequestFamily",
    "OpenAIFamily",
    "AnthropicFamily",
    "GeminiFamily",
    "HuggingFaceFamily",
]
