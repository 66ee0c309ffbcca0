"""
OpenAI-compatible chat completions (OpenAI, Groq).

Turns go through unchanged as `messages`; sampling settings sit at the top
level of the body.
"""

from typing import Any

from pydantic import ValidationError

from brixem_ai.adapters.base import shape_error
from brixem_ai.adapters.schema import (
    ChatTurn,
    CompletionResult,
    PreparedRequest,
    ProviderDescriptor,
)


class OpenAIFamily:
    """OpenAI-style `/chat/completions` with bearer auth."""

    def build_request(
        self,
        descriptor: ProviderDescriptor,
        turns: list[ChatTurn],
        model: str,
        max_tokens: int,
        temperature: float,
    ) -> PreparedRequest:
        headers = dict(descriptor.headers)
        headers["Authorization"] = f"Bearer {descriptor.api_key}"
        return PreparedRequest(
            url=f"{descriptor.base_url}/chat/completions",
            headers=headers,
            json_body={
                "model": model,
                "messages": [t.model_dump() for t in turns],
                "max_tokens": max_tokens,
                "temperature": temperature,
            },
        )

    def parse_response(self, descriptor: ProviderDescriptor, data: Any) -> CompletionResult:
        try:
            content = data["choices"][0]["message"]["content"]
            usage = data["usage"]
            return CompletionResult(content=content, usage=usage)
        except (KeyError, IndexError, TypeError, ValidationError) as e:
            raise shape_error(descriptor, data, e) from e
