"""
Anthropic Messages API.

`messages` may only hold user/assistant turns, so system turns are lifted
out into the top-level `system` field.
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

ANTHROPIC_VERSION = "2023-06-01"


class AnthropicFamily:
    """Anthropic `/messages` with x-api-key auth."""

    def build_request(
        self,
        descriptor: ProviderDescriptor,
        turns: list[ChatTurn],
        model: str,
        max_tokens: int,
        temperature: float,
    ) -> PreparedRequest:
        headers = dict(descriptor.headers)
        headers["x-api-key"] = descriptor.api_key
        headers.setdefault("anthropic-version", ANTHROPIC_VERSION)

        conversation = [
            {"role": t.role, "content": t.content}
            for t in turns
            if t.role in ("user", "assistant")
        ]
        if not conversation:
            raise ValueError(f"{descriptor.name} requires at least one user or assistant turn")

        system_parts = [t.content for t in turns if t.role == "system"]
        body: dict[str, Any] = {
            "model": model,
            "max_tokens": max_tokens,
            "temperature": temperature,
            "messages": conversation,
        }
        if system_parts:
            body["system"] = "\n\n".join(system_parts)

        return PreparedRequest(
            url=f"{descriptor.base_url}/messages",
            headers=headers,
            json_body=body,
        )

    def parse_response(self, descriptor: ProviderDescriptor, data: Any) -> CompletionResult:
        try:
            content = data["content"][0]["text"]
            usage = data["usage"]
            return CompletionResult(content=content, usage=usage)
        except (KeyError, IndexError, TypeError, ValidationError) as e:
            raise shape_error(descriptor, data, e) from e
