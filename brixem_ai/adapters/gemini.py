"""
Google Gemini `generateContent`.

The credential travels in the `key` query parameter, not a header.
Gemini only knows the roles "user" and "model".
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


def _gemini_role(role: str) -> str:
    return "user" if role == "user" else "model"


class GeminiFamily:
    """Gemini `models/{model}:generateContent` with query-string auth."""

    def build_request(
        self,
        descriptor: ProviderDescriptor,
        turns: list[ChatTurn],
        model: str,
        max_tokens: int,
        temperature: float,
    ) -> PreparedRequest:
        return PreparedRequest(
            url=f"{descriptor.base_url}/models/{model}:generateContent",
            headers=dict(descriptor.headers),
            params={"key": descriptor.api_key},
            json_body={
                "contents": [
                    {"role": _gemini_role(t.role), "parts": [{"text": t.content}]}
                    for t in turns
                ],
                "generationConfig": {
                    "maxOutputTokens": max_tokens,
                    "temperature": temperature,
                },
            },
        )

    def parse_response(self, descriptor: ProviderDescriptor, data: Any) -> CompletionResult:
        try:
            content = data["candidates"][0]["content"]["parts"][0]["text"]
            usage = data["usageMetadata"]
            return CompletionResult(content=content, usage=usage)
        except (KeyError, IndexError, TypeError, ValidationError) as e:
            raise shape_error(descriptor, data, e) from e
