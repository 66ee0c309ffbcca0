"""
Hugging Face serverless Inference API (text-generation task).

Key differences from the chat-style families:
- Single prompt: `inputs` is the content of the last turn only; earlier
  history is not sent.
- No usage accounting: the API reports none, so usage is a zeroed stub.
- Bare array response: `[{"generated_text": ...}]`
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


class HuggingFaceFamily:
    """Hugging Face `/models/{model}` with bearer auth."""

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
            url=f"{descriptor.base_url}/{model}",
            headers=headers,
            json_body={
                "inputs": turns[-1].content,
                "parameters": {
                    "max_new_tokens": max_tokens,
                    "temperature": temperature,
                    "return_full_text": False,
                },
            },
        )

    def parse_response(self, descriptor: ProviderDescriptor, data: Any) -> CompletionResult:
        try:
            content = data[0]["generated_text"]
            return CompletionResult(content=content, usage={"total_tokens": 0})
        except (KeyError, IndexError, TypeError, ValidationError) as e:
            raise shape_error(descriptor, data, e) from e
