"""
RequestFamily Protocol - defines the contract for provider wire formats.

This is the WHAT (interface), not the HOW (implementation).
Each hosted API family (OpenAI-compatible, Anthropic, Gemini, Hugging Face)
gets one stateless implementation; AIClient picks one at construction time
and owns the actual HTTP call.
"""

import json
from typing import Any, Protocol

from brixem_ai.adapters.schema import (
    ChatTurn,
    CompletionResult,
    PreparedRequest,
    ProviderDescriptor,
)
from brixem_ai.errors import ResponseShapeError


class RequestFamily(Protocol):
    """
    Contract for one provider wire format.

    Implementations must provide:
    - Request shaping (build_request)
    - Response normalization (parse_response)

    Both are pure functions of their arguments: no I/O, no state.
    """

    def build_request(
        self,
        descriptor: ProviderDescriptor,
        turns: list[ChatTurn],
        model: str,
        max_tokens: int,
        temperature: float,
    ) -> PreparedRequest:
        """
        Reshape normalized turns into the provider's request.

        Args:
            descriptor: Active provider (base URL, headers, credential)
            turns: Non-empty, chronologically ordered conversation
            model: Effective model id
            max_tokens: Effective output token limit
            temperature: Effective sampling temperature

        Returns:
            PreparedRequest with url, headers, query params and JSON body
        """
        ...

    def parse_response(
        self,
        descriptor: ProviderDescriptor,
        data: Any,
    ) -> CompletionResult:
        """
        Extract the canonical {content, usage} pair from decoded JSON.

        Raises:
            ResponseShapeError if the expected path is missing
        """
        ...


def shape_error(descriptor: ProviderDescriptor, data: Any, exc: Exception) -> ResponseShapeError:
    """Build a ResponseShapeError quoting a bounded slice of the payload."""
    try:
        snippet = json.dumps(data)[:500]
    except (TypeError, ValueError):
        snippet = repr(data)[:500]
    return ResponseShapeError(
        f"Unexpected {descriptor.name} response shape ({type(exc).__name__}: {exc}): {snippet}"
    )
