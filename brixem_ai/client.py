"""
AIClient - one chat_completion() call over any configured hosted provider.

The provider and its request family are resolved once, at construction.
Each call then issues exactly one HTTP request: no retry, no backoff, and no
timeout unless the caller asks for one.
"""

import logging
from typing import Any, Optional, Sequence, Union

import httpx

from brixem_ai.adapters import FAMILIES, RequestFamily
from brixem_ai.adapters.schema import (
    ChatOptions,
    ChatTurn,
    CompletionResult,
    PreparedRequest,
    ProviderDescriptor,
    ProviderKind,
    coerce_turns,
)
from brixem_ai.config import API_KEY_ENV, get_active_provider_name, load_providers
from brixem_ai.errors import ConfigurationError, ProviderRequestError, ResponseShapeError, UpstreamError

logger = logging.getLogger(__name__)


def _resolve_kind(provider: Union[ProviderKind, str]) -> ProviderKind:
    try:
        return ProviderKind(provider)
    except ValueError:
        valid = ", ".join(k.value for k in ProviderKind)
        raise ConfigurationError(
            f"AI provider '{provider}' not found. Expected one of: {valid}"
        ) from None


class AIClient:
    """
    Provider-agnostic chat client.

    Usage:
        client = AIClient()                     # AI_PROVIDER, else openai
        client = AIClient("anthropic")          # explicit override
        result = await client.chat_completion(
            [{"role": "user", "content": "Plan a loft conversion"}],
            ChatOptions(model="advanced", temperature=0.2),
        )
        print(result.content, result.usage)
    """

    def __init__(
        self,
        provider: Optional[Union[ProviderKind, str]] = None,
        providers: Optional[dict[ProviderKind, ProviderDescriptor]] = None,
        timeout: Optional[float] = None,
    ):
        """
        Args:
            provider: Provider override. Falls back to AI_PROVIDER, then openai.
            providers: Descriptor table. Defaults to load_providers().
            timeout: Per-request timeout in seconds. None disables it.

        Raises:
            ConfigurationError: unknown provider or empty credential
        """
        kind = _resolve_kind(provider or get_active_provider_name())
        table = providers if providers is not None else load_providers()

        descriptor = table.get(kind)
        if descriptor is None:
            raise ConfigurationError(f"AI provider '{kind.value}' not found")
        if not descriptor.api_key:
            raise ConfigurationError(
                f"API key not configured for {descriptor.name}. "
                f"Set {API_KEY_ENV[kind]} in the environment."
            )

        self._descriptor = descriptor
        self._family: RequestFamily = FAMILIES[kind]
        self._timeout = timeout
        logger.info("AI provider selected: %s", descriptor.name)

    @property
    def provider(self) -> ProviderDescriptor:
        return self._descriptor

    def prepare(
        self,
        turns: Sequence[Union[ChatTurn, dict]],
        options: Optional[ChatOptions] = None,
    ) -> PreparedRequest:
        """Resolve effective settings and shape the request without sending it."""
        if not turns:
            raise ValueError("chat_completion requires at least one turn")

        options = options or ChatOptions()
        d = self._descriptor
        model = d.models.resolve(options.model)
        max_tokens = options.max_tokens if options.max_tokens is not None else d.max_tokens
        temperature = options.temperature if options.temperature is not None else d.temperature

        return self._family.build_request(
            d, coerce_turns(list(turns)), model, max_tokens, temperature
        )

    async def chat_completion(
        self,
        turns: Sequence[Union[ChatTurn, dict]],
        options: Optional[ChatOptions] = None,
    ) -> CompletionResult:
        """
        Run one chat completion against the active provider.

        Args:
            turns: Non-empty ordered conversation (ChatTurn or role/content dicts)
            options: Optional model tier/id, max_tokens and temperature overrides

        Returns:
            CompletionResult with the response text and provider usage

        Raises:
            ValueError: turns is empty, or holds no turn the provider accepts
            UpstreamError: non-2xx HTTP status
            ProviderRequestError: transport failure
            ResponseShapeError: response JSON missing the expected path
        """
        request = self.prepare(turns, options)
        data = await self._send(request)
        return self._family.parse_response(self._descriptor, data)

    async def _send(self, request: PreparedRequest) -> Any:
        name = self._descriptor.name
        # request.params may carry the credential; log the bare URL only
        logger.debug("POST %s (%s)", request.url, name)

        try:
            async with httpx.AsyncClient(timeout=self._timeout) as client:
                response = await client.post(
                    request.url,
                    headers=request.headers,
                    params=request.params or None,
                    json=request.json_body,
                )
        except httpx.HTTPError as e:
            logger.warning("%s request failed: %s", name, e)
            raise ProviderRequestError(f"{name} request failed: {e}") from e

        if not response.is_success:
            logger.warning("%s returned HTTP %d", name, response.status_code)
            raise UpstreamError(name, response.status_code, response.text)

        try:
            return response.json()
        except ValueError as e:
            raise ResponseShapeError(
                f"{name} returned non-JSON body: {response.text[:500]}"
            ) from e


def create_client(
    provider: Optional[Union[ProviderKind, str]] = None,
    timeout: Optional[float] = None,
) -> AIClient:
    """Factory for callers that want an environment-configured client injected."""
    return AIClient(provider=provider, timeout=timeout)
