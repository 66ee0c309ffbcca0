from enum import Enum
from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field


class ProviderKind(str, Enum):
    """Closed set of hosted chat providers. Values double as AI_PROVIDER keys."""
    OPENAI = "openai"
    ANTHROPIC = "anthropic"
    GOOGLE = "google"
    HUGGINGFACE = "huggingface"
    GROQ = "groq"


class ModelTiers(BaseModel):
    model_config = ConfigDict(frozen=True)

    chat: str
    fast: str
    advanced: str

    def resolve(self, model: Optional[str]) -> str:
        """Map a tier name to its model id. Anything else is taken as a literal id."""
        if not model:
            return self.chat
        if model in ("chat", "fast", "advanced"):
            return getattr(self, model)
        return model


class ProviderDescriptor(BaseModel):
    """
    One hosted AI service as loaded from configuration.

    Frozen once built: the client selects a descriptor at construction and
    never mutates it, so concurrent calls can share it without locking.
    `headers` holds the static request headers only; credentials are
    attached per request by the family handler.
    """
    model_config = ConfigDict(frozen=True)

    kind: ProviderKind
    name: str
    base_url: str
    api_key: str = ""
    models: ModelTiers
    headers: Dict[str, str] = Field(default_factory=dict)
    max_tokens: int = 2000
    temperature: float = 0.7

    @property
    def configured(self) -> bool:
        return bool(self.api_key)


class ChatTurn(BaseModel):
    """A single message in a conversation."""
    role: Literal["system", "user", "assistant"]
    content: str


class ChatOptions(BaseModel):
    """Per-call overrides. None means "use the provider default"."""
    model: Optional[str] = None  # tier name or literal model id
    max_tokens: Optional[int] = None
    temperature: Optional[float] = None


class PreparedRequest(BaseModel):
    """Provider-specific HTTP request, ready to send as-is."""
    url: str
    headers: Dict[str, str] = Field(default_factory=dict)
    params: Dict[str, str] = Field(default_factory=dict)
    json_body: Dict[str, Any]


class CompletionResult(BaseModel):
    """
    Normalized completion.

    `usage` is passed through untouched; its shape depends on the provider
    (OpenAI-style token counts, Anthropic input/output tokens, Gemini
    usageMetadata, ...).
    """
    content: str
    usage: Dict[str, Any] = Field(default_factory=dict)


def coerce_turns(turns: List[Any]) -> List[ChatTurn]:
    """Accept ChatTurn instances or plain {"role", "content"} dicts."""
    return [t if isinstance(t, ChatTurn) else ChatTurn.model_validate(t) for t in turns]
