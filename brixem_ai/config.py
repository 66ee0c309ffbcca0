"""
Configuration constants, provider table and environment loading for brixem-ai.
"""

import logging
import os
from pathlib import Path
from typing import Optional, Union

from dotenv import dotenv_values, set_key, unset_key

from brixem_ai.adapters.schema import ModelTiers, ProviderDescriptor, ProviderKind

logger = logging.getLogger(__name__)


# ─────────────────────────────────────────────────────────────────────
# DEFAULTS
# ─────────────────────────────────────────────────────────────────────

DEFAULT_PROVIDER: ProviderKind = ProviderKind.OPENAI
DEFAULT_TEMPERATURE: float = 0.7
DEFAULT_MAX_TOKENS: int = 2000
DEFAULT_ENV_FILE: str = ".env.local"

ACTIVE_PROVIDER_ENV: str = "AI_PROVIDER"

API_KEY_ENV: dict[ProviderKind, str] = {
    ProviderKind.OPENAI: "OPENAI_API_KEY",
    ProviderKind.ANTHROPIC: "ANTHROPIC_API_KEY",
    ProviderKind.GOOGLE: "GOOGLE_API_KEY",
    ProviderKind.HUGGINGFACE: "HUGGINGFACE_API_KEY",
    ProviderKind.GROQ: "GROQ_API_KEY",
}

# Where to get a key, shown by `brixem-ai providers`
API_KEY_URLS: dict[ProviderKind, str] = {
    ProviderKind.OPENAI: "https://platform.openai.com/api-keys",
    ProviderKind.ANTHROPIC: "https://console.anthropic.com/",
    ProviderKind.GOOGLE: "https://makersuite.google.com/app/apikey",
    ProviderKind.HUGGINGFACE: "https://huggingface.co/settings/tokens",
    ProviderKind.GROQ: "https://console.groq.com/keys",
}


# ─────────────────────────────────────────────────────────────────────
# PROVIDER TABLE - everything except credentials
# ─────────────────────────────────────────────────────────────────────

_JSON_HEADERS = {"Content-Type": "application/json"}

PROVIDER_DEFAULTS: dict[ProviderKind, dict] = {
    ProviderKind.OPENAI: {
        "name": "OpenAI",
        "base_url": "https://api.openai.com/v1",
        "models": ModelTiers(chat="gpt-3.5-turbo", fast="gpt-3.5-turbo", advanced="gpt-4"),
        "headers": _JSON_HEADERS,
        "max_tokens": 2000,
    },
    ProviderKind.ANTHROPIC: {
        "name": "Anthropic Claude",
        "base_url": "https://api.anthropic.com/v1",
        "models": ModelTiers(
            chat="claude-3-haiku-20240307",
            fast="claude-3-haiku-20240307",
            advanced="claude-3-sonnet-20240229",
        ),
        "headers": {**_JSON_HEADERS, "anthropic-version": "2023-06-01"},
        "max_tokens": 2000,
    },
    ProviderKind.GOOGLE: {
        "name": "Google Gemini",
        "base_url": "https://generativelanguage.googleapis.com/v1beta",
        "models": ModelTiers(chat="gemini-pro", fast="gemini-pro", advanced="gemini-pro"),
        "headers": _JSON_HEADERS,
        "max_tokens": 2000,
    },
    ProviderKind.HUGGINGFACE: {
        "name": "Hugging Face",
        "base_url": "https://api-inference.huggingface.co/models",
        "models": ModelTiers(
            chat="microsoft/DialoGPT-medium",
            fast="microsoft/DialoGPT-medium",
            advanced="meta-llama/Llama-2-7b-chat-hf",
        ),
        "headers": _JSON_HEADERS,
        "max_tokens": 1000,
    },
    ProviderKind.GROQ: {
        "name": "Groq",
        "base_url": "https://api.groq.com/openai/v1",
        "models": ModelTiers(
            chat="llama-3.3-70b-versatile",
            fast="llama-3.3-70b-versatile",
            advanced="llama-3.3-70b-versatile",
        ),
        "headers": _JSON_HEADERS,
        "max_tokens": 2000,
    },
}


# ─────────────────────────────────────────────────────────────────────
# ENVIRONMENT LOADING
# ─────────────────────────────────────────────────────────────────────

def get_active_provider_name() -> str:
    """
    Get the active provider key from environment or default.

    Set AI_PROVIDER in .env (default: openai). Returned as a raw string;
    validation against ProviderKind happens in AIClient.
    """
    value = os.environ.get(ACTIVE_PROVIDER_ENV, "").strip()
    return value or DEFAULT_PROVIDER.value


def get_api_key(kind: ProviderKind) -> str:
    """Get a provider credential from environment ("" when unset)."""
    return os.environ.get(API_KEY_ENV[kind], "").strip()


def load_providers() -> dict[ProviderKind, ProviderDescriptor]:
    """
    Build one immutable descriptor per supported provider.

    Credentials are read from the environment at call time; a provider with
    no key still gets a descriptor (configured=False) so it can be listed.
    """
    return {
        kind: ProviderDescriptor(
            kind=kind,
            api_key=get_api_key(kind),
            temperature=DEFAULT_TEMPERATURE,
            **defaults,
        )
        for kind, defaults in PROVIDER_DEFAULTS.items()
    }


# ─────────────────────────────────────────────────────────────────────
# SETUP - persist provider choice to a dotenv file
# ─────────────────────────────────────────────────────────────────────

def save_provider_config(
    provider: Union[ProviderKind, str],
    api_key: str,
    env_file: Optional[Union[str, Path]] = None,
) -> Path:
    """
    Write AI_PROVIDER and the provider's credential to a dotenv file.

    Credential lines of the other providers are removed so exactly one
    provider is configured afterwards. Unrelated lines are kept.

    Raises:
        ValueError: unknown provider or empty api_key
        OSError: the dotenv file cannot be created or written
    """
    kind = ProviderKind(provider)
    api_key = api_key.strip()
    if not api_key:
        raise ValueError("API key must not be empty")

    path = Path(env_file or DEFAULT_ENV_FILE)
    path.touch(exist_ok=True)

    existing = dotenv_values(path)
    for other, env_name in API_KEY_ENV.items():
        if other is not kind and env_name in existing:
            unset_key(path, env_name, quote_mode="never")

    set_key(path, ACTIVE_PROVIDER_ENV, kind.value, quote_mode="never")
    set_key(path, API_KEY_ENV[kind], api_key, quote_mode="never")
    logger.info("Saved %s configuration to %s", kind.value, path)
    return path
