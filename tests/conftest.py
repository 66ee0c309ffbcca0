"""Shared test fixtures for brixem-ai tests."""

import pytest

from brixem_ai.adapters.schema import ChatTurn, ProviderKind
from brixem_ai.config import ACTIVE_PROVIDER_ENV, API_KEY_ENV, load_providers


# ─────────────────────────────────────────────────────────────────────
# MOCK DATA
# ─────────────────────────────────────────────────────────────────────

TEST_KEYS = {
    ProviderKind.OPENAI: "sk-test-openai",
    ProviderKind.ANTHROPIC: "sk-ant-test",
    ProviderKind.GOOGLE: "AIza-test",
    ProviderKind.HUGGINGFACE: "hf_test",
    ProviderKind.GROQ: "gsk_test",
}

ENDPOINTS = {
    ProviderKind.OPENAI: "https://api.openai.com/v1/chat/completions",
    ProviderKind.GROQ: "https://api.groq.com/openai/v1/chat/completions",
    ProviderKind.ANTHROPIC: "https://api.anthropic.com/v1/messages",
    ProviderKind.GOOGLE: "https://generativelanguage.googleapis.com/v1beta/models/gemini-pro:generateContent",
    ProviderKind.HUGGINGFACE: "https://api-inference.huggingface.co/models/microsoft/DialoGPT-medium",
}

MOCK_OPENAI_RESPONSE = {
    "id": "chatcmpl-123",
    "object": "chat.completion",
    "created": 1699000000,
    "model": "gpt-3.5-turbo",
    "choices": [
        {
            "index": 0,
            "message": {
                "role": "assistant",
                "content": "Start with a structural survey."
            },
            "finish_reason": "stop"
        }
    ],
    "usage": {
        "prompt_tokens": 12,
        "completion_tokens": 6,
        "total_tokens": 18
    }
}

MOCK_ANTHROPIC_RESPONSE = {
    "id": "msg_01",
    "type": "message",
    "role": "assistant",
    "model": "claude-3-haiku-20240307",
    "content": [{"type": "text", "text": "Order the skip before demolition."}],
    "stop_reason": "end_turn",
    "usage": {"input_tokens": 20, "output_tokens": 7},
}

MOCK_GEMINI_RESPONSE = {
    "candidates": [
        {
            "content": {"role": "model", "parts": [{"text": "Check party wall requirements."}]},
            "finishReason": "STOP",
        }
    ],
    "usageMetadata": {"promptTokenCount": 9, "candidatesTokenCount": 5, "totalTokenCount": 14},
}

MOCK_HUGGINGFACE_RESPONSE = [{"generated_text": "Budget a 10% contingency."}]


# ─────────────────────────────────────────────────────────────────────
# FIXTURES - Environment
# ─────────────────────────────────────────────────────────────────────

@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Strip provider settings from the real environment for every test."""
    monkeypatch.delenv(ACTIVE_PROVIDER_ENV, raising=False)
    for env_name in API_KEY_ENV.values():
        monkeypatch.delenv(env_name, raising=False)


@pytest.fixture
def configured_env(monkeypatch):
    """Set a fake credential for every provider."""
    for kind, key in TEST_KEYS.items():
        monkeypatch.setenv(API_KEY_ENV[kind], key)


@pytest.fixture
def providers(configured_env):
    """Descriptor table with every provider configured."""
    return load_providers()


# ─────────────────────────────────────────────────────────────────────
# FIXTURES - Conversations
# ─────────────────────────────────────────────────────────────────────

@pytest.fixture
def system_user_turns():
    return [
        ChatTurn(role="system", content="S"),
        ChatTurn(role="user", content="U"),
    ]


@pytest.fixture
def sample_turns():
    """Return a short renovation conversation."""
    return [
        ChatTurn(role="system", content="You are a construction assistant."),
        ChatTurn(role="user", content="I want to extend my kitchen."),
        ChatTurn(role="assistant", content="How large is the extension?"),
        ChatTurn(role="user", content="About 20 square metres."),
    ]
