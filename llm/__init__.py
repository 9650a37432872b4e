"""
LLM Module - Unified interface for LLM providers.

Usage:
    from llm import get_client

    client = get_client()  # Uses config settings and the credential chain
    response = client.generate("Your prompt here")
    print(response.content)

Supported providers:
- openai: OpenAI chat completions (or any OpenAI-compatible base URL)
"""
from typing import Optional

from config import settings
from .base import LLMClient, LLMError, LLMResponse, Message
from .credentials import (
    CredentialChain,
    CredentialProvider,
    EnvironmentCredentialProvider,
    KeyFileCredentialProvider,
    MissingCredentialError,
    SettingsCredentialProvider,
    StaticCredentialProvider,
    default_chain,
    save_api_key,
)
from .openai_client import OpenAIClient


# Provider mapping
_PROVIDERS = {
    "openai": OpenAIClient,
}

# Default models per provider
_DEFAULT_MODELS = {
    "openai": "gpt-4o-mini",
}


def get_client(
    provider: Optional[str] = None,
    api_key: Optional[str] = None,
    model: Optional[str] = None,
    credentials: Optional[CredentialChain] = None,
    timeout: Optional[float] = None,
) -> LLMClient:
    """
    Get an LLM client instance.

    Args:
        provider: Provider name. Defaults to settings.LLM_PROVIDER
        api_key: API key. When omitted the credential chain is consulted
        model: Model name. Defaults to settings.LLM_MODEL or provider default
        credentials: Chain to resolve the key from. Defaults to default_chain()
        timeout: Request timeout. Defaults to settings.LLM_TIMEOUT_SECONDS

    Raises:
        ValueError: Unknown provider
        MissingCredentialError: No key could be resolved
    """
    provider = (provider or settings.LLM_PROVIDER).lower()

    if provider not in _PROVIDERS:
        raise ValueError(f"Unknown LLM provider: {provider}. Available: {list(_PROVIDERS.keys())}")

    if api_key is None:
        api_key = (credentials or default_chain()).require()

    model = model or settings.LLM_MODEL or _DEFAULT_MODELS.get(provider)

    client_class = _PROVIDERS[provider]
    return client_class(
        api_key=api_key,
        model=model,
        timeout=timeout or settings.LLM_TIMEOUT_SECONDS,
        verify_ssl=settings.LLM_VERIFY_SSL,
        base_url=settings.LLM_BASE_URL,
    )


__all__ = [
    "get_client",
    "LLMClient",
    "LLMError",
    "LLMResponse",
    "Message",
    "OpenAIClient",
    "CredentialChain",
    "CredentialProvider",
    "StaticCredentialProvider",
    "SettingsCredentialProvider",
    "EnvironmentCredentialProvider",
    "KeyFileCredentialProvider",
    "MissingCredentialError",
    "default_chain",
    "save_api_key",
]
