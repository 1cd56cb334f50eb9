"""Provider-agnostic chat completion and model listing.

This module provides:
- Per-provider auth header construction (bearer or Anthropic key)
- Async HTTP client factory with headers pre-attached
- Single-turn chat completion
- Model listing tolerant of differing response shapes
"""

from handy_cloud.features.llm.chat import send_chat_completion
from handy_cloud.features.llm.client import (
    client_session,
    create_client,
    create_plain_client,
)
from handy_cloud.features.llm.errors import (
    ClientConstructionError,
    InvalidAudioError,
    InvalidCredentialEncodingError,
    LlmApiError,
    LlmError,
    LlmTransportError,
    MissingCredentialError,
    ResponseShapeError,
    UnknownProviderError,
)
from handy_cloud.features.llm.headers import build_headers
from handy_cloud.features.llm.metrics import LlmMetrics
from handy_cloud.features.llm.model_list import fetch_models, normalize_model_ids
from handy_cloud.features.llm.providers import (
    BUILTIN_PROVIDERS,
    AuthScheme,
    ProviderDescriptor,
    custom_provider,
    get_provider,
)


__all__ = [
    # Operations
    "send_chat_completion",
    "fetch_models",
    "normalize_model_ids",
    # Client
    "build_headers",
    "client_session",
    "create_client",
    "create_plain_client",
    # Providers
    "AuthScheme",
    "ProviderDescriptor",
    "BUILTIN_PROVIDERS",
    "get_provider",
    "custom_provider",
    # Errors
    "LlmError",
    "InvalidCredentialEncodingError",
    "ClientConstructionError",
    "LlmTransportError",
    "LlmApiError",
    "ResponseShapeError",
    "MissingCredentialError",
    "UnknownProviderError",
    "InvalidAudioError",
    # Metrics
    "LlmMetrics",
]
