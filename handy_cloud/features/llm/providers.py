"""Provider descriptors and their authentication schemes."""

from enum import Enum
from typing import Annotated, Any, Final

from pydantic import BaseModel, ConfigDict, Field, model_validator

from handy_cloud.features.llm.constants import ANTHROPIC_PROVIDER_ID
from handy_cloud.features.llm.errors import UnknownProviderError


class AuthScheme(str, Enum):
    """How an API key is presented to a provider.

    - BEARER: ``Authorization: Bearer <key>``
    - ANTHROPIC_KEY: ``x-api-key: <key>`` plus ``anthropic-version``
    """

    BEARER = "bearer"
    ANTHROPIC_KEY = "anthropic_key"


def default_auth_scheme(provider_id: str) -> AuthScheme:
    """Return the auth scheme implied by a provider id."""
    if provider_id == ANTHROPIC_PROVIDER_ID:
        return AuthScheme.ANTHROPIC_KEY
    return AuthScheme.BEARER


class ProviderDescriptor(BaseModel):
    """Identifies a provider and where its API lives.

    When ``auth_scheme`` is not given it is derived from ``id``.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    id: Annotated[str, Field(min_length=1)]
    base_url: str
    auth_scheme: AuthScheme = AuthScheme.BEARER

    @model_validator(mode="before")
    @classmethod
    def derive_auth_scheme(cls, data: Any) -> Any:
        """Fill in ``auth_scheme`` from the provider id when absent."""
        if isinstance(data, dict) and data.get("auth_scheme") is None:
            data = dict(data)
            data["auth_scheme"] = default_auth_scheme(str(data.get("id", "")))
        return data

    @property
    def normalized_base_url(self) -> str:
        """Base URL with trailing slashes stripped."""
        return self.base_url.rstrip("/")

    def endpoint(self, path: str) -> str:
        """Join the normalized base URL with an endpoint path.

        Args:
            path: Endpoint path starting with ``/``.

        Returns:
            Absolute request URL.
        """
        return f"{self.normalized_base_url}{path}"


CUSTOM_PROVIDER_ID: Final = "custom"

BUILTIN_PROVIDERS: Final[dict[str, ProviderDescriptor]] = {
    provider.id: provider
    for provider in (
        ProviderDescriptor(id="openai", base_url="https://api.openai.com/v1"),
        ProviderDescriptor(id="openrouter", base_url="https://openrouter.ai/api/v1"),
        ProviderDescriptor(id="anthropic", base_url="https://api.anthropic.com/v1"),
        ProviderDescriptor(id="groq", base_url="https://api.groq.com/openai/v1"),
        ProviderDescriptor(id="cerebras", base_url="https://api.cerebras.ai/v1"),
    )
}


def get_provider(provider_id: str, base_url: str | None = None) -> ProviderDescriptor:
    """Look up a built-in provider, optionally overriding its base URL.

    Args:
        provider_id: Catalog identifier (e.g. 'openai', 'anthropic').
        base_url: Replacement base URL, for proxies or self-hosted gateways.

    Returns:
        The provider descriptor.

    Raises:
        UnknownProviderError: If the id is not in the catalog.
    """
    provider = BUILTIN_PROVIDERS.get(provider_id)
    if provider is None:
        raise UnknownProviderError(provider_id)
    if base_url:
        return provider.model_copy(update={"base_url": base_url})
    return provider


def custom_provider(
    base_url: str, auth_scheme: AuthScheme = AuthScheme.BEARER
) -> ProviderDescriptor:
    """Build an ad-hoc provider for an OpenAI-compatible endpoint."""
    return ProviderDescriptor(
        id=CUSTOM_PROVIDER_ID, base_url=base_url, auth_scheme=auth_scheme
    )
