"""Unit tests for per-provider header construction."""

import pytest

from handy_cloud.features.llm.constants import (
    ANTHROPIC_API_VERSION,
    APP_REFERER,
    APP_TITLE,
    APP_USER_AGENT,
)
from handy_cloud.features.llm.errors import InvalidCredentialEncodingError, LlmError
from handy_cloud.features.llm.headers import (
    bearer_auth_header,
    build_headers,
    validate_header_value,
)
from handy_cloud.features.llm.providers import (
    BUILTIN_PROVIDERS,
    AuthScheme,
    ProviderDescriptor,
    custom_provider,
)


_KEY = "sk-test-key"  # noqa: S105

_ANTHROPIC = ProviderDescriptor(id="anthropic", base_url="https://api.anthropic.com/v1")
_OPENAI = ProviderDescriptor(id="openai", base_url="https://api.openai.com/v1")


def _lower(headers: dict[str, str]) -> dict[str, str]:
    return {key.lower(): value for key, value in headers.items()}


class TestCommonHeaders:
    """Headers present on every request."""

    @pytest.mark.parametrize("api_key", ["", _KEY])
    @pytest.mark.parametrize("provider", [_ANTHROPIC, _OPENAI])
    def test_identifying_headers_always_set(
        self, provider: ProviderDescriptor, api_key: str
    ) -> None:
        """Content type, referer, user agent and title are always present."""
        headers = _lower(build_headers(provider, api_key))

        assert headers["content-type"] == "application/json"
        assert headers["referer"] == APP_REFERER
        assert headers["user-agent"] == APP_USER_AGENT
        assert headers["x-title"] == APP_TITLE


class TestAnthropicAuth:
    """Anthropic uses x-api-key plus a version header."""

    def test_sets_key_and_version(self) -> None:
        """Should set x-api-key and anthropic-version."""
        headers = _lower(build_headers(_ANTHROPIC, _KEY))

        assert headers["x-api-key"] == _KEY
        assert headers["anthropic-version"] == ANTHROPIC_API_VERSION

    def test_no_bearer_authorization(self) -> None:
        """Should not set a bearer Authorization header."""
        headers = _lower(build_headers(_ANTHROPIC, _KEY))

        assert "authorization" not in headers


class TestBearerAuth:
    """Every other provider uses a bearer token."""

    @pytest.mark.parametrize(
        "provider_id", ["openai", "openrouter", "groq", "cerebras"]
    )
    def test_builtin_bearer_providers(self, provider_id: str) -> None:
        """Each known non-Anthropic provider gets a bearer header only."""
        headers = _lower(build_headers(BUILTIN_PROVIDERS[provider_id], _KEY))

        assert headers["authorization"] == f"Bearer {_KEY}"
        assert "x-api-key" not in headers
        assert "anthropic-version" not in headers

    def test_custom_provider_uses_bearer(self) -> None:
        """Ad-hoc providers default to bearer auth."""
        headers = _lower(build_headers(custom_provider("http://localhost:8080"), _KEY))

        assert headers["authorization"] == f"Bearer {_KEY}"

    def test_explicit_scheme_overrides_id(self) -> None:
        """An explicit auth scheme wins over the provider id."""
        provider = ProviderDescriptor(
            id="anthropic-proxy",
            base_url="https://proxy.example.com",
            auth_scheme=AuthScheme.ANTHROPIC_KEY,
        )

        headers = _lower(build_headers(provider, _KEY))

        assert headers["x-api-key"] == _KEY
        assert "authorization" not in headers


class TestEmptyKey:
    """An empty key means an unauthenticated request."""

    @pytest.mark.parametrize("provider", [_ANTHROPIC, _OPENAI])
    def test_no_auth_headers(self, provider: ProviderDescriptor) -> None:
        """Neither auth header is present for an empty key."""
        headers = _lower(build_headers(provider, ""))

        assert "authorization" not in headers
        assert "x-api-key" not in headers
        assert "anthropic-version" not in headers


class TestInvalidKey:
    """Keys that cannot be header values fail clearly."""

    @pytest.mark.parametrize("bad_key", ["sk-abc\n", "sk-\x00abc", "sk-ключ", "a\x7fb"])
    @pytest.mark.parametrize("provider", [_ANTHROPIC, _OPENAI])
    def test_illegal_characters_raise(
        self, provider: ProviderDescriptor, bad_key: str
    ) -> None:
        """Control and non-ASCII characters are rejected."""
        with pytest.raises(InvalidCredentialEncodingError, match="Invalid"):
            build_headers(provider, bad_key)

    def test_error_names_header(self) -> None:
        """The error carries the header it was destined for."""
        with pytest.raises(InvalidCredentialEncodingError) as exc_info:
            bearer_auth_header("bad\r\nkey")

        assert exc_info.value.header_name == "Authorization"
        assert isinstance(exc_info.value, LlmError)

    def test_tab_and_space_allowed(self) -> None:
        """Tab and space are legal header characters."""
        assert validate_header_value("x-api-key", "a b\tc") == "a b\tc"
