"""Per-provider HTTP header construction."""

from collections.abc import Callable

from handy_cloud.features.llm.constants import (
    ANTHROPIC_API_VERSION,
    APP_REFERER,
    APP_TITLE,
    APP_USER_AGENT,
    HEADER_ANTHROPIC_KEY,
    HEADER_ANTHROPIC_VERSION,
    HEADER_AUTHORIZATION,
    HEADER_CONTENT_TYPE,
    HEADER_REFERER,
    HEADER_TITLE,
    HEADER_USER_AGENT,
    JSON_CONTENT_TYPE,
)
from handy_cloud.features.llm.errors import InvalidCredentialEncodingError
from handy_cloud.features.llm.providers import AuthScheme, ProviderDescriptor


_DEL = 0x7F


def validate_header_value(header_name: str, value: str) -> str:
    """Check that a value is legal inside an HTTP header.

    Only visible ASCII, space and horizontal tab are accepted.

    Args:
        header_name: Header the value is destined for (used in the error).
        value: Candidate header value.

    Returns:
        The unchanged value.

    Raises:
        InvalidCredentialEncodingError: If the value contains control or
            non-ASCII characters.
    """
    for position, char in enumerate(value):
        code = ord(char)
        if char == "\t":
            continue
        if code < 0x20 or code >= _DEL:
            msg = f"illegal character {char!r} at position {position}"
            raise InvalidCredentialEncodingError(header_name, msg)
    return value


def bearer_auth_header(api_key: str) -> dict[str, str]:
    """Build a generic bearer ``Authorization`` header."""
    value = validate_header_value(HEADER_AUTHORIZATION, f"Bearer {api_key}")
    return {HEADER_AUTHORIZATION: value}


def anthropic_auth_headers(api_key: str) -> dict[str, str]:
    """Build Anthropic's key and version headers."""
    return {
        HEADER_ANTHROPIC_KEY: validate_header_value(HEADER_ANTHROPIC_KEY, api_key),
        HEADER_ANTHROPIC_VERSION: ANTHROPIC_API_VERSION,
    }


_AUTH_HEADER_BUILDERS: dict[AuthScheme, Callable[[str], dict[str, str]]] = {
    AuthScheme.BEARER: bearer_auth_header,
    AuthScheme.ANTHROPIC_KEY: anthropic_auth_headers,
}


def common_headers() -> dict[str, str]:
    """Headers identifying the client application on every JSON request."""
    return {
        HEADER_CONTENT_TYPE: JSON_CONTENT_TYPE,
        HEADER_REFERER: APP_REFERER,
        HEADER_USER_AGENT: APP_USER_AGENT,
        HEADER_TITLE: APP_TITLE,
    }


def build_headers(provider: ProviderDescriptor, api_key: str) -> dict[str, str]:
    """Build the header set for a provider request.

    An empty key yields no auth header at all; the remote server is left
    to reject the request.

    Args:
        provider: Target provider; its auth scheme selects the key headers.
        api_key: API key, possibly empty.

    Returns:
        Header mapping ready to attach to a client.

    Raises:
        InvalidCredentialEncodingError: If the key is not a legal header value.
    """
    headers = common_headers()
    if api_key:
        headers.update(_AUTH_HEADER_BUILDERS[provider.auth_scheme](api_key))
    return headers
