"""Factory for HTTP clients with provider headers pre-attached."""

from collections.abc import AsyncIterator, Callable
from contextlib import asynccontextmanager

import httpx
import structlog

from handy_cloud.features.llm.constants import DEFAULT_TIMEOUT_SECONDS
from handy_cloud.features.llm.errors import ClientConstructionError
from handy_cloud.features.llm.headers import build_headers
from handy_cloud.features.llm.providers import ProviderDescriptor
from handy_cloud.features.llm.redact import redact_headers


logger = structlog.get_logger()


def create_client(
    provider: ProviderDescriptor,
    api_key: str,
    *,
    timeout: float = DEFAULT_TIMEOUT_SECONDS,
    transport: httpx.AsyncBaseTransport | None = None,
) -> httpx.AsyncClient:
    """Create an async HTTP client carrying the provider's headers.

    The caller owns the returned client and must close it, typically with
    ``async with``.

    Args:
        provider: Target provider.
        api_key: API key, possibly empty.
        timeout: Request timeout in seconds.
        transport: Optional transport override (used by tests).

    Returns:
        Configured ``httpx.AsyncClient``.

    Raises:
        InvalidCredentialEncodingError: If the key is not a legal header value.
        ClientConstructionError: If the client cannot be built (e.g. TLS
            initialisation failure).
    """
    headers = build_headers(provider, api_key)
    logger.debug(
        "http_client_headers",
        component="llm",
        subcomponent="client",
        provider=provider.id,
        headers=redact_headers(headers),
    )
    return create_plain_client(headers=headers, timeout=timeout, transport=transport)


def create_plain_client(
    *,
    headers: dict[str, str] | None = None,
    timeout: float = DEFAULT_TIMEOUT_SECONDS,
    transport: httpx.AsyncBaseTransport | None = None,
) -> httpx.AsyncClient:
    """Create an async HTTP client without provider headers.

    Raises:
        ClientConstructionError: If the client cannot be built.
    """
    try:
        return httpx.AsyncClient(headers=headers, timeout=timeout, transport=transport)
    except (OSError, ValueError, TypeError) as exc:
        msg = f"Failed to build HTTP client: {exc}"
        raise ClientConstructionError(msg) from exc


@asynccontextmanager
async def client_session(
    client: httpx.AsyncClient | None,
    factory: Callable[[], httpx.AsyncClient],
) -> AsyncIterator[httpx.AsyncClient]:
    """Yield the caller's client as-is, or a fresh one closed on exit.

    A borrowed client is never closed here; its owner controls its lifetime.
    """
    if client is not None:
        yield client
        return
    async with factory() as owned:
        yield owned
