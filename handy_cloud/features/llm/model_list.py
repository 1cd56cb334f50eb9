"""Model listing with tolerant normalization of response shapes.

Providers disagree on the shape of ``GET /models``. Two shapes are
recognised, tried in order:

1. ``{"data": [{"id": ...} | {"name": ...}, ...]}`` (OpenAI and most
   compatible gateways)
2. ``["model-a", "model-b", ...]``

Anything else yields an empty list rather than an error.
"""

import json
from collections.abc import Callable

import httpx
import structlog

from handy_cloud.features.llm.client import client_session, create_client
from handy_cloud.features.llm.constants import (
    DEFAULT_TIMEOUT_SECONDS,
    MODELS_PATH,
    OPERATION_MODELS,
    UNKNOWN_ERROR_BODY,
)
from handy_cloud.features.llm.errors import (
    LlmApiError,
    LlmError,
    LlmTransportError,
    ResponseShapeError,
)
from handy_cloud.features.llm.headers import build_headers
from handy_cloud.features.llm.metrics import LlmMetrics
from handy_cloud.features.llm.providers import ProviderDescriptor
from handy_cloud.features.llm.redact import redact_url_credentials
from handy_cloud.features.llm.responses import describe_status, read_error_text


logger = structlog.get_logger()


def _from_data_envelope(payload: object) -> list[str] | None:
    if not isinstance(payload, dict):
        return None
    data = payload.get("data")
    if not isinstance(data, list):
        return None

    models: list[str] = []
    for entry in data:
        if not isinstance(entry, dict):
            continue
        model_id = entry.get("id")
        if isinstance(model_id, str):
            models.append(model_id)
            continue
        name = entry.get("name")
        if isinstance(name, str):
            models.append(name)
    return models


def _from_string_list(payload: object) -> list[str] | None:
    if not isinstance(payload, list):
        return None
    return [entry for entry in payload if isinstance(entry, str)]


_SHAPES: tuple[Callable[[object], list[str] | None], ...] = (
    _from_data_envelope,
    _from_string_list,
)


def normalize_model_ids(payload: object) -> list[str]:
    """Extract model ids from a decoded ``/models`` response.

    Order follows the server's order. Duplicates are kept.

    Args:
        payload: Decoded JSON value.

    Returns:
        Model ids, or an empty list for unrecognised shapes.
    """
    for shape in _SHAPES:
        models = shape(payload)
        if models is not None:
            return models
    return []


async def fetch_models(
    provider: ProviderDescriptor,
    api_key: str,
    *,
    timeout: float = DEFAULT_TIMEOUT_SECONDS,
    transport: httpx.AsyncBaseTransport | None = None,
    client: httpx.AsyncClient | None = None,
) -> list[str]:
    """Query a provider for its available models.

    Args:
        provider: Target provider.
        api_key: API key; empty sends the request unauthenticated.
        timeout: Request timeout in seconds.
        transport: Optional transport override (used by tests).
        client: Caller-owned client to reuse. Provider headers are sent per
            request and the client is left open.

    Returns:
        Model ids in server order.

    Raises:
        InvalidCredentialEncodingError: If the key is not a legal header value.
        ClientConstructionError: If the HTTP client cannot be built.
        LlmTransportError: On network-level failure.
        LlmApiError: On a non-success HTTP status.
        ResponseShapeError: If a success body is not JSON at all.
    """
    url = provider.endpoint(MODELS_PATH)
    log = logger.bind(component="llm", subcomponent="models", provider=provider.id)
    metrics = LlmMetrics.get_instance()
    metrics.record_request(OPERATION_MODELS)

    log.debug("models_request", url=redact_url_credentials(url))
    try:
        payload = await _get_models_payload(
            provider, api_key, url, timeout, transport, client
        )
    except LlmError as exc:
        metrics.record_failure(OPERATION_MODELS, type(exc).__name__)
        log.warning("models_fetch_failed", error=str(exc))
        raise

    models = normalize_model_ids(payload)
    log.info("models_fetched", count=len(models))
    return models


async def _get_models_payload(  # noqa: PLR0913
    provider: ProviderDescriptor,
    api_key: str,
    url: str,
    timeout: float,
    transport: httpx.AsyncBaseTransport | None,
    client: httpx.AsyncClient | None,
) -> object:
    request_headers = build_headers(provider, api_key) if client is not None else None

    async with client_session(
        client,
        lambda: create_client(provider, api_key, timeout=timeout, transport=transport),
    ) as http:
        try:
            response = await http.get(url, headers=request_headers)
        except httpx.HTTPError as exc:
            msg = f"Failed to fetch models: {exc}"
            raise LlmTransportError(msg) from exc

        if not response.is_success:
            error_text = await read_error_text(response, UNKNOWN_ERROR_BODY)
            msg = f"Model list request failed ({describe_status(response)}): {error_text}"
            raise LlmApiError(msg, status_code=response.status_code, body=error_text)

        try:
            return response.json()
        except (json.JSONDecodeError, UnicodeDecodeError) as exc:
            msg = f"Failed to parse response: {exc}"
            raise ResponseShapeError(msg) from exc
