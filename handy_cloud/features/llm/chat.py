"""Single-turn chat completion against OpenAI- or Anthropic-compatible APIs."""

import httpx
import structlog

from handy_cloud.features.llm.client import client_session, create_client
from handy_cloud.features.llm.constants import (
    CHAT_COMPLETIONS_PATH,
    DEFAULT_TIMEOUT_SECONDS,
    OPERATION_CHAT,
    UNREADABLE_ERROR_BODY,
)
from handy_cloud.features.llm.errors import LlmApiError, LlmError, LlmTransportError
from handy_cloud.features.llm.headers import build_headers
from handy_cloud.features.llm.metrics import LlmMetrics
from handy_cloud.features.llm.providers import ProviderDescriptor
from handy_cloud.features.llm.redact import redact_url_credentials
from handy_cloud.features.llm.responses import (
    ChatCompletionRequest,
    ChatCompletionResponse,
    ChatMessage,
    describe_status,
    parse_body,
    read_error_text,
)


logger = structlog.get_logger()


async def send_chat_completion(
    provider: ProviderDescriptor,
    api_key: str,
    model: str,
    prompt: str,
    *,
    timeout: float = DEFAULT_TIMEOUT_SECONDS,
    transport: httpx.AsyncBaseTransport | None = None,
    client: httpx.AsyncClient | None = None,
) -> str | None:
    """Send a single-turn prompt and return the first completion's text.

    Args:
        provider: Target provider.
        api_key: API key; empty sends the request unauthenticated.
        model: Model identifier.
        prompt: User message content.
        timeout: Request timeout in seconds.
        transport: Optional transport override (used by tests).
        client: Caller-owned client to reuse. Provider headers are sent per
            request and the client is left open; ``timeout`` and ``transport``
            are ignored in that case.

    Returns:
        Completion text, or None when the provider returned no choices or a
        choice without content (e.g. filtered output).

    Raises:
        InvalidCredentialEncodingError: If the key is not a legal header value.
        ClientConstructionError: If the HTTP client cannot be built.
        LlmTransportError: On network-level failure.
        LlmApiError: On a non-success HTTP status.
        ResponseShapeError: If a success body has an unexpected shape.
    """
    url = provider.endpoint(CHAT_COMPLETIONS_PATH)
    log = logger.bind(
        component="llm", subcomponent="chat", provider=provider.id, model=model
    )
    metrics = LlmMetrics.get_instance()
    metrics.record_request(OPERATION_CHAT)

    log.debug("chat_completion_request", url=redact_url_credentials(url))
    try:
        content = await _post_completion(
            provider, api_key, url, model, prompt, timeout, transport, client
        )
    except LlmError as exc:
        metrics.record_failure(OPERATION_CHAT, type(exc).__name__)
        log.warning("chat_completion_failed", error=str(exc))
        raise

    if content is None:
        log.info("chat_completion_empty")
    else:
        log.debug("chat_completion_complete", chars=len(content))
    return content


async def _post_completion(  # noqa: PLR0913
    provider: ProviderDescriptor,
    api_key: str,
    url: str,
    model: str,
    prompt: str,
    timeout: float,
    transport: httpx.AsyncBaseTransport | None,
    client: httpx.AsyncClient | None,
) -> str | None:
    request_body = ChatCompletionRequest(
        model=model,
        messages=[ChatMessage(role="user", content=prompt)],
    )

    request_headers = build_headers(provider, api_key) if client is not None else None

    async with client_session(
        client,
        lambda: create_client(provider, api_key, timeout=timeout, transport=transport),
    ) as http:
        try:
            response = await http.post(
                url, json=request_body.model_dump(), headers=request_headers
            )
        except httpx.HTTPError as exc:
            msg = f"HTTP request failed: {exc}"
            raise LlmTransportError(msg) from exc

        if not response.is_success:
            error_text = await read_error_text(response, UNREADABLE_ERROR_BODY)
            msg = (
                f"API request failed with status {describe_status(response)}: "
                f"{error_text}"
            )
            raise LlmApiError(msg, status_code=response.status_code, body=error_text)

        completion = parse_body(
            response, ChatCompletionResponse, "Failed to parse API response"
        )

    return completion.first_content()
