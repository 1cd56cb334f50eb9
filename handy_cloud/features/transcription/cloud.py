"""Audio transcription through an OpenAI-compatible cloud API."""

from collections.abc import Sequence

import httpx
import numpy as np
import structlog

from handy_cloud.features.llm.client import client_session, create_plain_client
from handy_cloud.features.llm.constants import (
    DEFAULT_TIMEOUT_SECONDS,
    OPERATION_TRANSCRIPTION,
    TRANSCRIPTIONS_PATH,
    UNREADABLE_ERROR_BODY,
)
from handy_cloud.features.llm.errors import (
    LlmApiError,
    LlmError,
    LlmTransportError,
    MissingCredentialError,
)
from handy_cloud.features.llm.headers import bearer_auth_header
from handy_cloud.features.llm.metrics import LlmMetrics
from handy_cloud.features.llm.redact import redact_url_credentials
from handy_cloud.features.llm.responses import (
    TranscriptionResponse,
    describe_status,
    parse_body,
    parse_error_message,
    read_error_text,
)
from handy_cloud.features.transcription.wav import SAMPLE_RATE_HZ, encode_wav


logger = structlog.get_logger()

AUDIO_FILENAME = "audio.wav"
AUDIO_MIME_TYPE = "audio/wav"

MISSING_KEY_MESSAGE = (
    "Cloud transcription API key is missing. Please add it in the Advanced settings."
)


async def transcribe_cloud(  # noqa: PLR0913
    api_key: str,
    base_url: str,
    model: str,
    audio_samples: Sequence[float] | np.ndarray,
    *,
    timeout: float = DEFAULT_TIMEOUT_SECONDS,
    transport: httpx.AsyncBaseTransport | None = None,
    client: httpx.AsyncClient | None = None,
) -> str:
    """Transcribe mono 16 kHz float samples with a cloud Whisper-style API.

    The samples are encoded to an in-memory WAV and uploaded as multipart
    form data to ``{base_url}/audio/transcriptions`` with bearer auth.

    Args:
        api_key: API key. Must be non-empty.
        base_url: Service base URL (e.g. 'https://api.openai.com/v1').
        model: Transcription model (e.g. 'whisper-1').
        audio_samples: Mono float32 samples at 16 kHz.
        timeout: Request timeout in seconds.
        transport: Optional transport override (used by tests).
        client: Caller-owned client to reuse. It is left open.

    Returns:
        Transcribed text.

    Raises:
        MissingCredentialError: If ``api_key`` is empty. No request is made.
        InvalidAudioError: If the samples cannot be encoded.
        InvalidCredentialEncodingError: If the key is not a legal header value.
        ClientConstructionError: If the HTTP client cannot be built.
        LlmTransportError: On network-level failure.
        LlmApiError: On a non-success HTTP status.
        ResponseShapeError: If a success body has no ``text`` field.
    """
    log = logger.bind(component="transcription", subcomponent="cloud", model=model)
    metrics = LlmMetrics.get_instance()

    if not api_key:
        metrics.record_failure(OPERATION_TRANSCRIPTION, MissingCredentialError.__name__)
        log.warning("cloud_transcription_missing_key")
        raise MissingCredentialError(MISSING_KEY_MESSAGE)

    url = f"{base_url.rstrip('/')}{TRANSCRIPTIONS_PATH}"
    metrics.record_request(OPERATION_TRANSCRIPTION)
    log.debug("cloud_transcription_request", url=redact_url_credentials(url))

    try:
        text = await _upload(
            api_key, url, model, audio_samples, timeout, transport, client
        )
    except LlmError as exc:
        metrics.record_failure(OPERATION_TRANSCRIPTION, type(exc).__name__)
        log.warning("cloud_transcription_failed", error=str(exc))
        raise

    log.info("cloud_transcription_complete", chars=len(text))
    return text


async def _upload(  # noqa: PLR0913
    api_key: str,
    url: str,
    model: str,
    audio_samples: Sequence[float] | np.ndarray,
    timeout: float,
    transport: httpx.AsyncBaseTransport | None,
    client: httpx.AsyncClient | None,
) -> str:
    headers = bearer_auth_header(api_key)
    wav_bytes = encode_wav(audio_samples, SAMPLE_RATE_HZ)

    async with client_session(
        client, lambda: create_plain_client(timeout=timeout, transport=transport)
    ) as http:
        try:
            response = await http.post(
                url,
                headers=headers,
                files={"file": (AUDIO_FILENAME, wav_bytes, AUDIO_MIME_TYPE)},
                data={"model": model},
            )
        except httpx.HTTPError as exc:
            msg = f"Cloud transcription request failed: {exc}"
            raise LlmTransportError(msg) from exc

        if not response.is_success:
            error_text = await read_error_text(response, UNREADABLE_ERROR_BODY)
            status = describe_status(response)
            api_message = parse_error_message(error_text)
            if api_message is not None:
                msg = f"Cloud transcription API error ({status}): {api_message}"
            else:
                msg = f"Cloud transcription failed ({status}): {error_text}"
            raise LlmApiError(msg, status_code=response.status_code, body=error_text)

        result = parse_body(
            response,
            TranscriptionResponse,
            "Failed to parse cloud transcription response",
        )

    return result.text
