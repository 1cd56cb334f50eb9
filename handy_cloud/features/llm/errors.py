"""Domain-specific error types for the cloud client layer.

Every failure raised by the header builder, client factory and the three
network operations derives from ``LlmError``. The string form of each error
is the user-visible message.
"""


class LlmError(Exception):
    """Base exception for all cloud client errors."""


class InvalidCredentialEncodingError(LlmError):
    """API key cannot be used as an HTTP header value.

    Attributes:
        header_name: Header the key was destined for.
    """

    def __init__(self, header_name: str, reason: str) -> None:
        """Initialize the error.

        Args:
            header_name: Header the key was destined for.
            reason: Why the value was rejected.
        """
        self.header_name = header_name
        super().__init__(f"Invalid {header_name} header value: {reason}")


class ClientConstructionError(LlmError):
    """HTTP client could not be built. Not retryable."""


class LlmTransportError(LlmError):
    """Network-level failure (DNS, connection, timeout).

    No HTTP status is available for this kind of failure.
    """

    status_code = None


class LlmApiError(LlmError):
    """Remote service rejected the request.

    Attributes:
        status_code: HTTP status code from the API response.
        body: Raw response body text, or a placeholder when unreadable.
    """

    def __init__(self, message: str, status_code: int, body: str = "") -> None:
        super().__init__(message)
        self.status_code = status_code
        self.body = body


class ResponseShapeError(LlmError):
    """Success status but the body does not have the expected shape."""


class MissingCredentialError(LlmError):
    """Required API key is not configured."""


class UnknownProviderError(LlmError):
    """Provider id is not present in the built-in catalog."""

    def __init__(self, provider_id: str) -> None:
        self.provider_id = provider_id
        super().__init__(f"Unknown provider: {provider_id}")


class InvalidAudioError(LlmError):
    """Audio samples or WAV bytes cannot be encoded or decoded."""
