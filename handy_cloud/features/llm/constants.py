"""Constants shared by the provider-facing HTTP operations.

Centralizes header values and endpoint paths so the header builder and
every operation agree on them.
"""

from typing import Final


# Identifying headers sent with every chat / model-listing request
APP_REFERER: Final = "https://github.com/cjpais/Handy"
APP_USER_AGENT: Final = "Handy/1.0 (+https://github.com/cjpais/Handy)"
APP_TITLE: Final = "Handy"
JSON_CONTENT_TYPE: Final = "application/json"

# Header names
HEADER_CONTENT_TYPE: Final = "Content-Type"
HEADER_REFERER: Final = "Referer"
HEADER_USER_AGENT: Final = "User-Agent"
HEADER_TITLE: Final = "X-Title"
HEADER_AUTHORIZATION: Final = "Authorization"
HEADER_ANTHROPIC_KEY: Final = "x-api-key"
HEADER_ANTHROPIC_VERSION: Final = "anthropic-version"

ANTHROPIC_API_VERSION: Final = "2023-06-01"
ANTHROPIC_PROVIDER_ID: Final = "anthropic"

# Endpoint paths, appended to a normalized base URL
CHAT_COMPLETIONS_PATH: Final = "/chat/completions"
MODELS_PATH: Final = "/models"
TRANSCRIPTIONS_PATH: Final = "/audio/transcriptions"

# Default request timeout (seconds)
DEFAULT_TIMEOUT_SECONDS: Final = 60.0

# Placeholders used when an error body cannot be read
UNREADABLE_ERROR_BODY: Final = "Failed to read error response"
UNKNOWN_ERROR_BODY: Final = "Unknown error"

# Operation names used in logs and metrics
OPERATION_CHAT: Final = "chat_completion"
OPERATION_MODELS: Final = "fetch_models"
OPERATION_TRANSCRIPTION: Final = "cloud_transcription"
