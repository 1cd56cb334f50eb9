"""Cloud transcription services that speak the OpenAI upload protocol."""

from enum import Enum


class CloudTranscriptionService(str, Enum):
    """Selectable cloud transcription backends.

    - OPENAI: OpenAI's Whisper transcription API
    - NOVA: Deepgram Nova via its OpenAI-compatible endpoint
    """

    OPENAI = "openai"
    NOVA = "nova"

    @property
    def default_base_url(self) -> str:
        """Base URL used when none is configured."""
        return DEFAULT_BASE_URLS[self]

    @property
    def display_name(self) -> str:
        """Human-readable service name."""
        return {
            CloudTranscriptionService.OPENAI: "OpenAI",
            CloudTranscriptionService.NOVA: "Deepgram Nova",
        }[self]


DEFAULT_BASE_URLS: dict[CloudTranscriptionService, str] = {
    CloudTranscriptionService.OPENAI: "https://api.openai.com/v1",
    CloudTranscriptionService.NOVA: "https://api.deepgram.com/v1/openai",
}
