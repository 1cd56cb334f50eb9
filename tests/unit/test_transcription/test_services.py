"""Unit tests for cloud transcription service selection."""

import pytest

from handy_cloud.features.transcription.services import CloudTranscriptionService


class TestCloudTranscriptionService:
    """Tests for CloudTranscriptionService."""

    @pytest.mark.parametrize(
        ("service", "url"),
        [
            (CloudTranscriptionService.OPENAI, "https://api.openai.com/v1"),
            (CloudTranscriptionService.NOVA, "https://api.deepgram.com/v1/openai"),
        ],
    )
    def test_default_base_urls(self, service: CloudTranscriptionService, url: str) -> None:
        """Each service has its documented default endpoint."""
        assert service.default_base_url == url

    def test_lookup_by_value(self) -> None:
        """Services are selectable by their string value."""
        assert CloudTranscriptionService("nova") is CloudTranscriptionService.NOVA

    def test_display_names(self) -> None:
        """Display names are human-readable."""
        assert CloudTranscriptionService.NOVA.display_name == "Deepgram Nova"
        assert CloudTranscriptionService.OPENAI.display_name == "OpenAI"
