"""Application settings powered by Pydantic BaseSettings."""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from handy_cloud.features.llm.constants import DEFAULT_TIMEOUT_SECONDS
from handy_cloud.features.llm.providers import (
    CUSTOM_PROVIDER_ID,
    ProviderDescriptor,
    custom_provider,
    get_provider,
)
from handy_cloud.features.transcription.services import CloudTranscriptionService


class AppSettings(BaseSettings):
    """Centralized environment configuration."""

    model_config = SettingsConfigDict(
        env_prefix="",
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
        populate_by_name=True,
        extra="ignore",
    )

    # Vendor credentials keep their conventional unprefixed names.
    openai_api_key: str = Field(default="", validation_alias="OPENAI_API_KEY")
    openai_base_url: str = Field(
        default=CloudTranscriptionService.OPENAI.default_base_url,
        validation_alias="OPENAI_BASE_URL",
    )
    nova_api_key: str = Field(default="", validation_alias="NOVA_API_KEY")
    nova_base_url: str = Field(
        default=CloudTranscriptionService.NOVA.default_base_url,
        validation_alias="NOVA_BASE_URL",
    )
    transcription_service: CloudTranscriptionService = Field(
        default=CloudTranscriptionService.OPENAI,
        validation_alias="HANDY_TRANSCRIPTION_SERVICE",
    )
    transcription_model: str = Field(
        default="whisper-1", validation_alias="HANDY_TRANSCRIPTION_MODEL"
    )

    post_process_provider: str = Field(
        default="openai", validation_alias="HANDY_POST_PROCESS_PROVIDER"
    )
    post_process_api_key: str = Field(
        default="", validation_alias="HANDY_POST_PROCESS_API_KEY"
    )
    post_process_base_url: str | None = Field(
        default=None, validation_alias="HANDY_POST_PROCESS_BASE_URL"
    )
    post_process_model: str = Field(
        default="gpt-4o-mini", validation_alias="HANDY_POST_PROCESS_MODEL"
    )

    http_timeout_seconds: float = Field(
        default=DEFAULT_TIMEOUT_SECONDS, gt=0, validation_alias="HANDY_HTTP_TIMEOUT"
    )
    log_level: str = Field(default="info", validation_alias="HANDY_LOG_LEVEL")
    log_json: bool = Field(default=False, validation_alias="HANDY_LOG_JSON")

    def provider(self, provider_id: str | None = None) -> ProviderDescriptor:
        """Resolve the post-processing provider descriptor.

        Args:
            provider_id: Overrides the configured provider id.

        Returns:
            Provider descriptor, with the configured base URL override applied.

        Raises:
            UnknownProviderError: If the id is neither built-in nor 'custom'.
            ValueError: If 'custom' is selected without a base URL.
        """
        effective_id = provider_id or self.post_process_provider
        if effective_id == CUSTOM_PROVIDER_ID:
            if not self.post_process_base_url:
                msg = "HANDY_POST_PROCESS_BASE_URL is required for the custom provider"
                raise ValueError(msg)
            return custom_provider(self.post_process_base_url)
        return get_provider(effective_id, self.post_process_base_url)

    def transcription_endpoint(
        self, service: CloudTranscriptionService | None = None
    ) -> tuple[str, str]:
        """Return ``(api_key, base_url)`` for a cloud transcription service."""
        effective = service or self.transcription_service
        if effective is CloudTranscriptionService.NOVA:
            return self.nova_api_key, self.nova_base_url
        return self.openai_api_key, self.openai_base_url


def get_settings() -> AppSettings:
    """Get a settings instance."""
    return AppSettings()
