"""Provider-agnostic client layer for cloud chat, model listing and transcription APIs."""

__version__ = "0.1.0"
