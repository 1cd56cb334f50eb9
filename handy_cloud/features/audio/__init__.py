"""Audio capture state shared with the transcription pipeline."""

from handy_cloud.features.audio.mode import MicrophoneMode, MicrophoneModeManager


__all__ = ["MicrophoneMode", "MicrophoneModeManager"]
