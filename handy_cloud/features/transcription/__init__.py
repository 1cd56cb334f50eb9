"""Cloud transcription of in-memory audio."""

from handy_cloud.features.transcription.cloud import transcribe_cloud
from handy_cloud.features.transcription.services import CloudTranscriptionService
from handy_cloud.features.transcription.wav import (
    SAMPLE_RATE_HZ,
    WavAudio,
    decode_wav,
    encode_wav,
    to_pcm16,
)


__all__ = [
    "transcribe_cloud",
    "CloudTranscriptionService",
    "SAMPLE_RATE_HZ",
    "WavAudio",
    "decode_wav",
    "encode_wav",
    "to_pcm16",
]
