"""In-memory WAV encoding and decoding for transcription uploads."""

import io
import wave
from collections.abc import Sequence
from dataclasses import dataclass

import numpy as np

from handy_cloud.features.llm.errors import InvalidAudioError


SAMPLE_RATE_HZ = 16000
PCM16_MAX = 32767
PCM16_MIN = -32768
_PCM16_WIDTH = 2


@dataclass(frozen=True)
class WavAudio:
    """Decoded WAV contents.

    Attributes:
        samples: Mono float32 samples in [-1.0, 1.0].
        sample_rate: Frames per second.
        channels: Channel count of the source container.
        sample_width: Bytes per sample in the source container.
    """

    samples: np.ndarray
    sample_rate: int
    channels: int
    sample_width: int

    @property
    def duration_seconds(self) -> float:
        """Length of the audio in seconds."""
        if self.sample_rate == 0:
            return 0.0
        return len(self.samples) / self.sample_rate


def to_pcm16(samples: Sequence[float] | np.ndarray) -> np.ndarray:
    """Convert float samples to little-endian 16-bit PCM.

    Each sample becomes ``round(s * 32767)``, saturated to the int16 range
    so out-of-range input clips instead of wrapping.

    Args:
        samples: Float samples, nominally in [-1.0, 1.0].

    Returns:
        Array of dtype ``<i2``, one element per input sample.

    Raises:
        InvalidAudioError: If any sample is NaN or infinite.
    """
    data = np.asarray(samples, dtype=np.float64).reshape(-1)
    if not np.all(np.isfinite(data)):
        msg = "Audio samples must be finite"
        raise InvalidAudioError(msg)
    scaled = np.rint(data * PCM16_MAX)
    return np.clip(scaled, PCM16_MIN, PCM16_MAX).astype("<i2")


def encode_wav(
    samples: Sequence[float] | np.ndarray, sample_rate: int = SAMPLE_RATE_HZ
) -> bytes:
    """Build a mono 16-bit PCM WAV container in memory.

    Args:
        samples: Mono float samples.
        sample_rate: Sample rate in Hz.

    Returns:
        Complete WAV file bytes with correct header lengths.
    """
    pcm = to_pcm16(samples)

    buffer = io.BytesIO()
    with wave.open(buffer, "wb") as wav_file:
        wav_file.setnchannels(1)  # Mono
        wav_file.setsampwidth(_PCM16_WIDTH)
        wav_file.setframerate(sample_rate)
        wav_file.writeframes(pcm.tobytes())

    return buffer.getvalue()


def decode_wav(data: bytes) -> WavAudio:
    """Read a 16-bit PCM WAV file into mono float samples.

    Multi-channel audio is downmixed by averaging channels.

    Args:
        data: WAV file bytes.

    Returns:
        Decoded audio.

    Raises:
        InvalidAudioError: If the bytes are not a 16-bit PCM WAV file or the
            data chunk ends mid-frame.
    """
    try:
        with wave.open(io.BytesIO(data), "rb") as wav_file:
            channels = wav_file.getnchannels()
            sample_width = wav_file.getsampwidth()
            sample_rate = wav_file.getframerate()
            frames = wav_file.readframes(wav_file.getnframes())
    except (wave.Error, EOFError) as exc:
        msg = f"Invalid WAV data: {exc}"
        raise InvalidAudioError(msg) from exc

    if sample_width != _PCM16_WIDTH:
        msg = f"Unsupported sample width: {sample_width * 8} bits (expected 16)"
        raise InvalidAudioError(msg)

    frame_size = sample_width * channels
    if len(frames) % frame_size:
        msg = (
            f"Truncated WAV data: {len(frames)} bytes is not a whole number "
            f"of {frame_size}-byte frames"
        )
        raise InvalidAudioError(msg)

    pcm = np.frombuffer(frames, dtype="<i2").astype(np.float32)
    if channels > 1:
        pcm = pcm.reshape(-1, channels).mean(axis=1, dtype=np.float32)

    return WavAudio(
        samples=pcm / PCM16_MAX,
        sample_rate=sample_rate,
        channels=channels,
        sample_width=sample_width,
    )
