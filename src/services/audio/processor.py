"""Audio processing utilities for captured and uploaded clips.

Decodes browser audio clips to numpy arrays, joins them and writes the
result back out as 16-bit WAV bytes.
"""

import io
import logging

import numpy as np
import soundfile as sf

from src.core.exceptions import AudioDecodeError

logger = logging.getLogger(__name__)


class AudioProcessor:
    """Converts between encoded audio bytes and float32 sample arrays.

    All decoded audio is downmixed to mono so clips captured with different
    devices can be concatenated into a single recording.
    """

    def decode(self, audio_bytes: bytes) -> tuple[np.ndarray, int]:
        """Decode WAV/FLAC/OGG bytes to mono float32 samples.

        Args:
            audio_bytes: Encoded audio as returned by the browser widget.

        Returns:
            Tuple of (float32 samples in [-1.0, 1.0], sample rate in Hz).

        Raises:
            AudioDecodeError: If libsndfile cannot read the data.
        """
        try:
            data, sample_rate = sf.read(io.BytesIO(audio_bytes), dtype="float32")
        except (sf.LibsndfileError, RuntimeError, TypeError) as exc:
            raise AudioDecodeError(f"Could not decode audio: {exc}") from exc

        # Convert to mono if stereo
        if data.ndim > 1:
            data = data.mean(axis=1)
        return data.astype(np.float32), int(sample_rate)

    def resample(self, data: np.ndarray, sample_rate: int, target_rate: int) -> np.ndarray:
        """Linearly resample ``data`` from ``sample_rate`` to ``target_rate``."""
        if sample_rate == target_rate or len(data) == 0:
            return data
        duration = len(data) / sample_rate
        num_samples = int(duration * target_rate)
        indices = np.linspace(0, len(data) - 1, num_samples)
        return np.interp(indices, np.arange(len(data)), data).astype(np.float32)

    def encode_wav(self, data: np.ndarray, sample_rate: int) -> bytes:
        """Encode float32 samples as 16-bit PCM WAV bytes.

        Raises:
            ValueError: If ``data`` is empty.
        """
        if len(data) == 0:
            raise ValueError("Cannot encode empty audio to WAV")
        buf = io.BytesIO()
        sf.write(buf, np.clip(data, -1.0, 1.0), sample_rate, format="WAV", subtype="PCM_16")
        return buf.getvalue()

    def duration_seconds(self, audio_bytes: bytes) -> float | None:
        """Length of an encoded clip in seconds, or None if it is unreadable."""
        try:
            info = sf.info(io.BytesIO(audio_bytes))
        except (sf.LibsndfileError, RuntimeError, TypeError) as exc:
            logger.warning("Could not read audio length: %s", exc)
            return None
        return float(info.duration)
