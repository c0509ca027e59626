"""Recording sessions and the audio artifacts they produce.

A ``RecordingSession`` accumulates the clips captured by the browser
microphone widget between ``start()`` and ``stop()`` and joins them into a
single WAV ``AudioArtifact``. Uploaded files become artifacts directly.
"""

import logging
import os
import tempfile
import weakref
from collections.abc import Callable
from datetime import UTC, datetime
from pathlib import Path

import numpy as np

from src.core.exceptions import RecorderNotActiveError, RecordingAlreadyActiveError
from src.services.audio.processor import AudioProcessor

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]


def _utcnow() -> datetime:
    return datetime.now(UTC)


def _unlink_quietly(path: str) -> None:
    try:
        os.unlink(path)
    except FileNotFoundError:
        pass


class AudioArtifact:
    """A captured or uploaded clip ready to be transcribed.

    The playback file behind ``playback_path`` is created on first access
    and removed by ``release()``, or when the artifact is garbage collected.
    """

    def __init__(
        self,
        data: bytes,
        filename: str,
        mime_type: str,
        started_at: datetime,
        source: str = "recording",
    ) -> None:
        self.data = data
        self.filename = filename
        self.mime_type = mime_type
        self.started_at = started_at
        self.source = source
        self._playback_path: str | None = None
        self._finalizer: weakref.finalize | None = None

    @classmethod
    def from_upload(
        cls,
        data: bytes,
        filename: str,
        mime_type: str | None = None,
        clock: Clock = _utcnow,
    ) -> "AudioArtifact":
        """Wrap a user-selected file, stamping the upload time as its start."""
        return cls(
            data=data,
            filename=filename,
            mime_type=mime_type or "application/octet-stream",
            started_at=clock(),
            source="upload",
        )

    @property
    def is_upload(self) -> bool:
        return self.source == "upload"

    @property
    def playback_path(self) -> str:
        """Path of a temporary file holding the clip, for the audio player."""
        if self._playback_path is None:
            suffix = Path(self.filename).suffix or ".wav"
            fd, path = tempfile.mkstemp(prefix="recitescribe-", suffix=suffix)
            with os.fdopen(fd, "wb") as fh:
                fh.write(self.data)
            self._playback_path = path
            self._finalizer = weakref.finalize(self, _unlink_quietly, path)
        return self._playback_path

    @property
    def released(self) -> bool:
        return self._finalizer is not None and not self._finalizer.alive

    def release(self) -> None:
        """Delete the playback file, if one was created."""
        if self._finalizer is not None:
            self._finalizer()
        self._playback_path = None

    def audio_seconds(self, processor: AudioProcessor | None = None) -> float | None:
        """Length of the clip in seconds, or None when it cannot be read."""
        return (processor or AudioProcessor()).duration_seconds(self.data)


class AudioSlot:
    """Holds the current artifact and releases the previous one on replace."""

    def __init__(self) -> None:
        self._current: AudioArtifact | None = None

    @property
    def current(self) -> AudioArtifact | None:
        return self._current

    def replace(self, artifact: AudioArtifact) -> None:
        if self._current is not None and self._current is not artifact:
            self._current.release()
        self._current = artifact

    def clear(self) -> None:
        if self._current is not None:
            self._current.release()
        self._current = None


class RecordingSession:
    """One microphone capture: start timestamp plus buffered clips.

    The chunk buffer belongs to the session and is reset on every
    ``start()``, so clips never leak from one recording into the next.
    """

    def __init__(self, processor: AudioProcessor | None = None, clock: Clock = _utcnow) -> None:
        self._processor = processor or AudioProcessor()
        self._clock = clock
        self._chunks: list[np.ndarray] = []
        self._sample_rate: int | None = None
        self.started_at: datetime | None = None
        self.active = False

    @property
    def chunk_count(self) -> int:
        return len(self._chunks)

    def start(self) -> None:
        """Open a capture session.

        Raises:
            RecordingAlreadyActiveError: If a capture is already running.
        """
        if self.active:
            raise RecordingAlreadyActiveError()
        self._chunks = []
        self._sample_rate = None
        self.started_at = self._clock()
        self.active = True
        logger.info("Recording started at %s", self.started_at.isoformat())

    def add_chunk(self, audio_bytes: bytes) -> None:
        """Decode a captured clip and append it to the buffer.

        Raises:
            RecorderNotActiveError: If no capture is running.
            AudioDecodeError: If the clip cannot be decoded.
        """
        if not self.active:
            raise RecorderNotActiveError()
        data, sample_rate = self._processor.decode(audio_bytes)
        if self._sample_rate is None:
            self._sample_rate = sample_rate
        else:
            data = self._processor.resample(data, sample_rate, self._sample_rate)
        self._chunks.append(data)

    def stop(self) -> AudioArtifact | None:
        """Finalize the capture and join buffered clips into one WAV artifact.

        Returns:
            The new artifact, or None when nothing was recorded or no
            capture was running.
        """
        if not self.active:
            return None
        self.active = False
        chunks, self._chunks = self._chunks, []
        if not chunks or self._sample_rate is None:
            logger.warning("Recording stopped without any captured audio")
            return None

        joined = np.concatenate(chunks)
        if len(joined) == 0:
            logger.warning("Recording stopped with zero-length audio")
            return None
        wav_bytes = self._processor.encode_wav(joined, self._sample_rate)
        logger.info(
            "Recording stopped: %d clip(s), %.1fs of audio",
            len(chunks),
            len(joined) / self._sample_rate,
        )
        return AudioArtifact(
            data=wav_bytes,
            filename="recording.wav",
            mime_type="audio/wav",
            started_at=self.started_at,
            source="recording",
        )
