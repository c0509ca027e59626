"""Submitting audio for transcription and deriving the recitation duration."""

import logging
from dataclasses import dataclass
from datetime import datetime

from pydantic import ValidationError

from src.core.config import UploadDurationMode
from src.core.exceptions import InvalidResponseError, MissingAudioError
from src.core.models import TranscribeResponse
from src.core.utils import round_seconds
from src.services.audio.recorder import AudioArtifact
from src.services.transcription.lattice import extract_readable_text

logger = logging.getLogger(__name__)

TRANSCRIBE_FAILED_TEXT = "Error during transcription"


@dataclass(frozen=True)
class TranscriptionJob:
    """Result of a successful submit: the polling key and the readable text."""

    order_id: str
    text: str


def compute_recite_duration(
    artifact: AudioArtifact,
    now: datetime,
    upload_mode: UploadDurationMode = "elapsed",
) -> int:
    """Whole seconds attributed to the recitation behind ``artifact``.

    Recordings always count the time elapsed since capture started. For
    uploads ``upload_mode`` decides: ``"elapsed"`` treats them like
    recordings, ``"zero"`` never counts them and ``"audio_length"`` uses the
    length of the uploaded audio.
    """
    if artifact.is_upload and upload_mode == "zero":
        return 0
    if artifact.is_upload and upload_mode == "audio_length":
        return round_seconds(artifact.audio_seconds() or 0.0)
    return round_seconds((now - artifact.started_at).total_seconds())


def submit_transcription(client, artifact: AudioArtifact | None) -> TranscriptionJob:
    """Upload ``artifact`` and convert the returned lattice into text.

    Args:
        client: ``APIClient`` (or anything with a matching ``transcribe``).
        artifact: The current audio artifact.

    Raises:
        MissingAudioError: If there is no artifact.
        APIError: On transport or HTTP failures.
        InvalidResponseError: If the response has no order id.
    """
    if artifact is None:
        raise MissingAudioError()

    body = client.transcribe(artifact.data, filename=artifact.filename, mime_type=artifact.mime_type)
    try:
        response = TranscribeResponse.model_validate(body)
    except ValidationError as exc:
        raise InvalidResponseError("/api/transcribe", str(exc)) from exc

    logger.info("Transcription order %s accepted", response.order_id)
    return TranscriptionJob(
        order_id=response.order_id,
        text=extract_readable_text(response.transcription),
    )
