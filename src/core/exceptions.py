"""
ReciteScribe exception hierarchy.

All application-specific exceptions inherit from ReciteScribeError so the
UI layer can turn any of them into a user-facing message in one place.
"""

from datetime import UTC, datetime


class ReciteScribeError(Exception):
    """Base exception for all ReciteScribe errors."""

    def __init__(
        self,
        detail: str = "An unexpected error occurred",
        code: str = "RECITESCRIBE_ERROR",
    ) -> None:
        self.detail = detail
        self.code = code
        self.timestamp = datetime.now(UTC).isoformat()
        super().__init__(detail)


class RecordingAlreadyActiveError(ReciteScribeError):
    """Raised when trying to start a recording while one is already active."""

    def __init__(self) -> None:
        super().__init__(
            detail="A recording is already active",
            code="RECORDING_ALREADY_ACTIVE",
        )


class RecorderNotActiveError(ReciteScribeError):
    """Raised when audio arrives while no recording is active."""

    def __init__(self) -> None:
        super().__init__(
            detail="No recording is active",
            code="RECORDER_NOT_ACTIVE",
        )


class AudioDecodeError(ReciteScribeError):
    """Raised when captured audio bytes cannot be decoded."""

    def __init__(self, detail: str = "Could not decode audio") -> None:
        super().__init__(detail=detail, code="AUDIO_DECODE_ERROR")


class MissingAudioError(ReciteScribeError):
    """Raised when transcription is requested before any audio exists."""

    def __init__(self) -> None:
        super().__init__(
            detail="Record or upload audio before transcribing",
            code="MISSING_AUDIO",
        )


class TranscriptionParseError(ReciteScribeError):
    """Raised when a lattice payload cannot be turned into text.

    ``stage`` is ``"json"`` when the payload is not valid JSON and
    ``"schema"`` when it does not have the expected nested shape.
    """

    def __init__(self, stage: str, detail: str) -> None:
        self.stage = stage
        super().__init__(
            detail=f"Lattice {stage} error: {detail}",
            code="TRANSCRIPTION_PARSE_ERROR",
        )


class InvalidResponseError(ReciteScribeError):
    """Raised when the service answers with an unexpected body."""

    def __init__(self, endpoint: str, detail: str) -> None:
        self.endpoint = endpoint
        super().__init__(
            detail=f"Unexpected response from {endpoint}: {detail}",
            code="INVALID_RESPONSE",
        )


class APIError(Exception):
    """User-friendly API error with categorized message.

    Categories: "connection", "timeout", "http", "network", "decode", "unknown".
    Used by the UI to display appropriate error messages. For "http" errors
    ``body`` holds the decoded JSON reply when the server sent one.
    """

    def __init__(self, message: str, category: str = "unknown", body=None) -> None:
        self.message = message
        self.category = category
        self.body = body
        super().__init__(message)
