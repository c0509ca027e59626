"""
Pydantic v2 models for the remote transcription / check-in service.

Wire models mirror the JSON bodies of ``/api/transcribe``,
``/api/status/{orderId}`` and ``/api/record_recitation``. The lattice models
describe the vendor speech-lattice payload carried (JSON-encoded) in the
``transcription`` field of the transcribe response.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

# ---------------------------------------------------------------------------
# Transcription
# ---------------------------------------------------------------------------


class TranscribeResponse(BaseModel):
    """POST /api/transcribe response."""

    model_config = ConfigDict(populate_by_name=True, coerce_numbers_to_str=True)

    order_id: str = Field(alias="orderId")
    # JSON-encoded lattice payload; parsed by services.transcription.lattice
    transcription: Any = None


class StatusResponse(BaseModel):
    """GET /api/status/{orderId} response."""

    model_config = ConfigDict(populate_by_name=True)

    status: str | None = None
    estimated_time: float | None = Field(default=None, alias="estimatedTime")

    @property
    def completed(self) -> bool:
        return self.status == "completed"


# ---------------------------------------------------------------------------
# Check-in
# ---------------------------------------------------------------------------


class CheckInRequest(BaseModel):
    """POST /api/record_recitation request body."""

    username: str
    recited_pages: str
    recite_duration: int = Field(ge=0)


class CheckInResponse(BaseModel):
    """POST /api/record_recitation response."""

    message: str = ""
    record: dict[str, Any] = Field(default_factory=dict)


# ---------------------------------------------------------------------------
# Speech lattice (vendor format)
# ---------------------------------------------------------------------------


class CandidateWord(BaseModel):
    """One candidate word; ``w`` already carries any spacing."""

    w: str


class WordGroup(BaseModel):
    cw: list[CandidateWord]


class RecognitionResult(BaseModel):
    ws: list[WordGroup]


class SentenceTree(BaseModel):
    """Sentence-level node. Only the first recognition result is read."""

    rt: list[Any] = Field(min_length=1)

    @field_validator("rt")
    @classmethod
    def _validate_best_result(cls, value: list[Any]) -> list[Any]:
        return [RecognitionResult.model_validate(value[0]), *value[1:]]

    @property
    def best(self) -> RecognitionResult:
        return self.rt[0]


class OneBest(BaseModel):
    st: SentenceTree


class LatticeSegment(BaseModel):
    json_1best: OneBest


class LatticePayload(BaseModel):
    """Top-level lattice document: ``{"lattice2": [segment, ...]}``."""

    lattice2: list[LatticeSegment]

    def words(self) -> list[str]:
        """Every word fragment in document order."""
        return [
            word.w
            for segment in self.lattice2
            for group in segment.json_1best.st.best.ws
            for word in group.cw
        ]
