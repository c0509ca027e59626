"""Flattening of the vendor speech-lattice payload into plain text.

The transcribe endpoint returns the recognizer output as a JSON-encoded
string shaped like::

    {"lattice2": [{"json_1best": {"st": {"rt": [{"ws": [{"cw": [{"w": "..."}]}]}]}}}]}

Only the first recognition result (``rt[0]``) of every segment is used and
word fragments are joined without separators; the vendor already embeds
spacing inside ``w``.
"""

import json
import logging
from typing import Any

from pydantic import ValidationError

from src.core.exceptions import TranscriptionParseError
from src.core.models import LatticePayload

logger = logging.getLogger(__name__)

PARSE_ERROR_TEXT = "Error parsing transcription data."


def _format_location(loc: tuple) -> str:
    return ".".join(str(part) for part in loc) or "<root>"


def parse_lattice(raw: Any) -> str:
    """Strictly decode a lattice payload and return its readable text.

    Raises:
        TranscriptionParseError: ``stage="json"`` for undecodable input,
            ``stage="schema"`` when the nested shape does not match.
    """
    if not isinstance(raw, (str, bytes, bytearray)):
        raise TranscriptionParseError("json", f"expected a JSON string, got {type(raw).__name__}")
    try:
        document = json.loads(raw)
    except ValueError as exc:
        raise TranscriptionParseError("json", str(exc)) from exc

    try:
        payload = LatticePayload.model_validate(document)
    except ValidationError as exc:
        first = exc.errors()[0]
        raise TranscriptionParseError(
            "schema", f"{_format_location(first['loc'])}: {first['msg']}"
        ) from exc

    return "".join(payload.words())


def extract_readable_text(raw: Any) -> str:
    """Return the readable transcript, or ``PARSE_ERROR_TEXT`` on any failure.

    Never raises: a malformed payload yields the fallback text, not a
    partial transcript.
    """
    try:
        return parse_lattice(raw)
    except TranscriptionParseError as exc:
        logger.error("Error parsing transcription (%s stage): %s", exc.stage, exc.detail)
        return PARSE_ERROR_TEXT
