"""
Transcription module - Submitting audio, parsing lattices, polling status.
"""

from .lattice import PARSE_ERROR_TEXT, extract_readable_text, parse_lattice
from .poller import PollState, StatusPoller
from .submitter import TranscriptionJob, compute_recite_duration, submit_transcription

__all__ = [
    "PARSE_ERROR_TEXT",
    "PollState",
    "StatusPoller",
    "TranscriptionJob",
    "compute_recite_duration",
    "extract_readable_text",
    "parse_lattice",
    "submit_transcription",
]
