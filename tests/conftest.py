"""Shared pytest fixtures for the ReciteScribe test suite.

Provides synthetic audio, a lattice payload builder and a mocked API
client used across the unit tests.
"""

import json
import struct
from datetime import UTC, datetime
from unittest.mock import MagicMock

import pytest

# ---------------------------------------------------------------------------
# Audio Fixtures
# ---------------------------------------------------------------------------


def _sine_pcm(sample_rate: int, duration: float, frequency: float = 440.0) -> bytes:
    import math

    amplitude = 16000  # ~50% of max int16
    samples = []
    for i in range(int(sample_rate * duration)):
        value = int(amplitude * math.sin(2 * math.pi * frequency * i / sample_rate))
        samples.append(struct.pack("<h", value))
    return b"".join(samples)


def _wav_bytes(pcm: bytes, sample_rate: int) -> bytes:
    import io
    import wave

    buf = io.BytesIO()
    with wave.open(buf, "wb") as wf:
        wf.setnchannels(1)
        wf.setsampwidth(2)
        wf.setframerate(sample_rate)
        wf.writeframes(pcm)
    return buf.getvalue()


@pytest.fixture
def sample_wav_bytes():
    """1 second of 440Hz sine wave as a 16kHz, 16-bit mono WAV file.

    Returns:
        bytes: Encoded WAV data.
    """
    return _wav_bytes(_sine_pcm(16000, 1.0), 16000)


@pytest.fixture
def half_second_wav_bytes():
    """0.5 seconds of sine wave recorded at 8kHz (different sample rate)."""
    return _wav_bytes(_sine_pcm(8000, 0.5), 8000)


@pytest.fixture
def fixed_clock():
    """Clock returning a fixed UTC timestamp."""
    return lambda: datetime(2026, 3, 1, 12, 0, 0, tzinfo=UTC)


# ---------------------------------------------------------------------------
# Lattice Fixtures
# ---------------------------------------------------------------------------


def _build_lattice(segments: list[list[list[str]]]) -> dict:
    return {
        "lattice2": [
            {
                "json_1best": {
                    "st": {"rt": [{"ws": [{"cw": [{"w": w} for w in group]} for group in groups]}]}
                }
            }
            for groups in segments
        ]
    }


@pytest.fixture
def build_lattice():
    """Factory building a lattice document from segments -> word groups -> words."""
    return _build_lattice


@pytest.fixture
def lattice_json():
    """JSON-encoded lattice for "Hello world. Bye." across two segments."""
    return json.dumps(_build_lattice([[["Hello"], [" world"], ["."]], [[" Bye", "."]]]))


# ---------------------------------------------------------------------------
# API Client Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def mock_client():
    """Create a mock APIClient for service-level tests.

    Returns:
        MagicMock: Mock with default transcribe / status / check-in replies.
    """
    from src.ui.api_client import APIClient

    client = MagicMock(spec=APIClient)
    client.transcribe.return_value = {"orderId": "order-1", "transcription": None}
    client.get_status.return_value = {"status": "completed"}
    client.record_recitation.return_value = {"message": "Checked in", "record": {}}
    return client
