"""
Audio module - Recording sessions, artifacts and clip processing.
"""

from .processor import AudioProcessor
from .recorder import AudioArtifact, AudioSlot, RecordingSession

__all__ = ["AudioProcessor", "AudioArtifact", "AudioSlot", "RecordingSession"]
