"""
Recorder component — microphone capture, file upload and playback.

States: idle -> recording -> idle (with an audio artifact)
Uses ``st.audio_input()`` for the browser microphone; every clip recorded
between "Start Recording" and "Stop Recording" is joined into one WAV.
"""

import logging

import streamlit as st

from src.core.exceptions import AudioDecodeError, RecordingAlreadyActiveError
from src.services.audio.recorder import AudioArtifact, AudioSlot, RecordingSession

logger = logging.getLogger(__name__)

_AUDIO_TYPES = ["wav", "mp3", "m4a", "ogg", "flac", "webm"]


def _recording_session() -> RecordingSession:
    if "recording_session" not in st.session_state:
        st.session_state.recording_session = RecordingSession()
    return st.session_state.recording_session


def audio_slot() -> AudioSlot:
    """Return this session's audio slot, creating it on first use."""
    if "audio_slot" not in st.session_state:
        st.session_state.audio_slot = AudioSlot()
    return st.session_state.audio_slot


def _start() -> None:
    try:
        _recording_session().start()
    except RecordingAlreadyActiveError as exc:
        st.warning(exc.detail)
        return
    st.session_state._mic_clip_ids = set()
    st.session_state._mic_generation = st.session_state.get("_mic_generation", 0) + 1
    st.rerun()


def _stop() -> None:
    artifact = _recording_session().stop()
    if artifact is None:
        st.warning("Nothing was recorded.")
        return
    audio_slot().replace(artifact)
    st.rerun()


def _capture_clip() -> None:
    """Feed a newly recorded microphone clip into the active session."""
    generation = st.session_state.get("_mic_generation", 0)
    clip = st.audio_input("Microphone", key=f"mic_{generation}")
    if clip is None:
        return
    seen = st.session_state.setdefault("_mic_clip_ids", set())
    if clip.file_id in seen:
        return
    seen.add(clip.file_id)
    try:
        _recording_session().add_chunk(clip.getvalue())
    except AudioDecodeError as exc:
        logger.warning("Dropping microphone clip: %s", exc.detail)
        st.error("Could not read the recorded audio.")


def render_recorder() -> None:
    """Render Start/Stop controls, the microphone while active, and the player."""
    st.subheader("Record Audio")
    session = _recording_session()

    col1, col2 = st.columns(2)
    with col1:
        if st.button("Start Recording", disabled=session.active, use_container_width=True):
            _start()
    with col2:
        if st.button("Stop Recording", disabled=not session.active, use_container_width=True):
            _stop()

    if session.active:
        _capture_clip()
        st.caption(f"Recording... {session.chunk_count} clip(s) captured")

    artifact = audio_slot().current
    if artifact is not None:
        st.audio(artifact.playback_path, format=artifact.mime_type)


def render_upload() -> None:
    """Render the file picker; a new file replaces the current artifact."""
    st.subheader("Upload Audio")
    uploaded = st.file_uploader("Audio file", type=_AUDIO_TYPES)
    if uploaded is None or uploaded.file_id == st.session_state.get("_upload_file_id"):
        return
    st.session_state._upload_file_id = uploaded.file_id
    audio_slot().replace(
        AudioArtifact.from_upload(uploaded.getvalue(), uploaded.name, uploaded.type)
    )
    st.rerun()
