"""
Transcription component — submit the current audio, show the readable
text and follow the order status until it completes or fails.
"""

import logging
from datetime import UTC, datetime

import streamlit as st

from src.core.config import get_settings
from src.core.exceptions import ReciteScribeError
from src.services.transcription.poller import StatusPoller
from src.services.transcription.submitter import (
    TRANSCRIBE_FAILED_TEXT,
    compute_recite_duration,
    submit_transcription,
)
from src.ui.api_client import APIError, get_api_client
from src.ui.components.recorder import audio_slot

logger = logging.getLogger(__name__)


def _replace_poller(poller: StatusPoller | None) -> None:
    previous = st.session_state.get("status_poller")
    if previous is not None and previous is not poller:
        previous.cancel()
    st.session_state.status_poller = poller


def _transcribe() -> None:
    artifact = audio_slot().current
    if artifact is None:
        st.session_state.status_message = "Record or upload audio first."
        return

    settings = get_settings()
    st.session_state.recite_duration = compute_recite_duration(
        artifact, datetime.now(UTC), settings.upload_duration_mode
    )

    client = get_api_client(st.session_state.api_base_url)
    try:
        job = submit_transcription(client, artifact)
    except (APIError, ReciteScribeError) as exc:
        logger.error("Transcription request failed: %s", exc)
        _replace_poller(None)
        st.session_state.status_message = TRANSCRIBE_FAILED_TEXT
        return

    st.session_state.order_id = job.order_id
    st.session_state.transcription_text = job.text
    _replace_poller(StatusPoller(client, job.order_id, interval=settings.status_poll_interval))
    st.session_state.status_message = st.session_state.status_poller.message


def _show_status(message: str) -> None:
    if message:
        st.warning(message)


@st.fragment(run_every=get_settings().status_poll_interval)
def _live_status() -> None:
    """Timer-driven status area; only rendered while a poller is processing."""
    poller = st.session_state.get("status_poller")
    if poller is None:
        return
    st.session_state.status_message = poller.poll_if_due()
    _show_status(st.session_state.status_message)
    if poller.done:
        # Full rerun so the page renders the static status and the timer stops
        st.rerun()


def render_transcription() -> None:
    """Render the Transcribe button, the transcript and the status area."""
    if st.button("Transcribe", type="primary"):
        _transcribe()

    if st.session_state.transcription_text:
        st.subheader("Transcription")
        st.code(st.session_state.transcription_text, language=None, wrap_lines=True)

    if st.session_state.order_id:
        st.caption(f"Order ID: {st.session_state.order_id}")

    poller = st.session_state.get("status_poller")
    if poller is not None and not poller.done:
        _live_status()
    else:
        _show_status(st.session_state.status_message)
