"""
ReciteScribe Streamlit UI — main entry point.

Run with: ``streamlit run src/ui/app.py``
"""

# ---------------------------------------------------------------------------
# Ensure project root is on sys.path so ``from src.xxx`` imports work.
# Streamlit replaces sys.path[0] with the script directory (src/ui/),
# which removes the project root needed for absolute ``src.*`` imports.
# ---------------------------------------------------------------------------
import sys  # noqa: E402
from pathlib import Path  # noqa: E402

_project_root = str(Path(__file__).resolve().parent.parent.parent)
if _project_root not in sys.path:
    sys.path.insert(0, _project_root)

import logging  # noqa: E402

import streamlit as st  # noqa: E402

from src.core.config import get_settings  # noqa: E402

_settings = get_settings()

logging.basicConfig(
    level=_settings.log_level.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

# ---------------------------------------------------------------------------
# Page config (must be first Streamlit call)
# ---------------------------------------------------------------------------
st.set_page_config(
    page_title="Audio Transcription App",
    page_icon="\U0001f399\ufe0f",
    layout="centered",
)

# ---------------------------------------------------------------------------
# Session state defaults
# ---------------------------------------------------------------------------
# Mutable per-session objects (recording session, audio slot, poller) are
# created lazily by the components, never shared through this dict.
_DEFAULTS = {
    "api_base_url": _settings.api_base_url,
    "transcription_text": "",
    "order_id": None,
    "status_poller": None,
    "status_message": "",
    "username": "",
    "recited_pages": "",
    "recite_duration": 0,
    "check_in_message": "",
}

for key, value in _DEFAULTS.items():
    if key not in st.session_state:
        st.session_state[key] = value

# ---------------------------------------------------------------------------
# Sidebar
# ---------------------------------------------------------------------------
with st.sidebar:
    st.title("\U0001f399\ufe0f ReciteScribe")
    st.caption("Record a recitation, transcribe it, check in")
    st.divider()
    st.session_state.api_base_url = st.text_input(
        "Service URL",
        value=st.session_state.api_base_url,
        help="Base URL of the transcription service (endpoints under /api)",
    )

st.title("Audio Transcription App")

# ---------------------------------------------------------------------------
# Navigation
# ---------------------------------------------------------------------------
transcribe_page = st.Page(
    "pages/01_transcribe.py",
    title="Audio to Text",
    icon="\U0001f3a4",
    default=True,
)

nav = st.navigation([transcribe_page])
nav.run()
