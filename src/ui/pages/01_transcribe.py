"""
Transcription & check-in page — capture or upload audio, transcribe it,
follow the order status and post a check-in.
"""

# Ensure project root is on sys.path (Streamlit page files need this).
import sys as _sys; from pathlib import Path as _Path; _r = str(_Path(__file__).resolve().parents[3]); _r in _sys.path or _sys.path.insert(0, _r)  # noqa: E702,I001

import streamlit as st  # noqa: E402

from src.ui.components.checkin import render_check_in  # noqa: E402
from src.ui.components.recorder import render_recorder, render_upload  # noqa: E402
from src.ui.components.transcription import render_transcription  # noqa: E402

st.header("Audio to Text with Check-in")
render_recorder()
render_upload()
st.divider()
render_transcription()
st.divider()
render_check_in()
