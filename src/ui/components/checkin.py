"""Check-in component — username, recited pages and recorded duration."""

import streamlit as st

from src.core.utils import format_duration
from src.services.checkin import submit_check_in
from src.ui.api_client import get_api_client


def render_check_in() -> None:
    st.subheader("Check-in")
    st.text_input("Username", key="username", placeholder="Username")
    st.text_input("Recited Pages", key="recited_pages", placeholder="Recited Pages (e.g. 1,2,3)")
    st.markdown(f"**Duration**: {format_duration(st.session_state.recite_duration)}")

    if st.button("Check-in"):
        st.session_state.check_in_message = submit_check_in(
            get_api_client(st.session_state.api_base_url),
            st.session_state.username,
            st.session_state.recited_pages,
            st.session_state.recite_duration,
        )

    if st.session_state.check_in_message:
        st.info(st.session_state.check_in_message)
