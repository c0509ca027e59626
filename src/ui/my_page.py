"""
Standalone static page, not registered in the main app's navigation.

Run with: ``streamlit run src/ui/my_page.py``
"""

import streamlit as st

st.set_page_config(page_title="My Page")

st.title("Welcome to My Page")
st.write("This is a custom page.")
