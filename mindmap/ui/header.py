"""Header component for the Outline Mind Map application."""

import streamlit as st

from mindmap.themes import THEMES


def render_header(theme_name: str = 'default'):
    """
    Render the application title and theme-specific page styling.
    """
    theme = THEMES.get(theme_name, THEMES['default'])
    st.markdown(f"""
    <style>
    .stApp {{
        background-color: {theme['background']};
        color: {theme['text']};
    }}
    /* Remove canvas frame */
    iframe {{
        border: none !important;
        box-shadow: none !important;
        background-color: transparent !important;
    }}
    </style>
    """, unsafe_allow_html=True)

    st.title("🧠 Outline Mind Map")
