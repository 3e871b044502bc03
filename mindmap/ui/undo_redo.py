"""Undo/Redo component for the Outline Mind Map application."""

import streamlit as st

from mindmap.session import MindMapSession


def render_undo_redo(session: MindMapSession):
    """
    Render undo and redo buttons in the sidebar.
    """
    undo_col, redo_col = st.sidebar.columns(2)
    if undo_col.button("↩️ Undo", disabled=not session.can_undo()):
        if session.undo()['success']:
            st.rerun()

    if redo_col.button("↪️ Redo", disabled=not session.can_redo()):
        if session.redo()['success']:
            st.rerun()
