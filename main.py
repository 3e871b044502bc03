"""main.py – Outline Mind Map

Streamlit front end for the mind map document engine:
- Outline editing (add child, add sibling, delete, move, reorder, collapse)
- Automatic right-hand layout
- Branch coloring with selectable palettes
- Undo/redo
- Session logs
"""

import streamlit as st

from mindmap.logging_setup import get_logger, rotate_logs
from mindmap.state import get_session
from mindmap.ui import (
    render_header, render_logs_section, render_network_visualization, render_node_edit,
    render_node_list, render_sidebar, render_undo_redo
)
from mindmap.utils import handle_error

# Keep only the last 20 log files, then configure the root logger
rotate_logs()
logger = get_logger()

# ---------------- Main App ----------------
try:
    st.set_page_config(page_title="Outline Mind Map", layout="wide")

    session = get_session()
    render_header(session.settings.get('theme', 'default'))

    render_undo_redo(session)
    render_sidebar(session)
    render_node_list(session)
    render_logs_section()

    canvas_height = f"{session.settings.get('canvas_height', 650)}px"
    render_network_visualization(session, canvas_height)
    render_node_edit(session)

except Exception as e:
    st.error(handle_error(e, logger, "Unhandled exception"))
