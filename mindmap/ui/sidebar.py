"""Sidebar component for the Outline Mind Map application."""

import logging

import streamlit as st

from mindmap.config import DEFAULT_SETTINGS
from mindmap.session import MindMapSession
from mindmap.themes import COLOR_SETS, THEMES

logger = logging.getLogger(__name__)


def _report(result: dict) -> None:
    # Failed commands keep the previous document; tell the user why
    if result.get('success'):
        st.rerun()
    else:
        st.sidebar.warning(result.get('message') or "Command failed")


def render_node_commands(session: MindMapSession):
    """
    Render the structural editing buttons for the selected node.
    """
    with st.sidebar.expander("Edit Outline", expanded=True):
        new_text = st.text_input("New node text", value="New Node", key="new_node_text")
        selected = session.selected_node_id

        if selected is None:
            st.caption("No node selected")
            if st.button("➕ Add Root"):
                _report(session.add_root(new_text))
            return

        st.caption(f"Selected: {session.get_node(selected).get('text', selected)}")
        col1, col2 = st.columns(2)
        if col1.button("➕ Child"):
            _report(session.add_child(selected, new_text))
        if col2.button("➕ Sibling"):
            _report(session.add_sibling(selected, new_text))

        col3, col4 = st.columns(2)
        collapsed = session.get_node(selected).get('collapsed', False)
        if col3.button("Expand" if collapsed else "Collapse"):
            _report(session.toggle_collapse(selected))
        if col4.button("🗑️ Delete"):
            _report(session.delete_node(selected))

        if st.button("➕ Add Root"):
            _report(session.add_root(new_text))


def render_settings(session: MindMapSession):
    """
    Render layout and color settings.
    """
    settings = session.settings
    with st.sidebar.expander("Settings", expanded=False):
        theme_names = list(THEMES.keys())
        theme = st.selectbox(
            "Canvas Theme",
            options=theme_names,
            index=theme_names.index(settings.get('theme', DEFAULT_SETTINGS['theme']))
            if settings.get('theme') in THEMES else 0
        )

        color_names = list(COLOR_SETS.keys())
        color_set = st.selectbox(
            "Branch Colors",
            options=color_names,
            index=color_names.index(settings['color_set']) if settings.get('color_set') in COLOR_SETS else 0,
            help="Palette used for top-level branches"
        )

        font_size = st.slider("Font Size", min_value=10, max_value=24,
                              value=int(settings.get('font_size', DEFAULT_SETTINGS['font_size'])), step=1)

        node_spacing = st.slider(
            "Node Spacing",
            min_value=4,
            max_value=40,
            value=int(settings.get('node_spacing', DEFAULT_SETTINGS['node_spacing'])),
            step=2,
            help="Vertical space between sibling subtrees"
        )

        auto_layout = st.checkbox("Auto layout", value=settings.get('auto_layout', True))
        sidebar_collapsed = st.checkbox(
            "Leave no room for a side panel",
            value=settings.get('sidebar_collapsed', DEFAULT_SETTINGS['sidebar_collapsed'])
        )

        changes = {}
        for key, value in (('theme', theme), ('color_set', color_set), ('font_size', font_size),
                           ('node_spacing', node_spacing), ('auto_layout', auto_layout),
                           ('sidebar_collapsed', sidebar_collapsed)):
            if settings.get(key) != value:
                changes[key] = value

        if changes:
            logger.info(f"Settings changed: {changes}")
            _report(session.update_settings(**changes))

        if not settings.get('auto_layout') and st.button("Apply Layout"):
            _report(session.apply_auto_layout())


def render_sidebar(session: MindMapSession):
    """
    Render the sidebar with editing commands and settings.
    """
    render_node_commands(session)
    render_settings(session)
