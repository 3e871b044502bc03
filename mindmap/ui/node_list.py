"""Node outline list for the Outline Mind Map application."""

import streamlit as st

from mindmap.metadata import describe_meta
from mindmap.normalized_store import get_siblings
from mindmap.session import MindMapSession


def outline_rows(session: MindMapSession, query: str = ''):
    """Flatten the visible outline into ``(depth, node)`` rows, filtered by text."""
    rows = []
    query = query.lower()

    def walk(node, depth):
        if not query or query in node.get('text', '').lower():
            rows.append((depth, node))
        if not node.get('collapsed'):
            for child in node.get('children', []):
                walk(child, depth + 1)

    for root in session.root_nodes:
        walk(root, 0)
    return rows


def render_node_list(session: MindMapSession):
    """
    Render the outline with select, move up and move down buttons for each node.
    """
    if not session.root_nodes:
        return

    with st.sidebar.expander("✏️ Outline", expanded=True):
        query = st.text_input("🔍 Filter nodes", key="node_list_search")
        rows = outline_rows(session, query)
        if query and not rows:
            st.info(f"No nodes match '{query}'")

        for depth, node in rows:
            node_id = node['id']
            col1, col2, col3 = st.columns([4, 1, 1])
            marker = "▸ " if node.get('collapsed') and node.get('children') else ""
            label = f"{'  ' * depth}{marker}{node.get('text', 'Untitled')}"
            if col1.button(label, key=f"select_{node_id}", help=describe_meta(node.get('structural_meta')) or None):
                session.select(node_id)
                st.rerun()

            siblings = get_siblings(session.data, node_id)
            index = siblings.index(node_id) if node_id in siblings else -1
            if col2.button("⬆", key=f"up_{node_id}", disabled=index <= 0):
                session.change_sibling_order(node_id, siblings[index - 1], insert_before=True)
                st.rerun()
            if col3.button("⬇", key=f"down_{node_id}", disabled=index < 0 or index >= len(siblings) - 1):
                session.change_sibling_order(node_id, siblings[index + 1], insert_before=False)
                st.rerun()
