"""Node editor form for the Outline Mind Map application."""

import streamlit as st

from mindmap.metadata import describe_meta
from mindmap.mutations import MOVE_POSITIONS
from mindmap.session import MindMapSession


def render_node_edit(session: MindMapSession):
    """
    Render the edit form for the selected node.
    """
    node_id = session.selected_node_id
    node = session.get_node(node_id) if node_id is not None else None
    if node is None:
        return

    with st.form(key=f"edit_node_{node_id}"):
        st.subheader(f"Edit Node: {node.get('text', 'Untitled')}")
        meta = describe_meta(node.get('structural_meta'))
        if meta:
            st.caption(meta)
        new_text = st.text_input("Text", value=node.get('text', ''))
        new_note = st.text_area("Note", value=node.get('note', ''), height=120)

        # Candidate targets for a move, excluding the node itself
        others = [n for n in session.data.nodes.values() if n['id'] != node_id]
        labels = [''] + [f"{n.get('text', n['id'])} ({n['id']})" for n in others]
        col1, col2 = st.columns(2)
        target_label = col1.selectbox("Move relative to", labels)
        position = col2.selectbox("Position", MOVE_POSITIONS, index=MOVE_POSITIONS.index('child'))

        submitted = st.form_submit_button("Save Changes")

    if not submitted:
        return

    patch = {}
    if new_text != node.get('text', ''):
        patch['text'] = new_text
    if new_note != node.get('note', ''):
        patch['note'] = new_note
    if patch:
        result = session.update_node(node_id, patch)
        if not result['success']:
            st.error(result['message'])
            return

    if target_label:
        target_id = others[labels.index(target_label) - 1]['id']
        result = session.move_node_with_position(node_id, target_id, position)
        if not result['success']:
            st.warning(result['message'])
            return

    st.rerun()
