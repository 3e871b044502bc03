# State management helpers for MindMap

import logging

import streamlit as st

from mindmap.config import DEFAULT_SETTINGS
from mindmap.models import HeadingMeta, ListMeta
from mindmap.session import MindMapSession

logger = logging.getLogger(__name__)

SESSION_KEY = 'mindmap_session'


def _sample_document():
    """Small outline shown on first start."""
    def node(node_id, text, meta=None, children=None):
        return {
            'id': node_id, 'text': text, 'x': 0.0, 'y': 0.0, 'collapsed': False,
            'structural_meta': meta, 'children': children or []
        }

    return [
        node('welcome', 'Outline Mind Map', HeadingMeta(level=1, line_number=1), [
            node('ideas', 'Ideas', HeadingMeta(level=2, line_number=3), [
                node('idea-1', 'Normalized store', ListMeta(ordered=False, indent=0, line_number=4)),
                node('idea-2', 'Auto layout', ListMeta(ordered=False, indent=0, line_number=5)),
            ]),
            node('tasks', 'Tasks', HeadingMeta(level=2, line_number=7), [
                node('task-1', 'Write tests', ListMeta(ordered=True, indent=0, line_number=8,
                                                       is_checkbox=True)),
            ]),
        ])
    ]


def get_session() -> MindMapSession:
    """Get the document session from Streamlit's session state, creating it on first use."""
    if SESSION_KEY not in st.session_state:
        logger.info("Creating new mind map session")
        st.session_state[SESSION_KEY] = MindMapSession(_sample_document())
    return st.session_state[SESSION_KEY]


def reset_session(root_nodes=None) -> MindMapSession:
    """Replace the session with a fresh one holding ``root_nodes``."""
    settings = get_settings()
    session = MindMapSession(root_nodes if root_nodes is not None else _sample_document(), settings)
    st.session_state[SESSION_KEY] = session
    return session


def get_settings() -> dict:
    """Current session settings, or the defaults before a session exists."""
    if SESSION_KEY not in st.session_state:
        return dict(DEFAULT_SETTINGS)
    return st.session_state[SESSION_KEY].settings


def update_settings(**changes) -> dict:
    """Apply setting changes to the current session."""
    return get_session().update_settings(**changes)
