"""Integration tests for the Streamlit session-state accessors."""

from conftest import make_node
from mindmap import state
from mindmap.config import DEFAULT_SETTINGS
from mindmap.session import MindMapSession


def test_get_session_creates_sample_once(mock_streamlit):
    session = state.get_session()
    assert isinstance(session, MindMapSession)
    assert session.data.root_ids == ['welcome']
    assert state.get_session() is session
    assert mock_streamlit.session_state[state.SESSION_KEY] is session


def test_settings_before_session(mock_streamlit):
    settings = state.get_settings()
    assert settings == DEFAULT_SETTINGS
    settings['font_size'] = 99
    assert DEFAULT_SETTINGS['font_size'] != 99


def test_update_settings(mock_streamlit):
    state.update_settings(node_spacing=20)
    assert state.get_settings()['node_spacing'] == 20


def test_reset_session_keeps_settings(mock_streamlit):
    state.update_settings(color_set='nord')
    old = state.get_session()
    session = state.reset_session([make_node('only')])
    assert session is not old
    assert session.data.root_ids == ['only']
    assert session.settings['color_set'] == 'nord'
    assert state.get_session() is session
