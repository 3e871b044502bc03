"""Shared fixtures for the mind map test suites."""

import pytest

from mindmap.models import HeadingMeta, ListMeta, NodeSize
from mindmap.node_size import clear_size_cache


class MockSessionState(dict):
    """Mock implementation of Streamlit's session state.

    Provides a dictionary-like object with attribute-style access, which is
    all the state accessors rely on.
    """

    def __getattr__(self, key):
        """Provide attribute-style access to dictionary items."""
        if key in self:
            return self[key]
        raise AttributeError(key)

    def __setattr__(self, key, value):
        self[key] = value


class MockStreamlit:
    """Mock implementation of the Streamlit module.

    Provides minimal implementations of Streamlit functions needed for testing.
    """

    def __init__(self):
        self.session_state = MockSessionState()
        self.errors = []

    def error(self, text):
        """Mock Streamlit's error display."""
        self.errors.append(text)

    def rerun(self):
        """Mock Streamlit's page rerun functionality."""
        pass


def fixed_size(node, edit_text=None, is_editing=False, font_size=None):
    """Size provider giving every node the same box, so layout math is exact."""
    return NodeSize(width=100.0, height=20.0)


def make_node(node_id, text=None, children=None, meta=None, collapsed=False, **attrs):
    node = {
        'id': node_id,
        'text': text if text is not None else node_id,
        'x': 0.0,
        'y': 0.0,
        'collapsed': collapsed,
        'structural_meta': meta,
        'children': children or [],
    }
    node.update(attrs)
    return node


@pytest.fixture(autouse=True)
def _fresh_size_cache():
    clear_size_cache()
    yield
    clear_size_cache()


@pytest.fixture
def mock_streamlit(monkeypatch):
    """Replace the streamlit module used by the state accessors."""
    from mindmap import state

    mock_st = MockStreamlit()
    monkeypatch.setattr(state, 'st', mock_st)
    return mock_st


@pytest.fixture
def size_provider():
    return fixed_size


@pytest.fixture
def outline_tree():
    """
    # Project            (root)
      ## Goals           (goals)
        - ship           (ship)
        - test           (test)
      ## Notes           (notes)
    """
    return [
        make_node('root-1', 'Project', meta=HeadingMeta(level=1, line_number=1), children=[
            make_node('goals', 'Goals', meta=HeadingMeta(level=2, line_number=2), children=[
                make_node('ship', 'ship', meta=ListMeta(ordered=False, indent=0, line_number=3)),
                make_node('test', 'test', meta=ListMeta(ordered=False, indent=0, line_number=4)),
            ]),
            make_node('notes', 'Notes', meta=HeadingMeta(level=2, line_number=6)),
        ])
    ]
