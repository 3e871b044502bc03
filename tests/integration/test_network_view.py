"""Integration tests for the pyvis network view."""

import pytest

from conftest import fixed_size, make_node
from mindmap.session import MindMapSession
from mindmap.ui.network_visualization import build_network, node_style, visible_node_ids


@pytest.fixture
def session():
    return MindMapSession([
        make_node('r', children=[
            make_node('a', children=[make_node('a1')]),
            make_node('b', collapsed=True, children=[make_node('b1'), make_node('b2')]),
        ])
    ], size_provider=fixed_size)


def test_visible_nodes_skip_collapsed(session):
    assert visible_node_ids(session) == ['r', 'a', 'a1', 'b']


def test_network_mirrors_outline(session):
    net = build_network(session, "500px")
    assert [node['id'] for node in net.nodes] == ['r', 'a', 'a1', 'b']
    assert {(edge['from'], edge['to']) for edge in net.edges} == {('r', 'a'), ('a', 'a1'), ('r', 'b')}


def test_nodes_drawn_at_layout_coordinates(session):
    net = build_network(session)
    drawn = {node['id']: node for node in net.nodes}
    for node_id in ('r', 'a', 'a1', 'b'):
        stored = session.get_node(node_id)
        assert drawn[node_id]['x'] == stored['x']
        assert drawn[node_id]['y'] == stored['y']
        assert drawn[node_id]['physics'] is False


def test_node_style(session):
    style = node_style(session, 'b')
    assert style['label'] == 'b (+2)'
    assert node_style(session, 'r')['color']['border'] == '#FF5722'
    session.select('a')
    assert node_style(session, 'a')['borderWidth'] == 3
    assert node_style(session, 'r')['borderWidth'] == 1
