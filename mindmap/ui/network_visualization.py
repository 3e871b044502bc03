"""
Network visualization module for the Mind Map application.

This module handles:
- PyVis Network creation with physics disabled
- Node placement at auto-layout coordinates
- Branch coloring of nodes and edges
- HTML generation for the Streamlit component
"""

import logging
from typing import Dict, List

import streamlit.components.v1 as components
from pyvis.network import Network

from mindmap.config import DEFAULT_SETTINGS, NETWORK_CONFIG
from mindmap.metadata import describe_meta
from mindmap.session import MindMapSession
from mindmap.themes import THEMES
from mindmap.utils import hex_to_rgb

logger = logging.getLogger(__name__)


def get_theme(settings: dict) -> dict:
    return THEMES.get(settings.get('theme'), THEMES['default'])


def visible_node_ids(session: MindMapSession) -> List[str]:
    """Ids drawn on the canvas: roots plus descendants of expanded nodes, in outline order."""
    visible = []

    def walk(node: dict) -> None:
        visible.append(node['id'])
        if not node.get('collapsed'):
            for child in node.get('children', []):
                walk(child)

    for root in session.root_nodes:
        walk(root)
    return visible


def node_style(session: MindMapSession, node_id: str) -> Dict[str, object]:
    """Keyword arguments for ``Network.add_node`` of one node."""
    node = session.get_node(node_id)
    r, g, b = hex_to_rgb(session.node_color(node_id))
    bg, bd = f"rgba({r},{g},{b},{NETWORK_CONFIG['rgba_alpha']})", f"rgba({r},{g},{b},1)"

    border_width = NETWORK_CONFIG['border_width']
    if node_id == session.selected_node_id:
        bd = NETWORK_CONFIG['selected_border']
        border_width = NETWORK_CONFIG['selected_border_width']

    label = node.get('text') or 'Untitled'
    if node.get('collapsed') and session.data.children_map.get(node_id):
        label += f" (+{len(session.data.children_map[node_id])})"

    title = node.get('text', '')
    meta = describe_meta(node.get('structural_meta'))
    if meta:
        title = f"{title}\n{meta}"
    if node.get('note'):
        title += f"\n\n{node['note']}"

    return {
        'label': label,
        'title': title,
        'shape': NETWORK_CONFIG['node_shape'],
        'color': {'background': bg, 'border': bd},
        'borderWidth': border_width,
        'x': float(node.get('x', 0.0)),
        'y': float(node.get('y', 0.0)),
        'physics': False,
        'font': {
            'size': session.settings.get('font_size', DEFAULT_SETTINGS['font_size']),
            'color': get_theme(session.settings)['text']
        }
    }


def build_network(session: MindMapSession, canvas_height: str = "650px") -> Network:
    """
    Build a PyVis network that mirrors the session's visible outline.

    Args:
        session: The document session to draw
        canvas_height: The height of the canvas (e.g., "600px")

    Returns:
        A Network with one node per visible outline node and one edge per
        visible parent-child link
    """
    theme = get_theme(session.settings)
    net = Network(
        height=canvas_height,
        width="100%",
        directed=False,
        bgcolor=theme['background'],
        select_menu=False,
        filter_menu=False,
        cdn_resources='remote'
    )
    net.toggle_physics(False)

    visible = visible_node_ids(session)
    for node_id in visible:
        net.add_node(node_id, **node_style(session, node_id))

    shown = set(visible)
    for node_id in visible:
        node = session.get_node(node_id)
        if node.get('collapsed'):
            continue
        for child_id in session.data.children_map.get(node_id, []):
            if child_id in shown:
                net.add_edge(node_id, child_id, color=session.node_color(child_id))

    logger.debug(f"Built network with {len(visible)} visible nodes")
    return net


def render_network_visualization(session: MindMapSession, canvas_height: str = "650px") -> None:
    """
    Render the network visualization using PyVis.

    Args:
        session: The document session to draw
        canvas_height: The height of the canvas (e.g., "600px")
    """
    net = build_network(session, canvas_height)
    components.html(
        net.generate_html(),
        height=int(canvas_height.replace("px", "")),
        scrolling=False
    )
