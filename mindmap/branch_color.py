"""Branch coloring: every node takes the color of its top-level branch."""

import colorsys
import logging
from typing import List, Optional, Sequence

from mindmap.models import NormalizedData
from mindmap.themes import COLOR_SETS, FALLBACK_COLOR, NODE_COLORS, ROOT_COLOR
from mindmap.utils import hex_to_rgb, rgb_to_hex

logger = logging.getLogger(__name__)


def get_color_set(color_set_name: Optional[str] = None) -> List[str]:
    """Palette for a named color set; unknown or empty names give the default palette."""
    if not color_set_name:
        return list(NODE_COLORS)
    if color_set_name not in COLOR_SETS:
        logger.debug(f"Unknown color set '{color_set_name}', using default palette")
        return list(NODE_COLORS)
    return list(COLOR_SETS[color_set_name])


def find_branch_root(node_id: str, data: NormalizedData) -> Optional[str]:
    """Walk up from ``node_id`` to the direct child of a root.

    Returns:
        The branch root id, or None for roots and inconsistent ancestry
    """
    current = node_id
    # The walk can never be longer than the store without a cycle
    for _ in range(len(data.nodes) + 1):
        parent_id = data.parent_map.get(current)
        if parent_id is None:
            return None
        if parent_id not in data.nodes:
            return None
        if parent_id not in data.parent_map:
            return current
        current = parent_id
    logger.warning(f"Ancestry walk from {node_id} did not terminate")
    return None


def branch_color(node_id: str, data: NormalizedData, palette: Optional[Sequence[str]] = None) -> str:
    """Display color of a node, derived only from its structural position."""
    palette = list(palette) if palette else list(NODE_COLORS)

    if node_id in data.nodes and node_id not in data.parent_map:
        return ROOT_COLOR

    branch_root_id = find_branch_root(node_id, data)
    if branch_root_id is None:
        return FALLBACK_COLOR

    root_id = data.parent_map[branch_root_id]
    siblings = data.children_map.get(root_id, [])
    if branch_root_id not in siblings:
        return FALLBACK_COLOR

    return palette[siblings.index(branch_root_id) % len(palette)]


def generate_branch_colors(base_color: str, steps: int = 5) -> List[str]:
    """Base color followed by progressively darker shades of the same hue."""
    r, g, b = hex_to_rgb(base_color)
    h, l, s = colorsys.rgb_to_hls(r / 255, g / 255, b / 255)
    shades = [base_color]
    for i in range(steps):
        lightness = max(0.2, min(0.8, l - (i + 1) * 0.04))
        nr, ng, nb = colorsys.hls_to_rgb(h, lightness, s)
        shades.append(rgb_to_hex(int(round(nr * 255)), int(round(ng * 255)), int(round(nb * 255))))
    return shades


def assign_branch_colors(data: NormalizedData, palette: Optional[Sequence[str]] = None) -> NormalizedData:
    """New snapshot whose non-root nodes carry their derived branch ``color``."""
    nodes = dict(data.nodes)
    changed = 0
    for node_id, node in data.nodes.items():
        if node_id not in data.parent_map:
            continue
        color = branch_color(node_id, data, palette)
        if node.get('color') != color:
            nodes[node_id] = {**node, 'color': color}
            changed += 1
    if not changed:
        return data
    logger.debug(f"Recolored {changed} nodes")
    return NormalizedData(nodes=nodes, children_map=data.children_map, parent_map=data.parent_map)
