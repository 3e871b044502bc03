"""Auto-layout engine: right-hand hierarchical mind map layout.

Children are stacked to the right of their parent and the parent is then
re-centered on the rendered extent of its children. Node sizes come from a
size provider so the engine itself never measures text. Descendants of
collapsed nodes are not visible and keep whatever coordinates they had.
"""

import logging
from copy import deepcopy
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, Tuple

from mindmap.config import COORDINATES, DEFAULT_SETTINGS, LAYOUT
from mindmap.models import NodeSize, NormalizedData
from mindmap.node_size import calculate_node_size
from mindmap.normalized_store import denormalize

logger = logging.getLogger(__name__)

SizeProvider = Callable[..., NodeSize]


@dataclass(frozen=True)
class LayoutOptions:
    """Inputs of a layout pass besides the tree itself.

    ``center_x``/``center_y`` left as None fall back to a default anchor that
    moves right while the sidebar is open.
    """
    center_x: Optional[float] = None
    center_y: Optional[float] = None
    node_spacing: float = DEFAULT_SETTINGS['node_spacing']
    font_size: Optional[float] = None
    sidebar_collapsed: bool = DEFAULT_SETTINGS['sidebar_collapsed']

    @classmethod
    def from_settings(cls, settings: dict, **overrides) -> 'LayoutOptions':
        values = {
            'node_spacing': settings.get('node_spacing', DEFAULT_SETTINGS['node_spacing']),
            'font_size': settings.get('font_size', DEFAULT_SETTINGS['font_size']),
            'sidebar_collapsed': settings.get('sidebar_collapsed', DEFAULT_SETTINGS['sidebar_collapsed']),
        }
        values.update(overrides)
        return cls(**values)


def resolve_center(options: LayoutOptions) -> Tuple[float, float]:
    """Anchor point of the first root."""
    center_x = options.center_x
    if center_x is None:
        center_x = COORDINATES['default_center_x']
        if not options.sidebar_collapsed:
            center_x += COORDINATES['sidebar_width']
    center_y = options.center_y
    if center_y is None:
        center_y = COORDINATES['default_center_y']
    return float(center_x), float(center_y)


def get_dynamic_node_spacing(parent_size: NodeSize, child_size: NodeSize, is_root_child: bool = False) -> float:
    """Edge-to-edge gap between a parent's right edge and its child's left edge.

    The base distances leave room for the collapse/expand toggle drawn at the
    parent's right edge; wide nodes and images push children further out.
    """
    min_width = LAYOUT['node_min_width']
    if is_root_child:
        width_adjustment = max(0.0, (parent_size.width - min_width) * 0.2)
        image_adjustment = parent_size.image_height * 0.15 if parent_size.image_height > 0 else 0.0
        return LAYOUT['root_to_child_distance'] + width_adjustment + image_adjustment

    parent_width_adjustment = max(0.0, (parent_size.width - min_width) * 0.1)
    parent_image_adjustment = parent_size.image_height * 0.1 if parent_size.image_height > 0 else 0.0
    child_width_adjustment = max(0.0, (child_size.width - min_width) * 0.05)
    return (LAYOUT['toggle_to_child_distance'] + parent_width_adjustment
            + parent_image_adjustment + child_width_adjustment)


def calculate_child_node_x(parent: dict, parent_size: NodeSize, child_size: NodeSize,
                           edge_distance: float) -> float:
    """Center x of a child whose left edge sits ``edge_distance`` right of the parent."""
    parent_right_edge = float(parent.get('x', 0.0)) + parent_size.width / 2
    return parent_right_edge + edge_distance + child_size.width / 2


def _visible_children(node: dict) -> List[dict]:
    if node.get('collapsed'):
        return []
    return node.get('children') or []


class _LayoutPass:
    """State shared by the recursive helpers of one layout call."""

    def __init__(self, options: LayoutOptions, size_provider: SizeProvider):
        self.options = options
        self.size_provider = size_provider
        self.gap = max(options.node_spacing * 0.5, LAYOUT['vertical_spacing_min'])
        self._sizes: Dict[int, NodeSize] = {}

    def size(self, node: dict) -> NodeSize:
        key = id(node)
        if key not in self._sizes:
            self._sizes[key] = self.size_provider(node, None, False, self.options.font_size)
        return self._sizes[key]

    def subtree_height(self, node: dict) -> float:
        children = _visible_children(node)
        own_height = self.size(node).height
        if not children:
            return own_height
        stacked = sum(self.subtree_height(child) for child in children)
        stacked += self.gap * (len(children) - 1)
        return max(own_height, stacked)

    def place_children(self, node: dict, depth: int) -> None:
        children = _visible_children(node)
        if not children:
            return

        parent_size = self.size(node)
        heights = [self.subtree_height(child) for child in children]
        total = sum(heights) + self.gap * (len(children) - 1)
        cursor = node['y'] - total / 2

        for child, height in zip(children, heights):
            child_size = self.size(child)
            distance = get_dynamic_node_spacing(parent_size, child_size, depth == 0)
            child['x'] = calculate_child_node_x(node, parent_size, child_size, distance)
            child['y'] = cursor + height / 2
            self.place_children(child, depth + 1)
            cursor += height + self.gap

        # Re-center on the rendered extent of the direct children
        top = min(child['y'] - self.size(child).height / 2 for child in children)
        bottom = max(child['y'] + self.size(child).height / 2 for child in children)
        node['y'] = (top + bottom) / 2

    def bounds(self, node: dict) -> Tuple[float, float]:
        half = self.size(node).height / 2
        top, bottom = node['y'] - half, node['y'] + half
        for child in _visible_children(node):
            child_top, child_bottom = self.bounds(child)
            top = min(top, child_top)
            bottom = max(bottom, child_bottom)
        return top, bottom

    def shift(self, node: dict, dy: float) -> None:
        node['y'] += dy
        for child in _visible_children(node):
            self.shift(child, dy)


def count_visible_nodes(node: dict) -> int:
    """Nodes drawn for a subtree: the node plus its expanded descendants."""
    return 1 + sum(count_visible_nodes(child) for child in _visible_children(node))


def get_subtree_bounds(node: dict, options: Optional[LayoutOptions] = None,
                       size_provider: SizeProvider = calculate_node_size) -> Tuple[float, float]:
    """Top and bottom y of the visible part of a positioned subtree."""
    return _LayoutPass(options or LayoutOptions(), size_provider).bounds(node)


def layout(root_nodes: List[dict], options: Optional[LayoutOptions] = None,
           size_provider: SizeProvider = calculate_node_size) -> List[dict]:
    """Assign x/y to every visible node of a document.

    Args:
        root_nodes: Tree-form document; it is not modified
        options: Spacing, font and anchor settings
        size_provider: Callable ``(node, edit_text, is_editing, font_size) -> NodeSize``

    Returns:
        A positioned deep copy of ``root_nodes``
    """
    options = options or LayoutOptions()
    roots = deepcopy(root_nodes)
    if not roots:
        return roots

    center_x, center_y = resolve_center(options)
    run = _LayoutPass(options, size_provider)

    for root in roots:
        root['x'] = center_x
        root['y'] = center_y
        run.place_children(root, 0)

    if len(roots) > 1:
        # Stack each root's subtree below the previous one
        previous_bottom = run.bounds(roots[0])[1]
        for previous, root in zip(roots, roots[1:]):
            busiest = max(count_visible_nodes(previous), count_visible_nodes(root))
            gap = LAYOUT['root_gap_base'] + min(busiest * 0.5, LAYOUT['root_gap_max_extra'])
            top, _ = run.bounds(root)
            run.shift(root, previous_bottom + gap - top)
            previous_bottom = run.bounds(root)[1]

        # Center the whole stack on the anchor
        top = min(run.bounds(root)[0] for root in roots)
        bottom = max(run.bounds(root)[1] for root in roots)
        offset = center_y - (top + bottom) / 2
        for root in roots:
            run.shift(root, offset)

    logger.debug(f"Laid out {sum(count_visible_nodes(r) for r in roots)} visible nodes in {len(roots)} roots")
    return roots


def apply_layout(data: NormalizedData, options: Optional[LayoutOptions] = None,
                 size_provider: SizeProvider = calculate_node_size) -> NormalizedData:
    """New snapshot with the coordinates of a layout pass copied onto its nodes."""
    positioned = layout(denormalize(data), options, size_provider)
    positions = {}

    def collect(node: dict) -> None:
        positions[node['id']] = (node['x'], node['y'])
        for child in _visible_children(node):
            collect(child)

    for root in positioned:
        collect(root)

    nodes = dict(data.nodes)
    for node_id, (x, y) in positions.items():
        node = nodes.get(node_id)
        if node is not None and (node.get('x'), node.get('y')) != (x, y):
            nodes[node_id] = {**node, 'x': x, 'y': y}
    return NormalizedData(nodes=nodes, children_map=data.children_map, parent_map=data.parent_map)
