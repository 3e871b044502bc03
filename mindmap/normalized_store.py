"""Normalized document store: conversions between tree form and flat maps.

The live document is kept as three flat maps (``nodes``, ``children_map``,
``parent_map``) so lookups, deletes and reparenting never search the tree.
The nested form (``children`` lists) is only produced on demand for
serialization and rendering.
"""

import logging
from collections import deque
from copy import deepcopy
from typing import Dict, Iterable, List, Optional, Set

from mindmap.config import ROOT_KEY
from mindmap.models import NormalizedData

logger = logging.getLogger(__name__)


def empty_store() -> NormalizedData:
    return NormalizedData(nodes={}, children_map={ROOT_KEY: []}, parent_map={})


def normalize(root_nodes: Optional[Iterable[dict]]) -> NormalizedData:
    """Flatten a list of root node trees into a NormalizedData snapshot.

    Args:
        root_nodes: Root node dictionaries, each with an optional ``children`` list

    Returns:
        A new NormalizedData; child order and node attributes are preserved
    """
    if not root_nodes:
        return empty_store()

    nodes: Dict[str, dict] = {}
    parent_map: Dict[str, str] = {}
    children_map: Dict[str, List[str]] = {}

    def traverse(node: dict, parent_id: Optional[str]) -> bool:
        node_id = node['id']
        if node_id in nodes or node_id == ROOT_KEY:
            logger.warning(f"Duplicate or reserved node id during normalize, keeping first: {node_id}")
            return False
        nodes[node_id] = {k: deepcopy(v) for k, v in node.items() if k != 'children'}
        if parent_id is not None:
            parent_map[node_id] = parent_id
        # Only children that were actually registered are listed
        children_map[node_id] = [
            child['id'] for child in node.get('children') or [] if traverse(child, node_id)
        ]
        return True

    root_ids = []
    for root in root_nodes:
        if traverse(root, None):
            root_ids.append(root['id'])

    children_map[ROOT_KEY] = root_ids
    logger.debug(f"Normalized {len(nodes)} nodes under {len(root_ids)} roots")
    return NormalizedData(nodes=nodes, children_map=children_map, parent_map=parent_map)


def denormalize(data: NormalizedData) -> List[dict]:
    """Rebuild nested root trees from a snapshot.

    Every returned dictionary is a fresh copy so that later snapshots can never
    alias into a tree handed to a reader.
    """
    def build(node_id: str) -> Optional[dict]:
        node = data.nodes.get(node_id)
        if node is None:
            logger.warning(f"Skipping dangling child reference during denormalize: {node_id}")
            return None
        tree = deepcopy(node)
        children = (build(child_id) for child_id in data.children_map.get(node_id, []))
        tree['children'] = [child for child in children if child is not None]
        return tree

    trees = (build(root_id) for root_id in data.root_ids)
    return [tree for tree in trees if tree is not None]


def find_node(data: NormalizedData, node_id: str) -> Optional[dict]:
    return data.nodes.get(node_id)


def get_parent_id(data: NormalizedData, node_id: str) -> Optional[str]:
    return data.parent_map.get(node_id)


def get_children(data: NormalizedData, node_id: str) -> List[str]:
    return list(data.children_map.get(node_id, []))


def is_root(data: NormalizedData, node_id: str) -> bool:
    return node_id in data.nodes and node_id not in data.parent_map


def get_siblings(data: NormalizedData, node_id: str) -> List[str]:
    """Ordered ids sharing ``node_id``'s parent (the root list for roots), itself included."""
    parent_id = data.parent_map.get(node_id, ROOT_KEY)
    return list(data.children_map.get(parent_id, []))


def collect_descendants(data: NormalizedData, node_id: str) -> Set[str]:
    """Breadth-first set of every id below ``node_id`` (not including it)."""
    descendants: Set[str] = set()
    queue = deque(data.children_map.get(node_id, []))
    while queue:
        current = queue.popleft()
        if current in descendants:
            continue
        descendants.add(current)
        queue.extend(data.children_map.get(current, []))
    return descendants


def is_descendant(data: NormalizedData, ancestor_id: str, node_id: str) -> bool:
    """True when ``node_id`` lies strictly below ``ancestor_id``."""
    current = data.parent_map.get(node_id)
    seen = set()
    while current is not None and current not in seen:
        if current == ancestor_id:
            return True
        seen.add(current)
        current = data.parent_map.get(current)
    return False


def get_depth(data: NormalizedData, node_id: str) -> int:
    """Number of ancestors above a node (0 for roots)."""
    depth = 0
    current = data.parent_map.get(node_id)
    while current is not None and depth <= len(data.nodes):
        depth += 1
        current = data.parent_map.get(current)
    return depth


def validate_store(data: NormalizedData) -> List[str]:
    """Check the structural invariants of a snapshot.

    Returns:
        A list of human-readable violations; empty when the snapshot is consistent
    """
    problems = []

    # Every listed child is recorded once, under the right parent
    seen: Dict[str, str] = {}
    for parent_id, child_ids in data.children_map.items():
        if parent_id != ROOT_KEY and parent_id not in data.nodes:
            problems.append(f"children_map has entry for unknown node {parent_id}")
        for child_id in child_ids:
            if child_id in seen:
                problems.append(f"{child_id} listed under both {seen[child_id]} and {parent_id}")
                continue
            seen[child_id] = parent_id
            expected = data.parent_map.get(child_id, ROOT_KEY)
            if expected != parent_id:
                problems.append(f"{child_id} listed under {parent_id} but parent_map says {expected}")

    for child_id, parent_id in data.parent_map.items():
        if child_id not in data.nodes:
            problems.append(f"parent_map has entry for unknown node {child_id}")
        if child_id not in data.children_map.get(parent_id, []):
            problems.append(f"{child_id} missing from children of {parent_id}")

    # Reachability from the root list, which also rules out cycles
    reachable: Set[str] = set()
    queue = deque(data.root_ids)
    while queue:
        current = queue.popleft()
        if current in reachable:
            problems.append(f"cycle or repeated reference at {current}")
            continue
        reachable.add(current)
        queue.extend(data.children_map.get(current, []))

    unreachable = set(data.nodes) - reachable
    if unreachable:
        problems.append(f"unreachable nodes: {sorted(unreachable)}")
    dangling = reachable - set(data.nodes)
    if dangling:
        problems.append(f"dangling ids: {sorted(dangling)}")

    return problems
