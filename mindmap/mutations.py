"""Structural mutation operations over the normalized store.

Every operation takes a NormalizedData snapshot and returns a new one. A
request that cannot be applied (unknown id, structure it would break) is
logged and answered with the input snapshot unchanged, so a failed mutation
never leaves the maps half updated.
"""

import logging
from typing import List, Optional, Tuple

from mindmap.branch_color import branch_color, get_color_set
from mindmap.config import DEFAULT_SETTINGS, ERROR_MESSAGES, ROOT_KEY
from mindmap.layout import calculate_child_node_x, get_dynamic_node_spacing
from mindmap.metadata import derive_child_meta, derive_sibling_meta
from mindmap.models import MAX_HEADING_LEVEL, HeadingMeta, ListMeta, NormalizedData
from mindmap.node_size import calculate_node_size
from mindmap.normalized_store import collect_descendants, is_descendant
from mindmap.utils import generate_node_id

logger = logging.getLogger(__name__)

MOVE_POSITIONS = ('before', 'after', 'child')


def _strip_children(node: dict) -> dict:
    return {k: v for k, v in node.items() if k != 'children'}


def _check_new_node(data: NormalizedData, new_node: dict) -> bool:
    node_id = new_node.get('id')
    if node_id == ROOT_KEY:
        logger.warning(ERROR_MESSAGES['reserved_id'].format(node_id=node_id))
        return False
    if node_id is None or node_id in data.nodes:
        logger.warning(ERROR_MESSAGES['duplicate_id'].format(node_id=node_id))
        return False
    return True


def add_normalized_node(data: NormalizedData, parent_id: str, new_node: dict) -> NormalizedData:
    """Append ``new_node`` as the last child of ``parent_id``."""
    if parent_id not in data.nodes:
        logger.warning(ERROR_MESSAGES['parent_not_found'].format(node_id=parent_id))
        return data
    if not _check_new_node(data, new_node):
        return data

    node_id = new_node['id']
    return NormalizedData(
        nodes={**data.nodes, node_id: _strip_children(new_node)},
        children_map={
            **data.children_map,
            parent_id: [*data.children_map.get(parent_id, []), node_id],
            node_id: [],
        },
        parent_map={**data.parent_map, node_id: parent_id},
    )


def add_sibling_normalized_node(data: NormalizedData, sibling_id: str, new_node: dict,
                                insert_after: bool = True) -> NormalizedData:
    """Insert ``new_node`` directly before or after a non-root sibling."""
    if sibling_id not in data.nodes:
        logger.warning(ERROR_MESSAGES['node_not_found'].format(node_id=sibling_id))
        return data
    parent_id = data.parent_map.get(sibling_id)
    if parent_id is None:
        logger.warning(ERROR_MESSAGES['root_sibling'].format(node_id=sibling_id))
        return data
    if not _check_new_node(data, new_node):
        return data

    siblings = list(data.children_map.get(parent_id, []))
    index = siblings.index(sibling_id)
    node_id = new_node['id']
    siblings.insert(index + 1 if insert_after else index, node_id)

    return NormalizedData(
        nodes={**data.nodes, node_id: _strip_children(new_node)},
        children_map={**data.children_map, parent_id: siblings, node_id: []},
        parent_map={**data.parent_map, node_id: parent_id},
    )


def add_root_sibling_node(data: NormalizedData, sibling_id: str, new_node: dict,
                          insert_after: bool = True) -> NormalizedData:
    """Insert a new top-level node next to an existing root."""
    root_ids = data.root_ids
    if sibling_id not in root_ids:
        logger.warning(ERROR_MESSAGES['not_root'].format(node_id=sibling_id))
        return data
    if not _check_new_node(data, new_node):
        return data

    index = root_ids.index(sibling_id)
    node_id = new_node['id']
    root_ids.insert(index + 1 if insert_after else index, node_id)

    return NormalizedData(
        nodes={**data.nodes, node_id: _strip_children(new_node)},
        children_map={**data.children_map, ROOT_KEY: root_ids, node_id: []},
        parent_map=data.parent_map,
    )


def add_root_node(data: NormalizedData, new_node: dict) -> NormalizedData:
    """Append a top-level node at the end of the root list (also seeds an empty store)."""
    if not _check_new_node(data, new_node):
        return data
    node_id = new_node['id']
    return NormalizedData(
        nodes={**data.nodes, node_id: _strip_children(new_node)},
        children_map={**data.children_map, ROOT_KEY: [*data.root_ids, node_id], node_id: []},
        parent_map=data.parent_map,
    )


def delete_normalized_node(data: NormalizedData, node_id: str) -> NormalizedData:
    """Remove a node and its whole subtree in one snapshot transition."""
    if node_id not in data.nodes:
        logger.warning(ERROR_MESSAGES['node_not_found'].format(node_id=node_id))
        return data

    doomed = collect_descendants(data, node_id) | {node_id}
    parent_id = data.parent_map.get(node_id, ROOT_KEY)

    nodes = {k: v for k, v in data.nodes.items() if k not in doomed}
    parent_map = {k: v for k, v in data.parent_map.items() if k not in doomed}
    children_map = {k: v for k, v in data.children_map.items() if k not in doomed}
    children_map[parent_id] = [c for c in data.children_map.get(parent_id, []) if c != node_id]

    logger.debug(f"Deleted node {node_id} with {len(doomed) - 1} descendants")
    return NormalizedData(nodes=nodes, children_map=children_map, parent_map=parent_map)


def validate_node_movement(data: NormalizedData, node_id: str, new_parent_id: str) -> Optional[str]:
    """Reason a reparent would break the tree or the outline rules, or None if allowed."""
    node = data.nodes.get(node_id)
    new_parent = data.nodes.get(new_parent_id)
    if node is None:
        return ERROR_MESSAGES['node_not_found'].format(node_id=node_id)
    if new_parent is None:
        return ERROR_MESSAGES['parent_not_found'].format(node_id=new_parent_id)
    if node_id not in data.parent_map:
        return ERROR_MESSAGES['move_root'].format(node_id=node_id)
    if node_id == new_parent_id or is_descendant(data, node_id, new_parent_id):
        return ERROR_MESSAGES['cycle'].format(node_id=node_id, target_id=new_parent_id)

    node_meta = node.get('structural_meta')
    parent_meta = new_parent.get('structural_meta')
    if isinstance(node_meta, HeadingMeta):
        if isinstance(parent_meta, ListMeta):
            return ERROR_MESSAGES['heading_under_list']
        if isinstance(parent_meta, HeadingMeta) and parent_meta.level + 1 > MAX_HEADING_LEVEL:
            return ERROR_MESSAGES['heading_too_deep']
    return None


def move_normalized_node(data: NormalizedData, node_id: str, new_parent_id: str) -> NormalizedData:
    """Reparent ``node_id`` as the last child of ``new_parent_id``."""
    reason = validate_node_movement(data, node_id, new_parent_id)
    if reason:
        logger.warning(f"Move rejected: {reason}")
        return data

    old_parent_id = data.parent_map[node_id]
    if old_parent_id == new_parent_id:
        return data

    return NormalizedData(
        nodes=data.nodes,
        children_map={
            **data.children_map,
            old_parent_id: [c for c in data.children_map[old_parent_id] if c != node_id],
            new_parent_id: [*data.children_map.get(new_parent_id, []), node_id],
        },
        parent_map={**data.parent_map, node_id: new_parent_id},
    )


def move_node_with_position(data: NormalizedData, node_id: str, target_id: str,
                            position: str = 'child') -> NormalizedData:
    """Move ``node_id`` before/after ``target_id``, or make it ``target_id``'s last child."""
    if position not in MOVE_POSITIONS:
        logger.warning(ERROR_MESSAGES['invalid_position'].format(position=position))
        return data
    if target_id not in data.nodes:
        logger.warning(ERROR_MESSAGES['node_not_found'].format(node_id=target_id))
        return data

    if position == 'child':
        new_parent_id = target_id
    else:
        new_parent_id = data.parent_map.get(target_id)
        if new_parent_id is None:
            logger.warning(f"Move rejected: target {target_id} is a root")
            return data
        if node_id == target_id:
            return data

    reason = validate_node_movement(data, node_id, new_parent_id)
    if reason:
        logger.warning(f"Move rejected: {reason}")
        return data

    old_parent_id = data.parent_map[node_id]
    old_siblings = [c for c in data.children_map[old_parent_id] if c != node_id]
    if old_parent_id == new_parent_id:
        new_siblings = list(old_siblings)
    else:
        new_siblings = list(data.children_map.get(new_parent_id, []))

    if position == 'child':
        new_siblings.append(node_id)
    else:
        index = new_siblings.index(target_id)
        new_siblings.insert(index if position == 'before' else index + 1, node_id)

    children_map = {**data.children_map, old_parent_id: old_siblings, new_parent_id: new_siblings}
    return NormalizedData(
        nodes=data.nodes,
        children_map=children_map,
        parent_map={**data.parent_map, node_id: new_parent_id},
    )


def change_sibling_order_normalized(data: NormalizedData, dragged_id: str, target_id: str,
                                    insert_before: bool = True) -> NormalizedData:
    """Reposition ``dragged_id`` next to ``target_id`` inside their shared child list."""
    if dragged_id not in data.nodes or target_id not in data.nodes:
        logger.warning(ERROR_MESSAGES['node_not_found'].format(
            node_id=dragged_id if dragged_id not in data.nodes else target_id))
        return data

    parent_id = data.parent_map.get(dragged_id, ROOT_KEY)
    if data.parent_map.get(target_id, ROOT_KEY) != parent_id:
        logger.warning(ERROR_MESSAGES['different_parents'])
        return data
    if dragged_id == target_id:
        return data

    siblings = [c for c in data.children_map.get(parent_id, []) if c != dragged_id]
    index = siblings.index(target_id)
    siblings.insert(index if insert_before else index + 1, dragged_id)

    if siblings == data.children_map.get(parent_id):
        return data
    return NormalizedData(
        nodes=data.nodes,
        children_map={**data.children_map, parent_id: siblings},
        parent_map=data.parent_map,
    )


def update_normalized_node(data: NormalizedData, node_id: str, patch: dict) -> NormalizedData:
    """Shallow-merge ``patch`` into a node's attributes."""
    node = data.nodes.get(node_id)
    if node is None:
        logger.warning(ERROR_MESSAGES['node_not_found'].format(node_id=node_id))
        return data

    ignored = {'id', 'children'} & set(patch)
    if ignored:
        logger.warning(f"Ignoring structural keys in patch for {node_id}: {sorted(ignored)}")
    updates = {k: v for k, v in patch.items() if k not in ignored}

    return NormalizedData(
        nodes={**data.nodes, node_id: {**node, **updates}},
        children_map=data.children_map,
        parent_map=data.parent_map,
    )


def next_selection_after_delete(data: NormalizedData, node_id: str) -> Optional[str]:
    """Node to select once ``node_id`` is deleted.

    Next sibling, then previous sibling, then the parent (never the synthetic
    root container), then the first root left after the delete, then None.
    """
    parent_id = data.parent_map.get(node_id, ROOT_KEY)
    siblings = data.children_map.get(parent_id, [])
    if node_id in siblings:
        index = siblings.index(node_id)
        if index < len(siblings) - 1:
            return siblings[index + 1]
        if index > 0:
            return siblings[index - 1]
        if parent_id != ROOT_KEY:
            return parent_id

    remaining = [r for r in data.root_ids if r != node_id]
    return remaining[0] if remaining else None


# Node creation

def create_node(text: str = 'New Node', x: float = 0.0, y: float = 0.0, **attributes) -> dict:
    """Fresh node dictionary with a newly minted id."""
    node = {
        'id': generate_node_id(),
        'text': text,
        'x': float(x),
        'y': float(y),
        'collapsed': False,
        'structural_meta': None,
    }
    node.update(attributes)
    return node


def _place_right_of(node: dict, parent: dict, font_size: float) -> None:
    parent_size = calculate_node_size(parent, font_size=font_size)
    child_size = calculate_node_size(node, font_size=font_size)
    distance = get_dynamic_node_spacing(parent_size, child_size, False)
    node['x'] = calculate_child_node_x(parent, parent_size, child_size, distance)
    node['y'] = float(parent.get('y', 0.0))


def _sibling_nodes(data: NormalizedData, parent_id: str) -> List[dict]:
    return [data.nodes[c] for c in data.children_map.get(parent_id, []) if c in data.nodes]


def add_child_node(data: NormalizedData, parent_id: str, text: str = 'New Node',
                   settings: Optional[dict] = None) -> Tuple[NormalizedData, Optional[str]]:
    """Create a node under ``parent_id`` with inherited metadata, position and color.

    Returns:
        (new snapshot, new node id); the id is None when the parent is unknown
    """
    settings = settings or DEFAULT_SETTINGS
    parent = data.nodes.get(parent_id)
    if parent is None:
        logger.warning(ERROR_MESSAGES['parent_not_found'].format(node_id=parent_id))
        return data, None

    if parent.get('collapsed'):
        data = update_normalized_node(data, parent_id, {'collapsed': False})
        parent = data.nodes[parent_id]

    node = create_node(text)
    node['structural_meta'] = derive_child_meta(parent, _sibling_nodes(data, parent_id))
    _place_right_of(node, parent, settings.get('font_size', DEFAULT_SETTINGS['font_size']))

    new_data = add_normalized_node(data, parent_id, node)
    palette = get_color_set(settings.get('color_set'))
    new_data = update_normalized_node(new_data, node['id'], {'color': branch_color(node['id'], new_data, palette)})
    logger.info(f"Added child {node['id']} under {parent_id}")
    return new_data, node['id']


def add_sibling_node(data: NormalizedData, node_id: str, text: str = 'New Node',
                     insert_after: bool = True,
                     settings: Optional[dict] = None) -> Tuple[NormalizedData, Optional[str]]:
    """Create a node next to ``node_id``; roots get a new root sibling."""
    settings = settings or DEFAULT_SETTINGS
    reference = data.nodes.get(node_id)
    if reference is None:
        logger.warning(ERROR_MESSAGES['node_not_found'].format(node_id=node_id))
        return data, None

    palette = get_color_set(settings.get('color_set'))
    parent_id = data.parent_map.get(node_id)
    node = create_node(text)

    if parent_id is None:
        node['structural_meta'] = derive_sibling_meta(reference, None, [])
        node['x'] = float(reference.get('x', 0.0))
        node['y'] = float(reference.get('y', 0.0))
        new_data = add_root_sibling_node(data, node_id, node, insert_after)
    else:
        parent = data.nodes[parent_id]
        node['structural_meta'] = derive_sibling_meta(reference, parent, _sibling_nodes(data, parent_id))
        _place_right_of(node, parent, settings.get('font_size', DEFAULT_SETTINGS['font_size']))
        new_data = add_sibling_normalized_node(data, node_id, node, insert_after)

    new_data = update_normalized_node(new_data, node['id'], {'color': branch_color(node['id'], new_data, palette)})
    logger.info(f"Added sibling {node['id']} next to {node_id}")
    return new_data, node['id']
