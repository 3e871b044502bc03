"""Document session: the single writer of the current mind map snapshot.

Every command computes a new normalized snapshot, re-lays it out when auto
layout is on, refreshes the denormalized tree and records the result in the
undo history before returning. Readers therefore never observe the flat maps
and the tree disagreeing.
"""

import logging
from typing import Any, Callable, Dict, List, Optional

from mindmap.branch_color import assign_branch_colors, branch_color, get_color_set
from mindmap.config import DEFAULT_SETTINGS, ERROR_MESSAGES
from mindmap.history import History
from mindmap.layout import LayoutOptions, SizeProvider, apply_layout
from mindmap.models import NormalizedData
from mindmap.mutations import (
    MOVE_POSITIONS, add_child_node, add_root_node, add_sibling_node,
    change_sibling_order_normalized, create_node, delete_normalized_node,
    move_node_with_position, move_normalized_node, next_selection_after_delete,
    update_normalized_node, validate_node_movement
)
from mindmap.node_size import calculate_node_size
from mindmap.normalized_store import denormalize, empty_store, normalize
from mindmap.utils import handle_error, standard_response

logger = logging.getLogger(__name__)


class MindMapSession:
    """Current document, selection, settings and undo history."""

    def __init__(self, root_nodes: Optional[List[dict]] = None, settings: Optional[dict] = None,
                 size_provider: SizeProvider = calculate_node_size):
        self.settings: Dict[str, Any] = {**DEFAULT_SETTINGS, **(settings or {})}
        self.size_provider = size_provider
        self.history = History()
        self.data: NormalizedData = empty_store()
        self.root_nodes: List[dict] = []
        self.selected_node_id: Optional[str] = None
        self.load(root_nodes or [])

    # Internal helpers

    def _layout_options(self) -> LayoutOptions:
        return LayoutOptions.from_settings(
            self.settings,
            center_x=self.settings.get('center_x'),
            center_y=self.settings.get('center_y'),
        )

    def _commit(self, data: NormalizedData, selected: Optional[str], record: bool = True) -> None:
        if self.settings.get('auto_layout'):
            data = apply_layout(data, self._layout_options(), self.size_provider)
        self.data = data
        self.root_nodes = denormalize(data)
        self.selected_node_id = selected if selected in data.nodes else None
        if record:
            self.history.push((self.data, self.selected_node_id))

    def _run(self, action: str, command: Callable[[], Dict[str, Any]]) -> Dict[str, Any]:
        try:
            return command()
        except Exception as e:
            error_msg = handle_error(e, logger, f"Error during {action}")
            return standard_response(False, error_msg)

    def _missing(self, node_id: str) -> Dict[str, Any]:
        message = ERROR_MESSAGES['node_not_found'].format(node_id=node_id)
        logger.warning(message)
        return standard_response(False, message)

    # Loading and queries

    def load(self, root_nodes: List[dict]) -> Dict[str, Any]:
        """Replace the document with an externally produced tree and reset history."""
        data = normalize(root_nodes)
        self.history.clear()
        roots = data.root_ids
        self._commit(data, roots[0] if roots else None)
        logger.info(f"Loaded document with {len(data)} nodes")
        return standard_response(True, f"Loaded {len(data)} nodes")

    def get_node(self, node_id: str) -> Optional[dict]:
        return self.data.get(node_id)

    def node_color(self, node_id: str) -> str:
        return branch_color(node_id, self.data, get_color_set(self.settings.get('color_set')))

    # Commands

    def add_root(self, text: str = 'New Map') -> Dict[str, Any]:
        def command():
            node = create_node(text)
            self._commit(add_root_node(self.data, node), node['id'])
            return standard_response(True, f"Added root {node['id']}", node_id=node['id'])
        return self._run('add_root', command)

    def add_child(self, parent_id: str, text: str = 'New Node') -> Dict[str, Any]:
        def command():
            data, new_id = add_child_node(self.data, parent_id, text, self.settings)
            if new_id is None:
                return self._missing(parent_id)
            self._commit(data, new_id)
            return standard_response(True, f"Node added with ID: {new_id}", node_id=new_id)
        return self._run('add_child', command)

    def add_sibling(self, node_id: str, text: str = 'New Node', insert_after: bool = True) -> Dict[str, Any]:
        def command():
            data, new_id = add_sibling_node(self.data, node_id, text, insert_after, self.settings)
            if new_id is None:
                return self._missing(node_id)
            self._commit(data, new_id)
            return standard_response(True, f"Node added with ID: {new_id}", node_id=new_id)
        return self._run('add_sibling', command)

    def delete_node(self, node_id: str) -> Dict[str, Any]:
        def command():
            if node_id not in self.data:
                return self._missing(node_id)
            next_selected = next_selection_after_delete(self.data, node_id)
            data = delete_normalized_node(self.data, node_id)
            selected = self.selected_node_id
            if selected == node_id or (selected is not None and selected not in data.nodes):
                selected = next_selected
            self._commit(data, selected)
            return standard_response(True, f"Deleted node {node_id}", selected=self.selected_node_id)
        return self._run('delete_node', command)

    def move_node(self, node_id: str, new_parent_id: str) -> Dict[str, Any]:
        def command():
            reason = validate_node_movement(self.data, node_id, new_parent_id)
            if reason:
                logger.warning(f"Move rejected: {reason}")
                return standard_response(False, reason)
            data = move_normalized_node(self.data, node_id, new_parent_id)
            if data is self.data:
                return standard_response(True, f"{node_id} is already under {new_parent_id}", changed=False)
            self._commit(data, self.selected_node_id)
            return standard_response(True, f"Moved {node_id} under {new_parent_id}", changed=True)
        return self._run('move_node', command)

    def move_node_with_position(self, node_id: str, target_id: str, position: str = 'child') -> Dict[str, Any]:
        def command():
            if position not in MOVE_POSITIONS:
                return standard_response(False, ERROR_MESSAGES['invalid_position'].format(position=position))
            data = move_node_with_position(self.data, node_id, target_id, position)
            if data is self.data:
                return standard_response(False, f"Move of {node_id} {position} {target_id} was rejected")
            self._commit(data, self.selected_node_id)
            return standard_response(True, f"Moved {node_id} {position} {target_id}")
        return self._run('move_node_with_position', command)

    def change_sibling_order(self, dragged_id: str, target_id: str, insert_before: bool = True) -> Dict[str, Any]:
        def command():
            data = change_sibling_order_normalized(self.data, dragged_id, target_id, insert_before)
            if data is self.data:
                return standard_response(True, "Sibling order unchanged", changed=False)
            self._commit(data, self.selected_node_id)
            return standard_response(True, f"Moved {dragged_id} next to {target_id}", changed=True)
        return self._run('change_sibling_order', command)

    def update_node(self, node_id: str, patch: Dict[str, Any]) -> Dict[str, Any]:
        def command():
            if node_id not in self.data:
                return self._missing(node_id)
            self._commit(update_normalized_node(self.data, node_id, patch), self.selected_node_id)
            return standard_response(True, f"Updated node {node_id}")
        return self._run('update_node', command)

    def toggle_collapse(self, node_id: str) -> Dict[str, Any]:
        node = self.data.get(node_id)
        if node is None:
            return self._missing(node_id)
        return self.update_node(node_id, {'collapsed': not node.get('collapsed', False)})

    def select(self, node_id: Optional[str]) -> Dict[str, Any]:
        if node_id is not None and node_id not in self.data:
            return self._missing(node_id)
        self.selected_node_id = node_id
        return standard_response(True)

    def apply_auto_layout(self) -> Dict[str, Any]:
        """Lay the document out once, whether or not auto layout is enabled."""
        def command():
            data = apply_layout(self.data, self._layout_options(), self.size_provider)
            self._commit(data, self.selected_node_id)
            return standard_response(True, "Layout applied")
        return self._run('apply_auto_layout', command)

    def recolor(self) -> Dict[str, Any]:
        """Rewrite every node's stored color from its current branch."""
        def command():
            palette = get_color_set(self.settings.get('color_set'))
            self._commit(assign_branch_colors(self.data, palette), self.selected_node_id)
            return standard_response(True, "Branch colors reassigned")
        return self._run('recolor', command)

    def update_settings(self, **changes) -> Dict[str, Any]:
        self.settings.update(changes)
        if 'color_set' in changes:
            return self.recolor()
        if self.settings.get('auto_layout'):
            self._commit(self.data, self.selected_node_id, record=False)
        return standard_response(True, "Settings updated")

    def undo(self) -> Dict[str, Any]:
        state = self.history.undo()
        if state is None:
            return standard_response(False, "Nothing to undo")
        self._restore(state)
        return standard_response(True, "Undone")

    def redo(self) -> Dict[str, Any]:
        state = self.history.redo()
        if state is None:
            return standard_response(False, "Nothing to redo")
        self._restore(state)
        return standard_response(True, "Redone")

    def can_undo(self) -> bool:
        return self.history.can_undo()

    def can_redo(self) -> bool:
        return self.history.can_redo()

    def _restore(self, state) -> None:
        data, selected = state
        self.data = data
        self.root_nodes = denormalize(data)
        self.selected_node_id = selected
