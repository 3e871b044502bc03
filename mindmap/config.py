"""Configuration settings for the Outline Mind Map application."""

# Reserved children_map key listing top-level node ids in display order
ROOT_KEY = "root"

# Source-line marker for nodes that did not come from a parsed outline line
SYNTHETIC_LINE = -1

# Default settings
DEFAULT_SETTINGS = {
    'auto_layout': True,
    'font_size': 14,
    'node_spacing': 8,
    'color_set': 'vibrant',
    'sidebar_collapsed': False,
    'canvas_height': 650,
    'theme': 'default'
}

# Layout configuration
LAYOUT = {
    'vertical_spacing_min': 2,
    'root_to_child_distance': 120,
    'toggle_to_child_distance': 60,
    'node_min_width': 100,
    'root_gap_base': 8,
    'root_gap_max_extra': 16
}

# Canvas coordinates
COORDINATES = {
    'default_center_x': 180.0,
    'default_center_y': 300.0,
    'sidebar_width': 280.0
}

# Node size heuristics
NODE_SIZE = {
    'min_height': 22,
    'vertical_padding': 8,
    'padding_factor': 1.5,
    'idle_min_chars': 4,
    'editing_min_chars': 8,
    'char_width_factor': 0.6,
    'wide_char_factor': 1.0,
    'icon_width': 32,
    'icon_spacing': 6,
    'icon_right_margin': 12,
    'text_icon_spacing': 14,
    'default_image_width': 150,
    'default_image_height': 105
}

# Error messages
ERROR_MESSAGES = {
    'node_not_found': "Node not found: {node_id}",
    'parent_not_found': "Parent node not found: {node_id}",
    'duplicate_id': "Node already exists: {node_id}",
    'reserved_id': "Node id is reserved: {node_id}",
    'root_sibling': "Node is a root, use a root sibling insert: {node_id}",
    'not_root': "Node is not a root: {node_id}",
    'move_root': "Root nodes cannot be moved: {node_id}",
    'cycle': "Cannot move node {node_id} under its own descendant {target_id}",
    'heading_under_list': "List nodes cannot hold heading children",
    'heading_too_deep': "Headings cannot nest deeper than level 6",
    'different_parents': "Nodes must share a parent to change sibling order",
    'invalid_position': "Invalid move position: {position}"
}

# Network view styling
NETWORK_CONFIG = {
    'node_shape': 'box',
    'rgba_alpha': 0.85,
    'selected_border': '#FF5722',
    'selected_border_width': 3,
    'border_width': 1
}
