"""Heuristic node size provider used by the layout engine.

There is no font rasterizer on the server side, so text width is estimated
from character classes. Results are memoized by the inputs that affect them.
"""

import logging
import re
import unicodedata
from typing import Optional

from mindmap.config import NODE_SIZE
from mindmap.models import NodeSize

logger = logging.getLogger(__name__)

_IMG_TAG = re.compile(r'<img[^>]*>', re.IGNORECASE)
_IMG_SRC = re.compile(r'<img[^>]*\ssrc=["\'][^"\'>\s]+["\'][^>]*>', re.IGNORECASE)
_MD_IMAGE = re.compile(r'!\[[^\]]*\]\(([^)]+)\)')
_WIDTH_ATTR = re.compile(r'\swidth=["\']?(\d+)(?:px)?["\']?', re.IGNORECASE)
_HEIGHT_ATTR = re.compile(r'\sheight=["\']?(\d+)(?:px)?["\']?', re.IGNORECASE)

# Cache for memoization
_size_cache = {}
MAX_CACHE_SIZE = 1000


def clear_size_cache():
    """Clear the size calculation cache"""
    global _size_cache
    _size_cache = {}


def measure_text_width(text: str, font_size: float) -> float:
    """Estimate the rendered width of the widest line of ``text``."""
    widest = 0.0
    for line in (text or '').split('\n'):
        width = 0.0
        for char in line:
            if unicodedata.east_asian_width(char) in ('W', 'F'):
                width += font_size * NODE_SIZE['wide_char_factor']
            else:
                width += font_size * NODE_SIZE['char_width_factor']
        widest = max(widest, width)
    return widest


def _image_size(node: dict):
    """Width and height reserved for an image embedded in the node, or (0, 0)."""
    if node.get('custom_image_width') and node.get('custom_image_height'):
        return float(node['custom_image_width']), float(node['custom_image_height'])

    note = node.get('note') or ''
    if not (_MD_IMAGE.search(note) or _IMG_SRC.search(note)):
        return 0.0, 0.0

    tag = _IMG_TAG.search(note)
    if tag:
        w_match = _WIDTH_ATTR.search(tag.group(0))
        h_match = _HEIGHT_ATTR.search(tag.group(0))
        if w_match and h_match and int(w_match.group(1)) > 0 and int(h_match.group(1)) > 0:
            return float(w_match.group(1)), float(h_match.group(1))

    return float(NODE_SIZE['default_image_width']), float(NODE_SIZE['default_image_height'])


def calculate_node_size(node: dict, edit_text: Optional[str] = None,
                        is_editing: bool = False, font_size: Optional[float] = None) -> NodeSize:
    """Estimate the rendered size of a node.

    Args:
        node: Node dictionary
        edit_text: Text currently typed into the editor, if any
        is_editing: Whether the node is in edit mode (wider minimum width)
        font_size: Global font size overriding the node's own

    Returns:
        NodeSize with width, height and the image part of the height
    """
    size = font_size or node.get('font_size') or 14
    text = edit_text if is_editing and edit_text is not None else node.get('text', '')
    has_links = bool(node.get('links'))
    image_width, image_height = _image_size(node)

    cache_key = (text, size, is_editing, has_links, image_width, image_height)
    if cache_key in _size_cache:
        return _size_cache[cache_key]

    min_chars = NODE_SIZE['editing_min_chars'] if is_editing else NODE_SIZE['idle_min_chars']
    text_width = max(measure_text_width(text, size), size * min_chars)
    text_based_width = max(text_width + size * NODE_SIZE['padding_factor'], size * 2)

    icon_width = 0
    if has_links:
        icon_width = NODE_SIZE['icon_width'] + NODE_SIZE['icon_right_margin']

    if icon_width:
        width = text_based_width + icon_width + NODE_SIZE['text_icon_spacing']
    else:
        width = text_based_width
    if image_height:
        width = max(width, image_width + 10)

    line_count = max(1, len(text.split('\n'))) if text else 1
    base_height = max(size + NODE_SIZE['vertical_padding'], NODE_SIZE['min_height'])
    height = base_height + (line_count - 1) * size * 1.2 + image_height

    result = NodeSize(width=float(width), height=float(height), image_height=float(image_height))
    _size_cache[cache_key] = result

    # Limit cache size to prevent memory issues
    if len(_size_cache) > MAX_CACHE_SIZE:
        clear_size_cache()

    return result
