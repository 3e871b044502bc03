"""Outline metadata inheritance for newly created nodes.

A new node's outline kind decides how it serializes back to outline text, so
it is derived from its future siblings first and its parent second.
"""

import logging
from typing import Optional, Sequence

from mindmap.models import MAX_HEADING_LEVEL, HeadingMeta, ListMeta, StructuralMeta

logger = logging.getLogger(__name__)

LIST_INDENT_STEP = 2


def meta_from_parent(parent_meta: Optional[StructuralMeta]) -> Optional[StructuralMeta]:
    """Metadata for the first child of a node carrying ``parent_meta``."""
    if parent_meta is None:
        return None
    if isinstance(parent_meta, HeadingMeta):
        child_level = parent_meta.level + 1
        if child_level > MAX_HEADING_LEVEL:
            return ListMeta(ordered=False, indent=0)
        return HeadingMeta(level=child_level)
    if isinstance(parent_meta, ListMeta):
        return ListMeta(
            ordered=parent_meta.ordered,
            indent=parent_meta.indent + LIST_INDENT_STEP,
            is_checkbox=parent_meta.is_checkbox,
        )
    raise TypeError(f"Unknown structural metadata: {parent_meta!r}")


def derive_child_meta(parent: Optional[dict], siblings: Sequence[dict]) -> Optional[StructuralMeta]:
    """Metadata for a node appended under ``parent``.

    Args:
        parent: The parent node, or None for a top-level insert
        siblings: The parent's existing children in display order

    Returns:
        The last sibling's metadata (synthetic), else the parent-derived
        metadata, else None for a plain node
    """
    if siblings:
        last_meta = siblings[-1].get('structural_meta')
        if last_meta is not None:
            return last_meta.synthetic()
    if parent is None:
        return None
    return meta_from_parent(parent.get('structural_meta'))


def derive_sibling_meta(reference: dict, parent: Optional[dict],
                        siblings: Sequence[dict]) -> Optional[StructuralMeta]:
    """Metadata for a node inserted next to ``reference``.

    The reference sibling's own metadata wins; when it has none the child rule
    is applied against the shared parent.
    """
    reference_meta = reference.get('structural_meta')
    if reference_meta is not None:
        return reference_meta.synthetic()
    if parent is None:
        return None
    logger.debug(f"Sibling {reference.get('id')} has no metadata, deriving from parent {parent.get('id')}")
    return derive_child_meta(parent, siblings)


def describe_meta(meta: Optional[StructuralMeta]) -> str:
    """Short outline marker for display, e.g. ``##`` or ``  -``."""
    if meta is None:
        return ''
    if isinstance(meta, HeadingMeta):
        return '#' * meta.level
    marker = '1.' if meta.ordered else '-'
    if meta.is_checkbox:
        marker += ' [x]' if meta.is_checked else ' [ ]'
    return ' ' * meta.indent + marker
