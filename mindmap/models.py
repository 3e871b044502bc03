"""Core data types for the mind map document engine.

Nodes are plain dictionaries (``id``, ``text``, ``x``, ``y``, ``collapsed``,
``structural_meta`` plus any presentation attributes). The structural metadata
is a closed union of two frozen dataclasses and the normalized store is a
frozen dataclass of flat maps keyed by node id.
"""

from dataclasses import dataclass, field, replace
from typing import Dict, List, Optional, Union

from mindmap.config import ROOT_KEY, SYNTHETIC_LINE

MAX_HEADING_LEVEL = 6


@dataclass(frozen=True)
class HeadingMeta:
    """Outline heading (``#`` through ``######``)."""
    level: int
    line_number: int = SYNTHETIC_LINE

    @property
    def kind(self) -> str:
        return 'heading'

    def synthetic(self) -> 'HeadingMeta':
        """Copy detached from any source line."""
        return replace(self, line_number=SYNTHETIC_LINE)


@dataclass(frozen=True)
class ListMeta:
    """Outline list item with its indentation in spaces."""
    ordered: bool
    indent: int
    line_number: int = SYNTHETIC_LINE
    is_checkbox: bool = False
    is_checked: bool = False

    @property
    def kind(self) -> str:
        return 'list'

    def synthetic(self) -> 'ListMeta':
        """Copy detached from any source line, with checkboxes unchecked."""
        return replace(self, line_number=SYNTHETIC_LINE, is_checked=False)


StructuralMeta = Union[HeadingMeta, ListMeta]


@dataclass(frozen=True)
class NodeSize:
    """Rendered size of a node as reported by a size provider."""
    width: float
    height: float
    image_height: float = 0.0


@dataclass(frozen=True)
class NormalizedData:
    """Flat, id-indexed representation of a document tree.

    ``children_map[ROOT_KEY]`` lists the top-level ids in display order and
    roots have no ``parent_map`` entry. Instances are never mutated; every
    operation builds a new one.
    """
    nodes: Dict[str, dict] = field(default_factory=dict)
    children_map: Dict[str, List[str]] = field(default_factory=lambda: {ROOT_KEY: []})
    parent_map: Dict[str, str] = field(default_factory=dict)

    @property
    def root_ids(self) -> List[str]:
        return list(self.children_map.get(ROOT_KEY, []))

    def __len__(self) -> int:
        return len(self.nodes)

    def __contains__(self, node_id: object) -> bool:
        return node_id in self.nodes

    def get(self, node_id: str) -> Optional[dict]:
        return self.nodes.get(node_id)
