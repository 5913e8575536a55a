"""
Layered layout for version graphs.

The main release line runs down the primary (vertical) axis; hotfixes branch
off to the right of their base along the secondary (horizontal) axis:

    v2.0.0 ●
           │
    v1.0.0 ●───○ hotfix.1 ───○ hotfix.2
           │
    v0.9.0 ●

Entry 0 of the input is placed at the top. ``forge version list`` returns
versions newest first, so the newest release ends up on top.
"""

import logging
import math
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence, Tuple

from forgegraph.constants import DEFAULT_HOTFIX_SUFFIXES
from forgegraph.model.forge import VersionHistoryEntry
from forgegraph.versioning.hotfix import enrich_versions_with_hotfix_data

from .assembler import assemble_graph, main_line_index
from .dag import GraphEdge, GraphNode

logger = logging.getLogger("forgegraph")


@dataclass(frozen=True)
class LayoutOptions:
    """Spacing and hotfix detection settings for the layout."""

    primary_axis_spacing: float = 80  # between consecutive releases
    branch_axis_spacing: float = 150  # between sibling hotfixes
    node_radius: float = 20
    horizontal_padding: float = 200  # room for labels right of the last column
    vertical_padding: float = 100
    hotfix_suffixes: Tuple[str, ...] = DEFAULT_HOTFIX_SUFFIXES

    def __post_init__(self) -> None:
        object.__setattr__(self, "hotfix_suffixes", tuple(self.hotfix_suffixes))
        for name in ("primary_axis_spacing", "branch_axis_spacing", "node_radius"):
            if not is_positive_finite(getattr(self, name)):
                raise ValueError(
                    f"{name} must be a positive finite number, got {getattr(self, name)!r}"
                )
        for name in ("horizontal_padding", "vertical_padding"):
            value = getattr(self, name)
            if not (math.isfinite(value) and value >= 0):
                raise ValueError(
                    f"{name} must be a non-negative finite number, got {value!r}"
                )


def is_positive_finite(value: float) -> bool:
    return math.isfinite(value) and value > 0


@dataclass(frozen=True)
class Position:
    x: float
    y: float


@dataclass(frozen=True)
class PositionedNode:
    node: GraphNode
    x: float
    y: float

    @property
    def id(self) -> str:
        return self.node.id

    @property
    def is_hotfix(self) -> bool:
        return self.node.is_hotfix

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.node.id,
            "version": self.node.version,
            "commit": self.node.commit,
            "date": self.node.date,
            "message": self.node.message,
            "isHotfix": self.node.is_hotfix,
            "baseTag": self.node.base_tag,
            "children": list(self.node.children),
            "x": self.x,
            "y": self.y,
        }


@dataclass(frozen=True)
class GraphLayout:
    nodes: List[PositionedNode] = field(default_factory=list)
    edges: List[GraphEdge] = field(default_factory=list)
    width: float = 0
    height: float = 0
    orphans: Tuple[str, ...] = ()

    @property
    def positions(self) -> Dict[str, Position]:
        return {node.id: Position(node.x, node.y) for node in self.nodes}

    def get(self, node_id: str) -> Optional[PositionedNode]:
        for node in self.nodes:
            if node.id == node_id:
                return node
        return None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "nodes": [node.to_dict() for node in self.nodes],
            "edges": [edge.to_dict() for edge in self.edges],
            "width": self.width,
            "height": self.height,
        }


def calculate_positions(
    nodes: Sequence[GraphNode], options: LayoutOptions
) -> Tuple[Dict[str, Position], List[str]]:
    """
    Assign a position to every node.

    Returns:
        (positions keyed by node id, ids of orphaned hotfixes in input order)
    """
    positions: Dict[str, Position] = {}

    main_line = [node for node in nodes if not node.is_hotfix]
    for index, node in enumerate(main_line):
        positions[node.id] = Position(0, index * options.primary_axis_spacing)
    main_line_positions = dict(positions)

    bases = main_line_index(main_line)
    hotfix_groups: Dict[str, List[GraphNode]] = {}
    for node in nodes:
        if not node.is_hotfix or node.base_tag is None:
            continue
        base = bases.get(node.base_tag)
        if base is None:
            logger.warning(f"Base node not found for hotfix base: {node.base_tag}")
            continue
        hotfix_groups.setdefault(base.id, []).append(node)

    for base_id, hotfixes in hotfix_groups.items():
        base_position = main_line_positions[base_id]
        hotfixes = sorted(hotfixes, key=lambda n: n.hotfix_sequence or 0)
        logger.debug(
            f"Positioning hotfixes for base {base_id} at y={base_position.y}: "
            f"{[h.version for h in hotfixes]}"
        )
        for index, hotfix in enumerate(hotfixes):
            positions[hotfix.id] = Position(
                (index + 1) * options.branch_axis_spacing, base_position.y
            )

    orphans = [node.id for node in nodes if node.id not in positions]
    if orphans:
        logger.warning(f"Found {len(orphans)} orphaned hotfixes: {orphans}")
        orphan_row = len(main_line) * options.primary_axis_spacing
        for index, node_id in enumerate(orphans):
            positions[node_id] = Position(
                (index + 1) * options.branch_axis_spacing, orphan_row
            )

    return positions, orphans


def calculate_bounds(
    positions: Sequence[Position], options: LayoutOptions
) -> Tuple[float, float]:
    """Return (width, height) of the drawing including label padding."""
    if not positions:
        return 0, 0

    max_x = max(0, max(position.x for position in positions))
    max_y = max(0, max(position.y for position in positions))
    return max_x + options.horizontal_padding, max_y + options.vertical_padding


def calculate_layout(
    nodes: Sequence[GraphNode],
    edges: Sequence[GraphEdge],
    options: Optional[LayoutOptions] = None,
) -> GraphLayout:
    """Position already-assembled nodes and compute the drawing bounds."""
    options = options or LayoutOptions()
    if not nodes:
        return GraphLayout(nodes=[], edges=[], width=0, height=0)

    positions, orphans = calculate_positions(nodes, options)
    positioned = [
        PositionedNode(node, positions[node.id].x, positions[node.id].y)
        for node in nodes
    ]
    width, height = calculate_bounds(list(positions.values()), options)

    return GraphLayout(
        nodes=positioned,
        edges=list(edges),
        width=width,
        height=height,
        orphans=tuple(orphans),
    )


class VersionGraphLayout:
    """Builds a positioned version graph from a version history."""

    def __init__(self, options: Optional[LayoutOptions] = None):
        self.options = options or LayoutOptions()

    def build_graph(self, versions: Sequence[VersionHistoryEntry]) -> GraphLayout:
        """
        Build a positioned graph from version history entries.

        Args:
            versions: Version history entries, in the order they should be laid
                out along the main line (forge returns newest first)

        Returns:
            GraphLayout with positioned nodes, edges and bounds
        """
        if not versions:
            return GraphLayout()

        enriched = enrich_versions_with_hotfix_data(
            versions, self.options.hotfix_suffixes
        )
        graph = assemble_graph(enriched)
        return calculate_layout(graph.nodes, graph.edges, self.options)
