"""Ordered directed graph of version nodes."""

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Set, Tuple


@dataclass(frozen=True)
class GraphNode:
    """One release or hotfix in the version graph. Positions live elsewhere."""

    id: str
    version: str
    commit: str = ""
    date: str = ""
    message: str = ""
    is_hotfix: bool = False
    base_tag: Optional[str] = None
    hotfix_sequence: Optional[int] = None
    children: Tuple[str, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class GraphEdge:
    """Directed edge between two node ids."""

    source: str
    target: str
    is_hotfix: bool = False

    def to_dict(self) -> Dict[str, object]:
        return {"from": self.source, "to": self.target, "isHotfix": self.is_hotfix}


class VersionGraph:
    """
    A directed graph that keeps nodes and edges in insertion order.

    Iteration order is part of the contract: layouts and renderers walk
    ``nodes`` and ``edges`` as they were added.
    """

    def __init__(self) -> None:
        self._nodes: Dict[str, GraphNode] = {}
        self._edges: List[GraphEdge] = []
        self._edge_keys: Set[Tuple[str, str]] = set()

    def add_node(self, node: GraphNode) -> None:
        """Add a node. A node with an id already present replaces it in place."""
        self._nodes[node.id] = node

    def add_edge(self, source: str, target: str, is_hotfix: bool = False) -> bool:
        """
        Add an edge between two existing nodes.

        Returns:
            False if the edge already exists or an endpoint is unknown
        """
        if source not in self._nodes or target not in self._nodes:
            return False
        if (source, target) in self._edge_keys:
            return False

        self._edge_keys.add((source, target))
        self._edges.append(GraphEdge(source, target, is_hotfix))
        return True

    def __contains__(self, node_id: object) -> bool:
        return node_id in self._nodes

    def __len__(self) -> int:
        return len(self._nodes)

    def get(self, node_id: str) -> Optional[GraphNode]:
        return self._nodes.get(node_id)

    @property
    def nodes(self) -> List[GraphNode]:
        return list(self._nodes.values())

    @property
    def edges(self) -> List[GraphEdge]:
        return list(self._edges)
