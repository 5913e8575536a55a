"""Turn enriched version entries into a version graph."""

import logging
from dataclasses import replace
from typing import Dict, Iterable, List, Sequence

from forgegraph.versioning.hotfix import EnrichedVersionEntry

from .dag import GraphNode, VersionGraph

logger = logging.getLogger("forgegraph")


def main_line_index(nodes: Iterable[GraphNode]) -> Dict[str, GraphNode]:
    """
    Map version and tag -> node for main-line releases.

    Hotfix bases resolve through this index. A version key wins over a tag key
    when the two collide.
    """
    main_line = [node for node in nodes if not node.is_hotfix]
    index = {node.id: node for node in main_line}
    index.update((node.version, node) for node in main_line)
    return index


def assemble_graph(versions: Sequence[EnrichedVersionEntry]) -> VersionGraph:
    """
    Build nodes and edges from enriched version entries.

    Edges come from three sources:
    - consecutive main-line releases, in input order
    - each main-line base to each of its hotfixes
    - consecutive hotfixes of the same base, ordered by sequence

    A hotfix whose base matches neither the version nor the tag of a main-line
    node gets no base edge and is left for the layout to place as an orphan.
    The ``children`` of each release node are rebuilt from the resolved base
    edges, so a release never lists a hotfix that is drawn as an orphan.
    """
    graph = VersionGraph()

    for entry in versions:
        graph.add_node(
            GraphNode(
                id=entry.tag,
                version=entry.version,
                commit=entry.commit,
                date=entry.date,
                message=entry.message,
                is_hotfix=entry.is_hotfix,
                base_tag=entry.base_tag,
                hotfix_sequence=entry.hotfix_sequence,
                children=entry.children,
            )
        )

    nodes = graph.nodes
    main_line = [node for node in nodes if not node.is_hotfix]
    for previous, current in zip(main_line, main_line[1:]):
        graph.add_edge(previous.id, current.id, is_hotfix=False)

    bases = main_line_index(nodes)
    groups: Dict[str, List[GraphNode]] = {node.id: [] for node in main_line}
    for node in nodes:
        if not node.is_hotfix:
            continue
        base = bases.get(node.base_tag) if node.base_tag is not None else None
        if base is None:
            logger.warning(
                f"No base node found for hotfix {node.version} with base tag {node.base_tag}"
            )
            continue
        graph.add_edge(base.id, node.id, is_hotfix=True)
        groups[base.id].append(node)

    for base_id, hotfixes in groups.items():
        chain = sorted(hotfixes, key=lambda n: n.hotfix_sequence or 0)
        for previous, current in zip(chain, chain[1:]):
            graph.add_edge(previous.id, current.id, is_hotfix=True)

        base = graph.get(base_id)
        children = tuple(hotfix.id for hotfix in chain)
        if base is not None and base.children != children:
            graph.add_node(replace(base, children=children))

    return graph
