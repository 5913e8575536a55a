import pydot

from .layout import GraphLayout

RELEASE_COLOR = "#3794FF"
HOTFIX_COLOR = "#D18616"


def export_to_dot(layout: GraphLayout, title: str = "") -> pydot.Dot:
    pydot_graph = pydot.Dot(
        graph_type="digraph", strict=True, label=title, labelloc="top", fontsize=20
    )
    pydot_graph.set_graph_defaults(splines="line")

    # Define the style for nodes
    node_defaults = {
        "shape": "circle",
        "style": "filled",
        "fontsize": "10",
        "fontcolor": "white",
        "penwidth": "1.0",
    }
    pydot_graph.set_node_defaults(**node_defaults)

    # Define the style for edges
    edge_defaults = {"color": "#888888", "penwidth": "1.0", "arrowsize": "0.7"}
    pydot_graph.set_edge_defaults(**edge_defaults)

    # Tags are not valid DOT ids, so nodes get positional ids and tag labels
    ids = {node.id: f"n{index}" for index, node in enumerate(layout.nodes)}

    for positioned in layout.nodes:
        node = positioned.node
        # Graphviz y grows upwards; render with `neato -n` to keep positions
        pydot_node = pydot.Node(
            ids[node.id],
            label=node.version,
            tooltip=node.id,
            fillcolor=HOTFIX_COLOR if node.is_hotfix else RELEASE_COLOR,
            pos=f"{positioned.x},{-positioned.y}!",
        )
        pydot_graph.add_node(pydot_node)

    for edge in layout.edges:
        if edge.source not in ids or edge.target not in ids:
            continue
        attrs = {"style": "dashed"} if edge.is_hotfix else {}
        pydot_graph.add_edge(pydot.Edge(ids[edge.source], ids[edge.target], **attrs))

    return pydot_graph
