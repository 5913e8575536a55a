"""Version graph construction, layout and rendering."""

import json

from .dag import GraphNode, GraphEdge, VersionGraph
from .assembler import assemble_graph, main_line_index
from .layout import (
    LayoutOptions,
    Position,
    PositionedNode,
    GraphLayout,
    VersionGraphLayout,
    calculate_positions,
    calculate_bounds,
    calculate_layout,
)
from ._svg import render_svg
from ._html import render_html
from ._mermaid import MermaidDiagramGenerator, generate_mermaid_diagram
from ._dot import export_to_dot


def to_json(layout: GraphLayout, indent: int = 2) -> str:
    return json.dumps(layout.to_dict(), indent=indent)


__all__ = [
    "GraphNode",
    "GraphEdge",
    "VersionGraph",
    "assemble_graph",
    "main_line_index",
    "LayoutOptions",
    "Position",
    "PositionedNode",
    "GraphLayout",
    "VersionGraphLayout",
    "calculate_positions",
    "calculate_bounds",
    "calculate_layout",
    "render_svg",
    "render_html",
    "MermaidDiagramGenerator",
    "generate_mermaid_diagram",
    "export_to_dot",
    "to_json",
]
