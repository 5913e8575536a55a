"""SVG rendering of a positioned version graph."""

from html import escape
from typing import List

from forgegraph.constants import SHORT_COMMIT_LENGTH

from .layout import GraphLayout, LayoutOptions

LABEL_OFFSET = 40
COMMIT_OFFSET = 55


def _edge_lines(layout: GraphLayout) -> List[str]:
    positions = layout.positions
    lines = []
    for edge in layout.edges:
        source = positions.get(edge.source)
        target = positions.get(edge.target)
        if source is None or target is None:
            continue
        css_class = "edge-hotfix" if edge.is_hotfix else "edge-release"
        lines.append(
            f'<line x1="{source.x}" y1="{source.y}" x2="{target.x}" y2="{target.y}" '
            f'class="{css_class}" />'
        )
    return lines


def _node_groups(layout: GraphLayout, radius: float) -> List[str]:
    groups = []
    for positioned in layout.nodes:
        node = positioned.node
        kind = "hotfix" if node.is_hotfix else "release"
        label_class = "node-label hotfix-label" if node.is_hotfix else "node-label"
        commit_class = "node-commit hotfix-commit" if node.is_hotfix else "node-commit"
        x, y = positioned.x, positioned.y
        groups.append(
            "\n".join(
                [
                    f'<g class="graph-node" data-tag="{escape(node.id)}" '
                    f'data-version="{escape(node.version)}" '
                    f'data-commit="{escape(node.commit)}" '
                    f'data-date="{escape(node.date)}" '
                    f'data-message="{escape(node.message)}">',
                    f"<title>{escape(node.id)}</title>",
                    f'<circle cx="{x}" cy="{y}" r="{radius}" class="node-{kind}" />',
                    f'<text x="{x}" y="{y + LABEL_OFFSET}" class="{label_class}">'
                    f"{escape(node.version)}</text>",
                    f'<text x="{x}" y="{y + COMMIT_OFFSET}" class="{commit_class}">'
                    f"{escape(node.commit[:SHORT_COMMIT_LENGTH])}</text>",
                    "</g>",
                ]
            )
        )
    return groups


def render_svg(layout: GraphLayout, options: LayoutOptions = LayoutOptions()) -> str:
    """Render a layout as an SVG document fragment.

    Edges are drawn first so that node circles sit on top of them.
    """
    body = _edge_lines(layout) + _node_groups(layout, options.node_radius)
    return "\n".join(
        [
            f'<svg width="{layout.width}" height="{layout.height}" '
            'xmlns="http://www.w3.org/2000/svg">',
            *body,
            "</svg>",
        ]
    )
