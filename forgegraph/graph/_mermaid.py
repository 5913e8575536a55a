"""Mermaid diagram generation for version graphs."""

from typing import Dict, List

from .layout import GraphLayout


def _label(text: str) -> str:
    return text.replace('"', "#quot;")


class MermaidDiagramGenerator:
    """Generates a Mermaid flowchart of releases and hotfixes."""

    def __init__(self, layout: GraphLayout, title: str = "Version Graph"):
        self.layout = layout
        self.title = title
        # Tags contain characters Mermaid does not accept in ids
        self.ids: Dict[str, str] = {
            node.id: f"n{index}" for index, node in enumerate(layout.nodes)
        }

    def generate_diagram(self) -> str:
        diagram_parts = [
            self._generate_header(),
            "flowchart TB",
            "\tclassDef hotfix fill:#f96",
            self._generate_nodes(),
            self._generate_edges(),
        ]
        return "\n".join(part for part in diagram_parts if part)

    def _generate_header(self) -> str:
        return "\n".join(["---", f"title: {self.title}", "---"])

    def _generate_nodes(self) -> str:
        lines: List[str] = []
        for positioned in self.layout.nodes:
            node = positioned.node
            node_id = self.ids[node.id]
            if node.is_hotfix:
                lines.append(f'\t{node_id}(["{_label(node.version)}"]):::hotfix')
            else:
                lines.append(f'\t{node_id}["{_label(node.version)}"]')
        return "\n".join(lines)

    def _generate_edges(self) -> str:
        lines: List[str] = []
        for edge in self.layout.edges:
            source = self.ids.get(edge.source)
            target = self.ids.get(edge.target)
            if source is None or target is None:
                continue
            arrow = "-.->" if edge.is_hotfix else "-->"
            lines.append(f"\t{source} {arrow} {target}")
        return "\n".join(lines)


def generate_mermaid_diagram(layout: GraphLayout, title: str = "Version Graph") -> str:
    """Generate a Mermaid flowchart for a positioned version graph.

    Args:
        layout: The positioned graph
        title: Diagram title

    Returns:
        A string containing the complete Mermaid diagram syntax
    """
    return MermaidDiagramGenerator(layout, title).generate_diagram()
