"""Standalone HTML page around the SVG version graph."""

from pathlib import Path

from jinja2 import Environment, FileSystemLoader, select_autoescape

from ._svg import render_svg
from .layout import GraphLayout, LayoutOptions

TEMPLATE_PATH = Path(__file__).parent.parent / "templates"


def render_html(
    layout: GraphLayout,
    title: str = "Version Graph",
    options: LayoutOptions = LayoutOptions(),
) -> str:
    env = Environment(
        loader=FileSystemLoader(TEMPLATE_PATH),
        autoescape=select_autoescape(["html", "jinja"]),
    )
    template = env.get_template("graph.html.jinja")
    return template.render(
        title=title,
        svg=render_svg(layout, options),
        n_releases=sum(1 for node in layout.nodes if not node.is_hotfix),
        n_hotfixes=sum(1 for node in layout.nodes if node.is_hotfix),
        orphans=layout.orphans,
    )
