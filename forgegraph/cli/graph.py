"""CLI command rendering the version graph."""

import json
from pathlib import Path
from typing import Optional

import click

from forgegraph.config import get_history_limit, get_layout_options
from forgegraph.constants import GraphFormat, MAX_HISTORY_LIMIT
from forgegraph.exceptions import ForgeError, ForgeOutputError
from forgegraph.forge import parse_forge_output
from forgegraph.graph import (
    GraphLayout,
    LayoutOptions,
    VersionGraphLayout,
    export_to_dot,
    generate_mermaid_diagram,
    render_html,
    render_svg,
    to_json,
)
from forgegraph.model.forge import VersionHistoryResponse

from .utils.context import (
    get_forge_service,
    get_user_config,
    load_local_config,
    log_error_and_quit,
)
from .utils.logging import logger


def read_history_file(path: Path) -> VersionHistoryResponse:
    """
    Read a saved ``forge version list --json`` document.

    A bare JSON list of entries is accepted as well.
    """
    text = Path(path).read_text(encoding="utf-8")
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise ForgeOutputError(f"{path} is not valid JSON: {e}", text) from e

    if isinstance(data, list):
        data = {"versions": data, "count": len(data)}
    return parse_forge_output(VersionHistoryResponse, json.dumps(data))


def render_layout(
    layout: GraphLayout, format: GraphFormat, options: LayoutOptions, title: str
) -> str:
    if format == GraphFormat.svg:
        return render_svg(layout, options)
    if format == GraphFormat.html:
        return render_html(layout, title=title, options=options)
    if format == GraphFormat.mermaid:
        return generate_mermaid_diagram(layout, title=title)
    if format == GraphFormat.dot:
        return export_to_dot(layout, title=title).to_string()
    return to_json(layout)


@click.command(name="graph")
@click.option("--app", "-a", help="App name for multi-app configurations.")
@click.option(
    "--limit",
    "-n",
    type=click.IntRange(1, MAX_HISTORY_LIMIT),
    help="Number of versions to include (defaults to the history.limit setting).",
)
@click.option(
    "--input",
    "-i",
    "input_file",
    type=click.Path(exists=True, dir_okay=False),
    help="Read the history from a saved `forge version list --json` document.",
)
@click.option(
    "--format",
    "-f",
    type=click.Choice([f.value for f in GraphFormat], case_sensitive=False),
    default=GraphFormat.svg.value,
    show_default=True,
    help="Output format.",
)
@click.option("--title", default="Version Graph", help="Title of the graph.")
@click.option(
    "--output",
    "-o",
    type=click.Path(dir_okay=False, writable=True),
    help="Write the graph to this file instead of stdout.",
)
@click.pass_context
def graph(
    ctx,
    app: Optional[str],
    limit: Optional[int],
    input_file: Optional[str],
    format: str,
    title: str,
    output: Optional[str],
):
    """Draw releases and their hotfixes as a graph.

    Releases form the main line; hotfixes branch off the release they fix.
    """
    settings = get_user_config(ctx)
    options = get_layout_options(settings)

    if input_file:
        try:
            history = read_history_file(Path(input_file))
        except ForgeError as e:
            log_error_and_quit(e)
    else:
        config_path, _ = load_local_config(ctx)
        if config_path is None:
            log_error_and_quit("No forge.yaml found. Use --input to render a saved history.")
        try:
            history = get_forge_service(ctx).get_version_history(
                app, limit or get_history_limit(settings)
            )
        except ForgeError as e:
            log_error_and_quit(e)

    versions = history.versions[:limit] if limit else history.versions
    layout = VersionGraphLayout(options).build_graph(versions)
    logger.debug(
        f"Graph has {len(layout.nodes)} nodes, {len(layout.edges)} edges, "
        f"size {layout.width}x{layout.height}"
    )

    rendered = render_layout(layout, GraphFormat(format.lower()), options, title)

    if output:
        Path(output).write_text(rendered, encoding="utf-8")
        logger.info(f"Graph written to {output}")
    else:
        click.echo(rendered)
