"""forgegraph CLI"""

import click

from forgegraph import __version__
from forgegraph.cli.graph import graph
from forgegraph.cli.project import init, install, validate
from forgegraph.cli.release import build, changelog, docker
from forgegraph.cli.settings import config
from forgegraph.cli.status import history, status
from forgegraph.cli.tag import tag
from forgegraph.cli.version import bump, version

from .debug import add_debug_option


def format_recursive_help(ctx, param, value):
    """Custom help formatter that lists every command and subcommand"""
    if not value or ctx.resilient_parsing:
        return

    click.echo("Usage: forgegraph [OPTIONS] COMMAND [ARGS]...")
    click.echo("")
    click.echo("  Version graphs and release tooling for forge projects.")
    click.echo("")
    click.echo("Options:")
    click.echo("  -C, --project-dir DIR  Project directory (default: current directory)")
    click.echo("  --config FILE          Settings file to use")
    click.echo("  --debug / --no-debug   Enable debug mode")
    click.echo("  --version              Show the version and exit.")
    click.echo("  --help                 Show this message and exit.")
    click.echo("")
    click.echo("Commands:")

    main_cli = ctx.find_root().command

    for name, command in main_cli.commands.items():
        click.echo(f"  {name:<12} {command.get_short_help_str(50)}")

        if hasattr(command, "commands"):
            for subname, subcommand in command.commands.items():
                click.echo(
                    f"    {name} {subname:<10} {subcommand.get_short_help_str(45)}"
                )

    ctx.exit()


@click.group()
@click.version_option(__version__, prog_name="forgegraph")
@click.option(
    "--help",
    "-h",
    is_flag=True,
    expose_value=False,
    is_eager=True,
    callback=format_recursive_help,
    help="Show this message and exit.",
)
@click.option(
    "--project-dir",
    "-C",
    type=click.Path(exists=True, file_okay=False),
    envvar="FORGEGRAPH_PROJECT_DIR",
    help="Project directory containing forge.yaml.",
)
@click.option(
    "--config",
    "config_path",
    type=click.Path(dir_okay=False),
    envvar="FORGEGRAPH_CONFIG",
    help="Settings file to use.",
)
@click.pass_context
def cli(ctx, project_dir, config_path):
    """
    Version graphs and release tooling for forge projects.
    """
    ctx.ensure_object(dict)
    ctx.obj["PROJECT_DIR"] = project_dir
    ctx.obj["CONFIG_PATH"] = config_path


cli.add_command(add_debug_option(status))
cli.add_command(add_debug_option(history))
cli.add_command(add_debug_option(graph))
cli.add_command(add_debug_option(tag))
cli.add_command(add_debug_option(version))
cli.add_command(add_debug_option(bump))
cli.add_command(add_debug_option(build))
cli.add_command(add_debug_option(docker))
cli.add_command(add_debug_option(changelog))
cli.add_command(add_debug_option(validate))
cli.add_command(add_debug_option(init))
cli.add_command(install)
cli.add_command(config)

add_debug_option(cli)

if __name__ == "__main__":
    cli(obj={})
