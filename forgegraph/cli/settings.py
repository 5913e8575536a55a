"""CLI commands for the forgegraph settings file."""

import click

from forgegraph.config import default_cfg

from .utils.context import get_user_config, log_error_and_quit


@click.group(name="config")
@click.pass_context
def config(ctx):
    """Read and change forgegraph settings."""
    ctx.ensure_object(dict)


@config.command("get")
@click.argument("section")
@click.argument("key")
@click.pass_context
def get_setting(ctx, section: str, key: str):
    """Print the value of SECTION.KEY."""
    default = default_cfg.get(section, {}).get(key)
    value = get_user_config(ctx).get(section, key, default)
    if value is None:
        log_error_and_quit(f"Unknown setting {section}.{key}")
    click.echo(value)


@config.command("set")
@click.argument("section")
@click.argument("key")
@click.argument("value")
@click.pass_context
def set_setting(ctx, section: str, key: str, value: str):
    """Set SECTION.KEY to VALUE."""
    if key not in default_cfg.get(section, {}):
        log_error_and_quit(f"Unknown setting {section}.{key}")
    accessor = get_user_config(ctx)
    accessor.set(section, key, value)
    accessor.save()


@config.command("list")
@click.pass_context
def list_settings(ctx):
    """Print all settings, with defaults for unset ones."""
    accessor = get_user_config(ctx)
    for section, values in default_cfg.items():
        for key, default in values.items():
            click.echo(f"{section}.{key} = {accessor.get(section, key, default)}")
