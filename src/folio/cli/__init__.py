"""Folio CLI: record, edit, and summarize investments from the terminal."""

import click

from folio import __version__


@click.group()
@click.version_option(version=__version__, package_name="folio")
@click.option(
    "--config",
    "config_file",
    type=click.Path(dir_okay=False),
    default=None,
    help="Config file (YAML or JSON). Defaults to ~/.folio/config.yaml.",
)
@click.option("--backend", type=click.Choice(["local", "remote"]), default=None, help="Override storage.backend.")
@click.option("-v", "--verbose", is_flag=True, help="Log debug output to stderr.")
@click.pass_context
def main(ctx: click.Context, config_file: str | None, backend: str | None, verbose: bool) -> None:
    """Folio: track your investments."""
    from .common import load_config

    config = load_config(config_file)
    if backend:
        config.set("storage.backend", backend)
    if verbose:
        config.set("logging.level", "DEBUG")
    ctx.obj = config


# Register subcommands (lazy imports keep startup fast)
from .investments_cmd import add, delete, edit, list_investments, summary

main.add_command(list_investments)
main.add_command(add)
main.add_command(edit)
main.add_command(delete)
main.add_command(summary)
