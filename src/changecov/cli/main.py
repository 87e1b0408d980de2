"""changecov CLI."""

import click

from changecov import __version__
from changecov.cli.check import check_command
from changecov.core.logging import configure_logging


@click.group()
@click.version_option(version=__version__, prog_name="changecov")
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging")
@click.pass_context
def cli(ctx: click.Context, verbose: bool) -> None:
    """changecov - Test coverage of the lines you changed, not the whole codebase."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    configure_logging(level="DEBUG" if verbose else "INFO")


cli.add_command(check_command, name="check")


if __name__ == "__main__":
    cli()
