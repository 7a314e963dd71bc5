"""csstrim CLI entry point: Click group with subcommands."""

import click

from csstrim import __version__


@click.group()
@click.version_option(version=__version__, prog_name="csstrim")
def cli() -> None:
    """csstrim - remove CSS that is provably dead or always overridden."""


# Import and register subcommands
from csstrim.cli.check import check  # noqa: E402
from csstrim.cli.prune import prune  # noqa: E402

cli.add_command(prune)
cli.add_command(check)
