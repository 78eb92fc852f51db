"""Root CLI group for edusync."""

from __future__ import annotations

import click

from edusync import __version__


@click.group()
@click.version_option(version=__version__, prog_name="edusync")
def cli() -> None:
    """edusync: split transcripts into time-coded discourse units."""


# Import and register subcommands
from edusync.cli.config_cmd import config_cmd  # noqa: E402
from edusync.cli.postprocess_cmd import postprocess_cmd  # noqa: E402
from edusync.cli.run_cmd import run_cmd  # noqa: E402
from edusync.cli.show_cmd import show_cmd  # noqa: E402

cli.add_command(run_cmd, "run")
cli.add_command(postprocess_cmd, "postprocess")
cli.add_command(show_cmd, "show")
cli.add_command(config_cmd, "init-config")
