"""edusync init-config: write a default pipeline config."""

from __future__ import annotations

from pathlib import Path

import click

from edusync.models.config import PipelineConfig
from edusync.utils.io import write_yaml
from edusync.utils.progress import log_error, log_success


@click.command()
@click.option(
    "--output", "-o",
    default="edusync.yaml",
    type=click.Path(dir_okay=False),
    help="Where to write the config",
)
@click.option("--force", is_flag=True, help="Overwrite an existing file")
def config_cmd(output: str, force: bool) -> None:
    """Write the default pipeline configuration as YAML."""
    path = Path(output)
    if path.exists() and not force:
        log_error(f"{path} already exists (use --force to overwrite)")
        raise SystemExit(1)

    write_yaml(path, PipelineConfig().model_dump(mode="json"))
    log_success(f"Config written to {path}")
