"""edusync postprocess: run only the transcript post-processor."""

from __future__ import annotations

from pathlib import Path

import click

from edusync.cli.run_cmd import default_output
from edusync.utils.progress import log_error, log_success


@click.command()
@click.argument("input_file", type=click.Path(exists=True, dir_okay=False))
@click.option(
    "--output", "-o",
    default=None,
    type=click.Path(dir_okay=False),
    help="Output JSON path (default: <input>.clean.json)",
)
@click.option(
    "--config", "-c", "config_file",
    default=None,
    type=click.Path(exists=True, dir_okay=False),
    help="Pipeline config YAML",
)
def postprocess_cmd(input_file: str, output: str | None, config_file: str | None) -> None:
    """Collapse short spacings and strip leading punctuation from words."""
    from edusync.models.config import load_config
    from edusync.transcript.loader import load_segments
    from edusync.transcript.postprocess import postprocess_transcript
    from edusync.utils.io import read_json, write_json

    input_path = Path(input_file).resolve()
    output_path = Path(output) if output else default_output(input_path, "clean")

    try:
        config = load_config(config_file)
        segments = load_segments(read_json(input_path))
    except Exception as e:
        log_error(f"Cannot load transcript: {e}")
        raise SystemExit(1)

    cleaned = postprocess_transcript(
        segments,
        spacing_threshold_ms=config.postprocess.spacing_collapse_threshold_ms,
        strip_punctuation=config.postprocess.strip_leading_punctuation,
    )
    write_json(output_path, {"segments": [s.model_dump(mode="json") for s in cleaned]})
    log_success(f"{len(cleaned)} segment(s) written to {output_path}")
