"""edusync run: full segmentation and realignment pipeline."""

from __future__ import annotations

from pathlib import Path

import click

from edusync.errors import EdusyncError
from edusync.utils.progress import log_error, log_success, show_stage_summary


def default_output(input_path: Path, suffix: str) -> Path:
    return input_path.with_name(f"{input_path.stem}.{suffix}.json")


@click.command()
@click.argument("input_file", type=click.Path(exists=True, dir_okay=False))
@click.option(
    "--output", "-o",
    default=None,
    type=click.Path(dir_okay=False),
    help="Result JSON path (default: <input>.edus.json)",
)
@click.option(
    "--config", "-c", "config_file",
    default=None,
    type=click.Path(exists=True, dir_okay=False),
    help="Pipeline config YAML",
)
def run_cmd(input_file: str, output: str | None, config_file: str | None) -> None:
    """Segment a word-level transcript into time-coded discourse units."""
    from edusync.models.config import load_config
    from edusync.oracle.claude import ClaudeOracle
    from edusync.pipeline.orchestrator import run_pipeline
    from edusync.transcript.loader import load_segments
    from edusync.utils.io import read_json, write_json

    input_path = Path(input_file).resolve()
    output_path = Path(output) if output else default_output(input_path, "edus")

    try:
        config = load_config(config_file)
        segments = load_segments(read_json(input_path))
        oracle = ClaudeOracle(config.oracle)
        result = run_pipeline(segments, oracle, config)
    except EdusyncError as e:
        log_error(f"Pipeline failed at {e.stage}: {e}")
        raise SystemExit(1)
    except Exception as e:
        log_error(f"Pipeline failed: {e}")
        raise SystemExit(1)

    write_json(output_path, result.model_dump(mode="json"))

    meta = result.metadata
    show_stage_summary(
        "Segmentation",
        meta.processing_time_ms,
        {
            "Words": meta.word_count,
            "Paragraphs": meta.paragraph_count,
            "Discourse units": meta.unit_count,
            "Output segments": meta.output_segment_count,
            "Collapsed spacings": meta.collapsed_spacing_count,
        },
    )
    log_success(f"Result written to {output_path}")
