from __future__ import annotations

from pathlib import Path
from typing import List, Optional

import typer
from rich.console import Console
from rich.table import Table

from bicseg.evaluation.runner import EvaluationRunner
from bicseg.pipeline import BicSegmentationPipeline, PipelineConfig
from bicseg.sweeps.grid import SweepRunner

console = Console()
app = typer.Typer(help="BIC segmentation of audio feature matrices")


@app.command()
def segment(
    features_path: Path = typer.Argument(..., exists=True, readable=True),
    out_dir: Path = typer.Option(Path("out"), "--out", "-o", help="Output directory"),
    config: Optional[Path] = typer.Option(None, help="Segmenter config yaml"),
    size1: Optional[int] = typer.Option(None, min=1, help="Coarse window length (frames)"),
    inc1: Optional[int] = typer.Option(None, min=1, help="Coarse scan step (frames)"),
    size2: Optional[int] = typer.Option(None, min=1, help="Fine window length (frames)"),
    inc2: Optional[int] = typer.Option(None, min=1, help="Fine scan step (frames)"),
    cpw: Optional[float] = typer.Option(None, min=0.0, help="BIC penalty weight"),
    debug_dir: Optional[Path] = typer.Option(None, help="Write a BIC debug bundle here"),
) -> None:
    overrides = {
        key: value
        for key, value in {
            "size1": size1,
            "inc1": inc1,
            "size2": size2,
            "inc2": inc2,
            "cpw": cpw,
        }.items()
        if value is not None
    }
    pipeline = BicSegmentationPipeline(
        PipelineConfig(config_path=config, sbic_overrides=overrides, debug_dir=debug_dir)
    )
    try:
        result = pipeline.run(features_path=features_path, output_dir=out_dir)
    except ValueError as exc:
        console.print(f"Segmentation failed: {exc}", style="red")
        raise typer.Exit(code=1) from exc

    if result.segmentation:
        table = Table("frame", "seconds", "dBIC")
        for segment in result.segments[:-1]:
            table.add_row(
                str(segment["end_frame"]),
                f"{segment['end_s']:.3f}",
                f"{segment['bic_value']:.3f}",
            )
        console.print(table)
        console.print(f"Found {len(result.segmentation)} change points", style="cyan")
    else:
        console.print("No change points found, input is a single segment", style="yellow")
    if result.manifest_path:
        console.print(f"Manifest written to {result.manifest_path}")
    if result.debug_path:
        console.print(f"Debug bundle written to {result.debug_path}")


@app.command()
def eval(
    manifest: Path = typer.Option(..., exists=True, readable=True),
    config: Optional[Path] = typer.Option(None, help="Segmenter config yaml"),
    tolerance: float = typer.Option(10.0, min=0.0, help="Boundary matching tolerance in frames"),
) -> None:
    try:
        runner = EvaluationRunner(config_path=config, tolerance_frames=tolerance)
        metrics = runner.run(manifest)
    except ValueError as exc:
        console.print(f"Evaluation failed: {exc}", style="red")
        raise typer.Exit(code=1) from exc
    console.print(metrics)


@app.command()
def sweep(
    manifest: Path = typer.Option(..., exists=True, readable=True),
    param: List[str] = typer.Option(..., help="Parameter sweep specification, e.g. 'cpw 1.0 1.5'"),
    config: Optional[Path] = typer.Option(None, help="Segmenter config yaml"),
    tolerance: float = typer.Option(10.0, min=0.0, help="Boundary matching tolerance in frames"),
) -> None:
    runner = SweepRunner(manifest, config_path=config, tolerance_frames=tolerance)
    try:
        results = runner.run(param)
    except ValueError as exc:
        console.print(f"Sweep failed: {exc}", style="red")
        raise typer.Exit(code=1) from exc
    for result in results:
        console.print(f"{result.params}: F1={result.metrics.get('f1', 0):.3f}")


def run() -> None:
    app()
