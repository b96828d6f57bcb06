"""Command-line interface for batch_resize."""

import logging
import os
from pathlib import Path

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.progress import (
    BarColumn,
    Progress,
    SpinnerColumn,
    TaskProgressColumn,
    TextColumn,
)
from rich.table import Table

from . import __version__
from .benchmark import BenchmarkRunner
from .config import Settings, get_settings
from .errors import DirectoryNotFound, OutputAreaError
from .models import BenchmarkResult, PassMode, PassResult, TaskStatus
from .tasks import TaskPlan

app = typer.Typer(
    name="batch-resize",
    help="Batch-resize images and compare sequential vs. concurrent processing",
    context_settings={"help_option_names": ["-h", "--help"]},
    add_completion=False,
)

console = Console(stderr=True)

STATUS_STYLES = {
    TaskStatus.SUCCESS: "green",
    TaskStatus.SKIPPED: "yellow",
    TaskStatus.FAILED: "red",
}


def version_callback(value: bool) -> None:
    """Print version and exit if --version flag is provided."""
    if value:
        typer.echo(f"batch-resize version {__version__}")
        raise typer.Exit()


def configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.INFO if verbose else logging.WARNING,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


def load_settings(**overrides) -> Settings:
    """Settings from the environment with non-None CLI values layered on top."""
    overrides = {key: value for key, value in overrides.items() if value is not None}
    if not overrides:
        return get_settings()
    return Settings(**overrides)


def print_outcomes(result: PassResult) -> None:
    """Print one row per source file."""
    table = Table(show_header=True, header_style="bold cyan")
    table.add_column("Source", style="blue")
    table.add_column("Status", width=8)
    table.add_column("Output")
    table.add_column("Size", justify="right")
    table.add_column("Reason")

    for outcome in sorted(result.outcomes, key=lambda o: str(o.source)):
        style = STATUS_STYLES[outcome.status]
        reason = f"{outcome.error_kind}: {outcome.reason}" if outcome.error_kind else ""
        table.add_row(
            outcome.source.name,
            f"[{style}]{outcome.status.value}[/{style}]",
            outcome.destination.name if outcome.destination else "",
            str(outcome.output_size) if outcome.output_size else "",
            reason,
        )

    console.print(table)


def print_counts(result: PassResult) -> None:
    console.print(
        f"[green]✓[/green] {result.succeeded} succeeded  "
        f"[yellow]•[/yellow] {result.skipped} skipped  "
        f"[red]✗[/red] {result.failed} failed"
    )


def print_benchmark(result: BenchmarkResult) -> None:
    """Print both pass timings and the improvement percentage."""
    console.print(f"Sequential time: {result.elapsed_sequential * 1000:.0f} ms")
    console.print(f"Concurrent time: {result.elapsed_concurrent * 1000:.0f} ms")
    console.print(f"[bold]Improvement:[/bold] {result.improvement_percent:.1f} %")


def progress_bar() -> Progress:
    return Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        BarColumn(),
        TaskProgressColumn(),
        console=console,
    )


def run_with_progress(runner: BenchmarkRunner, plan: TaskPlan, mode: PassMode) -> PassResult:
    """Clean the output area and run one pass under a progress bar."""
    with progress_bar() as progress:
        task = progress.add_task(f"{mode.value.capitalize()} pass...", total=len(plan.tasks))

        def update_progress(current: int, total: int) -> None:
            progress.update(task, completed=current, total=total)

        return runner.run_pass(plan, mode, progress_callback=update_progress)


def print_header(title: str, settings: Settings) -> None:
    console.print(f"[bold cyan]{title}[/bold cyan]")
    console.print(f"Source: {settings.source_path}")
    console.print(f"Output: {settings.dest_path}")
    console.print(f"Scale: {settings.scale}")
    console.print(f"Logical processors: {os.cpu_count()}")
    console.print(f"Workers: {settings.effective_max_concurrency}")
    console.print()


@app.command()
def benchmark(
    source_dir: Path | None = typer.Argument(
        None,
        help="Directory of source images (default: ./images)",
    ),
    dest_dir: Path | None = typer.Argument(
        None,
        help="Output directory, cleaned before each pass (default: ./output)",
    ),
    scale: float | None = typer.Option(
        None,
        "--scale",
        "-s",
        help="Scale factor applied to width and height (default: 2.0)",
    ),
    max_workers: int | None = typer.Option(
        None,
        "--max-workers",
        "-j",
        help="Concurrent workers (default: 2 per logical processor)",
    ),
    timeout: float | None = typer.Option(
        None,
        "--timeout",
        help="Time limit in seconds for the concurrent pass",
    ),
    quality: int | None = typer.Option(
        None,
        "--quality",
        "-q",
        help="JPEG quality 1-95 (default: 85)",
    ),
    resample: str | None = typer.Option(
        None,
        "--resample",
        help="Resample filter: lanczos, bicubic or bilinear",
    ),
    show_files: bool = typer.Option(
        True,
        "--show-files/--no-show-files",
        help="Print a per-file outcome table",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Log pass progress",
    ),
    version: bool | None = typer.Option(
        None,
        "--version",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit",
    ),
) -> None:
    """Resize every image twice, sequentially then concurrently, and compare timings.

    Both passes use the same discovered file set. The output directory is
    cleaned before each pass and holds the concurrent pass's files afterwards.

    \b
    Example:
        batch-resize benchmark ./images ./output --scale 2.0
        batch-resize benchmark ./photos ./thumbs -s 0.25 -j 8
    """
    configure_logging(verbose)

    try:
        settings = load_settings(
            source_path=source_dir,
            dest_path=dest_dir,
            scale=scale,
            max_concurrency=max_workers,
            timeout_seconds=timeout,
            jpeg_quality=quality,
            resample=resample,
        )
    except ValidationError as e:
        console.print(f"[red]Error:[/red] Invalid configuration: {e}")
        raise typer.Exit(1) from None

    print_header("Batch Resize Benchmark", settings)

    try:
        runner = BenchmarkRunner.from_settings(settings)
        plan = runner.plan(settings.source_path, settings.scale)
        console.print(f"Found {plan.total} images, {len(plan.tasks)} to resize")
        console.print()

        with progress_bar() as progress:
            bars = {
                mode: progress.add_task(f"{mode.value.capitalize()} pass...", total=len(plan.tasks))
                for mode in PassMode
            }

            def update_progress(mode: PassMode, current: int, total: int) -> None:
                progress.update(bars[mode], completed=current, total=total)

            result = runner.run_plan(plan, progress_callback=update_progress)
    except (DirectoryNotFound, OutputAreaError) as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1) from None

    console.print()
    print_benchmark(result)

    concurrent = result.concurrent
    if result.sequential.output_names != concurrent.output_names:
        console.print("[yellow]Warning:[/yellow] Passes produced different output files")

    console.print()
    if show_files:
        print_outcomes(concurrent)
    print_counts(concurrent)


@app.command()
def resize(
    source_dir: Path | None = typer.Argument(
        None,
        help="Directory of source images (default: ./images)",
    ),
    dest_dir: Path | None = typer.Argument(
        None,
        help="Output directory, cleaned before the pass (default: ./output)",
    ),
    scale: float | None = typer.Option(
        None,
        "--scale",
        "-s",
        help="Scale factor applied to width and height (default: 2.0)",
    ),
    mode: PassMode = typer.Option(
        PassMode.CONCURRENT,
        "--mode",
        "-m",
        help="Execution strategy",
    ),
    max_workers: int | None = typer.Option(
        None,
        "--max-workers",
        "-j",
        help="Concurrent workers (default: 2 per logical processor)",
    ),
    timeout: float | None = typer.Option(
        None,
        "--timeout",
        help="Time limit in seconds for a concurrent pass",
    ),
    quality: int | None = typer.Option(
        None,
        "--quality",
        "-q",
        help="JPEG quality 1-95 (default: 85)",
    ),
    resample: str | None = typer.Option(
        None,
        "--resample",
        help="Resample filter: lanczos, bicubic or bilinear",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Log pass progress",
    ),
    version: bool | None = typer.Option(
        None,
        "--version",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit",
    ),
) -> None:
    """Resize every image once with the chosen execution strategy.

    \b
    Example:
        batch-resize resize ./images ./output --scale 0.5 --mode sequential
    """
    configure_logging(verbose)

    try:
        settings = load_settings(
            source_path=source_dir,
            dest_path=dest_dir,
            scale=scale,
            max_concurrency=max_workers,
            timeout_seconds=timeout,
            jpeg_quality=quality,
            resample=resample,
        )
    except ValidationError as e:
        console.print(f"[red]Error:[/red] Invalid configuration: {e}")
        raise typer.Exit(1) from None

    print_header(f"Batch Resize ({mode.value})", settings)

    try:
        runner = BenchmarkRunner.from_settings(settings)
        plan = runner.plan(settings.source_path, settings.scale)
        result = run_with_progress(runner, plan, mode)
    except (DirectoryNotFound, OutputAreaError) as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1) from None

    console.print(f"Elapsed: {result.elapsed_seconds * 1000:.0f} ms")
    print_outcomes(result)
    print_counts(result)


if __name__ == "__main__":
    app()
