"""Sequential vs. concurrent benchmark over one discovery snapshot."""

import logging
from collections.abc import Callable
from functools import partial
from pathlib import Path

from .backends.base import ImageCodec, Resampler
from .backends.pillow import PillowCodec, PillowResampler
from .config import Settings
from .discovery import IMAGE_EXTENSIONS, find_images
from .models import BenchmarkResult, PassMode, PassResult
from .output import OutputArea
from .scheduler import ProgressCallback, Scheduler
from .tasks import TaskPlan, build_tasks

logger = logging.getLogger(__name__)

PassProgressCallback = Callable[[PassMode, int, int], None]


class BenchmarkRunner:
    """Runs resize passes and compares their wall-clock time.

    Discovery and planning happen once per run; the output area is cleaned
    before each pass so neither pass sees the other's files.

    Example:
        >>> runner = BenchmarkRunner(PillowCodec(), PillowResampler(), OutputArea(Path("output")), max_workers=8)
        >>> result = runner.run(Path("images"), scale=2.0)
        >>> print(f"{result.improvement_percent:.1f}%")
    """

    def __init__(
        self,
        codec: ImageCodec,
        resampler: Resampler,
        output_area: OutputArea,
        max_workers: int = 4,
        timeout: float | None = None,
    ):
        self.codec = codec
        self.output_area = output_area
        self.scheduler = Scheduler(codec, resampler, output_area, max_workers=max_workers, timeout=timeout)

    @classmethod
    def from_settings(cls, settings: Settings) -> "BenchmarkRunner":
        """Build a runner with Pillow backends configured from settings."""
        codec = PillowCodec(quality=settings.jpeg_quality, background_color=settings.background_color)
        return cls(
            codec=codec,
            resampler=PillowResampler(settings.resample),
            output_area=OutputArea(settings.dest_path, codec.output_extension),
            max_workers=settings.effective_max_concurrency,
            timeout=settings.timeout_seconds,
        )

    def plan(self, source_dir: Path, scale: float) -> TaskPlan:
        """Discover sources and build the task plan.

        Raises:
            DirectoryNotFound: If source_dir does not exist
        """
        sources = find_images(source_dir, IMAGE_EXTENSIONS)
        return build_tasks(sources, scale, self.output_area, self.codec)

    def run_pass(
        self,
        plan: TaskPlan,
        mode: PassMode,
        progress_callback: ProgressCallback | None = None,
    ) -> PassResult:
        """Clean the output area, then run one pass.

        Raises:
            OutputAreaError: If the output area cannot be cleaned
        """
        self.output_area.clean()
        return self.scheduler.run(plan, mode, progress_callback)

    def run(
        self,
        source_dir: Path,
        scale: float,
        progress_callback: PassProgressCallback | None = None,
    ) -> BenchmarkResult:
        """Run a sequential pass, then a concurrent pass over the same plan.

        Args:
            source_dir: Directory of source images
            scale: Scale factor for every image
            progress_callback: Optional callback (mode, current, total) -> None, called during both passes

        Returns:
            BenchmarkResult with both passes; the output area holds the concurrent pass's files

        Raises:
            DirectoryNotFound: If source_dir does not exist
            OutputAreaError: If the output area cannot be created or cleaned
        """
        plan = self.plan(source_dir, scale)
        return self.run_plan(plan, progress_callback)

    def run_plan(self, plan: TaskPlan, progress_callback: PassProgressCallback | None = None) -> BenchmarkResult:
        """Benchmark an already built plan.

        Args:
            plan: Task plan shared by both passes
            progress_callback: Optional callback (mode, current, total) -> None
        """
        passes = {}
        for mode in (PassMode.SEQUENTIAL, PassMode.CONCURRENT):
            callback = partial(progress_callback, mode) if progress_callback else None
            passes[mode] = self.run_pass(plan, mode, callback)

        result = BenchmarkResult(sequential=passes[PassMode.SEQUENTIAL], concurrent=passes[PassMode.CONCURRENT])
        logger.info(
            f"Sequential {result.elapsed_sequential:.3f}s, concurrent {result.elapsed_concurrent:.3f}s, "
            f"improvement {result.improvement_percent:.1f}%"
        )
        return result
