"""Sequential and concurrent execution of resize tasks.

Every task runs the same pipeline: decode -> resample -> encode. A failure in
one task is recorded as that task's outcome and never stops the others. Only
an unusable output directory aborts a pass.

The concurrent pass uses a bounded thread pool. Pillow releases the GIL while
decoding, resampling and encoding, so threads overlap both I/O and pixel work.
Each worker returns its outcome through its future, and the coordinator places
it into a pre-allocated slot indexed by task position once the future is done.
"""

import logging
import time
from collections.abc import Callable
from concurrent.futures import Future, ThreadPoolExecutor, as_completed
from concurrent.futures import TimeoutError as FuturesTimeoutError

from .backends.base import ImageCodec, Resampler
from .errors import DecodeError, InvalidDimensions, PassTimeout, ResampleError, WriteError
from .models import PassMode, PassResult, ResizeTask, TaskOutcome, TaskStatus
from .output import OutputArea
from .tasks import TaskPlan

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[int, int], None]


def process_task(
    task: ResizeTask,
    codec: ImageCodec,
    resampler: Resampler,
    output_area: OutputArea,
) -> TaskOutcome:
    """Run decode -> resample -> encode for one task.

    Returns:
        Success outcome with the written size, or a failed outcome naming the error
    """
    logger.debug(f"Resizing {task.source.name}: {task.source_size} -> {task.target_size}")
    try:
        buffer = codec.decode(task.source)
        resized = resampler.resample(buffer, task.target_size)
        del buffer

        output_size = codec.buffer_size(resized)
        if output_size != task.target_size:
            raise ResampleError(f"Resampler produced {output_size}, expected {task.target_size}")

        output_area.write(task.destination, resized, codec)
    except (DecodeError, InvalidDimensions, ResampleError, WriteError) as e:
        logger.warning(f"Failed {task.source}: {e}")
        return TaskOutcome.from_error(task.source, TaskStatus.FAILED, e, task.destination)
    except Exception as e:
        # Backends are pluggable and may raise anything; one task never aborts a pass
        logger.exception(f"Unexpected error processing {task.source}")
        return TaskOutcome.from_error(task.source, TaskStatus.FAILED, e, task.destination)

    return TaskOutcome(
        source=task.source,
        status=TaskStatus.SUCCESS,
        destination=task.destination,
        output_size=output_size,
    )


class Scheduler:
    """Runs a task plan against an output area in either execution mode.

    Args:
        codec: Image decoder/encoder
        resampler: Resize transform
        output_area: Destination directory
        max_workers: Upper bound on simultaneously running pipelines (concurrent mode)
        timeout: Optional wall-clock limit in seconds for a concurrent pass
    """

    def __init__(
        self,
        codec: ImageCodec,
        resampler: Resampler,
        output_area: OutputArea,
        max_workers: int = 4,
        timeout: float | None = None,
    ):
        if max_workers < 1:
            raise ValueError(f"max_workers must be >= 1, got {max_workers}")
        if timeout is not None and timeout <= 0:
            raise ValueError(f"timeout must be positive, got {timeout}")
        self.codec = codec
        self.resampler = resampler
        self.output_area = output_area
        self.max_workers = max_workers
        self.timeout = timeout

    def run(
        self,
        plan: TaskPlan,
        mode: PassMode,
        progress_callback: ProgressCallback | None = None,
    ) -> PassResult:
        """Run a pass in the given mode."""
        if mode == PassMode.SEQUENTIAL:
            return self.run_sequential(plan, progress_callback)
        return self.run_concurrent(plan, progress_callback)

    def run_sequential(
        self,
        plan: TaskPlan,
        progress_callback: ProgressCallback | None = None,
    ) -> PassResult:
        """Process tasks one at a time, in plan order.

        Raises:
            OutputAreaError: If the output directory cannot be created
        """
        self.output_area.prepare()
        total = len(plan.tasks)
        logger.info(f"Starting sequential pass over {total} tasks")

        start = time.perf_counter()
        outcomes = []
        for i, task in enumerate(plan.tasks, start=1):
            outcomes.append(process_task(task, self.codec, self.resampler, self.output_area))
            if progress_callback:
                progress_callback(i, total)
        elapsed = time.perf_counter() - start

        result = PassResult(PassMode.SEQUENTIAL, plan.skipped + outcomes, elapsed)
        _log_pass(result)
        return result

    def run_concurrent(
        self,
        plan: TaskPlan,
        progress_callback: ProgressCallback | None = None,
    ) -> PassResult:
        """Process tasks on a bounded worker pool and join them all.

        Does not return until every task has completed, failed, or (after a
        timeout) been cancelled before starting. Tasks already running when a
        timeout fires are allowed to finish their write.

        Raises:
            OutputAreaError: If the output directory cannot be created
        """
        self.output_area.prepare()
        tasks = plan.tasks
        total = len(tasks)
        workers = min(self.max_workers, total) or 1
        logger.info(f"Starting concurrent pass over {total} tasks with {workers} workers")

        start = time.perf_counter()
        slots: list[TaskOutcome | None] = [None] * total

        with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="resize") as executor:
            futures = {
                executor.submit(process_task, task, self.codec, self.resampler, self.output_area): idx
                for idx, task in enumerate(tasks)
            }

            completed = 0
            try:
                for future in as_completed(futures, timeout=self.timeout):
                    idx = futures[future]
                    slots[idx] = _collect(future, tasks[idx])
                    completed += 1
                    if progress_callback:
                        progress_callback(completed, total)
            except FuturesTimeoutError:
                logger.warning(
                    f"Concurrent pass timed out after {self.timeout}s with {total - completed} tasks unfinished"
                )
                executor.shutdown(wait=True, cancel_futures=True)

        # Everything is finished or cancelled once the executor has shut down
        for future, idx in futures.items():
            if slots[idx] is None:
                slots[idx] = _collect(future, tasks[idx])
        elapsed = time.perf_counter() - start

        result = PassResult(PassMode.CONCURRENT, plan.skipped + slots, elapsed)
        _log_pass(result)
        return result


def _collect(future: Future, task: ResizeTask) -> TaskOutcome:
    """Turn a finished future into an outcome."""
    if future.cancelled():
        error = PassTimeout("Pass timed out before this task started")
        return TaskOutcome.from_error(task.source, TaskStatus.FAILED, error, task.destination)
    try:
        return future.result()
    except Exception as e:
        logger.exception(f"Unexpected error processing {task.source}")
        return TaskOutcome.from_error(task.source, TaskStatus.FAILED, e, task.destination)


def _log_pass(result: PassResult) -> None:
    logger.info(
        f"{result.mode.value.capitalize()} pass finished in {result.elapsed_seconds:.3f}s: "
        f"{result.succeeded} succeeded, {result.skipped} skipped, {result.failed} failed"
    )
