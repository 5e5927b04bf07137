"""Local stand-in for the distributed job executor."""

import itertools
import logging
import secrets
import shutil
import tempfile
import time
from concurrent.futures import Future, ThreadPoolExecutor
from itertools import repeat
from pathlib import Path
from types import TracebackType
from typing import Protocol

from total_order_sort.errors import JobExecutionFailure
from total_order_sort.job.execution import (
    ExecutorClass,
    describe_executor,
    get_executor_class,
    run_tasks,
)
from total_order_sort.job.tasks import compute_splits, run_map_task, run_reduce_task
from total_order_sort.job.types import MAP_TASK, REDUCE_TASK, JobConfig, JobId
from total_order_sort.partition.partitioner import RangePartitioner
from total_order_sort.shard.writer import check_output_specs

logger = logging.getLogger(__name__)


class JobExecutor(Protocol):
    """What the orchestrator needs from an executor."""

    def submit(self, config: JobConfig) -> "JobHandle": ...


class JobHandle:
    """Completion handle for one submitted job."""

    def __init__(self, job_id: JobId, future: Future[list[str]]):
        self.job_id = job_id
        self.shards: list[str] = []
        self._future = future

    def done(self) -> bool:
        return self._future.done()

    def wait_for_completion(self) -> bool:
        """Block until the job finishes; True iff it succeeded."""
        try:
            self.shards = self._future.result()
        except JobExecutionFailure as exc:
            logger.error("%s failed: %s", self.job_id, exc)
            return False
        return True


def run_job(
    job_id: JobId,
    config: JobConfig,
    executor_class: ExecutorClass,
    workers: int | None = None,
) -> list[str]:
    """
    Run one sort job to completion: map over input splits, then one reduce per partition.

    Returns the shard paths in partition order. Any task failure is raised as
    JobExecutionFailure.
    """
    total_start = time.perf_counter()
    spill_root = tempfile.mkdtemp(prefix=f"total_order_sort_{job_id}_")

    try:
        partitioner = RangePartitioner.from_manifest(config.manifest_path, config.input_name)
        splits = compute_splits(config.input_path, config.split_size)
        num_partitions = partitioner.num_partitions

        logger.info(
            "%s started: file=%s, splits=%d, partitions=%d, executor=%s",
            job_id,
            config.input_name,
            len(splits),
            num_partitions,
            describe_executor(executor_class),
        )

        # Map phase.
        t1_start = time.perf_counter()
        map_attempts = [str(job_id.attempt(MAP_TASK, i)) for i in range(len(splits))]
        spill_dirs = [str(Path(spill_root) / attempt) for attempt in map_attempts]
        map_stats = run_tasks(
            executor_class, workers, run_map_task, repeat(config), map_attempts, splits, spill_dirs
        )
        t1 = time.perf_counter() - t1_start

        records = sum(stats.records_written for stats in map_stats)
        logger.info("%s map phase done: %d records in %.2fs", job_id, records, t1)

        # Reduce phase.
        t2_start = time.perf_counter()
        reduce_attempts = [str(job_id.attempt(REDUCE_TASK, p)) for p in range(num_partitions)]
        shards = run_tasks(
            executor_class,
            workers,
            run_reduce_task,
            repeat(config),
            reduce_attempts,
            range(num_partitions),
            repeat(spill_dirs),
        )
        t2 = time.perf_counter() - t2_start

        logger.info("%s reduce phase done: %d shards in %.2fs", job_id, len(shards), t2)
        logger.info("%s succeeded (total %.2fs)", job_id, time.perf_counter() - total_start)
        return shards

    except Exception as exc:
        logger.exception("%s: task failed", job_id)
        raise JobExecutionFailure(f"{config.input_name}: {exc}") from exc

    finally:
        shutil.rmtree(spill_root, ignore_errors=True)


class LocalJobRunner:
    """
    Run submitted jobs concurrently on a thread per job.

    Each job's tasks run on the executor chosen by ``get_executor_class``.
    Job numbers come from a per-runner counter under a per-runner tracker id,
    so task attempt ids never repeat across the jobs of one runner, nor
    across runners.
    """

    def __init__(self, workers: int | None = None, max_concurrent_jobs: int | None = None):
        self.tracker = f"{time.strftime('%Y%m%d%H%M%S')}{secrets.token_hex(3)}"
        self._workers = workers
        self._job_numbers = itertools.count(1)
        self._pool = ThreadPoolExecutor(
            max_workers=max_concurrent_jobs, thread_name_prefix="sort-job"
        )

    def submit(self, config: JobConfig) -> JobHandle:
        """Check the output directory and start the job without waiting for it."""
        check_output_specs(config.output_dir)

        job_id = JobId(self.tracker, next(self._job_numbers))
        executor_class = get_executor_class()
        future = self._pool.submit(run_job, job_id, config, executor_class, self._workers)
        logger.info("Submitted %s for %s", job_id, config.input_path)
        return JobHandle(job_id, future)

    def shutdown(self) -> None:
        self._pool.shutdown(wait=True)

    def __enter__(self) -> "LocalJobRunner":
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.shutdown()
