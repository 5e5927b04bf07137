"""Orchestration of one sort job per input file."""

import logging
import sys
import time
from collections.abc import Sequence
from pathlib import Path

from total_order_sort.errors import MalformedRecord, ManifestError, UsageError
from total_order_sort.job.runner import JobExecutor, LocalJobRunner
from total_order_sort.job.types import DEFAULT_SPLIT_SIZE, JobConfig, JobStatus, SortJob
from total_order_sort.partition.boundaries import build_boundaries
from total_order_sort.partition.manifest import manifest_path_for, write_manifest
from total_order_sort.partition.sampler import IntervalSampler
from total_order_sort.partition.types import DEFAULT_PARTITIONS
from total_order_sort.records.types import DEFAULT_KEY_COLUMN

logger = logging.getLogger(__name__)


def validate_inputs(output_dir: str, files: Sequence[str]) -> tuple[Path, list[Path]]:
    """
    Check the arguments before any job is created.

    Returns the absolute output directory and input paths.

    Raises:
        UsageError: no inputs, the output path exists but is not a directory,
            two inputs resolve to the same file, or an input is not a regular file.
    """
    if not files:
        raise UsageError("no input files specified")

    output_path = Path(output_dir)
    if output_path.exists() and not output_path.is_dir():
        raise UsageError(f"specified output directory '{output_dir}' is not a directory!")

    resolved = [Path(file).resolve() for file in files]
    if len(set(resolved)) < len(resolved):
        raise UsageError("duplicate file names specified!")

    for file, path in zip(files, resolved):
        if not path.is_file():
            raise UsageError(f"file '{file}' is not a file!")

    return output_path.resolve(), resolved


class SortOrchestrator:
    """
    Sort each input file into its own set of ordered shards.

    Every job is sampled, has its boundaries published and is submitted
    before any job is waited on, so the jobs run concurrently. One job
    failing does not stop the others.
    """

    def __init__(
        self,
        runner: JobExecutor,
        num_partitions: int = DEFAULT_PARTITIONS,
        key_column: int = DEFAULT_KEY_COLUMN,
        sampler: IntervalSampler | None = None,
        split_size: int = DEFAULT_SPLIT_SIZE,
        extension: str = "",
    ):
        if num_partitions < 1:
            raise ValueError(f"num_partitions must be >= 1, got {num_partitions}")
        self.runner = runner
        self.num_partitions = num_partitions
        self.key_column = key_column
        self.sampler = sampler or IntervalSampler()
        self.split_size = split_size
        self.extension = extension
        self.jobs: list[SortJob] = []

    def submit_job(self, input_path: Path, output_dir: Path) -> SortJob:
        """Sample one input, publish its boundaries and submit its job."""
        manifest_path = manifest_path_for(input_path)
        config = JobConfig(
            input_path=str(input_path),
            output_dir=str(output_dir),
            manifest_path=str(manifest_path),
            key_column=self.key_column,
            extension=self.extension,
            split_size=self.split_size,
        )
        job = SortJob(config)
        self.jobs.append(job)

        try:
            samples = self.sampler.sample(config.input_path, self.key_column)
            boundaries = build_boundaries(samples, self.num_partitions)
            if not boundaries and self.num_partitions > 1:
                logger.warning("%s: empty sample, using a single partition", input_path.name)
            write_manifest(manifest_path, config.input_name, boundaries, self.key_column)
            logger.info(
                "%s: %d samples, published %d boundaries to %s",
                input_path.name,
                len(samples),
                len(boundaries),
                manifest_path,
            )
            logger.debug("%s: boundaries %s", input_path.name, list(boundaries))

            handle = self.runner.submit(config)
        except (MalformedRecord, ManifestError, OSError) as exc:
            logger.error("%s: job could not be submitted: %s", input_path.name, exc)
            job.finish(False, str(exc))
            return job

        job.mark_running(handle)
        return job

    def wait_all(self) -> bool:
        """Wait for every job in submission order; True iff all succeeded."""
        all_succeeded = True
        for job in self.jobs:
            if job.status is JobStatus.RUNNING:
                job.wait()
            logger.info("%s: %s", job.config.input_name, job.status.value)
            if job.status is not JobStatus.SUCCEEDED:
                all_succeeded = False
        return all_succeeded

    def run(self, output_dir: str, files: Sequence[str]) -> int:
        """
        Validate, submit every job, then wait for all of them.

        Returns 0 if every job succeeded and 1 otherwise. Validation failures
        raise UsageError before anything is submitted.
        """
        output_path, inputs = validate_inputs(output_dir, files)

        for input_path in inputs:
            self.submit_job(input_path, output_path)

        return 0 if self.wait_all() else 1


def sort_files(
    output_dir: str,
    files: Sequence[str],
    num_partitions: int = DEFAULT_PARTITIONS,
    key_column: int = DEFAULT_KEY_COLUMN,
    sampler: IntervalSampler | None = None,
    split_size: int = DEFAULT_SPLIT_SIZE,
    extension: str = "",
    workers: int | None = None,
) -> int:
    """Sort files on a local job runner and return the exit status."""
    total_start = time.perf_counter()

    with LocalJobRunner(workers=workers) as runner:
        orchestrator = SortOrchestrator(
            runner,
            num_partitions=num_partitions,
            key_column=key_column,
            sampler=sampler,
            split_size=split_size,
            extension=extension,
        )
        status = orchestrator.run(output_dir, files)

    failed = sum(1 for job in orchestrator.jobs if job.status is JobStatus.FAILED)
    logger.info(
        "Result: %d/%d jobs succeeded (total %.2fs)",
        len(orchestrator.jobs) - failed,
        len(orchestrator.jobs),
        time.perf_counter() - total_start,
    )
    return status


def main_sort(output_dir: str, files: Sequence[str], **options) -> int:
    """Main entry point: report usage errors on stderr and return the exit status."""
    try:
        return sort_files(output_dir, files, **options)
    except UsageError as exc:
        print(f"ERROR: {exc}", file=sys.stderr)
        return 2
