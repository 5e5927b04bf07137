"""Sort job types, tasks and the local job runner."""

from total_order_sort.job.runner import JobHandle, LocalJobRunner, run_job
from total_order_sort.job.types import JobConfig, JobId, JobStatus, SortJob, TaskAttemptId

__all__ = [
    "JobConfig",
    "JobHandle",
    "JobId",
    "JobStatus",
    "LocalJobRunner",
    "SortJob",
    "TaskAttemptId",
    "run_job",
]
