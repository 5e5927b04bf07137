"""Job identity, configuration and lifecycle state."""

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import TYPE_CHECKING

from total_order_sort.records.types import DEFAULT_KEY_COLUMN

if TYPE_CHECKING:
    from total_order_sort.job.runner import JobHandle

# 32MB map input splits.
DEFAULT_SPLIT_SIZE = 32 * 1024 * 1024

MAP_TASK = "m"
REDUCE_TASK = "r"


class JobStatus(Enum):
    PENDING = "pending"
    RUNNING = "running"
    SUCCEEDED = "succeeded"
    FAILED = "failed"

    @property
    def is_terminal(self) -> bool:
        return self in (JobStatus.SUCCEEDED, JobStatus.FAILED)


@dataclass(frozen=True, slots=True)
class JobId:
    """Identifies one job of one runner: ``job_<tracker>_<number>``."""

    tracker: str
    number: int

    def __str__(self) -> str:
        return f"job_{self.tracker}_{self.number:04d}"

    def attempt(self, kind: str, task: int, attempt: int = 0) -> "TaskAttemptId":
        return TaskAttemptId(self, kind, task, attempt)


@dataclass(frozen=True, slots=True)
class TaskAttemptId:
    """
    Identifies one execution of one task.

    Rendered as ``attempt_<tracker>_<job>_<m|r>_<task>_<attempt>``. Task
    numbers are zero-padded so that reduce attempts of one job sort in
    partition order.
    """

    job: JobId
    kind: str
    task: int
    attempt: int = 0

    def __str__(self) -> str:
        return (
            f"attempt_{self.job.tracker}_{self.job.number:04d}"
            f"_{self.kind}_{self.task:06d}_{self.attempt}"
        )


@dataclass(frozen=True, slots=True)
class InputSplit:
    """A byte range of an input file handled by one map task."""

    start: int
    length: int


@dataclass(frozen=True, slots=True)
class JobConfig:
    """Everything a worker needs to run its part of one sort job."""

    input_path: str
    output_dir: str
    manifest_path: str
    key_column: int = DEFAULT_KEY_COLUMN
    extension: str = ""
    split_size: int = DEFAULT_SPLIT_SIZE

    @property
    def input_name(self) -> str:
        return Path(self.input_path).name


@dataclass
class SortJob:
    """One input file's job as tracked by the orchestrator."""

    config: JobConfig
    status: JobStatus = JobStatus.PENDING
    handle: "JobHandle | None" = None
    error: str | None = None

    def mark_running(self, handle: "JobHandle") -> None:
        if self.status is not JobStatus.PENDING:
            raise RuntimeError(f"cannot start job in state {self.status.value}")
        self.handle = handle
        self.status = JobStatus.RUNNING

    def finish(self, succeeded: bool, error: str | None = None) -> None:
        """Set the terminal state. It can only be set once."""
        if self.status.is_terminal:
            raise RuntimeError(f"job already finished as {self.status.value}")
        self.status = JobStatus.SUCCEEDED if succeeded else JobStatus.FAILED
        self.error = error

    def wait(self) -> None:
        """Block on the executor handle and record the outcome."""
        if self.handle is None:
            raise RuntimeError("job was never submitted")
        self.finish(self.handle.wait_for_completion())
