"""Choice of where a job's map and reduce tasks run."""

import os
import sys
from collections.abc import Callable, Iterable
from concurrent.futures import ProcessPoolExecutor, ThreadPoolExecutor
from typing import TypeAlias, TypeVar

T = TypeVar("T")

ExecutorClass: TypeAlias = type[ThreadPoolExecutor] | type[ProcessPoolExecutor] | None

TOS_EXECUTOR_ENV = "TOS_EXECUTOR"

# Tasks handed to each worker process at a time.
PROCESS_POOL_CHUNKSIZE = 4

POLICIES: dict[str, ExecutorClass] = {
    "serial": None,
    "threads": ThreadPoolExecutor,
    "processes": ProcessPoolExecutor,
}


def is_gil_enabled() -> bool:
    """False only on a free-threaded interpreter running without the GIL."""
    try:
        return sys._is_gil_enabled()
    except AttributeError:
        return True


def get_executor_class() -> ExecutorClass:
    """
    Pick the task executor for a job.

    ``TOS_EXECUTOR`` (serial, threads or processes) wins when set to a known
    policy. Otherwise record parsing is CPU bound, so tasks go to worker
    processes unless the interpreter runs without the GIL, where threads
    avoid pickling configs and results. ``serial`` keeps every task in the
    job's own thread, which lets breakpoints in tasks work.
    """
    policy = os.environ.get(TOS_EXECUTOR_ENV, "").lower()
    if policy in POLICIES:
        return POLICIES[policy]
    return ProcessPoolExecutor if is_gil_enabled() else ThreadPoolExecutor


def describe_executor(executor_class: ExecutorClass) -> str:
    """Policy name of an executor class, as accepted by ``TOS_EXECUTOR``."""
    for name, policy_class in POLICIES.items():
        if policy_class is executor_class:
            return name
    return executor_class.__name__


def run_tasks(
    executor_class: ExecutorClass,
    workers: int | None,
    fn: Callable[..., T],
    *iterables: Iterable,
) -> list[T]:
    """
    Run ``fn`` over zipped argument iterables and collect results in order.

    The first task exception propagates to the caller.
    """
    if executor_class is None:
        return [fn(*args) for args in zip(*iterables)]

    with executor_class(max_workers=workers) as executor:
        if executor_class is ProcessPoolExecutor:
            return list(executor.map(fn, *iterables, chunksize=PROCESS_POOL_CHUNKSIZE))
        return list(executor.map(fn, *iterables))
