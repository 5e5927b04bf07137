"""Shard naming and committed writes into a shared output directory."""

import logging
import os
from pathlib import Path
from types import TracebackType
from typing import BinaryIO

from total_order_sort.partition.types import BUFFER_SIZE

logger = logging.getLogger(__name__)


def shard_path(
    output_dir: str | Path,
    input_name: str,
    attempt_id: str,
    extension: str = "",
) -> Path:
    """
    Name the shard written by one task attempt for one input file.

    ``<output_dir>/<input_name>_<attempt_id>[.<extension>]``
    """
    extension = extension.lstrip(".")
    suffix = f".{extension}" if extension else ""
    return Path(output_dir) / f"{input_name}_{attempt_id}{suffix}"


def check_output_specs(output_dir: str | Path) -> Path:
    """
    Prepare a shared output directory.

    The directory may already exist and hold shards of other jobs; it is
    created when missing. A non-directory at the path is an error.
    """
    output_path = Path(output_dir)
    if output_path.exists() and not output_path.is_dir():
        raise NotADirectoryError(f"output path '{output_path}' is not a directory")
    output_path.mkdir(parents=True, exist_ok=True)
    return output_path


class ShardWriter:
    """
    Write one shard under a hidden temporary name and rename it on commit.

    Used as a context manager: a clean exit commits, an exception discards
    the temporary file, so a failed attempt leaves no shard behind.
    """

    def __init__(self, path: Path):
        self.path = path
        self._tmp_path = path.with_name(f".{path.name}.tmp")
        self._handle: BinaryIO | None = None
        self.records_written = 0

    def __enter__(self) -> "ShardWriter":
        self._handle = open(self._tmp_path, "wb", buffering=BUFFER_SIZE)  # noqa: SIM115
        return self

    def write(self, line: bytes) -> None:
        """Write one record, terminating it with a newline if it lacks one."""
        if self._handle is None:
            raise RuntimeError(f"shard writer for {self.path.name} is not open")
        self._handle.write(line)
        if not line.endswith(b"\n"):
            self._handle.write(b"\n")
        self.records_written += 1

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        if self._handle is None:
            return
        self._handle.close()
        self._handle = None
        if exc_type is None:
            os.replace(self._tmp_path, self.path)
            logger.debug("Committed %s (%d records)", self.path.name, self.records_written)
        else:
            self._tmp_path.unlink(missing_ok=True)
