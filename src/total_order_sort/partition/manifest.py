"""Durable store for published partition boundaries."""

import json
import logging
import os
import tempfile
from pathlib import Path

from total_order_sort.errors import ManifestError
from total_order_sort.partition.types import PARTITION_MANIFEST_NAME, Boundaries

logger = logging.getLogger(__name__)


def manifest_path_for(input_path: str | Path) -> Path:
    """Return the manifest location for an input: a sibling ``_partitioning`` file."""
    return Path(input_path).resolve().parent / PARTITION_MANIFEST_NAME


def _load_entries(manifest_path: Path) -> dict[str, dict]:
    """Read the manifest; a missing file is an empty one."""
    try:
        with open(manifest_path, encoding="utf-8") as handle:
            entries = json.load(handle)
    except FileNotFoundError:
        return {}
    except (UnicodeDecodeError, json.JSONDecodeError) as exc:
        raise ManifestError(f"{manifest_path} is not a partition manifest: {exc}") from exc

    if not isinstance(entries, dict) or not all(isinstance(v, dict) for v in entries.values()):
        raise ManifestError(f"{manifest_path} is not a partition manifest")
    return entries


def write_manifest(
    manifest_path: str | Path,
    input_name: str,
    boundaries: Boundaries,
    key_column: int,
) -> None:
    """
    Publish the boundaries for one input file.

    The manifest maps input file names to their entries. Only the entry for
    ``input_name`` is replaced; the file is swapped in atomically so readers
    never see a partial write.
    """
    manifest_path = Path(manifest_path)
    entries = _load_entries(manifest_path)
    entries[input_name] = {
        "boundaries": list(boundaries),
        "num_partitions": len(boundaries) + 1,
        "key_column": key_column,
    }

    fd, tmp_name = tempfile.mkstemp(
        prefix=f".{manifest_path.name}.", dir=manifest_path.parent, text=True
    )
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as handle:
            json.dump(entries, handle, indent=2, sort_keys=True)
        os.replace(tmp_name, manifest_path)
    except BaseException:
        Path(tmp_name).unlink(missing_ok=True)
        raise

    logger.debug("Published %d boundaries for %s to %s", len(boundaries), input_name, manifest_path)


def read_manifest(manifest_path: str | Path, input_name: str) -> Boundaries:
    """Load the published boundaries for one input file."""
    manifest_path = Path(manifest_path)
    entries = _load_entries(manifest_path)
    if input_name not in entries:
        raise KeyError(f"no boundaries for {input_name!r} in {manifest_path}")

    boundaries = tuple(int(value) for value in entries[input_name]["boundaries"])
    if any(a > b for a, b in zip(boundaries, boundaries[1:])):
        raise ValueError(f"boundaries for {input_name!r} in {manifest_path} are not sorted")
    return boundaries
