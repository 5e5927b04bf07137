"""Error types raised by the sorter."""


class UsageError(ValueError):
    """Bad arguments or a failed pre-submission check."""


class MalformedRecord(ValueError):
    """A record whose sort key cannot be extracted."""

    def __init__(self, reason: str, offset: int | None = None):
        self.reason = reason
        self.offset = offset
        if offset is None:
            super().__init__(reason)
        else:
            super().__init__(f"{reason} (at byte offset {offset})")


class JobExecutionFailure(RuntimeError):
    """A sort job did not complete successfully."""


class ManifestError(ValueError):
    """A ``_partitioning`` file that does not hold published boundaries."""
