"""Processing status values reported to the status gateway."""

from enum import Enum


class ProcessingStatus(str, Enum):
    """Status values for a file-processing request."""

    PROCESSING = "Processing"
    READY = "Ready"
    FAILED = "Failed"

    @property
    def is_terminal(self) -> bool:
        """Whether no further transition is allowed after this status."""
        return self in (ProcessingStatus.READY, ProcessingStatus.FAILED)
