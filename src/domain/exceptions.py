"""Domain exceptions for compaction candidate selection."""

from typing import Optional


class CompactionSelectionError(Exception):
    """Base class for errors raised while selecting compaction candidates."""


class PartitionFormatError(CompactionSelectionError, ValueError):
    """Raised when a partition path does not match the partition date format.

    A malformed partition path points at an upstream data-layout defect, so it
    aborts the whole selection instead of skipping the offending operations.
    """

    def __init__(self, partition_path: str, pattern: str, reason: Optional[str] = None):
        """Initialize PartitionFormatError.

        Args:
            partition_path: Partition path that failed to parse.
            pattern: Partition date pattern the path was parsed against.
            reason: Optional detail from the underlying parser.
        """
        self.partition_path = partition_path
        self.pattern = pattern
        message = f"Invalid partition date format: '{partition_path}' does not match '{pattern}'"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message)


class ConfigurationError(CompactionSelectionError, ValueError):
    """Raised when a compaction configuration value is malformed."""
