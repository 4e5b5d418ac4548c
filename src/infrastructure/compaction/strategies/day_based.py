"""Day-based compaction strategy implementation."""

import logging
from collections import defaultdict
from datetime import datetime
from typing import Dict, List, Optional, Sequence

from src.domain.interfaces import CompactionStrategy
from src.domain.models import CompactionOperation, CompactionPlan, SelectionConfig
from src.infrastructure.compaction.partition_date_format import PartitionDateFormat

logger = logging.getLogger(__name__)


class DayBasedCompactionStrategy(CompactionStrategy):
    """Compacts the most recent date partitions first, capped per run.

    Partitions are ordered by the date encoded in their path, latest first
    (last in, first compacted). Whole partitions are admitted until
    target_partitions_per_run is reached; a partition is never split.
    """

    def __init__(self, date_format: Optional[PartitionDateFormat] = None):
        """Initialize DayBasedCompactionStrategy.

        Args:
            date_format: Partition date format (default: yyyy/MM/dd).
        """
        self._date_format = date_format or PartitionDateFormat()

    @property
    def date_format(self) -> PartitionDateFormat:
        return self._date_format

    def sort_key(self, partition_path: str) -> datetime:
        """Get the date a partition sorts by.

        Raises:
            PartitionFormatError: If the path does not match the date format.
        """
        return self._date_format.parse(partition_path)

    def compare(self, left_partition: str, right_partition: str) -> int:
        """Compare two partitions in selection order.

        Returns:
            -1 if left is more recent, 1 if right is more recent, 0 if equal.
        """
        left = self.sort_key(left_partition)
        right = self.sort_key(right_partition)
        if left > right:
            return -1
        if right > left:
            return 1
        return 0

    def group_by_partition(
        self, operations: Sequence[CompactionOperation]
    ) -> Dict[str, List[CompactionOperation]]:
        """Group operations by partition path, keeping input order within each group."""
        grouped = defaultdict(list)
        for operation in operations:
            grouped[operation.partition_path].append(operation)
        return dict(grouped)

    def order_and_filter(
        self,
        config: SelectionConfig,
        operations: Sequence[CompactionOperation],
        pending_plans: Sequence[CompactionPlan],
    ) -> List[CompactionOperation]:
        """Admit the latest partitions' operations up to the partition budget.

        Args:
            config: Selection settings; target_partitions_per_run caps admitted partitions.
            operations: Candidate operations.
            pending_plans: Plans already scheduled elsewhere. Accepted but not consulted.

        Returns:
            Operations of the admitted partitions, latest partition first, each
            partition's operations in input order.

        Raises:
            PartitionFormatError: If any partition path is not a date in the
                configured format. Raised before anything is admitted.
        """
        grouped = self.group_by_partition(operations)

        # Parse every key once up front; a single malformed path fails the run
        partition_dates = {path: self.sort_key(path) for path in grouped}

        budget = config.target_partitions_per_run
        if budget <= 0:
            logger.warning(
                "target_partitions_per_run is %d; no partitions admitted this run", budget
            )
            return []

        # sorted() is stable with reverse=True, so equal dates keep first-seen order
        ordered_paths = sorted(grouped, key=partition_dates.__getitem__, reverse=True)
        admitted_paths = ordered_paths[:budget]

        logger.debug(
            "Admitting %d of %d partitions (budget %d, %d pending plans): %s",
            len(admitted_paths),
            len(ordered_paths),
            budget,
            len(pending_plans),
            admitted_paths,
        )

        return [operation for path in admitted_paths for operation in grouped[path]]
