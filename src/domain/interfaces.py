"""Domain interfaces (ports)."""

import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Sequence

from src.domain.exceptions import PartitionFormatError
from src.domain.models import (
    CandidateSet,
    CompactionOperation,
    CompactionPlan,
    SelectionConfig,
    SelectionResult,
)

logger = logging.getLogger(__name__)


class CompactionStrategy(ABC):
    """Interface for compaction candidate selection strategies."""

    @abstractmethod
    def order_and_filter(
        self,
        config: SelectionConfig,
        operations: Sequence[CompactionOperation],
        pending_plans: Sequence[CompactionPlan],
    ) -> List[CompactionOperation]:
        """Order candidate operations and keep the ones admitted into this run.

        Args:
            config: Selection settings (partition budget, date format).
            operations: Candidate operations. Never mutated.
            pending_plans: Plans already scheduled by earlier runs.

        Returns:
            Admitted operations, in execution priority order.

        Raises:
            PartitionFormatError: If a partition path cannot be interpreted.
        """

    def select(
        self,
        config: SelectionConfig,
        operations: Sequence[CompactionOperation],
        pending_plans: Sequence[CompactionPlan] = (),
    ) -> SelectionResult:
        """Run order_and_filter and capture a malformed partition as a failed result.

        Args:
            config: Selection settings.
            operations: Candidate operations.
            pending_plans: Plans already scheduled by earlier runs.

        Returns:
            SelectionResult with the admitted operations, or with the error and
            no operations when a partition path is malformed.
        """
        try:
            admitted = self.order_and_filter(config, operations, pending_plans)
        except PartitionFormatError as e:
            logger.error("Compaction selection aborted: %s", e)
            return SelectionResult.failure(e)
        return SelectionResult.success(admitted)


class CandidateSource(ABC):
    """Interface for loading compaction candidates."""

    @abstractmethod
    def load(self) -> CandidateSet:
        """Load candidate operations and pending plans.

        Returns:
            CandidateSet with operations and pending plans.
        """


class ConfigLoader(ABC):
    """Interface for configuration loading."""

    @abstractmethod
    def load_table_config(self, table_id: str) -> Dict[str, Any]:
        """Load configuration for a table.

        Args:
            table_id: Identifier of the table configuration to load.

        Returns:
            Dictionary containing the table configuration.
        """
