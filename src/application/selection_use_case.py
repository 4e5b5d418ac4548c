"""Compaction selection use case."""

import logging

from ..domain.interfaces import CandidateSource, CompactionStrategy
from ..domain.models import SelectionConfig, SelectionResult

logger = logging.getLogger(__name__)


class CompactionSelectionUseCase:
    """Loads compaction candidates and selects the ones admitted into this run."""

    def __init__(
        self,
        candidate_source: CandidateSource,
        strategy: CompactionStrategy,
        selection_config: SelectionConfig,
    ):
        """Initialize selection use case with dependencies.

        Args:
            candidate_source: Source of candidate operations and pending plans.
            strategy: Strategy deciding which partitions are admitted.
            selection_config: Selection settings (partition budget, date format).
        """
        self._candidate_source = candidate_source
        self._strategy = strategy
        self._selection_config = selection_config

    @property
    def strategy(self) -> CompactionStrategy:
        """Get strategy instance (for testing)."""
        return self._strategy

    @property
    def selection_config(self) -> SelectionConfig:
        """Get selection config (for testing)."""
        return self._selection_config

    def execute(self, table_id: str = "default") -> SelectionResult:
        """Execute candidate loading and selection.

        Args:
            table_id: Table identifier, used for logging.

        Returns:
            SelectionResult with the admitted operations, or the partition
            format error that aborted the selection.
        """
        logger.info(
            "Starting compaction selection for table %s (strategy: %s, target partitions: %d)",
            table_id,
            self._selection_config.strategy,
            self._selection_config.target_partitions_per_run,
        )

        candidates = self._candidate_source.load()
        result = self._strategy.select(
            self._selection_config, candidates.operations, candidates.pending_plans
        )

        if not result.ok:
            logger.error("Compaction selection failed for table %s: %s", table_id, result.error)
            return result

        logger.info(
            "Admitted %d of %d operations across %d partitions",
            len(result.operations),
            len(candidates.operations),
            len(result.partition_paths()),
        )
        return result
