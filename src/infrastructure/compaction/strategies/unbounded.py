"""Unbounded compaction strategy implementation."""

from typing import List, Sequence

from src.domain.interfaces import CompactionStrategy
from src.domain.models import CompactionOperation, CompactionPlan, SelectionConfig


class UnboundedCompactionStrategy(CompactionStrategy):
    """Admits every candidate operation, in input order, with no partition budget."""

    def order_and_filter(
        self,
        config: SelectionConfig,
        operations: Sequence[CompactionOperation],
        pending_plans: Sequence[CompactionPlan],
    ) -> List[CompactionOperation]:
        return list(operations)
