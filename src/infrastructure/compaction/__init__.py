"""Compaction candidate selection strategies."""

from src.infrastructure.compaction.partition_date_format import PartitionDateFormat
from src.infrastructure.compaction.strategies.day_based import DayBasedCompactionStrategy
from src.infrastructure.compaction.strategies.unbounded import UnboundedCompactionStrategy
from src.infrastructure.compaction.strategy_factory import CompactionStrategyFactory

__all__ = [
    "CompactionStrategyFactory",
    "DayBasedCompactionStrategy",
    "PartitionDateFormat",
    "UnboundedCompactionStrategy",
]
