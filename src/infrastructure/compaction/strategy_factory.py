"""Factory for creating CompactionStrategy instances."""

from typing import Any, Dict, Optional

from src.domain.interfaces import CompactionStrategy
from src.domain.models import SelectionConfig
from src.infrastructure.compaction.partition_date_format import PartitionDateFormat
from src.infrastructure.compaction.strategies.day_based import DayBasedCompactionStrategy
from src.infrastructure.compaction.strategies.unbounded import UnboundedCompactionStrategy


class CompactionStrategyFactory:
    """Factory for creating CompactionStrategy instances based on configuration."""

    @staticmethod
    def create(config: Optional[Dict[str, Any]] = None) -> CompactionStrategy:
        """Create CompactionStrategy instance from configuration.

        Args:
            config: Configuration dictionary. Reads 'compaction.strategy' or uses default.
                Examples:
                - {"compaction": {"strategy": "day_based"}}
                - {"compaction": {"strategy": "unbounded"}}
                - {"compaction": {}}  # defaults to day_based
                - None  # defaults to day_based

        Returns:
            CompactionStrategy instance (defaults to DayBasedCompactionStrategy).

        Raises:
            ValueError: If strategy is unknown.
            ConfigurationError: If the compaction section is malformed.
        """
        return CompactionStrategyFactory.from_selection_config(SelectionConfig.from_dict(config))

    @staticmethod
    def from_selection_config(selection_config: SelectionConfig) -> CompactionStrategy:
        """Create CompactionStrategy instance from an already parsed SelectionConfig."""
        strategy_name = selection_config.strategy

        if strategy_name == "day_based":
            return DayBasedCompactionStrategy(
                PartitionDateFormat(selection_config.partition_date_format)
            )
        if strategy_name == "unbounded":
            return UnboundedCompactionStrategy()

        raise ValueError(f"Unknown compaction strategy: {strategy_name}")
