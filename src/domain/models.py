"""Domain models for compaction candidate selection."""

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Dict, List, Mapping, Optional, Set, Tuple

from src.domain.exceptions import ConfigurationError, PartitionFormatError

DEFAULT_TARGET_PARTITIONS_PER_RUN = 10
DEFAULT_STRATEGY = "day_based"
DEFAULT_PARTITION_DATE_FORMAT = "yyyy/MM/dd"


def _require_mapping(value: Any, what: str) -> Mapping[str, Any]:
    if not isinstance(value, Mapping):
        raise ValueError(f"{what} must be a mapping, got {type(value).__name__}")
    return value


def _require_list(value: Any, what: str) -> List[Any]:
    if value is None:
        return []
    if not isinstance(value, (list, tuple)):
        raise ValueError(f"{what} must be a list, got {type(value).__name__}")
    return list(value)


def _parse_metrics(value: Any) -> Dict[str, float]:
    metrics: Dict[str, float] = {}
    for name, raw in _require_mapping(value or {}, "'metrics'").items():
        try:
            metrics[str(name)] = float(raw)
        except (TypeError, ValueError):
            raise ValueError(f"metric '{name}' must be a number, got {raw!r}") from None
    return metrics


@dataclass(frozen=True)
class CompactionOperation:
    """A unit of pending compaction work scoped to a single partition.

    metrics is held as a read-only mapping and left out of the hash, so
    operations are fully immutable and hashable.
    """

    partition_path: str
    file_id: Optional[str] = None
    base_instant_time: Optional[str] = None
    data_file_path: Optional[str] = None
    delta_file_paths: Tuple[str, ...] = ()
    metrics: Mapping[str, float] = field(default_factory=dict, hash=False)

    def __post_init__(self):
        object.__setattr__(self, "delta_file_paths", tuple(self.delta_file_paths))
        object.__setattr__(self, "metrics", MappingProxyType(dict(self.metrics)))

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "CompactionOperation":
        """Build an operation from a manifest entry.

        Args:
            data: Mapping with at least a 'partition_path' string.

        Returns:
            CompactionOperation instance.

        Raises:
            ValueError: If the entry is not a mapping, 'partition_path' is missing
                or not a string, or 'delta_file_paths' / 'metrics' are malformed.
        """
        data = _require_mapping(data, "compaction operation")
        partition_path = data.get("partition_path")
        if not isinstance(partition_path, str):
            raise ValueError("compaction operation must have a string 'partition_path'")

        delta_file_paths = _require_list(data.get("delta_file_paths"), "'delta_file_paths'")
        if not all(isinstance(path, str) for path in delta_file_paths):
            raise ValueError("'delta_file_paths' must contain only strings")

        return cls(
            partition_path=partition_path,
            file_id=data.get("file_id"),
            base_instant_time=data.get("base_instant_time"),
            data_file_path=data.get("data_file_path"),
            delta_file_paths=tuple(delta_file_paths),
            metrics=_parse_metrics(data.get("metrics")),
        )

    def to_dict(self) -> Dict[str, Any]:
        """Render the operation as a JSON-serializable dictionary."""
        return {
            "partition_path": self.partition_path,
            "file_id": self.file_id,
            "base_instant_time": self.base_instant_time,
            "data_file_path": self.data_file_path,
            "delta_file_paths": list(self.delta_file_paths),
            "metrics": dict(self.metrics),
        }


@dataclass(frozen=True)
class CompactionPlan:
    """A compaction plan already scheduled by a previous run."""

    operations: Tuple[CompactionOperation, ...] = ()
    extra_metadata: Mapping[str, str] = field(default_factory=dict, hash=False)
    version: int = 1

    def __post_init__(self):
        object.__setattr__(self, "operations", tuple(self.operations))
        object.__setattr__(self, "extra_metadata", MappingProxyType(dict(self.extra_metadata)))

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "CompactionPlan":
        """Build a pending plan from a manifest entry.

        Args:
            data: Mapping with 'operations', optional 'extra_metadata' and 'version'.

        Returns:
            CompactionPlan instance.

        Raises:
            ValueError: If the entry or any of its fields is malformed.
        """
        data = _require_mapping(data, "pending plan")
        operations = _require_list(data.get("operations"), "pending plan 'operations'")
        extra_metadata = _require_mapping(data.get("extra_metadata") or {}, "'extra_metadata'")

        version = data.get("version", 1)
        if isinstance(version, bool) or not isinstance(version, int):
            raise ValueError(f"pending plan 'version' must be an integer, got {version!r}")

        return cls(
            operations=tuple(CompactionOperation.from_dict(op) for op in operations),
            extra_metadata=dict(extra_metadata),
            version=version,
        )

    def to_dict(self) -> Dict[str, Any]:
        """Render the plan as a JSON-serializable dictionary."""
        return {
            "operations": [op.to_dict() for op in self.operations],
            "extra_metadata": dict(self.extra_metadata),
            "version": self.version,
        }

    def partition_paths(self) -> Set[str]:
        """Return the partitions this plan touches."""
        return {op.partition_path for op in self.operations}


@dataclass(frozen=True)
class SelectionConfig:
    """Settings that drive a single selection run."""

    target_partitions_per_run: int = DEFAULT_TARGET_PARTITIONS_PER_RUN
    strategy: str = DEFAULT_STRATEGY
    partition_date_format: str = DEFAULT_PARTITION_DATE_FORMAT

    @classmethod
    def from_dict(cls, config: Optional[Dict[str, Any]] = None) -> "SelectionConfig":
        """Build a SelectionConfig from a table configuration.

        Args:
            config: Configuration dictionary. Reads the 'compaction' section:
                - {"compaction": {"target_partitions_per_run": 5}}
                - {"compaction": {"strategy": "unbounded"}}
                - {} or None  # all defaults

        Returns:
            SelectionConfig instance.

        Raises:
            ConfigurationError: If a value has the wrong type. A zero or negative
                budget is accepted; selection then admits nothing.
        """
        if config is not None and not isinstance(config, Mapping):
            raise ConfigurationError("table configuration must be a mapping")

        compaction_config = (config or {}).get("compaction") or {}
        if not isinstance(compaction_config, Mapping):
            raise ConfigurationError("'compaction' section must be a mapping")

        budget = compaction_config.get(
            "target_partitions_per_run", DEFAULT_TARGET_PARTITIONS_PER_RUN
        )
        strategy = compaction_config.get("strategy", DEFAULT_STRATEGY)
        date_format = compaction_config.get(
            "partition_date_format", DEFAULT_PARTITION_DATE_FORMAT
        )

        if not isinstance(strategy, str) or not strategy:
            raise ConfigurationError("'compaction.strategy' must be a non-empty string")
        if not isinstance(date_format, str) or not date_format:
            raise ConfigurationError(
                "'compaction.partition_date_format' must be a non-empty string"
            )

        return cls(
            target_partitions_per_run=_parse_budget(budget),
            strategy=strategy,
            partition_date_format=date_format,
        )


def _parse_budget(value: Any) -> int:
    # bool is an int subclass; "true" is never a meaningful partition count
    if isinstance(value, bool):
        raise ConfigurationError(
            f"'compaction.target_partitions_per_run' must be an integer, got {value!r}"
        )
    if isinstance(value, int):
        return value
    try:
        return int(str(value).strip())
    except ValueError:
        raise ConfigurationError(
            f"'compaction.target_partitions_per_run' must be an integer, got {value!r}"
        ) from None


@dataclass(frozen=True)
class CandidateSet:
    """Candidate operations and the pending plans they were generated against."""

    operations: Tuple[CompactionOperation, ...] = ()
    pending_plans: Tuple[CompactionPlan, ...] = ()

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "CandidateSet":
        """Build a candidate set from a manifest document.

        Args:
            data: Dictionary with 'operations' and optional 'pending_plans' lists.

        Returns:
            CandidateSet instance.

        Raises:
            ValueError: If the document is not a mapping or an entry is malformed.
        """
        if data is None:
            return cls()
        data = _require_mapping(data, "candidate manifest")
        operations = _require_list(data.get("operations"), "manifest 'operations'")
        pending_plans = _require_list(data.get("pending_plans"), "manifest 'pending_plans'")

        return cls(
            operations=tuple(CompactionOperation.from_dict(op) for op in operations),
            pending_plans=tuple(CompactionPlan.from_dict(plan) for plan in pending_plans),
        )


@dataclass(frozen=True)
class SelectionResult:
    """Outcome of a selection run.

    Either carries the admitted operations, or the PartitionFormatError that
    aborted the run. A failed result never carries operations.
    """

    operations: Tuple[CompactionOperation, ...] = ()
    error: Optional[PartitionFormatError] = None

    @classmethod
    def success(cls, operations: List[CompactionOperation]) -> "SelectionResult":
        return cls(operations=tuple(operations))

    @classmethod
    def failure(cls, error: PartitionFormatError) -> "SelectionResult":
        return cls(error=error)

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> List[CompactionOperation]:
        """Return the admitted operations.

        Raises:
            PartitionFormatError: If the run failed.
        """
        if self.error is not None:
            raise self.error
        return list(self.operations)

    def partition_paths(self) -> List[str]:
        """Return admitted partition paths in admission order."""
        seen: Dict[str, None] = {}
        for op in self.operations:
            seen.setdefault(op.partition_path, None)
        return list(seen)
