"""Tests for domain models."""

import pytest

from src.domain.exceptions import ConfigurationError, PartitionFormatError
from src.domain.models import (
    CandidateSet,
    CompactionOperation,
    CompactionPlan,
    SelectionConfig,
    SelectionResult,
)
from tests.builders import CandidateManifestBuilder, CompactionOperationBuilder


class TestCompactionOperation:
    """Tests for CompactionOperation class."""

    def test_from_dict_reads_all_fields(self):
        """Test that every manifest field is carried over."""
        operation = CompactionOperation.from_dict(
            {
                "partition_path": "2024/01/15",
                "file_id": "f1",
                "base_instant_time": "20240115000000",
                "data_file_path": "2024/01/15/f1.parquet",
                "delta_file_paths": [".f1.log.1", ".f1.log.2"],
                "metrics": {"TOTAL_LOG_FILES": 2},
            }
        )

        assert operation.partition_path == "2024/01/15"
        assert operation.file_id == "f1"
        assert operation.delta_file_paths == (".f1.log.1", ".f1.log.2")
        assert operation.metrics == {"TOTAL_LOG_FILES": 2.0}

    def test_from_dict_without_partition_path_raises(self):
        """Test that a missing partition path is rejected."""
        with pytest.raises(ValueError, match="partition_path"):
            CompactionOperation.from_dict({"file_id": "f1"})

    def test_to_dict_round_trips(self):
        """Test that to_dict output rebuilds an equal operation."""
        operation = (
            CompactionOperationBuilder()
            .with_partition("2024/02/01")
            .with_data_file("2024/02/01/f.parquet")
            .with_delta_files(".f.log.1")
            .with_metric("TOTAL_IO_MB", 12.5)
            .build()
        )

        assert CompactionOperation.from_dict(operation.to_dict()) == operation

    def test_is_immutable(self):
        """Test that operations cannot be modified."""
        operation = CompactionOperationBuilder().build()

        with pytest.raises(AttributeError):
            operation.partition_path = "2024/01/01"  # type: ignore[misc]


class TestCompactionPlan:
    """Tests for CompactionPlan class."""

    def test_partition_paths(self):
        """Test that a plan reports the partitions it touches."""
        plan = CompactionPlan.from_dict(
            {
                "operations": [
                    {"partition_path": "2024/01/01"},
                    {"partition_path": "2024/01/02"},
                    {"partition_path": "2024/01/01"},
                ],
                "extra_metadata": {"owner": "scheduler"},
            }
        )

        assert plan.partition_paths() == {"2024/01/01", "2024/01/02"}
        assert plan.extra_metadata == {"owner": "scheduler"}
        assert plan.version == 1


class TestCandidateSet:
    """Tests for CandidateSet class."""

    def test_from_dict(self):
        """Test building a candidate set from a manifest document."""
        document = (
            CandidateManifestBuilder()
            .with_operation("2024/01/01", "a")
            .with_operation("2024/01/02", "b")
            .with_pending_plan("2023/12/31")
            .build()
        )

        candidates = CandidateSet.from_dict(document)

        assert [op.file_id for op in candidates.operations] == ["a", "b"]
        assert len(candidates.pending_plans) == 1
        assert candidates.pending_plans[0].partition_paths() == {"2023/12/31"}

    def test_from_none_is_empty(self):
        """Test that an empty manifest yields no candidates."""
        assert CandidateSet.from_dict(None) == CandidateSet()

    def test_from_non_mapping_raises(self):
        """Test that a non-mapping document is rejected."""
        with pytest.raises(ValueError, match="mapping"):
            CandidateSet.from_dict(["2024/01/01"])  # type: ignore[arg-type]


class TestSelectionConfig:
    """Tests for SelectionConfig class."""

    def test_defaults(self):
        """Test default settings."""
        config = SelectionConfig.from_dict(None)

        assert config.target_partitions_per_run == 10
        assert config.strategy == "day_based"
        assert config.partition_date_format == "yyyy/MM/dd"

    def test_reads_compaction_section(self):
        """Test reading every compaction setting."""
        config = SelectionConfig.from_dict(
            {
                "compaction": {
                    "strategy": "unbounded",
                    "target_partitions_per_run": 3,
                    "partition_date_format": "yyyy-MM-dd",
                }
            }
        )

        assert config == SelectionConfig(3, "unbounded", "yyyy-MM-dd")

    def test_numeric_string_budget_is_accepted(self):
        """Test that a numeric string budget is converted."""
        config = SelectionConfig.from_dict({"compaction": {"target_partitions_per_run": " 4 "}})

        assert config.target_partitions_per_run == 4

    @pytest.mark.parametrize("budget", [0, -3])
    def test_non_positive_budget_is_accepted(self, budget):
        """Test that a non-positive budget does not fail configuration."""
        config = SelectionConfig.from_dict({"compaction": {"target_partitions_per_run": budget}})

        assert config.target_partitions_per_run == budget

    @pytest.mark.parametrize("budget", ["many", True, None, 2.5])
    def test_malformed_budget_raises(self, budget):
        """Test that non-integer budgets are rejected."""
        with pytest.raises(ConfigurationError):
            SelectionConfig.from_dict({"compaction": {"target_partitions_per_run": budget}})

    def test_non_mapping_compaction_section_raises(self):
        """Test that a non-mapping compaction section is rejected."""
        with pytest.raises(ConfigurationError):
            SelectionConfig.from_dict({"compaction": "day_based"})

    def test_empty_strategy_raises(self):
        """Test that an empty strategy name is rejected."""
        with pytest.raises(ConfigurationError):
            SelectionConfig.from_dict({"compaction": {"strategy": ""}})


class TestSelectionResult:
    """Tests for SelectionResult class."""

    def test_partition_paths_in_admission_order(self):
        """Test that partitions are reported once, in the order admitted."""
        operations = [
            CompactionOperationBuilder().with_partition(path).build()
            for path in ["2024/03/01", "2024/03/01", "2024/02/01"]
        ]

        result = SelectionResult.success(operations)

        assert result.partition_paths() == ["2024/03/01", "2024/02/01"]

    def test_failure_unwrap_raises(self):
        """Test that unwrapping a failed result raises its error."""
        error = PartitionFormatError("bad", "yyyy/MM/dd")
        result = SelectionResult.failure(error)

        assert not result.ok
        with pytest.raises(PartitionFormatError) as exc_info:
            result.unwrap()
        assert exc_info.value is error


class TestManifestShapeValidation:
    """Tests for rejection of badly shaped manifest entries."""

    @pytest.mark.parametrize(
        "entry, message",
        [
            ("2023/01/01", "compaction operation must be a mapping"),
            ({"partition_path": "2023/01/01", "metrics": ["x"]}, "'metrics' must be a mapping"),
            ({"partition_path": "2023/01/01", "metrics": {"a": None}}, "metric 'a'"),
            ({"partition_path": "2023/01/01", "metrics": {"a": "lots"}}, "metric 'a'"),
            ({"partition_path": "2023/01/01", "delta_file_paths": "a.log"}, "'delta_file_paths'"),
            ({"partition_path": "2023/01/01", "delta_file_paths": [1]}, "only strings"),
        ],
    )
    def test_malformed_operation_raises_value_error(self, entry, message):
        """Test that malformed operation entries raise ValueError with context."""
        with pytest.raises(ValueError, match=message):
            CandidateSet.from_dict({"operations": [entry]})

    @pytest.mark.parametrize(
        "document, message",
        [
            ({"operations": "2023/01/01"}, "manifest 'operations' must be a list"),
            ({"operations": {"partition_path": "2023/01/01"}}, "manifest 'operations'"),
            ({"pending_plans": "plan"}, "manifest 'pending_plans' must be a list"),
            ({"pending_plans": ["plan"]}, "pending plan must be a mapping"),
            ({"pending_plans": [{"operations": "x"}]}, "pending plan 'operations'"),
            ({"pending_plans": [{"extra_metadata": ["x"]}]}, "'extra_metadata'"),
            ({"pending_plans": [{"version": "one"}]}, "'version'"),
        ],
    )
    def test_malformed_document_raises_value_error(self, document, message):
        """Test that malformed manifest sections raise ValueError with context."""
        with pytest.raises(ValueError, match=message):
            CandidateSet.from_dict(document)

    def test_non_mapping_table_config_raises(self):
        """Test that a table configuration that is not a mapping is rejected."""
        with pytest.raises(ConfigurationError, match="must be a mapping"):
            SelectionConfig.from_dict(["compaction"])  # type: ignore[arg-type]


class TestOperationImmutability:
    """Tests for immutability and hashability of operations and plans."""

    def test_metrics_cannot_be_modified(self):
        """Test that metrics are exposed read-only."""
        operation = CompactionOperationBuilder().with_metric("TOTAL_IO_MB", 1.0).build()

        with pytest.raises(TypeError):
            operation.metrics["TOTAL_IO_MB"] = 2.0  # type: ignore[index]

    def test_metrics_are_copied_from_caller(self):
        """Test that mutating the source dict does not leak into the operation."""
        metrics = {"TOTAL_IO_MB": 1.0}
        operation = CompactionOperation(partition_path="2024/01/01", metrics=metrics)

        metrics["TOTAL_IO_MB"] = 5.0

        assert operation.metrics["TOTAL_IO_MB"] == 1.0

    def test_operations_are_hashable(self):
        """Test that equal operations hash equally and work as set members."""
        first = CompactionOperationBuilder().with_metric("TOTAL_IO_MB", 1.0).build()
        second = CompactionOperationBuilder().with_metric("TOTAL_IO_MB", 1.0).build()

        assert hash(first) == hash(second)
        assert len({first, second}) == 1

    def test_plans_are_read_only_and_hashable(self):
        """Test that plan metadata is read-only and plans hash."""
        plan = CompactionPlan(
            operations=[CompactionOperationBuilder().build()],  # type: ignore[arg-type]
            extra_metadata={"owner": "scheduler"},
        )

        assert isinstance(plan.operations, tuple)
        with pytest.raises(TypeError):
            plan.extra_metadata["owner"] = "someone"  # type: ignore[index]
        assert isinstance(hash(plan), int)
