"""Command-line interface for selecting compaction candidates."""

import argparse
import json
import logging
import sys
from typing import Any, Dict, Optional

import yaml
from botocore.exceptions import BotoCoreError, ClientError

from src.application.selection_use_case import CompactionSelectionUseCase
from src.domain.exceptions import PartitionFormatError
from src.domain.models import SelectionConfig
from src.infrastructure.compaction import CompactionStrategyFactory
from src.infrastructure.config_loader import YamlConfigLoader
from src.infrastructure.sources import create_candidate_source

DEFAULT_CONFIG_DIR = "config/tables"


def _get_config(table_id: str, config_dir: str) -> Dict[str, Any]:
    """Load configuration for a table.

    Args:
        table_id: Table identifier.
        config_dir: Directory holding table YAML files.

    Returns:
        Configuration dictionary.
    """
    config_loader = YamlConfigLoader(config_dir)
    return config_loader.load_table_config(table_id)


def _get_aws_region(config: Dict[str, Any]) -> str:
    candidates_config = config.get("candidates") or {}
    return candidates_config.get("aws_region", "us-east-1")


def _execute_selection(table_id: str, candidates: str, config_dir: str) -> int:
    """Execute compaction selection for a table without error handling.

    Args:
        table_id: Table identifier.
        candidates: Candidate manifest location (local path or s3:// URI).
        config_dir: Directory holding table YAML files.

    Returns:
        Exit code (0 for success).

    Raises:
        FileNotFoundError: If configuration or manifest not found.
        yaml.YAMLError: If YAML parsing fails.
        ValueError: If configuration or manifest is invalid.
        PartitionFormatError: If a candidate partition path is malformed.
        ClientError: If S3 access fails.
        TypeError: If type errors occur.
    """
    config = _get_config(table_id, config_dir)
    selection_config = SelectionConfig.from_dict(config)

    use_case = CompactionSelectionUseCase(
        candidate_source=create_candidate_source(candidates, aws_region=_get_aws_region(config)),
        strategy=CompactionStrategyFactory.from_selection_config(selection_config),
        selection_config=selection_config,
    )

    operations = use_case.execute(table_id).unwrap()

    print(json.dumps([op.to_dict() for op in operations], indent=2))
    print(f"✓ Selection completed. Admitted {len(operations)} operations.", file=sys.stderr)
    return 0


def _handle_error(error: BaseException) -> int:
    """Handle errors and return appropriate exit code.

    Args:
        error: Exception or BaseException that was raised.

    Returns:
        Exit code (1 for errors, 130 for KeyboardInterrupt).
    """
    if isinstance(error, FileNotFoundError):
        print(f"✗ File not found: {error}", file=sys.stderr)
        return 1
    if isinstance(error, yaml.YAMLError):
        print(f"✗ Invalid YAML: {error}", file=sys.stderr)
        return 1
    if isinstance(error, PartitionFormatError):
        print(f"✗ Malformed partition: {error}", file=sys.stderr)
        return 1
    if isinstance(error, ValueError):
        print(f"✗ Configuration error: {error}", file=sys.stderr)
        return 1
    if isinstance(error, (ClientError, BotoCoreError)):
        print(f"✗ S3 error: {error}", file=sys.stderr)
        return 1
    if isinstance(error, OSError):
        print(f"✗ I/O error: {error}", file=sys.stderr)
        return 1
    if isinstance(error, TypeError):
        print(f"✗ Type error: {error}", file=sys.stderr)
        return 1
    if isinstance(error, KeyboardInterrupt):
        print("\n✗ Operation cancelled by user", file=sys.stderr)
        return 130  # Standard exit code for SIGINT

    print(f"✗ Unexpected error: {error}", file=sys.stderr)
    return 1


def run_selection(table_id: str, candidates: str, config_dir: str = DEFAULT_CONFIG_DIR) -> int:
    """Run compaction selection for a table with error handling.

    Args:
        table_id: Table identifier.
        candidates: Candidate manifest location (local path or s3:// URI).
        config_dir: Directory holding table YAML files.

    Returns:
        Exit code (0 for success, 1 for error, 130 for KeyboardInterrupt).
    """
    try:
        return _execute_selection(table_id, candidates, config_dir)
    except KeyboardInterrupt as error:
        return _handle_error(error)
    except (
        FileNotFoundError,
        yaml.YAMLError,
        ValueError,
        ClientError,
        BotoCoreError,
        OSError,
        TypeError,
    ) as error:
        return _handle_error(error)


def main(argv: Optional[list] = None):
    """Main entry point for CLI."""
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    # Suppress noisy third-party logs
    logging.getLogger("urllib3").setLevel(logging.WARNING)
    logging.getLogger("botocore").setLevel(logging.WARNING)
    logging.getLogger("boto3").setLevel(logging.WARNING)
    logging.getLogger("s3transfer").setLevel(logging.WARNING)

    parser = argparse.ArgumentParser(
        description="Select the compaction operations admitted into this run",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "table_id",
        type=str,
        help="Table identifier (e.g., 'trips_mor')",
    )
    parser.add_argument(
        "--candidates",
        "-c",
        type=str,
        required=True,
        help="Candidate manifest: local .json/.yml file or s3://bucket/key",
    )
    parser.add_argument(
        "--config-dir",
        type=str,
        default=DEFAULT_CONFIG_DIR,
        help=f"Directory with table YAML configurations (default: {DEFAULT_CONFIG_DIR})",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable verbose logging (DEBUG level)",
    )

    args = parser.parse_args(argv)

    if args.verbose:
        logging.getLogger().setLevel(logging.DEBUG)
        logging.info("Verbose logging enabled")

    exit_code = run_selection(args.table_id, args.candidates, args.config_dir)
    sys.exit(exit_code)


if __name__ == "__main__":
    main()
