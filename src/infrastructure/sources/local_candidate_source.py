"""Candidate source backed by a manifest file on local disk."""

import logging
from pathlib import Path

from src.domain.interfaces import CandidateSource
from src.domain.models import CandidateSet
from src.infrastructure.sources.manifest import decode_manifest

logger = logging.getLogger(__name__)


class LocalCandidateSource(CandidateSource):
    """Loads compaction candidates from a JSON or YAML manifest file."""

    def __init__(self, path: str) -> None:
        """Initialize LocalCandidateSource.

        Args:
            path: Path to the manifest file (.json, .yml or .yaml).
        """
        self._path = Path(path)

    def load(self) -> CandidateSet:
        """Load candidates from the manifest file.

        Returns:
            CandidateSet with operations and pending plans.

        Raises:
            FileNotFoundError: If the manifest file does not exist.
        """
        if not self._path.exists():
            raise FileNotFoundError(f"Candidate manifest not found: {self._path}")

        with open(self._path, encoding="utf-8") as f:
            candidates = decode_manifest(f.read(), self._path.name)

        logger.info(
            "Loaded %d candidate operations and %d pending plans from %s",
            len(candidates.operations),
            len(candidates.pending_plans),
            self._path,
        )
        return candidates
