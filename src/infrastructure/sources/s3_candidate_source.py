"""Candidate source backed by a manifest object in S3."""

import logging
from typing import Any

import boto3
from botocore.exceptions import ClientError

from src.domain.interfaces import CandidateSource
from src.domain.models import CandidateSet
from src.infrastructure.sources.manifest import decode_manifest

logger = logging.getLogger(__name__)


class S3CandidateSource(CandidateSource):
    """Loads compaction candidates from a JSON or YAML manifest stored in S3."""

    def __init__(self, bucket: str, key: str, s3_client: Any = None, aws_region: str = "us-east-1"):
        """Initialize S3CandidateSource.

        Args:
            bucket: S3 bucket name.
            key: Object key of the manifest.
            s3_client: Boto3 S3 client (optional, for testing).
            aws_region: AWS region (default: us-east-1).
        """
        self._bucket = bucket
        self._key = key
        self._s3_client = s3_client or boto3.client("s3", region_name=aws_region)

    def load(self) -> CandidateSet:
        """Load candidates from the manifest object.

        Returns:
            CandidateSet with operations and pending plans.

        Raises:
            FileNotFoundError: If the manifest object does not exist.
            ClientError: For any other S3 failure.
        """
        try:
            response = self._s3_client.get_object(Bucket=self._bucket, Key=self._key)
            with response["Body"] as body:
                text = body.read().decode("utf-8")
        except ClientError as e:
            if e.response["Error"]["Code"] == "NoSuchKey":
                raise FileNotFoundError(
                    f"Candidate manifest not found: s3://{self._bucket}/{self._key}"
                ) from e
            raise

        candidates = decode_manifest(text, self._key)
        logger.info(
            "Loaded %d candidate operations and %d pending plans from s3://%s/%s",
            len(candidates.operations),
            len(candidates.pending_plans),
            self._bucket,
            self._key,
        )
        return candidates
