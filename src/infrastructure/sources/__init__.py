"""Candidate sources for compaction selection."""

from typing import Any

from src.domain.interfaces import CandidateSource
from src.infrastructure.sources.local_candidate_source import LocalCandidateSource
from src.infrastructure.sources.s3_candidate_source import S3CandidateSource

S3_SCHEME = "s3://"


def create_candidate_source(
    location: str, s3_client: Any = None, aws_region: str = "us-east-1"
) -> CandidateSource:
    """Create a candidate source for a manifest location.

    Args:
        location: Local path, or S3 URI of the form 's3://bucket/key'.
        s3_client: Boto3 S3 client used for S3 locations (optional, for testing).
        aws_region: AWS region for S3 locations.

    Returns:
        S3CandidateSource for S3 URIs, LocalCandidateSource otherwise.

    Raises:
        ValueError: If an S3 URI has no bucket or no key.
    """
    if not location.startswith(S3_SCHEME):
        return LocalCandidateSource(location)

    bucket, _, key = location[len(S3_SCHEME):].partition("/")
    if not bucket or not key:
        raise ValueError(f"Invalid S3 location: {location}")
    return S3CandidateSource(bucket=bucket, key=key, s3_client=s3_client, aws_region=aws_region)


__all__ = [
    "LocalCandidateSource",
    "S3CandidateSource",
    "create_candidate_source",
]
