"""Decoding of candidate manifest documents."""

import json
from typing import Any

import yaml

from src.domain.models import CandidateSet

YAML_SUFFIXES = (".yml", ".yaml")


def decode_manifest(text: str, name: str) -> CandidateSet:
    """Decode a candidate manifest into a CandidateSet.

    Args:
        text: Manifest contents.
        name: File name or object key; a .yml/.yaml suffix selects YAML, anything
            else is read as JSON.

    Returns:
        CandidateSet built from the manifest.

    Raises:
        json.JSONDecodeError: If a JSON manifest is malformed.
        yaml.YAMLError: If a YAML manifest is malformed.
        ValueError: If an entry is missing its partition path.
    """
    document: Any
    if name.lower().endswith(YAML_SUFFIXES):
        document = yaml.safe_load(text)
    else:
        document = json.loads(text) if text.strip() else None
    return CandidateSet.from_dict(document)
