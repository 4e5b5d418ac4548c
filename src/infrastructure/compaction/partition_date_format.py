"""Partition date format used to order date-partitioned compaction candidates."""

import re
from dataclasses import dataclass, field
from datetime import datetime
from typing import Tuple

from src.domain.exceptions import ConfigurationError, PartitionFormatError
from src.domain.models import DEFAULT_PARTITION_DATE_FORMAT

# Date pattern tokens mapped to (strptime directive, accepted digits)
_PATTERN_TOKENS = {
    "yyyy": ("%Y", "[0-9]{4}"),
    "MM": ("%m", "[0-9]{1,2}"),
    "dd": ("%d", "[0-9]{1,2}"),
    "HH": ("%H", "[0-9]{1,2}"),
    "mm": ("%M", "[0-9]{1,2}"),
    "ss": ("%S", "[0-9]{1,2}"),
}

# A token is a run of one repeated letter, so "yyyyMMdd" splits into three
_TOKEN_RUN = re.compile(r"([A-Za-z])\1*")


def compile_pattern(pattern: str) -> Tuple[str, re.Pattern]:
    """Compile a date pattern into a strptime directive and a structure regex.

    Args:
        pattern: Date pattern (e.g., "yyyy/MM/dd"). Letters must form one of
            yyyy, MM, dd, HH, mm, ss; everything else is literal text.

    Returns:
        Tuple of (strptime directive, compiled regex matching the exact structure).

    Raises:
        ConfigurationError: If the pattern has no date token or an unknown token.
    """
    directive_parts = []
    regex_parts = []
    position = 0
    for match in _TOKEN_RUN.finditer(pattern):
        literal = pattern[position:match.start()]
        directive_parts.append(literal.replace("%", "%%"))
        regex_parts.append(re.escape(literal))

        token = match.group(0)
        if token not in _PATTERN_TOKENS:
            raise ConfigurationError(
                f"Unsupported token '{token}' in partition date format '{pattern}' "
                f"(supported: {', '.join(_PATTERN_TOKENS)})"
            )
        directive, digits = _PATTERN_TOKENS[token]
        directive_parts.append(directive)
        regex_parts.append(f"({digits})")
        position = match.end()

    if position == 0:
        raise ConfigurationError(f"Partition date format '{pattern}' has no date token")

    literal = pattern[position:]
    directive_parts.append(literal.replace("%", "%%"))
    regex_parts.append(re.escape(literal))
    return "".join(directive_parts), re.compile("".join(regex_parts))


def to_strptime_pattern(pattern: str) -> str:
    """Translate a date pattern (e.g., "yyyy/MM/dd") into a strptime directive string."""
    return compile_pattern(pattern)[0]


@dataclass(frozen=True)
class PartitionDateFormat:
    """Immutable partition date pattern: {yyyy}/{MM}/{dd} by default.

    The pattern is validated once, at construction. Paths must match its
    structure exactly (digits in every token, literal separators, nothing
    else) before the date itself is checked. Only numeric tokens exist, so
    parsing does not depend on the process locale, and an instance can be
    shared freely between threads.
    """

    pattern: str = DEFAULT_PARTITION_DATE_FORMAT
    strptime_pattern: str = field(init=False, repr=False, compare=False)
    _structure: re.Pattern = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        directive, structure = compile_pattern(self.pattern)
        object.__setattr__(self, "strptime_pattern", directive)
        object.__setattr__(self, "_structure", structure)

    def parse(self, partition_path: str) -> datetime:
        """Parse a partition path into the date it encodes.

        Args:
            partition_path: Partition path string (e.g., "2024/01/15").

        Returns:
            Parsed datetime.

        Raises:
            PartitionFormatError: If the path does not match the pattern exactly,
                including whitespace, trailing segments and impossible dates.
        """
        if not isinstance(partition_path, str):
            raise PartitionFormatError(str(partition_path), self.pattern, "not a string")
        if not self._structure.fullmatch(partition_path):
            raise PartitionFormatError(partition_path, self.pattern, "unexpected structure")
        try:
            return datetime.strptime(partition_path, self.strptime_pattern)
        except ValueError as e:
            raise PartitionFormatError(partition_path, self.pattern, str(e)) from e
