"""
Version string helpers shared by the parsers

Numeric dotted versions ("1", "1.27", "1.27.3") are parsed with the packaging library;
anything else is treated as unparseable rather than raising.
"""

import re
from typing import Iterable, List, Optional

from packaging import version as pkg_version

NUMERIC_DOTTED = re.compile(r'^\d+(\.\d+)*$')


def parse_version(value: Optional[str]) -> Optional[pkg_version.Version]:
    """Parse a numeric dotted version, returning None when it is not one"""
    if not value or not NUMERIC_DOTTED.match(value.strip()):
        return None
    try:
        return pkg_version.Version(value.strip())
    except pkg_version.InvalidVersion:
        return None


def is_valid_version(value: Optional[str]) -> bool:
    return parse_version(value) is not None


def separator_count(value: str) -> int:
    return value.count('.')


def is_series_marker(value: str) -> bool:
    """A bare major.minor value describes a whole release series"""
    return separator_count(value) == 1


def series_start(value: str) -> str:
    """'1.27.3' -> '1.27.0'; values without a minor component are returned unchanged"""
    parts = value.split('.')
    if len(parts) < 2:
        return value
    return f"{parts[0]}.{parts[1]}.0"


def release_segments(value: str, size: int = 3) -> Optional[List[int]]:
    """Release components of a numeric version, zero padded to ``size``"""
    parsed = parse_version(value)
    if parsed is None:
        return None
    segments = list(parsed.release[:size])
    return segments + [0] * (size - len(segments))


def trim_version_prefixes(value: str, prefixes: Iterable[str]) -> str:
    """Strip cosmetic prefixes such as 'v' until none of them remain"""
    value = (value or "").strip()
    prefixes = [p for p in prefixes if p]
    stripped = True
    while stripped:
        stripped = False
        for prefix in prefixes:
            if value.startswith(prefix):
                value = value[len(prefix):]
                stripped = True
    return value.strip()
