"""
Version Range Builder

Turns the affected ``versions`` entries of one CVE record into an ordered list of
Version ranges. Entries are sanitized first, then classified by the comparator they
carry:

- lessThanOrEqual -> (introduced, last_affected)
- lessThan        -> (introduced, fixed); a ".0" bound means the whole prior line is affected
- bare version    -> a point range, or an open release series that needs the merge pass
"""

import logging
from enum import Enum
from typing import Iterable, List, Optional, Tuple

from ..base.version_utils import is_series_marker, series_start
from .config import K8S_CVE_FEED_CONFIG
from .models import RawVersionField, Version
from .version_sanitizer import sanitize_version

logger = logging.getLogger(__name__)

AFFECTED = K8S_CVE_FEED_CONFIG['affected_status']
OPEN_LOWER_BOUNDS = ("", "0", "*")


class Comparator(Enum):
    LESS_EQUAL = "<="
    LESS_THAN = "<"


def extract_bounds(upper: str, point: str,
                   comparator: Optional[Comparator]) -> Tuple[str, str]:
    """
    Derive (introduced, last_affected) from a sanitized version field.

    Args:
        upper: lessThan / lessThanOrEqual value, empty when there is no comparator
        point: the ``version`` value of the entry
        comparator: comparator carried by the entry, None for a bare version

    Returns:
        Tuple of introduced and last affected versions. last_affected is empty for
        LESS_THAN, the exclusive bound is reported by the caller as the fixed version.
    """
    point = point.strip()
    upper = upper.strip()

    if comparator is None:
        return point, point

    if point in OPEN_LOWER_BOUNDS:
        introduced = "0"
    elif point == upper:
        # only the bound is known, assume the bound's release series
        introduced = series_start(upper)
    else:
        introduced = point

    last_affected = upper if comparator is Comparator.LESS_EQUAL else ""
    return introduced, last_affected


def build_version_ranges(raw_versions: Iterable[RawVersionField]) -> Tuple[List[Version], bool]:
    """
    Build the raw range list of one advisory.

    Returns:
        The ranges in encounter order and whether a bare release series was seen,
        in which case the list must go through merge_version_ranges
    """
    versions: List[Version] = []
    requires_merge = False

    for raw in raw_versions:
        if raw.status != AFFECTED:
            continue
        v = sanitize_version(raw)
        if v is None:
            continue

        fixed = ""
        last_affected = ""
        if v.less_than_or_equal.strip():
            introduced, last_affected = extract_bounds(v.less_than_or_equal, v.version,
                                                       Comparator.LESS_EQUAL)
        elif v.less_than.strip():
            introduced, last_affected = extract_bounds(v.less_than, v.version,
                                                       Comparator.LESS_THAN)
            if v.less_than.endswith(".0"):
                introduced = "0"
            fixed = v.less_than
        elif is_series_marker(v.version):
            requires_merge = True
            introduced = v.version
        else:
            introduced, last_affected = extract_bounds("", v.version, None)

        versions.append(Version(introduced=introduced, fixed=fixed, last_affected=last_affected))

    logger.debug(f"Built {len(versions)} version ranges (merge required: {requires_merge})")
    return versions, requires_merge
