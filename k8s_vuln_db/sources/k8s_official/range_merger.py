"""
Range Merger

Advisories sometimes list an already vulnerable release series as a bare marker
("1.26") next to concrete patch versions of the following series ("1.27.3").
Emitted as is, those entries give overlapping or gapped ranges. The merger sorts
the ranges and walks them with a two state machine:

    IDLE         series marker       -> SERIES_OPEN (remember the marker)
    IDLE         anything else       -> emit unchanged
    SERIES_OPEN  patch level version -> emit [marker.0, version] then the version, IDLE
    SERIES_OPEN  anything else       -> dropped

A series still open at the end is the latest vulnerable line; it is closed with a
fixed version one minor release above the highest version seen.
"""

import logging
from enum import Enum
from typing import List, Optional

from ..base.version_utils import (is_series_marker, parse_version, release_segments,
                                  separator_count)
from .models import Version

logger = logging.getLogger(__name__)


class MergeState(Enum):
    IDLE = "idle"
    SERIES_OPEN = "series_open"


def sort_by_introduced(versions: List[Version]) -> List[Version]:
    """
    Ascending numeric order of ``introduced``.

    Unparseable values sort after every parseable one and keep their relative order.
    """
    def key(v: Version):
        parsed = parse_version(v.introduced)
        if parsed is None:
            return (1,)
        return (0, parsed)

    return sorted(versions, key=key)


def next_minor_fixed(versions: List[Version]) -> Optional[str]:
    """Fixed version closing an open series: highest introduced with its minor bumped"""
    parseable = [v.introduced for v in versions if parse_version(v.introduced) is not None]
    if not parseable:
        return None
    highest = max(parseable, key=parse_version)
    major, minor, patch = release_segments(highest)
    return f"{major}.{minor + 1}.{patch}"


def merge_version_ranges(versions: List[Version]) -> List[Version]:
    """Fuse bare release series markers with the versions that close them"""
    ordered = sort_by_introduced(versions)
    merged: List[Version] = []
    state = MergeState.IDLE
    start_version = ""

    for v in ordered:
        if state is MergeState.IDLE:
            if is_series_marker(v.introduced):
                start_version = v.introduced
                state = MergeState.SERIES_OPEN
            else:
                merged.append(v)
            continue

        if separator_count(v.introduced) > 1:
            merged.append(Version(introduced=start_version + ".0", last_affected=v.introduced))
            merged.append(Version(introduced=v.introduced, fixed=v.fixed,
                                  last_affected=v.last_affected))
            start_version = ""
            state = MergeState.IDLE
        else:
            logger.debug(f"Dropping {v.introduced!r} while series {start_version} is open")

    if state is MergeState.SERIES_OPEN:
        fixed = next_minor_fixed(ordered)
        if fixed is not None:
            merged.append(Version(introduced=start_version + ".0", fixed=fixed))
        else:
            logger.warning(f"Could not close open release series {start_version}")

    return merged
