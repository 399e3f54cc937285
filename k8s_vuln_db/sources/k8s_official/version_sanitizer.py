"""
Version field sanitation for CVE JSON 5 ``affected.versions`` entries

CNAs fill the version fields inconsistently: comparators inside the version
string ("< 1.2.3", "<= 1.2.3"), prose ("prior to 1.5"), wildcards ("1.27.*",
"1.27.x") and placeholder values ("n/a", "unspecified"). sanitize_version
rewrites one entry into a clean (version, lessThan, lessThanOrEqual) triple
or rejects it.
"""

import logging
from dataclasses import replace
from typing import Optional

from ..base.version_utils import is_series_marker, trim_version_prefixes
from .config import K8S_CVE_FEED_CONFIG
from .models import RawVersionField

logger = logging.getLogger(__name__)

NOT_APPLICABLE = K8S_CVE_FEED_CONFIG['not_applicable_marker']
UNSPECIFIED = K8S_CVE_FEED_CONFIG['unspecified_marker']
PRIOR_TO = K8S_CVE_FEED_CONFIG['prior_to_phrase']
WILDCARD = K8S_CVE_FEED_CONFIG['wildcard_suffix']
SERIES_WILDCARD = K8S_CVE_FEED_CONFIG['series_wildcard_suffix']
VERSION_PREFIXES = K8S_CVE_FEED_CONFIG['version_prefixes']


def sanitize_version(raw: RawVersionField) -> Optional[RawVersionField]:
    """
    Normalize one raw version field.

    Args:
        raw: Entry taken from the CVE record; it is not modified

    Returns:
        A new RawVersionField with cleaned version / less_than / less_than_or_equal,
        or None when the entry carries no usable version information
    """
    v = replace(raw)

    if NOT_APPLICABLE in v.version and not v.less_than and not v.less_than_or_equal:
        logger.debug(f"Rejecting version field without version information: {raw}")
        return None
    if UNSPECIFIED in (v.less_than_or_equal, v.less_than) and v.version:
        logger.debug(f"Rejecting version field with unspecified upper bound: {raw}")
        return None

    # "<=" used as a placeholder, the bound is the version itself
    if v.less_than_or_equal == "<=":
        v.less_than_or_equal = v.version
    # comparator written into the version field, the version itself is unknown
    if v.version.startswith("< "):
        v.less_than = v.version[len("< "):]
        v.version = ""
    if v.version.startswith("<= "):
        v.less_than_or_equal = v.version[len("<= "):]
        v.version = ""

    if v.version.strip().startswith(PRIOR_TO):
        prior_to = v.version.strip()[len(PRIOR_TO):].strip()
        if is_series_marker(prior_to):
            prior_to = prior_to + ".0"
        v.version = prior_to
        v.less_than = prior_to
    if v.less_than.strip().startswith(PRIOR_TO):
        v.less_than = v.less_than.strip()[len(PRIOR_TO):].strip()

    # "1.27.*": every release of the series is affected, no fix known yet
    if v.less_than.strip().endswith(WILDCARD):
        v.version = v.less_than.replace(WILDCARD, "").strip().rstrip(".")
        v.less_than = ""
    if v.version.strip().endswith(SERIES_WILDCARD):
        trimmed = v.version.strip()
        v.version = trimmed[:trimmed.rindex(".")]

    if "<=" in v.less_than_or_equal:
        v.less_than_or_equal = v.less_than_or_equal.replace("<=", "").strip()

    return RawVersionField(
        version=trim_version_prefixes(v.version, VERSION_PREFIXES),
        less_than=trim_version_prefixes(v.less_than, VERSION_PREFIXES),
        less_than_or_equal=trim_version_prefixes(v.less_than_or_equal, VERSION_PREFIXES),
        status=v.status,
        version_type=v.version_type,
    )
