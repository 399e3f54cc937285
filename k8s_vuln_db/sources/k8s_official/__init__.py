"""
Kubernetes Official CVE Feed Integration

DATA SOURCE: https://kubernetes.io/docs/reference/issues-security/official-cve-feed/index.json
DETAIL RECORDS: https://cveawg.mitre.org/api/cve/<CVE id> (CVE JSON 5)

STEPS PROGRAM WILL FOLLOW:
1. Fetch the feed and the CVE record of every advisory
2. Sanitize affected version fields and build version ranges
3. Merge bare release series with the versions that close them
4. Convert ranges to introduced / fixed / last_affected events
5. Resolve the canonical component and assemble the records
6. Validate the batch
"""

from .collector import K8sVulnDBCollector
from .components import get_component_name, infer_component_from_text
from .config import K8S_CVE_FEED_CONFIG
from .events import build_affected, flatten_affected
from .fetcher import K8sCveFeedFetcher
from .models import (Affected, AdvisoryRecord, Cvss, DetailRecord, Event, EventKind,
                     K8sVulnDB, Range, RawVersionField, Version, Violation)
from .parser import MitreCveParser
from .range_merger import merge_version_ranges
from .validator import collect_violations, validate_cve_data
from .version_ranges import build_version_ranges, extract_bounds
from .version_sanitizer import sanitize_version

__all__ = [
    'K8sVulnDBCollector',
    'K8sCveFeedFetcher',
    'MitreCveParser',
    'K8S_CVE_FEED_CONFIG',
    'sanitize_version',
    'extract_bounds',
    'build_version_ranges',
    'merge_version_ranges',
    'build_affected',
    'flatten_affected',
    'get_component_name',
    'infer_component_from_text',
    'collect_violations',
    'validate_cve_data',
    'Affected',
    'AdvisoryRecord',
    'Cvss',
    'DetailRecord',
    'Event',
    'EventKind',
    'K8sVulnDB',
    'Range',
    'RawVersionField',
    'Version',
    'Violation',
]
