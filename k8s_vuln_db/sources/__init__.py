"""
Vulnerability sources

- base/: Common infrastructure used by all sources
- k8s_official/: Kubernetes official CVE feed combined with MITRE CVE records

Each source follows the same pattern:
1. Fetcher: Retrieves raw data from source
2. Parser: Converts source format to intermediate records
3. Loader: Writes the validated database
"""

from .base import (
    BaseFetcher,
    BaseParser,
    CommonLoader,
    VulnSourceException
)

__all__ = [
    'BaseFetcher',
    'BaseParser',
    'CommonLoader',
    'VulnSourceException'
]
