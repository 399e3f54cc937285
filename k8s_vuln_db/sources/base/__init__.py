"""
Base Infrastructure for the Kubernetes Vulnerability Database Collector

Key Components:
- BaseFetcher: Abstract interface for data fetching
- BaseParser: Common parsing utilities
- CommonLoader: JSON database writer
- version_utils: Numeric dotted version helpers

Related Files:
- sources/k8s_official/* builds on these classes
"""

from .base_fetcher import BaseFetcher
from .base_parser import BaseParser
from .common_loader import CommonLoader
from .exceptions import (VulnSourceException, FetchException, ParseException,
                         UnsupportedSourceException, ConfigException, ValidationException)

__all__ = [
    'BaseFetcher',
    'BaseParser',
    'CommonLoader',
    'VulnSourceException',
    'FetchException',
    'ParseException',
    'UnsupportedSourceException',
    'ConfigException',
    'ValidationException'
]
