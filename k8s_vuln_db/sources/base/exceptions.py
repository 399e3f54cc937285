"""
Custom Exceptions for the Kubernetes Vulnerability Database Collector

Purpose: Standardized error handling across the feed fetcher, the CVE record parser
and the batch validator
Usage: Fetchers, parsers and the collector raise these for consistent error reporting
Related Files: Used by sources/k8s_official/*

Exception Hierarchy:
- VulnSourceException (base)
  ├── FetchException (data retrieval errors)
  ├── ParseException (data parsing errors)
  ├── UnsupportedSourceException (detail record hosted outside the CVE registry)
  ├── ConfigException (configuration errors)
  └── ValidationException (aggregated validation violations)
"""

from typing import List, Optional


class VulnSourceException(Exception):
    """Base exception for feed collection, record parsing and database output"""

    def __init__(self, message: str, source_name: str = None, details: dict = None):
        self.source_name = source_name
        self.details = details or {}
        super().__init__(message)

    def __str__(self):
        if self.source_name:
            return f"[{self.source_name}] {super().__str__()}"
        return super().__str__()

class FetchException(VulnSourceException):
    """Raised when the feed or a CVE record cannot be downloaded"""

    def __init__(self, message: str, source_name: str = None,
                 status_code: int = None, url: str = None, **kwargs):
        self.status_code = status_code
        self.url = url
        details = {'status_code': status_code, 'url': url, **kwargs}
        super().__init__(message, source_name, details)

class ParseException(VulnSourceException):
    """Raised when a feed document or CVE record cannot be decoded"""

    def __init__(self, message: str, source_name: str = None,
                 raw_data_sample: str = None, **kwargs):
        self.raw_data_sample = raw_data_sample
        details = {'raw_data_sample': raw_data_sample, **kwargs}
        super().__init__(message, source_name, details)

class UnsupportedSourceException(VulnSourceException):
    """Raised when an advisory points at a detail record outside the CVE registry"""

    def __init__(self, message: str, source_name: str = None,
                 external_url: str = None, **kwargs):
        self.external_url = external_url
        details = {'external_url': external_url, **kwargs}
        super().__init__(message, source_name, details)

class ConfigException(VulnSourceException):
    """Raised when a required endpoint or setting is missing"""

    def __init__(self, message: str, source_name: str = None,
                 config_key: str = None, **kwargs):
        self.config_key = config_key
        details = {'config_key': config_key, **kwargs}
        super().__init__(message, source_name, details)

class ValidationException(VulnSourceException):
    """
    Raised when the assembled database fails validation.

    Carries every violation found across the batch, not only the first one.
    """

    def __init__(self, message: str, source_name: str = None,
                 violations: Optional[List] = None, **kwargs):
        self.violations = list(violations or [])
        details = {'violation_count': len(self.violations), **kwargs}
        super().__init__(message, source_name, details)

    def __str__(self):
        lines = [super().__str__()]
        lines.extend(f"  - {violation}" for violation in self.violations)
        return "\n".join(lines)
