"""
Base Parser for the Kubernetes Vulnerability Database Collector

Abstract base class for vulnerability record parsers.
Provides common parsing functionality and enforces consistent interface.

OBJECTIVE:
Common parsing infrastructure that turns decoded source documents into intermediate
records before range normalization and assembly.

RELATIONS TO LOCAL CODES:
- Integrates: Error handling from sources/base/exceptions.py
- Subclassed by: sources/k8s_official/parser.py (MITRE CVE JSON 5 records)
"""

import abc
import json
import logging
import re
from typing import Any, Dict, List, Sequence, Union

from .exceptions import ParseException


class BaseParser(abc.ABC):
    """Abstract base class for vulnerability source parsers"""

    def __init__(self, source_name: str, config: Dict[str, Any]):
        """
        Initialize parser with source configuration

        Args:
            source_name: Name of the vulnerability source
            config: Static source configuration dict
        """
        self.source_name = source_name
        self.config = config
        self.logger = logging.getLogger(f"parser.{source_name}")

        # Common CVE pattern
        self.cve_pattern = re.compile(r'CVE-\d{4}-\d{4,}')

    @abc.abstractmethod
    def parse_record(self, raw_record: Dict[str, Any]) -> Any:
        """
        Parse one decoded source record

        Args:
            raw_record: Decoded JSON document from the fetcher

        Returns:
            Source specific intermediate record
        """
        pass

    def parse_json(self, data: Union[str, bytes, Dict, List]) -> Union[Dict, List]:
        """Parse JSON data with error handling"""
        try:
            if isinstance(data, (str, bytes)):
                return json.loads(data)
            return data
        except json.JSONDecodeError as e:
            raise ParseException(f"Invalid JSON data: {e}", source_name=self.source_name,
                                 raw_data_sample=str(data)[:500])

    def expand_ids(self, raw_id: str) -> List[str]:
        """
        Split an advisory id that bundles several CVE identifiers

        "CVE-2023-1, CVE-2023-2" -> ["CVE-2023-1", "CVE-2023-2"]; single ids are
        returned as they are.
        """
        if ',' not in raw_id:
            return [raw_id.strip()]
        return [part.strip() for part in raw_id.split(',')
                if self.cve_pattern.fullmatch(part.strip())]

    @staticmethod
    def get_nested(data: Any, keys: Sequence[Union[str, int]], default: Any = None) -> Any:
        """Safely retrieve a nested value from dicts and lists"""
        current = data
        for key in keys:
            if isinstance(current, dict) and key in current:
                current = current[key]
            elif isinstance(current, list) and isinstance(key, int) and 0 <= key < len(current):
                current = current[key]
            else:
                return default
        return current

