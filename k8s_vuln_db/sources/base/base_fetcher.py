"""
Base Fetcher for the Kubernetes Vulnerability Database Collector

Abstract base class for source fetchers.
Provides a shared HTTP session and JSON retrieval; requests are made once, without retries.
"""

import abc
import logging
from typing import Any, Dict, List

import requests

from .exceptions import ConfigException, FetchException, ParseException


class BaseFetcher(abc.ABC):
    """Abstract base class for vulnerability source fetchers"""

    def __init__(self, source_name: str, config: Dict[str, Any]):
        """
        Initialize fetcher with source configuration

        Args:
            source_name: Name of the vulnerability source
            config: Runtime configuration (timeout_seconds, user_agent, ...)
        """
        self.source_name = source_name
        self.config = config
        self.logger = logging.getLogger(f"fetcher.{source_name}")

        self.timeout = config.get('timeout_seconds', 30)

        # Session for connection pooling
        self.session = requests.Session()
        self.session.headers.update({
            'User-Agent': config.get('user_agent', 'K8sVulnDB-Collector/1.0'),
            'Accept': 'application/json',
        })

    def _get_json(self, url: str, params: Dict[str, Any] = None) -> Any:
        """
        GET a JSON document

        Raises:
            FetchException: On connection errors and non 2xx responses
            ParseException: If the body is not valid JSON
        """
        self.logger.debug(f"GET {url}")
        try:
            response = self.session.get(url, params=params, timeout=self.timeout)
            response.raise_for_status()
        except requests.HTTPError as e:
            raise FetchException(f"Request to {url} failed: {e}", source_name=self.source_name,
                                 status_code=e.response.status_code if e.response is not None else None,
                                 url=url)
        except requests.RequestException as e:
            raise FetchException(f"Request to {url} failed: {e}", source_name=self.source_name,
                                 url=url)

        try:
            return response.json()
        except ValueError as e:
            raise ParseException(f"Invalid JSON returned by {url}: {e}",
                                 source_name=self.source_name,
                                 raw_data_sample=response.text[:500])

    def validate_config(self) -> bool:
        """
        Validate that required configuration is present

        Raises:
            ConfigException: If configuration is invalid
        """
        for field in self.get_required_config_fields():
            if not self.config.get(field):
                raise ConfigException(f"Missing required configuration field: {field}",
                                      source_name=self.source_name, config_key=field)
        return True

    @abc.abstractmethod
    def get_required_config_fields(self) -> List[str]:
        """Return list of required configuration fields for this source"""
        pass

    def cleanup(self):
        """Clean up resources (close sessions, etc.)"""
        if hasattr(self, 'session'):
            self.session.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.cleanup()
        return False
