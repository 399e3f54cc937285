"""
Kubernetes CVE feed fetcher

Retrieves the official Kubernetes CVE index feed (JSON Feed 1.1) and the CVE JSON 5
detail record of each advisory from the MITRE CVE services API.
"""

from typing import Any, Dict, List, Optional

from ..base.base_fetcher import BaseFetcher
from .config import K8S_CVE_FEED_CONFIG
from ...config import Settings, settings as default_settings


class K8sCveFeedFetcher(BaseFetcher):
    """Fetches the index feed and per-CVE registry records"""

    def __init__(self, settings: Optional[Settings] = None):
        settings = settings or default_settings
        super().__init__(K8S_CVE_FEED_CONFIG['source_name'], {
            'feed_url': settings.K8S_FEED_URL,
            'mitre_api_url': settings.MITRE_API_URL,
            'timeout_seconds': settings.TIMEOUT_SECONDS,
            'user_agent': settings.USER_AGENT,
        })
        self.feed_url = settings.K8S_FEED_URL
        self.mitre_api_url = settings.MITRE_API_URL.rstrip('/')
        self.validate_config()

    def get_required_config_fields(self) -> List[str]:
        return ['feed_url', 'mitre_api_url']

    def fetch_index_feed(self) -> Dict[str, Any]:
        """Download the Kubernetes official CVE feed"""
        self.logger.info(f"Fetching Kubernetes CVE feed from {self.feed_url}")
        return self._get_json(self.feed_url)

    def fetch_detail_record(self, cve_id: str) -> Dict[str, Any]:
        """Download the CVE JSON 5 record of one CVE"""
        return self._get_json(f"{self.mitre_api_url}/{cve_id}")
