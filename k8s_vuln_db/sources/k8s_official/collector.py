"""
Kubernetes Vulnerability Database Collector

OBJECTIVE:
Build the normalized Kubernetes vulnerability database from the official CVE feed.

STEPS PROGRAM WILL FOLLOW:
1. Fetch the Kubernetes official CVE feed (index of advisory summaries)
2. Skip advisories about non-core components
3. Expand advisories that bundle several CVE ids
4. Fetch and parse the MITRE CVE record of every CVE
5. Drop CVEs without a component or without affected ranges
6. Assemble AdvisoryRecord objects from feed and registry fields
7. Validate the whole batch, raising every violation at once

ERROR HANDLING:
- Fetch / parse failure of one CVE record: that CVE is skipped
- Detail record outside the CVE registry: the remaining ids of that advisory are skipped
- Validation violations: aggregated into one ValidationException
"""

import logging
from typing import Any, Dict, List, Optional

from tqdm import tqdm

from ..base.exceptions import (FetchException, ParseException,
                               UnsupportedSourceException)
from .components import get_component_name, infer_component_from_text
from .config import K8S_CVE_FEED_CONFIG
from .events import build_affected
from .fetcher import K8sCveFeedFetcher
from .models import AdvisoryRecord, DetailRecord, K8sVulnDB
from .parser import MitreCveParser
from .validator import validate_cve_data
from ...config import Settings, settings as default_settings


class K8sVulnDBCollector:
    """Assembles and validates the Kubernetes vulnerability database"""

    def __init__(self, settings: Optional[Settings] = None,
                 fetcher: Optional[K8sCveFeedFetcher] = None,
                 parser: Optional[MitreCveParser] = None,
                 show_progress: bool = False):
        self.settings = settings or default_settings
        self.source_name = K8S_CVE_FEED_CONFIG['source_name']
        self.fetcher = fetcher or K8sCveFeedFetcher(self.settings)
        self.parser = parser or MitreCveParser()
        self.show_progress = show_progress
        self.logger = logging.getLogger(f"collector.{self.source_name}")

        self.stats = {
            'feed_items': 0,
            'excluded': 0,
            'cves_processed': 0,
            'cves_collected': 0,
            'skipped': 0,
            'errors': 0,
        }

    def collect(self) -> K8sVulnDB:
        """Fetch the feed and build the validated database"""
        feed = self.fetcher.fetch_index_feed()
        return self.parse_vuln_db_data(feed)

    def parse_vuln_db_data(self, feed: Dict[str, Any]) -> K8sVulnDB:
        """
        Build the database from a decoded feed document

        Args:
            feed: Kubernetes CVE feed with an ``items`` list

        Returns:
            K8sVulnDB holding every collected CVE

        Raises:
            ParseException: If the feed has no items list
            ValidationException: If any collected CVE is incomplete
        """
        items = feed.get('items') if isinstance(feed, dict) else None
        if not isinstance(items, list):
            raise ParseException("Kubernetes CVE feed has no items list",
                                 source_name=self.source_name,
                                 raw_data_sample=str(feed)[:500])

        self.stats['feed_items'] = len(items)
        cves: List[AdvisoryRecord] = []
        for item in tqdm(items, desc="Processing Kubernetes CVE feed", disable=not self.show_progress):
            cves.extend(self._process_item(item))

        self._log_statistics()
        validate_cve_data(cves)
        return K8sVulnDB(cves=cves)

    def _process_item(self, item: Dict[str, Any]) -> List[AdvisoryRecord]:
        missing = [f for f in K8S_CVE_FEED_CONFIG['required_fields'] if not item.get(f)]
        if missing:
            self.logger.warning(f"Skipping feed item {item.get('id', 'unknown')}: missing {missing}")
            self.stats['skipped'] += 1
            return []

        advisory_id = item['id']
        if advisory_id in self.settings.EXCLUDED_CVE_IDS:
            self.logger.debug(f"Skipping non-core advisory {advisory_id}")
            self.stats['excluded'] += 1
            return []

        records = []
        external_url = item['external_url']
        for cve_id in self.parser.expand_ids(advisory_id):
            self.stats['cves_processed'] += 1
            try:
                detail = self.get_detail_record(external_url, cve_id)
            except UnsupportedSourceException as e:
                self.logger.error(f"Skipping advisory {advisory_id}: {e}")
                self.stats['errors'] += 1
                break
            except (FetchException, ParseException) as e:
                self.logger.warning(f"Skipping {cve_id}: {e}")
                self.stats['errors'] += 1
                continue

            if not detail.component or not detail.affected_versions:
                self.logger.info(f"Skipping {cve_id}: no component or affected versions")
                self.stats['skipped'] += 1
                continue

            records.append(self.assemble_record(cve_id, item, detail))
            self.stats['cves_collected'] += 1
        return records

    def get_detail_record(self, external_url: str, cve_id: str) -> DetailRecord:
        """
        Fetch and parse the registry record of one CVE

        Raises:
            UnsupportedSourceException: If the advisory does not link to the CVE registry
        """
        if not external_url.startswith(self.settings.CVE_LIST_URL):
            raise UnsupportedSourceException(f"unsupported external url {external_url}",
                                             source_name=self.source_name,
                                             external_url=external_url)
        raw_record = self.fetcher.fetch_detail_record(cve_id)
        return self.parser.parse_record(raw_record)

    def assemble_record(self, cve_id: str, item: Dict[str, Any],
                        detail: DetailRecord) -> AdvisoryRecord:
        """Combine feed fields with the parsed registry record"""
        feed_component = infer_component_from_text(item.get('content_text') or "")
        return AdvisoryRecord(
            id=cve_id,
            created_at=item.get('date_published') or "",
            component=get_component_name(feed_component, detail.component),
            affected=build_affected(detail.affected_versions),
            summary=item.get('summary') or "",
            description=detail.description,
            urls=[url for url in (item.get('url'), item.get('external_url')) if url],
            cvss=detail.cvss,
            severity=detail.severity,
        )

    def _log_statistics(self):
        self.logger.info("=== Collection Statistics ===")
        self.logger.info(f"Feed items: {self.stats['feed_items']}")
        self.logger.info(f"Excluded advisories: {self.stats['excluded']}")
        self.logger.info(f"CVEs processed: {self.stats['cves_processed']}")
        self.logger.info(f"CVEs collected: {self.stats['cves_collected']}")
        self.logger.info(f"Skipped: {self.stats['skipped']}")
        self.logger.info(f"Errors: {self.stats['errors']}")
