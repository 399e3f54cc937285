"""
MITRE CVE JSON 5 record parser

Extracts the affected component, English description, CVSS v3 metrics and the
normalized affected version ranges from one registry record.

Record layout used:
{
  "cveMetadata": {"cveId": "CVE-2023-2431"},
  "containers": {
    "cna": {
      "affected": [{"product": "kubelet", "versions": [{"status": "affected",
                    "version": "1.27.0", "lessThanOrEqual": "1.27.1"}]}],
      "descriptions": [{"lang": "en", "value": "..."}],
      "metrics": [{"cvssV3_1": {"vectorString": "CVSS:3.1/AV:L/..."}}]
    }
  }
}
"""

from typing import Any, Dict, List, Tuple

from ..base.base_parser import BaseParser
from ..base.exceptions import ParseException
from .components import infer_component_from_text
from .config import K8S_CVE_FEED_CONFIG
from .cvss import score_vector
from .models import Cvss, DetailRecord, RawVersionField
from .range_merger import merge_version_ranges
from .version_ranges import build_version_ranges


class MitreCveParser(BaseParser):
    """Parses MITRE CVE records into DetailRecord objects"""

    def __init__(self):
        super().__init__(K8S_CVE_FEED_CONFIG['source_name'], K8S_CVE_FEED_CONFIG)

    def parse_record(self, raw_record: Dict[str, Any]) -> DetailRecord:
        """
        Parse one CVE JSON 5 record

        Raises:
            ParseException: If the record has no CNA container or a field has the wrong type
        """
        cve_id = self.get_nested(raw_record, ['cveMetadata', 'cveId'], 'unknown')
        cna = self.get_nested(raw_record, ['containers', 'cna'])
        if not isinstance(cna, dict):
            raise ParseException(f"CVE record {cve_id} has no CNA container",
                                 source_name=self.source_name,
                                 raw_data_sample=str(raw_record)[:500])

        try:
            return self._parse_cna(cna)
        except (TypeError, AttributeError, KeyError) as e:
            raise ParseException(f"Malformed CVE record {cve_id}: {e}",
                                 source_name=self.source_name,
                                 raw_data_sample=str(cna)[:500]) from e

    def _parse_cna(self, cna: Dict[str, Any]) -> DetailRecord:
        component, raw_versions = self._get_affected(cna.get('affected') or [])
        versions, requires_merge = build_version_ranges(raw_versions)
        if requires_merge:
            versions = merge_version_ranges(versions)

        description = self._get_description(cna.get('descriptions') or [])
        if component.lower() == self.config['generic_component']:
            component = infer_component_from_text(description)

        vector, severity, score = self._get_metrics(cna.get('metrics') or [])
        return DetailRecord(
            component=component,
            description=description,
            affected_versions=versions,
            cvss=Cvss(vector=vector, score=score),
            severity=severity,
        )

    def _get_affected(self, affected: List[Dict[str, Any]]) -> Tuple[str, List[RawVersionField]]:
        """First named product and every version entry of every product"""
        component = ""
        raw_versions = []
        for product in affected:
            if not component:
                component = product.get('product') or ""
            for entry in product.get('versions') or []:
                raw_versions.append(RawVersionField.from_dict(entry))
        return component, raw_versions

    def _get_description(self, descriptions: List[Dict[str, Any]]) -> str:
        """English description, empty when the record has none"""
        lang = self.config['description_lang']
        for description in descriptions:
            if description.get('lang') == lang:
                return description.get('value') or ""
        return ""

    def _get_metrics(self, metrics: List[Dict[str, Any]]) -> Tuple[str, str, float]:
        """
        Vector, severity and score

        CVSS 3.0 is preferred within a metric, the last metric carrying a v3 vector wins.
        """
        vector, severity, score = "", "", 0.0
        for metric in metrics:
            metric_vector = (self.get_nested(metric, ['cvssV3_0', 'vectorString'])
                             or self.get_nested(metric, ['cvssV3_1', 'vectorString']))
            if not metric_vector:
                continue
            vector = metric_vector
            severity, score = score_vector(vector)
        return vector, severity, score
