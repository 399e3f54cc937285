"""
Common Loader for the Kubernetes Vulnerability Database Collector

Writes the validated database to disk, one JSON document per CVE or the whole
database in a single file, and logs loading statistics.

RELATIONS TO LOCAL CODES:
- Consumes: K8sVulnDB from sources/k8s_official/collector.py
- Used by: scripts/run_collection.py
"""

import json
import logging
from pathlib import Path
from typing import Dict, Union

from .exceptions import VulnSourceException


class CommonLoader:
    """Writes vulnerability records as JSON files"""

    def __init__(self, source_name: str):
        """Initialize common loader for specific source"""
        self.source_name = source_name
        self.logger = logging.getLogger(f"loader.{source_name}")

        # Load statistics
        self.stats = {
            'total_processed': 0,
            'written': 0,
            'errors': 0
        }

    def load_vulnerabilities(self, vuln_db, output_dir: Union[str, Path]) -> Dict[str, int]:
        """
        Write one ``<CVE id>.json`` file per record

        Args:
            vuln_db: Database object exposing ``cves`` records with ``to_dict()``
            output_dir: Target directory, created when missing

        Returns:
            Dictionary with loading statistics
        """
        output_dir = Path(output_dir)
        output_dir.mkdir(parents=True, exist_ok=True)
        self.logger.info(f"Writing {len(vuln_db.cves)} vulnerabilities to {output_dir}")

        self.stats['total_processed'] = len(vuln_db.cves)
        for cve in vuln_db.cves:
            try:
                self._write_json(output_dir / f"{cve.id}.json", cve.to_dict())
                self.stats['written'] += 1
            except OSError as e:
                self.logger.error(f"Error writing vulnerability {cve.id}: {e}")
                self.stats['errors'] += 1

        self._log_loading_statistics()
        return self.stats.copy()

    def load_single_file(self, vuln_db, output_file: Union[str, Path]) -> Path:
        """Write the whole database into one JSON document"""
        output_file = Path(output_file)
        output_file.parent.mkdir(parents=True, exist_ok=True)
        try:
            self._write_json(output_file, vuln_db.to_dict())
        except OSError as e:
            raise VulnSourceException(f"Failed to write {output_file}: {e}",
                                      source_name=self.source_name)
        self.stats['total_processed'] = len(vuln_db.cves)
        self.stats['written'] = len(vuln_db.cves)
        self.logger.info(f"Database saved to {output_file}")
        return output_file

    def _write_json(self, path: Path, data: Dict) -> None:
        with open(path, 'w') as file:
            json.dump(data, file, indent=4)

    def _log_loading_statistics(self):
        """Log loading statistics"""
        self.logger.info("=== Loading Statistics ===")
        self.logger.info(f"Total Processed: {self.stats['total_processed']}")
        self.logger.info(f"Written: {self.stats['written']}")
        self.logger.info(f"Errors: {self.stats['errors']}")

    def get_loading_stats(self) -> Dict[str, int]:
        """Return current loading statistics"""
        return self.stats.copy()

    def reset_stats(self):
        """Reset loading statistics"""
        self.stats = {
            'total_processed': 0,
            'written': 0,
            'errors': 0
        }
