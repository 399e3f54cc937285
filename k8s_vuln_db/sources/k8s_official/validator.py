"""
Validator for the assembled vulnerability database

Every record is checked independently and every problem is collected, so one run
reports all incomplete records at once.
"""

import logging
from typing import Iterable, List

from ..base.exceptions import ValidationException
from ..base.version_utils import is_valid_version
from .components import split_component
from .config import K8S_CVE_FEED_CONFIG
from .events import flatten_affected
from .models import AdvisoryRecord, Violation

logger = logging.getLogger(__name__)


def check_record(cve: AdvisoryRecord) -> List[Violation]:
    """All violations of a single record"""
    violations = []

    def missing(field_name: str, label: str):
        violations.append(Violation(cve.id, field_name, f"{label} is missing"))

    if not cve.id:
        missing('id', 'id')
    if not cve.created_at:
        missing('created_at', 'CreatedAt')
    if not cve.summary:
        missing('summary', 'Summary')
    organization, repository = split_component(cve.component)
    if organization is None or not repository or repository.startswith('/'):
        missing('component', 'Component')
    if not cve.description:
        missing('description', 'Description')
    if not cve.affected:
        missing('affected', 'Affected version range')
    for v in flatten_affected(cve.affected):
        if not is_valid_version(v.introduced):
            violations.append(Violation(cve.id, 'affected',
                                        f"AffectedVersion From {v.introduced} is invalid"))
    if cve.cvss.score == 0:
        missing('cvssv3.score', 'CVSS score')
    if not cve.cvss.vector:
        missing('cvssv3.vector', 'CVSS vector')
    if not cve.severity:
        missing('severity', 'Severity')
    if not cve.urls:
        missing('urls', 'Urls')
    return violations


def collect_violations(cves: Iterable[AdvisoryRecord]) -> List[Violation]:
    violations = []
    for cve in cves:
        violations.extend(check_record(cve))
    return violations


def validate_cve_data(cves: Iterable[AdvisoryRecord]) -> None:
    """
    Validate the whole batch

    Raises:
        ValidationException: carrying every violation of every record
    """
    violations = collect_violations(cves)
    if violations:
        logger.error(f"Validation found {len(violations)} problems")
        raise ValidationException(f"{len(violations)} validation violations",
                                  source_name=K8S_CVE_FEED_CONFIG['source_name'],
                                  violations=violations)
