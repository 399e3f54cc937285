"""
Data model for the Kubernetes vulnerability database

RawVersionField -> Version -> Event / Range / Affected -> AdvisoryRecord -> K8sVulnDB

Output keys follow the OSV range vocabulary (introduced / fixed / last_affected).
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List

from .config import K8S_CVE_FEED_CONFIG

SEMVER = K8S_CVE_FEED_CONFIG['range_type']


@dataclass
class RawVersionField:
    """One entry of a CVE record's affected ``versions`` list"""
    version: str = ""
    less_than: str = ""
    less_than_or_equal: str = ""
    status: str = ""
    version_type: str = ""

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "RawVersionField":
        return cls(
            version=data.get('version') or "",
            less_than=data.get('lessThan') or "",
            less_than_or_equal=data.get('lessThanOrEqual') or "",
            status=data.get('status') or "",
            version_type=data.get('versionType') or "",
        )


@dataclass
class Version:
    """
    Normalized affected range of one advisory.

    ``introduced`` of "0" means from the beginning. ``fixed`` wins over
    ``last_affected`` when events are built.
    """
    introduced: str = ""
    fixed: str = ""
    last_affected: str = ""


class EventKind(Enum):
    INTRODUCED = "introduced"
    FIXED = "fixed"
    LAST_AFFECTED = "last_affected"


@dataclass(frozen=True)
class Event:
    """A single range boundary; exactly one kind per event"""
    kind: EventKind
    value: str

    def to_dict(self) -> Dict[str, str]:
        return {self.kind.value: self.value}


@dataclass
class Range:
    events: List[Event] = field(default_factory=list)
    range_type: str = SEMVER

    def to_dict(self) -> Dict[str, Any]:
        return {
            'type': self.range_type,
            'events': [event.to_dict() for event in self.events],
        }


@dataclass
class Affected:
    ranges: List[Range] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {'ranges': [r.to_dict() for r in self.ranges]}


@dataclass
class Cvss:
    vector: str = ""
    score: float = 0.0

    def to_dict(self) -> Dict[str, Any]:
        return {'vector': self.vector, 'score': self.score}


@dataclass
class DetailRecord:
    """Fields extracted from one MITRE CVE JSON 5 record"""
    component: str = ""
    description: str = ""
    affected_versions: List[Version] = field(default_factory=list)
    cvss: Cvss = field(default_factory=Cvss)
    severity: str = ""


@dataclass(frozen=True)
class AdvisoryRecord:
    """Final output unit: one CVE of the Kubernetes feed"""
    id: str
    created_at: str
    component: str
    affected: List[Affected]
    summary: str
    description: str
    urls: List[str]
    cvss: Cvss
    severity: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.id,
            'created_at': self.created_at,
            'summary': self.summary,
            'component': self.component,
            'description': self.description,
            'affected': [a.to_dict() for a in self.affected],
            'urls': list(self.urls),
            'cvssv3': self.cvss.to_dict(),
            'severity': self.severity,
        }


@dataclass
class K8sVulnDB:
    cves: List[AdvisoryRecord] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {'cves': [cve.to_dict() for cve in self.cves]}


@dataclass(frozen=True)
class Violation:
    """One structural problem found by the validator"""
    cve_id: str
    field_name: str
    message: str

    def __str__(self):
        return f"{self.message} on cve #{self.cve_id}"
