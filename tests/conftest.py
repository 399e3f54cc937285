"""Shared fixtures: a small Kubernetes CVE feed and matching MITRE CVE records."""

from __future__ import annotations

import copy
from typing import Any

import pytest

from k8s_vuln_db.config import Settings
from k8s_vuln_db.sources.base.exceptions import FetchException

KUBELET_RECORD: dict[str, Any] = {
    "dataType": "CVE_RECORD",
    "cveMetadata": {"cveId": "CVE-2023-2431", "state": "PUBLISHED"},
    "containers": {
        "cna": {
            "affected": [
                {
                    "vendor": "Kubernetes",
                    "product": "kubelet",
                    "versions": [
                        {"status": "affected", "version": "v1.27.0",
                         "lessThanOrEqual": "v1.27.1", "versionType": "semver"},
                        {"status": "affected", "version": "v1.26.0",
                         "lessThanOrEqual": "v1.26.4", "versionType": "semver"},
                        {"status": "affected", "version": "0",
                         "lessThan": "v1.24.14", "versionType": "semver"},
                        {"status": "unaffected", "version": "v1.28.0"},
                    ],
                }
            ],
            "descriptions": [
                {"lang": "en", "value": "A security issue was discovered in Kubelet that "
                                        "allows pods to bypass the seccomp profile enforcement."},
            ],
            "metrics": [
                {"format": "CVSS", "cvssV3_1": {
                    "version": "3.1",
                    "vectorString": "CVSS:3.1/AV:L/AC:L/PR:H/UI:N/S:U/C:L/I:L/A:N"}},
            ],
        }
    },
}

APISERVER_RECORD: dict[str, Any] = {
    "dataType": "CVE_RECORD",
    "cveMetadata": {"cveId": "CVE-2023-2728", "state": "PUBLISHED"},
    "containers": {
        "cna": {
            "affected": [
                {
                    "vendor": "Kubernetes",
                    "product": "Kubernetes",
                    "versions": [
                        {"status": "affected", "version": "1.26"},
                        {"status": "affected", "version": "1.27.3", "lessThan": "1.27.5"},
                    ],
                }
            ],
            "descriptions": [
                {"lang": "en", "value": "Users may be able to launch containers that bypass the "
                                        "mountable secrets policy enforced by the "
                                        "ServiceAccount admission plugin in kube-apiserver."},
            ],
            "metrics": [
                {"other": {"type": "unknown"}},
                {"cvssV3_1": {
                    "vectorString": "CVSS:3.1/AV:N/AC:L/PR:L/UI:N/S:U/C:H/I:H/A:H"}},
            ],
        }
    },
}

FEED: dict[str, Any] = {
    "version": "https://jsonfeed.org/version/1.1",
    "title": "Kubernetes Vulnerability Announcements - CVE Feed",
    "items": [
        {
            "id": "CVE-2023-2431",
            "url": "https://github.com/kubernetes/kubernetes/issues/118690",
            "external_url": "https://www.cve.org/cverecord?id=CVE-2023-2431",
            "summary": "Bypass of seccomp profile enforcement",
            "content_text": "A security issue was discovered in Kubelet.",
            "date_published": "2023-06-15T14:42:32Z",
        },
        {
            "id": "CVE-2023-2728",
            "url": "https://github.com/kubernetes/kubernetes/issues/118640",
            "external_url": "https://www.cve.org/cverecord?id=CVE-2023-2728",
            "summary": "Bypassing enforce mountable secrets policy",
            "content_text": "The ServiceAccount admission plugin in kube-apiserver is affected.",
            "date_published": "2023-06-15T13:52:51Z",
        },
        {
            "id": "CVE-2020-8554",
            "url": "https://github.com/kubernetes/kubernetes/issues/97076",
            "external_url": "https://www.cve.org/cverecord?id=CVE-2020-8554",
            "summary": "Man in the middle using LoadBalancer or ExternalIPs",
            "content_text": "Affects all versions.",
            "date_published": "2020-12-07T00:00:00Z",
        },
    ],
}


class FakeFetcher:
    """Serves CVE records from memory and records every request."""

    def __init__(self, records: dict[str, dict[str, Any]], feed: dict[str, Any] | None = None):
        self.records = records
        self.feed = feed
        self.requested: list[str] = []
        self.closed = False

    def fetch_index_feed(self) -> dict[str, Any]:
        return copy.deepcopy(self.feed)

    def fetch_detail_record(self, cve_id: str) -> dict[str, Any]:
        self.requested.append(cve_id)
        if cve_id not in self.records:
            raise FetchException(f"404 for {cve_id}", url=cve_id, status_code=404)
        return copy.deepcopy(self.records[cve_id])

    def cleanup(self) -> None:
        self.closed = True


@pytest.fixture
def kubelet_record() -> dict[str, Any]:
    return copy.deepcopy(KUBELET_RECORD)


@pytest.fixture
def apiserver_record() -> dict[str, Any]:
    return copy.deepcopy(APISERVER_RECORD)


@pytest.fixture
def feed() -> dict[str, Any]:
    return copy.deepcopy(FEED)


@pytest.fixture
def fake_fetcher(feed) -> FakeFetcher:
    return FakeFetcher(
        {"CVE-2023-2431": copy.deepcopy(KUBELET_RECORD),
         "CVE-2023-2728": copy.deepcopy(APISERVER_RECORD)},
        feed=feed,
    )


@pytest.fixture
def test_settings() -> Settings:
    return Settings(OUTPUT_DIR="unused", TIMEOUT_SECONDS=5)
