from __future__ import annotations

import copy

import pytest

from conftest import APISERVER_RECORD, FakeFetcher
from k8s_vuln_db.sources.base.exceptions import ParseException, ValidationException
from k8s_vuln_db.sources.k8s_official.collector import K8sVulnDBCollector


@pytest.fixture
def collector(test_settings, fake_fetcher) -> K8sVulnDBCollector:
    return K8sVulnDBCollector(settings=test_settings, fetcher=fake_fetcher)


def test_collect_builds_validated_database(collector, fake_fetcher):
    vuln_db = collector.collect()

    assert [cve.id for cve in vuln_db.cves] == ["CVE-2023-2431", "CVE-2023-2728"]
    assert "CVE-2020-8554" not in fake_fetcher.requested
    assert collector.stats["excluded"] == 1
    assert collector.stats["cves_collected"] == 2


def test_assembled_records(collector):
    kubelet, apiserver = collector.collect().cves

    assert kubelet.component == "k8s.io/kubelet"
    assert kubelet.created_at == "2023-06-15T14:42:32Z"
    assert kubelet.urls == [
        "https://github.com/kubernetes/kubernetes/issues/118690",
        "https://www.cve.org/cverecord?id=CVE-2023-2431",
    ]
    assert apiserver.component == "k8s.io/apiserver"
    assert apiserver.to_dict()["affected"] == [
        {"ranges": [{"type": "SEMVER", "events": [{"introduced": "1.26.0"}, {"last_affected": "1.27.3"}]}]},
        {"ranges": [{"type": "SEMVER", "events": [{"introduced": "1.27.3"}, {"fixed": "1.27.5"}]}]},
    ]
    assert apiserver.to_dict()["cvssv3"] == {
        "vector": "CVSS:3.1/AV:N/AC:L/PR:L/UI:N/S:U/C:H/I:H/A:H",
        "score": 8.8,
    }


def test_bundled_advisory_ids_are_expanded(test_settings, feed):
    second = copy.deepcopy(APISERVER_RECORD)
    second["cveMetadata"]["cveId"] = "CVE-2023-2729"
    fetcher = FakeFetcher({"CVE-2023-2728": copy.deepcopy(APISERVER_RECORD), "CVE-2023-2729": second})
    feed["items"] = [dict(feed["items"][1], id="CVE-2023-2728, CVE-2023-2729")]

    vuln_db = K8sVulnDBCollector(settings=test_settings, fetcher=fetcher).parse_vuln_db_data(feed)

    assert fetcher.requested == ["CVE-2023-2728", "CVE-2023-2729"]
    assert [cve.id for cve in vuln_db.cves] == ["CVE-2023-2728", "CVE-2023-2729"]


def test_unsupported_external_url_skips_advisory(collector, fake_fetcher, feed):
    feed["items"][0]["external_url"] = "https://github.com/kubernetes/kubernetes/issues/118690"

    vuln_db = collector.parse_vuln_db_data(feed)

    assert [cve.id for cve in vuln_db.cves] == ["CVE-2023-2728"]
    assert fake_fetcher.requested == ["CVE-2023-2728"]
    assert collector.stats["errors"] == 1


def test_fetch_failure_skips_only_that_cve(test_settings, feed):
    fetcher = FakeFetcher({"CVE-2023-2728": copy.deepcopy(APISERVER_RECORD)})

    vuln_db = K8sVulnDBCollector(settings=test_settings, fetcher=fetcher).parse_vuln_db_data(feed)

    assert [cve.id for cve in vuln_db.cves] == ["CVE-2023-2728"]
    assert fetcher.requested == ["CVE-2023-2431", "CVE-2023-2728"]


def test_record_without_affected_versions_is_skipped(collector, fake_fetcher, feed):
    fake_fetcher.records["CVE-2023-2431"]["containers"]["cna"]["affected"][0]["versions"] = [
        {"status": "unaffected", "version": "1.28.0"},
    ]

    vuln_db = collector.parse_vuln_db_data(feed)

    assert [cve.id for cve in vuln_db.cves] == ["CVE-2023-2728"]
    assert collector.stats["skipped"] == 1


def test_feed_item_without_required_fields_is_skipped(collector, feed):
    del feed["items"][0]["external_url"]
    assert [cve.id for cve in collector.parse_vuln_db_data(feed).cves] == ["CVE-2023-2728"]


def test_incomplete_records_fail_validation(collector, feed):
    feed["items"][0]["summary"] = ""
    feed["items"][1]["date_published"] = ""

    with pytest.raises(ValidationException) as exc_info:
        collector.parse_vuln_db_data(feed)

    assert [str(v) for v in exc_info.value.violations] == [
        "Summary is missing on cve #CVE-2023-2431",
        "CreatedAt is missing on cve #CVE-2023-2728",
    ]


def test_feed_without_items_is_rejected(collector):
    with pytest.raises(ParseException):
        collector.parse_vuln_db_data({"title": "empty"})


@pytest.mark.parametrize(
    "versions",
    [
        [{"status": "affected", "version": 1.26}],
        ["v1.27.0"],
        [{"status": "affected", "version": "1.27.0", "lessThan": 127}],
    ],
)
def test_malformed_record_skips_only_that_cve(collector, fake_fetcher, feed, versions):
    fake_fetcher.records["CVE-2023-2431"]["containers"]["cna"]["affected"][0]["versions"] = versions

    vuln_db = collector.parse_vuln_db_data(feed)

    assert [cve.id for cve in vuln_db.cves] == ["CVE-2023-2728"]
    assert collector.stats["errors"] == 1
