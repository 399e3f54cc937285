from __future__ import annotations

import pytest

from k8s_vuln_db.sources.k8s_official.models import RawVersionField, Version
from k8s_vuln_db.sources.k8s_official.version_ranges import (Comparator, build_version_ranges,
                                                             extract_bounds)


def affected(version="", less_than="", less_than_or_equal="", status="affected"):
    return RawVersionField(version=version, less_than=less_than,
                           less_than_or_equal=less_than_or_equal, status=status)


@pytest.mark.parametrize(
    "upper, point, comparator, expected",
    [
        ("1.27.1", "1.27.0", Comparator.LESS_EQUAL, ("1.27.0", "1.27.1")),
        ("1.27.1", "", Comparator.LESS_EQUAL, ("0", "1.27.1")),
        ("1.27.1", "0", Comparator.LESS_EQUAL, ("0", "1.27.1")),
        ("1.27.1", "*", Comparator.LESS_EQUAL, ("0", "1.27.1")),
        ("1.27.1", "1.27.1", Comparator.LESS_EQUAL, ("1.27.0", "1.27.1")),
        ("1.24.14", "1.24.0", Comparator.LESS_THAN, ("1.24.0", "")),
        ("1.24.14", "1.24.14", Comparator.LESS_THAN, ("1.24.0", "")),
        ("", "1.2.3", None, ("1.2.3", "1.2.3")),
    ],
)
def test_extract_bounds(upper, point, comparator, expected):
    assert extract_bounds(upper, point, comparator) == expected


def test_release_boundary_fix_affects_everything_before():
    versions, requires_merge = build_version_ranges([affected(version="1.2.0", less_than="1.2.0")])
    assert versions == [Version(introduced="0", fixed="1.2.0")]
    assert requires_merge is False


def test_prior_to_series_becomes_fixed_boundary():
    versions, _ = build_version_ranges([affected(version="prior to 1.5")])
    assert versions == [Version(introduced="0", fixed="1.5.0")]


def test_less_than_keeps_lower_bound():
    versions, _ = build_version_ranges([affected(version="v1.26.0", less_than="v1.26.5")])
    assert versions == [Version(introduced="1.26.0", fixed="1.26.5")]


def test_less_equal_gives_last_affected():
    versions, _ = build_version_ranges([affected(version="1.27.0", less_than_or_equal="1.27.1")])
    assert versions == [Version(introduced="1.27.0", last_affected="1.27.1")]


def test_bare_patch_version_is_point_range():
    versions, requires_merge = build_version_ranges([affected(version="1.19.3")])
    assert versions == [Version(introduced="1.19.3", last_affected="1.19.3")]
    assert requires_merge is False


def test_series_marker_requires_merge():
    versions, requires_merge = build_version_ranges([affected(version="1.26")])
    assert versions == [Version(introduced="1.26")]
    assert requires_merge is True


def test_wildcard_series_requires_merge():
    versions, requires_merge = build_version_ranges([affected(version="1.27.0", less_than="1.27.*")])
    assert versions == [Version(introduced="1.27")]
    assert requires_merge is True


def test_unaffected_and_rejected_entries_are_skipped():
    versions, _ = build_version_ranges([
        affected(version="1.28.0", status="unaffected"),
        affected(version="n/a"),
        affected(version="1.2.0", less_than="unspecified"),
        affected(version="1.25.2"),
    ])
    assert versions == [Version(introduced="1.25.2", last_affected="1.25.2")]


def test_encounter_order_is_preserved():
    versions, _ = build_version_ranges([
        affected(version="1.27.0", less_than_or_equal="1.27.1"),
        affected(version="1.26.0", less_than_or_equal="1.26.4"),
        affected(version="0", less_than="1.24.14"),
    ])
    assert [v.introduced for v in versions] == ["1.27.0", "1.26.0", "0"]
