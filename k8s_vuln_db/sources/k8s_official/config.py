"""
Kubernetes Official CVE Feed Configuration

OBJECTIVE: Static parameters for the Kubernetes CVE feed and the MITRE CVE registry records

INTEGRATION: Used by K8sCveFeedFetcher, MitreCveParser and K8sVulnDBCollector
RUNTIME OVERRIDES: config/settings.py (K8S_VULNDB_* environment variables)
"""

K8S_CVE_FEED_CONFIG = {
    'source_name': 'k8s_official_cve_feed',
    'display_name': 'Kubernetes Official CVE Feed',

    # Output schema
    'range_type': 'SEMVER',
    'affected_status': 'affected',
    'description_lang': 'en',

    # Component used by the registry for advisories not scoped to one binary
    'generic_component': 'kubernetes',

    # Version sanitation markers
    'version_prefixes': ['v', 'V'],
    'not_applicable_marker': 'n/a',
    'unspecified_marker': 'unspecified',
    'prior_to_phrase': 'prior to',
    'wildcard_suffix': '*',
    'series_wildcard_suffix': '.x',

    # Integration settings
    'required_fields': ['id', 'external_url'],
}
