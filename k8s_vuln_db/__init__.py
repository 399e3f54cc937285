"""
Kubernetes Vulnerability Database Collector

Builds a normalized vulnerability database from the official Kubernetes CVE feed and the
MITRE CVE registry. Each record carries a canonical ``organization/repository`` component
and SEMVER ranges made of introduced / fixed / last_affected events.

Architecture:
- config/: Runtime settings (pydantic-settings)
- sources/base/: Common fetcher, parser and loader infrastructure
- sources/k8s_official/: Feed collector, version normalization engine and validator
- scripts/: Command line entry point

Usage:
    from k8s_vuln_db.sources.k8s_official import K8sVulnDBCollector

    db = K8sVulnDBCollector().collect()
"""

__version__ = "1.0.0"
