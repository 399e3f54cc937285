"""
Configuration settings for the Kubernetes Vulnerability Database Collector
"""

from typing import List

from pydantic_settings import BaseSettings, SettingsConfigDict

class Settings(BaseSettings):
    """Collector settings, overridable through K8S_VULNDB_* environment variables"""

    # Feed endpoints
    K8S_FEED_URL: str = "https://kubernetes.io/docs/reference/issues-security/official-cve-feed/index.json"
    MITRE_API_URL: str = "https://cveawg.mitre.org/api/cve"
    CVE_LIST_URL: str = "https://www.cve.org/"

    # HTTP
    TIMEOUT_SECONDS: int = 30
    USER_AGENT: str = "K8sVulnDB-Collector/1.0"

    # Advisories that do not concern core Kubernetes components
    EXCLUDED_CVE_IDS: List[str] = ["CVE-2019-11255", "CVE-2020-10749", "CVE-2020-8554"]

    # Output
    OUTPUT_DIR: str = "k8s_vuln_db_output"
    LOG_LEVEL: str = "INFO"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="K8S_VULNDB_",
        case_sensitive=True,
        extra="ignore",
    )

settings = Settings()
