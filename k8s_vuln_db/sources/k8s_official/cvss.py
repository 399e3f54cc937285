"""
CVSS v3.0 / v3.1 base score calculation

score_vector("CVSS:3.1/AV:N/AC:L/PR:N/UI:N/S:U/C:H/I:H/A:H") -> ("CRITICAL", 9.8)

Vectors that cannot be scored return ("", 0.0); the validator reports those records.
"""

import logging
import math
from typing import Dict, Optional, Tuple

logger = logging.getLogger(__name__)

SUPPORTED_VERSIONS = ("3.0", "3.1")
BASE_METRICS = ("AV", "AC", "PR", "UI", "S", "C", "I", "A")

ATTACK_VECTOR = {'N': 0.85, 'A': 0.62, 'L': 0.55, 'P': 0.2}
ATTACK_COMPLEXITY = {'L': 0.77, 'H': 0.44}
PRIVILEGES_REQUIRED = {
    'U': {'N': 0.85, 'L': 0.62, 'H': 0.27},
    'C': {'N': 0.85, 'L': 0.68, 'H': 0.5},
}
USER_INTERACTION = {'N': 0.85, 'R': 0.62}
IMPACT = {'H': 0.56, 'L': 0.22, 'N': 0.0}

SEVERITY_RATINGS = [
    (9.0, 'CRITICAL'),
    (7.0, 'HIGH'),
    (4.0, 'MEDIUM'),
    (0.1, 'LOW'),
    (0.0, 'NONE'),
]


def parse_vector(vector: str) -> Optional[Tuple[str, Dict[str, str]]]:
    """Split a vector string into its CVSS version and base metric values"""
    if not vector:
        return None
    parts = vector.strip().split('/')
    prefix, _, cvss_version = parts[0].partition(':')
    if prefix != 'CVSS' or cvss_version not in SUPPORTED_VERSIONS:
        return None

    metrics = {}
    for part in parts[1:]:
        name, sep, value = part.partition(':')
        if not sep:
            return None
        metrics[name] = value
    if any(name not in metrics for name in BASE_METRICS):
        return None
    return cvss_version, metrics


def round_up(value: float, cvss_version: str) -> float:
    if cvss_version == "3.0":
        return math.ceil(value * 10) / 10
    # CVSS 3.1 Roundup avoids floating point artifacts
    int_input = round(value * 100000)
    if int_input % 10000 == 0:
        return int_input / 100000.0
    return (math.floor(int_input / 10000) + 1) / 10.0


def base_score(cvss_version: str, metrics: Dict[str, str]) -> float:
    scope = metrics['S']
    if scope not in PRIVILEGES_REQUIRED:
        raise KeyError(f"S:{scope}")

    iss = 1 - ((1 - IMPACT[metrics['C']]) * (1 - IMPACT[metrics['I']]) * (1 - IMPACT[metrics['A']]))
    if scope == 'U':
        impact = 6.42 * iss
    else:
        impact = 7.52 * (iss - 0.029) - 3.25 * (iss - 0.02) ** 15
    exploitability = (8.22 * ATTACK_VECTOR[metrics['AV']] * ATTACK_COMPLEXITY[metrics['AC']]
                      * PRIVILEGES_REQUIRED[scope][metrics['PR']] * USER_INTERACTION[metrics['UI']])

    if impact <= 0:
        return 0.0
    if scope == 'U':
        return round_up(min(impact + exploitability, 10), cvss_version)
    return round_up(min(1.08 * (impact + exploitability), 10), cvss_version)


def severity_rating(score: float) -> str:
    for threshold, rating in SEVERITY_RATINGS:
        if score >= threshold:
            return rating
    return 'NONE'


def score_vector(vector: str) -> Tuple[str, float]:
    """
    Interpret a CVSS v3 vector string.

    Returns:
        Tuple of severity label and base score, ("", 0.0) for unusable vectors
    """
    parsed = parse_vector(vector)
    if parsed is None:
        if vector:
            logger.warning(f"Unsupported CVSS vector: {vector}")
        return "", 0.0

    cvss_version, metrics = parsed
    try:
        score = base_score(cvss_version, metrics)
    except KeyError as e:
        logger.warning(f"Invalid CVSS metric value {e} in vector {vector}")
        return "", 0.0
    return severity_rating(score), score
