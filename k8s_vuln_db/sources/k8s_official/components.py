"""
Component identity lookup

Maps the free-form product names used by the CVE registry and the Kubernetes feed
("kube-apiserver", "Kubelet", "ingress-nginx", ...) to canonical lowercase
``organization/repository`` identifiers such as ``k8s.io/apiserver``.

A lookup miss is reported as None by resolve_organization. get_component_name still
builds an identifier in that case ("/minikube"); such records are reported by the
validator instead of being dropped here.
"""

import logging
import re
from typing import Optional, Tuple

from .config import K8S_CVE_FEED_CONFIG

logger = logging.getLogger(__name__)

UPSTREAM_REPOSITORIES = {
    'k8s.io': [
        'kubernetes',
        'apiserver',
        'kubelet',
        'kube-controller-manager',
        'kube-scheduler',
        'kube-proxy',
        'kubectl',
        'kube-aggregator',
        'ingress-nginx',
        'kops',
        'kubeadm',
    ],
    'sigs.k8s.io': [
        'secrets-store-csi-driver',
        'aws-iam-authenticator',
        'kustomize',
        'image-builder',
    ],
    'github.com/kubernetes-csi': [
        'csi-proxy',
        'external-snapshotter',
        'external-provisioner',
    ],
}

REPOSITORY_ALIASES = {
    'kube-apiserver': 'apiserver',
    'api server': 'apiserver',
    'kubernetes api server': 'apiserver',
    'kube-apiserver-aggregator': 'kube-aggregator',
    'nginx ingress controller': 'ingress-nginx',
    'ingress-nginx controller': 'ingress-nginx',
    'secrets store csi driver': 'secrets-store-csi-driver',
}

# Names looked for in advisory text, first occurrence in the text wins
TEXT_COMPONENTS = [
    'kube-apiserver',
    'kube-controller-manager',
    'kube-scheduler',
    'kube-proxy',
    'kube-aggregator',
    'kubelet',
    'kubectl',
    'kubeadm',
    'ingress-nginx',
    'secrets-store-csi-driver',
    'aws-iam-authenticator',
    'external-snapshotter',
    'external-provisioner',
    'csi-proxy',
    'image-builder',
    'kustomize',
    'kops',
]
TEXT_COMPONENT_PATTERN = re.compile(
    r'(?<![\w-])(' + '|'.join(re.escape(name) for name in TEXT_COMPONENTS) + r')(?![\w-])',
    re.IGNORECASE,
)

GENERIC_COMPONENT = K8S_CVE_FEED_CONFIG['generic_component']


def resolve_repository(name: str) -> str:
    """Canonical repository name; unknown names are returned lowercased"""
    key = (name or "").strip().lower()
    return REPOSITORY_ALIASES.get(key, key)


def resolve_organization(name: str) -> Optional[str]:
    """Organization hosting the component, None when the component is unknown"""
    repository = resolve_repository(name)
    if not repository:
        return None
    for organization, repositories in UPSTREAM_REPOSITORIES.items():
        if repository in repositories:
            return organization
    return None


def split_component(component: str) -> Tuple[Optional[str], str]:
    """
    Split a component identifier into its recognized organization and the rest.

    ``k8s.io/kubelet`` -> ("k8s.io", "kubelet"); ``/kubelet`` -> (None, "/kubelet")
    """
    component = (component or "").lower()
    for organization in sorted(UPSTREAM_REPOSITORIES, key=len, reverse=True):
        prefix = organization + "/"
        if component.startswith(prefix):
            return organization, component[len(prefix):]
    return None, component


def infer_component_from_text(text: str) -> str:
    """Guess the affected component from advisory prose, empty when nothing matches"""
    match = TEXT_COMPONENT_PATTERN.search(text or "")
    if match is None:
        return ""
    return match.group(1).lower()


def get_component_name(feed_component: str, registry_component: str) -> str:
    """
    Canonical component of an advisory.

    Args:
        feed_component: component inferred from the Kubernetes feed text
        registry_component: product named by the CVE registry record

    Returns:
        Lowercase ``organization/repository``; the organization part is empty when
        neither name is known
    """
    component = feed_component
    # prefer the registry component unless it is the generic product name
    if registry_component and registry_component.lower() != GENERIC_COMPONENT:
        component = registry_component

    organization = resolve_organization(component)
    if organization is not None:
        return f"{organization}/{resolve_repository(component)}".lower()

    organization = resolve_organization(registry_component)
    if organization is None:
        logger.warning(f"Unknown component {component!r} / {registry_component!r}")
    return f"{organization or ''}/{resolve_repository(registry_component)}".lower()
