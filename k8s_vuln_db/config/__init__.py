# Config package for the Kubernetes vulnerability database collector
from .settings import Settings, settings

__all__ = ['Settings', 'settings']
