"""
Gated Mint - Configuration Registry

Configuration record, deployment document and the privileged store that
mutates them.
"""

from .schema import CollectionConfig, Deployment
from .manager import ConfigurationStore, SETTABLE_FIELDS

__all__ = [
    "CollectionConfig",
    "Deployment",
    "ConfigurationStore",
    "SETTABLE_FIELDS"
]
