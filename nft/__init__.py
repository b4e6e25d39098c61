"""
Gated Mint - Collection Package

Metadata resolution and the collection controller that exposes issuance,
metadata, administration and treasury operations.
"""

from .metadata import MetadataResolver, compose_uri
from .collections import Collection

__version__ = "1.0.0"

__all__ = [
    "MetadataResolver",
    "compose_uri",
    "Collection"
]
