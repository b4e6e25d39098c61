"""
Gated Mint - Metadata Resolution

Computes the metadata URI exposed for an asset from the reveal state, the
base URI and the per-asset URI overrides.
"""

import logging

from ledger.interfaces import LedgerAdapter
from registry.manager import ConfigurationStore
from registry.schema import CollectionConfig
from validator.exceptions import UnknownAssetError


def compose_uri(config: CollectionConfig, override: str, asset_id: int) -> str:
    """
    Reveal/override/base decision table.

    - not revealed: the placeholder URI, whatever else is configured
    - revealed, empty base: the override, which may be empty
    - revealed, base and override: base + override
    - revealed, base only: base + asset id + path extension
    """
    if not config.revealed:
        return config.not_revealed_uri

    base = config.base_uri
    if not base:
        return override
    if override:
        return f"{base}{override}"
    return f"{base}{asset_id}{config.path_extension}"


class MetadataResolver:
    """Resolves metadata URIs for issued assets."""

    def __init__(self, store: ConfigurationStore, ledger: LedgerAdapter):
        self.store = store
        self.ledger = ledger
        self.logger = logging.getLogger("nft.metadata")

    def resolve_uri(self, asset_id: int) -> str:
        """
        Resolve the metadata URI for asset_id.

        Raises:
            UnknownAssetError: the asset has not been issued
        """
        if not self.ledger.exists(asset_id):
            raise UnknownAssetError(asset_id)

        uri = compose_uri(self.store.config, self.store.token_uri_override(asset_id), asset_id)
        self.logger.debug(f"Resolved asset {asset_id} to {uri!r}")
        return uri
