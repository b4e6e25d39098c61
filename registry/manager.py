"""
Gated Mint - Configuration Store

Owns the collection configuration and the per-asset URI override map. Every
mutation is a single-field change gated by the access guard.
"""

import logging
from typing import Any, Dict, Optional

from ledger.interfaces import AccessGuard
from validator.audit_logger import AuditLogger, get_audit_logger
from validator.exceptions import UnauthorizedError

from .schema import CollectionConfig, Deployment


# Fields an administrator may set directly. max_supply is immutable.
SETTABLE_FIELDS = (
    "unit_price",
    "not_revealed_uri",
    "base_uri",
    "path_extension",
    "max_balance_per_holder",
    "max_per_request",
)


class ConfigurationStore:
    """Privileged access to the collection configuration."""

    def __init__(
        self,
        config: CollectionConfig,
        guard: AccessGuard,
        token_uris: Optional[Dict[int, str]] = None,
        audit_logger: Optional[AuditLogger] = None
    ):
        self.config = config
        self.guard = guard
        self.token_uris: Dict[int, str] = dict(token_uris or {})
        self.audit = audit_logger or get_audit_logger()
        self.logger = logging.getLogger("registry.store")

    @classmethod
    def from_deployment(cls, deployment: Deployment, guard: AccessGuard,
                        audit_logger: Optional[AuditLogger] = None) -> 'ConfigurationStore':
        return cls(
            config=deployment.collection.model_copy(),
            guard=guard,
            token_uris=deployment.token_uris,
            audit_logger=audit_logger
        )

    def authorize(self, caller: str, operation: str) -> None:
        """Raise UnauthorizedError unless caller is privileged."""
        if not self.guard.is_privileged(caller):
            self.logger.warning(f"Unauthorized {operation} attempt by {caller}")
            self.audit.log_security_event(caller, operation, UnauthorizedError.code)
            raise UnauthorizedError(f"{caller} is not permitted to {operation}")

    def _set(self, caller: str, field_name: str, value: Any) -> Any:
        operation = f"set_{field_name}"
        self.authorize(caller, operation)

        old_value = getattr(self.config, field_name)
        setattr(self.config, field_name, value)
        new_value = getattr(self.config, field_name)

        self.logger.info(f"{field_name} changed from {old_value!r} to {new_value!r} by {caller}")
        self.audit.log_configuration_change(caller, operation, old_value, new_value)
        return new_value

    def update(self, caller: str, field_name: str, value: Any) -> Any:
        """Set any administrator-settable field by name."""
        if field_name not in SETTABLE_FIELDS:
            raise ValueError(f"Field {field_name!r} cannot be set; settable: {', '.join(SETTABLE_FIELDS)}")
        return self._set(caller, field_name, value)

    def toggle_sale(self, caller: str) -> bool:
        return self._set(caller, "sale_active", not self.config.sale_active)

    def toggle_reveal(self, caller: str) -> bool:
        return self._set(caller, "revealed", not self.config.revealed)

    def set_unit_price(self, caller: str, price: int) -> int:
        return self._set(caller, "unit_price", price)

    def set_not_revealed_uri(self, caller: str, uri: str) -> str:
        return self._set(caller, "not_revealed_uri", uri)

    def set_base_uri(self, caller: str, uri: str) -> str:
        return self._set(caller, "base_uri", uri)

    def set_path_extension(self, caller: str, extension: str) -> str:
        return self._set(caller, "path_extension", extension)

    def set_max_balance_per_holder(self, caller: str, limit: int) -> int:
        return self._set(caller, "max_balance_per_holder", limit)

    def set_max_per_request(self, caller: str, limit: int) -> int:
        return self._set(caller, "max_per_request", limit)

    def set_token_uri(self, caller: str, asset_id: int, uri: str) -> None:
        """Set the URI override for one asset. Existence is checked by the caller."""
        operation = "set_token_uri"
        self.authorize(caller, operation)

        old_value = self.token_uris.get(asset_id, "")
        if uri:
            self.token_uris[asset_id] = uri
        else:
            self.token_uris.pop(asset_id, None)

        self.logger.info(f"URI override for asset {asset_id} set to {uri!r} by {caller}")
        self.audit.log_configuration_change(caller, operation, old_value, uri)

    def token_uri_override(self, asset_id: int) -> str:
        return self.token_uris.get(asset_id, "")

    def snapshot(self) -> Dict[str, Any]:
        """Describe the current configuration state."""
        return {
            **self.config.model_dump(),
            "token_uris": dict(self.token_uris),
        }

    def to_deployment(self, owner: str) -> Deployment:
        return Deployment(
            owner=owner,
            collection=self.config.model_copy(),
            token_uris=dict(self.token_uris)
        )
