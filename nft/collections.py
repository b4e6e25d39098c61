"""
Gated Mint - Collection Controller

The public surface of a limited-supply collection. Composes the configuration
store, issuance validator, metadata resolver and treasury around one ledger
and one access guard.
"""

import logging
from typing import Any, Dict, Optional

from ledger.interfaces import AccessGuard, LedgerAdapter, PaymentTransport
from ledger.memory import InMemoryLedger, InMemoryTransport, OwnerAccessGuard
from ledger.treasury import Treasury
from registry.manager import ConfigurationStore
from registry.schema import CollectionConfig, Deployment
from validator.audit_logger import AuditLogger, AuditResult, get_audit_logger
from validator.core import IssuanceContext, IssuanceReceipt
from validator.engine import IssuanceValidator
from validator.exceptions import IssuanceError, UnauthorizedError, UnknownAssetError

from .metadata import MetadataResolver


class Collection:
    """
    Limited-supply issuance controller.

    Every public operation runs to completion or raises; a raised operation
    leaves configuration, ledger and treasury unchanged.
    """

    def __init__(
        self,
        config: CollectionConfig,
        ledger: LedgerAdapter,
        guard: AccessGuard,
        transport: PaymentTransport,
        token_uris: Optional[Dict[int, str]] = None,
        audit_logger: Optional[AuditLogger] = None
    ):
        self.ledger = ledger
        self.guard = guard
        self.audit = audit_logger or get_audit_logger()
        self.store = ConfigurationStore(config, guard, token_uris=token_uris, audit_logger=self.audit)
        self.validator = IssuanceValidator(ledger)
        self.resolver = MetadataResolver(self.store, ledger)
        self.treasury = Treasury(guard, transport)
        self.logger = logging.getLogger("nft.collection")

    @classmethod
    def from_deployment(
        cls,
        deployment: Deployment,
        ledger: Optional[LedgerAdapter] = None,
        transport: Optional[PaymentTransport] = None,
        audit_logger: Optional[AuditLogger] = None
    ) -> 'Collection':
        """Build an owner-guarded collection, defaulting to in-memory collaborators."""
        return cls(
            config=deployment.collection.model_copy(),
            ledger=ledger if ledger is not None else InMemoryLedger(),
            guard=OwnerAccessGuard(deployment.owner),
            transport=transport if transport is not None else InMemoryTransport(),
            token_uris=deployment.token_uris,
            audit_logger=audit_logger
        )

    @property
    def config(self) -> CollectionConfig:
        return self.store.config

    # Issuance

    def request_issuance(self, caller: str, quantity: int, payment: int) -> IssuanceReceipt:
        """
        Issue quantity sequential assets to caller.

        Quantity zero passes validation and issues nothing; the payment is
        still kept. Overpayment is never refunded.

        Raises:
            SupplyExceededError, SaleInactiveError, HolderCapExceededError,
            InsufficientPaymentError, RequestCapExceededError: in that order
            of precedence
        """
        try:
            # Nested requests made from ledger callbacks deposit inside this
            # scope, so a failure here also unwinds their payments.
            with self.treasury.transaction():
                receipt = self.validator.issue(self.config, caller, quantity, payment)
                self.treasury.deposit(payment)
        except IssuanceError as e:
            self.audit.log_issuance(caller, AuditResult.REJECTED, amount=quantity,
                                    error_code=e.code, error_message=str(e))
            raise

        self.audit.log_issuance(
            caller,
            AuditResult.APPROVED if receipt.complete else AuditResult.WARNING,
            amount=quantity,
            asset_ids=list(receipt.issued_ids),
            context={"payment": payment, "skipped": receipt.skipped}
        )
        self.logger.info(f"{caller} received assets {receipt.issued_ids} for payment {payment}")
        return receipt

    def check_issuance(self, caller: str, quantity: int, payment: int) -> IssuanceContext:
        """Dry-run the issuance constraints without side effects."""
        return self.validator.check(self.config, caller, quantity, payment)

    def cost(self, quantity: int) -> int:
        return self.config.cost(quantity)

    def remaining_supply(self) -> int:
        return max(self.config.max_supply - self.ledger.current_supply(), 0)

    # Metadata

    def resolve_uri(self, asset_id: int) -> str:
        return self.resolver.resolve_uri(asset_id)

    def set_token_uri(self, caller: str, asset_id: int, uri: str) -> None:
        self.store.authorize(caller, "set_token_uri")
        if not self.ledger.exists(asset_id):
            raise UnknownAssetError(asset_id)
        self.store.set_token_uri(caller, asset_id, uri)

    # Administration

    def toggle_sale(self, caller: str) -> bool:
        return self.store.toggle_sale(caller)

    def toggle_reveal(self, caller: str) -> bool:
        return self.store.toggle_reveal(caller)

    def set_unit_price(self, caller: str, price: int) -> int:
        return self.store.set_unit_price(caller, price)

    def set_not_revealed_uri(self, caller: str, uri: str) -> str:
        return self.store.set_not_revealed_uri(caller, uri)

    def set_base_uri(self, caller: str, uri: str) -> str:
        return self.store.set_base_uri(caller, uri)

    def set_path_extension(self, caller: str, extension: str) -> str:
        return self.store.set_path_extension(caller, extension)

    def set_max_balance_per_holder(self, caller: str, limit: int) -> int:
        return self.store.set_max_balance_per_holder(caller, limit)

    def set_max_per_request(self, caller: str, limit: int) -> int:
        return self.store.set_max_per_request(caller, limit)

    # Treasury

    def withdraw(self, caller: str, destination: str) -> int:
        """Send the whole treasury balance to destination."""
        try:
            amount = self.treasury.withdraw(caller, destination)
        except UnauthorizedError as e:
            self.audit.log_security_event(caller, "withdraw", e.code)
            raise
        except IssuanceError as e:
            self.audit.log_treasury_operation(caller, AuditResult.ERROR, amount=self.treasury.balance,
                                              error_code=e.code, error_message=str(e))
            raise

        self.audit.log_treasury_operation(caller, AuditResult.APPROVED, amount=amount,
                                          context={"destination": destination})
        return amount

    def get_status(self) -> Dict[str, Any]:
        """Collection status summary."""
        supply = self.ledger.current_supply()
        return {
            "current_supply": supply,
            "max_supply": self.config.max_supply,
            "remaining_supply": self.remaining_supply(),
            "sale_active": self.config.sale_active,
            "revealed": self.config.revealed,
            "unit_price": self.config.unit_price,
            "treasury_balance": self.treasury.balance
        }
