"""
Gated Mint Issuance Engine

Evaluates an issuance request against the ordered constraint rules and, when
all pass, drives the individual issuances into the ledger adapter.
"""

import logging
import time
from typing import Any, Dict, List, Optional

from ledger.interfaces import LedgerAdapter, LedgerError
from registry.schema import CollectionConfig

from .core import IssuanceContext, IssuanceReceipt, ValidationRule
from .rules import default_rules


class IssuanceValidator:
    """
    Validates and executes issuance requests.

    The five constraints are checked up front against a single ledger
    snapshot. During the issuance loop the supply cap is checked again before
    every item, because ``LedgerAdapter.issue`` may run external code that
    issues assets of its own. An item that would breach the cap at that point
    is skipped without error, so a receipt may report fewer assets than were
    requested.
    """

    def __init__(self, ledger: LedgerAdapter, rules: Optional[List[ValidationRule]] = None):
        self.ledger = ledger
        self.rules: List[ValidationRule] = rules if rules is not None else default_rules()
        self.logger = logging.getLogger("validator.engine")

        self.validation_stats = {
            "requests_processed": 0,
            "requests_approved": 0,
            "requests_rejected": 0,
            "assets_issued": 0,
            "assets_skipped": 0,
            "total_validation_time": 0.0
        }

    def build_context(self, config: CollectionConfig, holder: str,
                      quantity: int, payment: int) -> IssuanceContext:
        if quantity < 0:
            raise ValueError(f"Quantity must be non-negative, got {quantity}")
        if payment < 0:
            raise ValueError(f"Payment must be non-negative, got {payment}")

        return IssuanceContext(
            holder=holder,
            quantity=quantity,
            payment=payment,
            config=config,
            current_supply=self.ledger.current_supply(),
            holder_balance=self.ledger.balance_of(holder)
        )

    def validate(self, context: IssuanceContext) -> IssuanceContext:
        """
        Run every rule in order, stopping at the first failure.

        Raises:
            IssuanceError: the specific error kind of the first failing rule
        """
        start_time = time.time()
        self.validation_stats["requests_processed"] += 1

        try:
            for rule in self.rules:
                if not rule.validate(context):
                    self.validation_stats["requests_rejected"] += 1
                    error = rule.violation(context)
                    self.logger.info(f"Issuance rejected by {rule.name}: {error}")
                    raise error
                context.mark_rule_passed(rule.name)
        finally:
            self.validation_stats["total_validation_time"] += time.time() - start_time

        self.validation_stats["requests_approved"] += 1
        return context

    def check(self, config: CollectionConfig, holder: str,
              quantity: int, payment: int) -> IssuanceContext:
        """Validate a request without issuing anything."""
        return self.validate(self.build_context(config, holder, quantity, payment))

    def issue(self, config: CollectionConfig, holder: str,
              quantity: int, payment: int) -> IssuanceReceipt:
        """
        Validate and execute an issuance request.

        Args:
            config: Collection configuration to validate against
            holder: Identity receiving the assets
            quantity: Number of assets requested
            payment: Payment supplied with the request

        Returns:
            IssuanceReceipt listing the ids actually issued

        Raises:
            IssuanceError: a constraint failed; nothing was issued
            LedgerError: the ledger refused an issuance; the request is rolled back
        """
        with self.ledger.transaction():
            context = self.check(config, holder, quantity, payment)
            receipt = IssuanceReceipt(holder=holder, requested=quantity, payment=payment)

            for _ in range(quantity):
                asset_id = self.ledger.current_supply()
                if asset_id >= config.max_supply:
                    # Soft re-check: the hard pre-check passed but external
                    # issuance has since consumed the remaining supply.
                    receipt.skipped += 1
                    self.logger.warning(
                        f"Skipped issuance to {holder}: supply {asset_id} reached "
                        f"maximum {config.max_supply} during request"
                    )
                    continue

                if not self.ledger.issue(holder, asset_id):
                    raise LedgerError(f"Ledger refused issuance of asset {asset_id} to {holder}")
                receipt.issued_ids.append(asset_id)

        self.validation_stats["assets_issued"] += receipt.issued
        self.validation_stats["assets_skipped"] += receipt.skipped
        self.logger.debug(
            f"Issued {receipt.issued}/{quantity} assets to {holder}: {receipt.issued_ids} "
            f"(context: {context.get_summary()['rules_passed']} rules passed)"
        )
        return receipt

    def get_statistics(self) -> Dict[str, Any]:
        """Get validation statistics."""
        return {
            **self.validation_stats,
            "registered_rules": len(self.rules),
            "rules": [rule.get_statistics() for rule in self.rules]
        }
