"""
Per-Holder Limit Rule

Point-in-time check of the requesting holder's balance. Assets moved to the
holder afterwards by the ledger are not re-validated, so a holder may later
end up above the cap.
"""

from validator.core import ValidationRule, IssuanceContext
from validator.exceptions import HolderCapExceededError


class HolderLimitRule(ValidationRule):
    """Enforces holder_balance + quantity <= max_balance_per_holder."""

    error_class = HolderCapExceededError

    def __init__(self):
        super().__init__(
            name="holder_limit",
            description="Enforces the maximum number of assets per holder"
        )

    def validate(self, context: IssuanceContext) -> bool:
        self.stats["validations_performed"] += 1

        balance = context.holder_balance
        limit = context.config.max_balance_per_holder
        new_balance = balance + context.quantity

        if new_balance > limit:
            self.stats["rejected"] += 1
            context.add_error(
                self.name,
                f"Holder {context.holder} would own {new_balance} assets, "
                f"limit is {limit} (currently {balance})"
            )
            return False

        self.stats["approved"] += 1
        self.logger.debug(f"Holder {context.holder} balance {balance} + {context.quantity} <= {limit}")
        return True
