"""
Supply Limit Enforcement Rule

Rejects requests that would push the collection's supply past its fixed
maximum.
"""

from validator.core import ValidationRule, IssuanceContext
from validator.exceptions import SupplyExceededError


class SupplyLimitRule(ValidationRule):
    """Enforces current_supply + quantity <= max_supply."""

    error_class = SupplyExceededError

    def __init__(self):
        super().__init__(
            name="supply_limit",
            description="Enforces the maximum supply of the collection"
        )

    def validate(self, context: IssuanceContext) -> bool:
        self.stats["validations_performed"] += 1

        current_supply = context.current_supply
        maximum_supply = context.config.max_supply
        new_supply = current_supply + context.quantity

        if new_supply > maximum_supply:
            self.stats["rejected"] += 1
            remaining_capacity = max(maximum_supply - current_supply, 0)

            context.add_error(
                self.name,
                f"Quantity {context.quantity} would exceed maximum supply. "
                f"Current: {current_supply}, Maximum: {maximum_supply}, "
                f"Remaining capacity: {remaining_capacity}"
            )
            return False

        self.stats["approved"] += 1
        self.logger.debug(
            f"Supply limit validation passed: {current_supply} + {context.quantity} = "
            f"{new_supply} <= {maximum_supply}"
        )
        return True
