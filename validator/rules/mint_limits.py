"""
Per-Request Limit Enforcement Rule

Caps the number of assets a single issuance request may ask for.
"""

from validator.core import ValidationRule, IssuanceContext
from validator.exceptions import RequestCapExceededError


class MintLimitRule(ValidationRule):
    """Enforces quantity <= max_per_request."""

    error_class = RequestCapExceededError

    def __init__(self):
        super().__init__(
            name="mint_limit",
            description="Enforces the per-request issuance limit"
        )

    def validate(self, context: IssuanceContext) -> bool:
        self.stats["validations_performed"] += 1

        per_request_limit = context.config.max_per_request
        if context.quantity > per_request_limit:
            self.stats["rejected"] += 1
            excess = context.quantity - per_request_limit
            context.add_error(
                self.name,
                f"Quantity {context.quantity} exceeds per-request limit "
                f"{per_request_limit} by {excess}"
            )
            return False

        self.stats["approved"] += 1
        return True
