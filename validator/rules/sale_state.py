"""
Sale State Rule

Issuance is only possible while the sale is switched on.
"""

from validator.core import ValidationRule, IssuanceContext
from validator.exceptions import SaleInactiveError


class SaleStateRule(ValidationRule):
    """Enforces sale_active == True."""

    error_class = SaleInactiveError

    def __init__(self):
        super().__init__(
            name="sale_state",
            description="Requires the sale to be active"
        )

    def validate(self, context: IssuanceContext) -> bool:
        self.stats["validations_performed"] += 1

        if not context.config.sale_active:
            self.stats["rejected"] += 1
            context.add_error(self.name, "Sale is not active")
            return False

        self.stats["approved"] += 1
        return True
