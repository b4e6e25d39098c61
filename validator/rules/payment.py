"""
Payment Rule

The payment supplied with a request must cover quantity * unit_price.
Overpayment is accepted and kept; nothing is refunded.
"""

from validator.core import ValidationRule, IssuanceContext
from validator.exceptions import InsufficientPaymentError, IssuanceError


class PaymentRule(ValidationRule):
    """Enforces quantity * unit_price <= payment."""

    error_class = InsufficientPaymentError

    def __init__(self):
        super().__init__(
            name="payment",
            description="Requires payment covering the unit price of every asset"
        )

    def validate(self, context: IssuanceContext) -> bool:
        self.stats["validations_performed"] += 1

        required = context.required_payment
        if required > context.payment:
            self.stats["rejected"] += 1
            context.add_error(
                self.name,
                f"Payment {context.payment} is below required {required} "
                f"({context.quantity} x {context.config.unit_price})"
            )
            return False

        if context.payment > required:
            context.add_warning(
                self.name,
                f"Overpayment of {context.payment - required} will not be refunded"
            )

        self.stats["approved"] += 1
        return True

    def violation(self, context: IssuanceContext) -> IssuanceError:
        return InsufficientPaymentError(context.required_payment, context.payment)
