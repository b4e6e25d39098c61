"""
Gated Mint Validator Rules

One rule per issuance constraint. ``default_rules`` returns them in the order
they are evaluated; the first failing rule decides the reported error.
"""

from typing import List

from validator.core import ValidationRule

from .supply_limit import SupplyLimitRule
from .sale_state import SaleStateRule
from .holder_limit import HolderLimitRule
from .payment import PaymentRule
from .mint_limits import MintLimitRule


def default_rules() -> List[ValidationRule]:
    return [
        SupplyLimitRule(),
        SaleStateRule(),
        HolderLimitRule(),
        PaymentRule(),
        MintLimitRule()
    ]


__all__ = [
    "SupplyLimitRule",
    "SaleStateRule",
    "HolderLimitRule",
    "PaymentRule",
    "MintLimitRule",
    "default_rules"
]
