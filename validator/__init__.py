"""
Gated Mint Validator Module

Issuance validation for the gated mint controller: ordered constraint rules,
the engine that executes validated requests against the ledger, the error
taxonomy and the audit trail.
"""

from .exceptions import (
    IssuanceError,
    SupplyExceededError,
    SaleInactiveError,
    HolderCapExceededError,
    InsufficientPaymentError,
    RequestCapExceededError,
    UnauthorizedError,
    UnknownAssetError,
    TransferFailedError
)

from .core import (
    IssuanceContext,
    IssuanceReceipt,
    ValidationRule,
    ValidationResult
)

from .engine import IssuanceValidator

from .rules import (
    SupplyLimitRule,
    SaleStateRule,
    HolderLimitRule,
    PaymentRule,
    MintLimitRule,
    default_rules
)

__all__ = [
    "IssuanceError",
    "SupplyExceededError",
    "SaleInactiveError",
    "HolderCapExceededError",
    "InsufficientPaymentError",
    "RequestCapExceededError",
    "UnauthorizedError",
    "UnknownAssetError",
    "TransferFailedError",
    "IssuanceContext",
    "IssuanceReceipt",
    "ValidationRule",
    "ValidationResult",
    "IssuanceValidator",
    "SupplyLimitRule",
    "SaleStateRule",
    "HolderLimitRule",
    "PaymentRule",
    "MintLimitRule",
    "default_rules"
]
