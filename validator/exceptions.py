"""
Gated Mint - Issuance Exceptions

Each failure kind is a distinct exception class carrying a stable ``code`` so
clients can tell "sale not open" apart from "insufficient payment".
"""

from typing import Optional


class IssuanceError(Exception):
    """Base exception for all issuance controller failures."""

    code = "IssuanceError"

    def __init__(self, message: Optional[str] = None):
        super().__init__(message or self.code)


class SupplyExceededError(IssuanceError):
    """Raised when a request would push supply past the maximum."""
    code = "SupplyExceeded"


class SaleInactiveError(IssuanceError):
    """Raised when minting while the sale is closed."""
    code = "SaleInactive"


class HolderCapExceededError(IssuanceError):
    """Raised when a holder would exceed the per-holder cap."""
    code = "HolderCapExceeded"


class InsufficientPaymentError(IssuanceError):
    """Raised when the supplied payment does not cover the request."""

    code = "InsufficientPayment"

    def __init__(self, required: int, available: int, message: Optional[str] = None):
        self.required = required
        self.available = available
        if message is None:
            message = f"Insufficient payment: required {required}, supplied {available}"
        super().__init__(message)


class RequestCapExceededError(IssuanceError):
    """Raised when a single request asks for more than the per-request cap."""
    code = "RequestCapExceeded"


class UnauthorizedError(IssuanceError):
    """Raised when a non-privileged caller invokes an administrative operation."""
    code = "Unauthorized"


class UnknownAssetError(IssuanceError):
    """Raised when an asset id has not been issued."""

    code = "UnknownAsset"

    def __init__(self, asset_id: int, message: Optional[str] = None):
        self.asset_id = asset_id
        super().__init__(message or f"Unknown asset: {asset_id}")


class TransferFailedError(IssuanceError):
    """Raised when a withdrawal destination refuses the transfer."""
    code = "TransferFailed"
