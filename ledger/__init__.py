"""
Gated Mint - Ledger Collaborators

This package defines the contracts the issuance controller consumes from its
host environment (asset ledger, access guard, payment transport) together with
in-memory reference implementations and the treasury that holds payments.
"""

from .interfaces import (
    LedgerAdapter,
    AccessGuard,
    PaymentTransport,
    LedgerError
)

from .memory import (
    InMemoryLedger,
    OwnerAccessGuard,
    InMemoryTransport
)

from .treasury import Treasury

__all__ = [
    "LedgerAdapter",
    "AccessGuard",
    "PaymentTransport",
    "LedgerError",
    "InMemoryLedger",
    "OwnerAccessGuard",
    "InMemoryTransport",
    "Treasury"
]
