"""
Gated Mint - External Collaborator Contracts

Abstract interfaces for the trusted primitives the issuance controller relies
on. Concrete ledgers, role systems and payment rails plug in by subclassing.
"""

from abc import ABC, abstractmethod
from contextlib import contextmanager
from typing import Iterator


class LedgerError(Exception):
    """Raised when the ledger adapter reports a failed issuance."""
    pass


class LedgerAdapter(ABC):
    """
    Asset ledger contract.

    Implementations guarantee that ``issue`` is atomic and increases both the
    supply and the holder's balance by exactly one. ``issue`` is a suspension
    point: arbitrary external code may run before it returns.
    """

    @abstractmethod
    def current_supply(self) -> int:
        """Number of assets issued so far."""
        pass

    @abstractmethod
    def balance_of(self, holder: str) -> int:
        """Number of assets currently owned by holder."""
        pass

    @abstractmethod
    def issue(self, holder: str, asset_id: int) -> bool:
        """
        Issue asset_id to holder.

        Returns:
            True on success, False if the ledger refused the issuance
        """
        pass

    def exists(self, asset_id: int) -> bool:
        """Ids are dense and zero-based, so existence is a range check."""
        return 0 <= asset_id < self.current_supply()

    @contextmanager
    def transaction(self) -> Iterator[None]:
        """
        Scope of one atomic operation.

        The default assumes the host already reverts failed operations.
        Adapters holding their own state override this to roll back.
        """
        yield


class AccessGuard(ABC):
    """Privileged-role capability check."""

    @abstractmethod
    def is_privileged(self, caller: str) -> bool:
        pass


class PaymentTransport(ABC):
    """Value transfer primitive used when withdrawing the treasury."""

    @abstractmethod
    def send(self, destination: str, amount: int) -> bool:
        """
        Transfer amount to destination.

        Returns:
            True if the destination accepted the transfer
        """
        pass
