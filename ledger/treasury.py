"""
Gated Mint - Treasury

Custody of the payments collected by successful issuance requests and the
privileged withdrawal of the whole balance.
"""

import logging
from contextlib import contextmanager
from threading import RLock
from typing import Iterator

from validator.exceptions import TransferFailedError, UnauthorizedError

from .interfaces import AccessGuard, PaymentTransport


class Treasury:
    """Accumulated payment balance held by the controller."""

    def __init__(self, guard: AccessGuard, transport: PaymentTransport, balance: int = 0):
        if balance < 0:
            raise ValueError("Treasury balance cannot be negative")

        self.guard = guard
        self.transport = transport
        self.balance = balance
        self._lock = RLock()
        self.logger = logging.getLogger("ledger.treasury")

    def deposit(self, amount: int) -> None:
        if amount < 0:
            raise ValueError(f"Cannot deposit negative amount {amount}")

        with self._lock:
            self.balance += amount

    @contextmanager
    def transaction(self) -> Iterator[None]:
        """Restore the balance if the enclosed block raises, including nested deposits."""
        with self._lock:
            snapshot = self.balance
            try:
                yield
            except Exception:
                self.balance = snapshot
                self.logger.debug(f"Rolled back treasury balance to {snapshot}")
                raise

    def withdraw(self, caller: str, destination: str) -> int:
        """
        Send the entire balance to destination.

        Args:
            caller: Identity requesting the withdrawal
            destination: Recipient of the funds

        Returns:
            Amount transferred

        Raises:
            UnauthorizedError: caller is not privileged
            TransferFailedError: destination refused; balance is left intact
        """
        if not self.guard.is_privileged(caller):
            raise UnauthorizedError(f"{caller} may not withdraw the treasury")

        with self._lock:
            amount = self.balance
            try:
                accepted = self.transport.send(destination, amount)
            except Exception as e:
                raise TransferFailedError(f"Transfer of {amount} to {destination} failed: {e}") from e

            if not accepted:
                raise TransferFailedError(f"Destination {destination} rejected transfer of {amount}")

            self.balance = 0

        self.logger.info(f"Withdrew {amount} to {destination}")
        return amount
