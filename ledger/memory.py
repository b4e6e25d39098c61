"""
Gated Mint - In-Memory Collaborators

Reference implementations of the ledger, access guard and payment transport.
Used by the CLI dry-run commands and throughout the test-suite.
"""

import logging
from contextlib import contextmanager
from threading import RLock
from typing import Callable, Dict, Iterable, Iterator, List, Optional, Set, Tuple

from .interfaces import AccessGuard, LedgerAdapter, PaymentTransport


IssueHook = Callable[["InMemoryLedger", str, int], None]


class InMemoryLedger(LedgerAdapter):
    """
    Dictionary-backed asset ledger.

    Ownership is tracked per asset id. The optional ``on_issue`` hook runs
    after every successful issuance and may call back into the ledger, which
    is how receiver callbacks behave on real chains.
    """

    def __init__(self, on_issue: Optional[IssueHook] = None):
        self.owners: Dict[int, str] = {}
        self.balances: Dict[str, int] = {}
        self.on_issue = on_issue
        self.refuse_ids: Set[int] = set()
        self._lock = RLock()
        self.logger = logging.getLogger("ledger.memory")

    @classmethod
    def from_snapshot(cls, supply: int, balances: Optional[Dict[str, int]] = None,
                      unassigned_holder: str = "unassigned") -> 'InMemoryLedger':
        """
        Rebuild a ledger holding supply assets.

        Ids are handed out in order to the holders in balances; any remainder
        belongs to unassigned_holder.
        """
        balances = balances or {}
        if supply < 0 or any(count < 0 for count in balances.values()):
            raise ValueError("Supply and balances must be non-negative")
        if sum(balances.values()) > supply:
            raise ValueError(f"Balances total {sum(balances.values())} exceeds supply {supply}")

        ledger = cls()
        holders = [holder for holder, count in balances.items() for _ in range(count)]
        for asset_id in range(supply):
            holder = holders[asset_id] if asset_id < len(holders) else unassigned_holder
            ledger.owners[asset_id] = holder
            ledger.balances[holder] = ledger.balances.get(holder, 0) + 1
        return ledger

    def current_supply(self) -> int:
        return len(self.owners)

    def balance_of(self, holder: str) -> int:
        return self.balances.get(holder, 0)

    def owner_of(self, asset_id: int) -> Optional[str]:
        return self.owners.get(asset_id)

    def exists(self, asset_id: int) -> bool:
        return asset_id in self.owners

    def issue(self, holder: str, asset_id: int) -> bool:
        with self._lock:
            if asset_id in self.owners or asset_id in self.refuse_ids:
                self.logger.debug(f"Refused issuance of asset {asset_id} to {holder}")
                return False

            self.owners[asset_id] = holder
            self.balances[holder] = self.balances.get(holder, 0) + 1

        if self.on_issue is not None:
            self.on_issue(self, holder, asset_id)

        return True

    def transfer(self, asset_id: int, new_owner: str) -> None:
        """Move an asset without any cap checks."""
        with self._lock:
            previous = self.owners[asset_id]
            self.owners[asset_id] = new_owner
            self.balances[previous] -= 1
            self.balances[new_owner] = self.balances.get(new_owner, 0) + 1

    @contextmanager
    def transaction(self) -> Iterator[None]:
        with self._lock:
            snapshot = (dict(self.owners), dict(self.balances))
            try:
                yield
            except Exception:
                self.owners, self.balances = snapshot
                self.logger.debug("Rolled back ledger transaction")
                raise


class OwnerAccessGuard(AccessGuard):
    """Single-owner privilege model."""

    def __init__(self, owner: str):
        self.owner = owner

    def is_privileged(self, caller: str) -> bool:
        return bool(self.owner) and caller == self.owner

    def transfer_ownership(self, caller: str, new_owner: str) -> bool:
        if not self.is_privileged(caller):
            return False
        self.owner = new_owner
        return True


class InMemoryTransport(PaymentTransport):
    """Credits destinations in a dictionary; listed destinations reject."""

    def __init__(self, rejecting: Optional[Iterable[str]] = None):
        self.credited: Dict[str, int] = {}
        self.transfers: List[Tuple[str, int]] = []
        self.rejecting = set(rejecting or [])

    def send(self, destination: str, amount: int) -> bool:
        if destination in self.rejecting:
            return False

        self.credited[destination] = self.credited.get(destination, 0) + amount
        self.transfers.append((destination, amount))
        return True
