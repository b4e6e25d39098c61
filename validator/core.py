"""
Gated Mint Validator Core

Shared building blocks of the issuance validator: the context object passed
between rules, the abstract rule interface, and the receipt describing what a
successful request actually issued.
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Type

from registry.schema import CollectionConfig

from .exceptions import IssuanceError


class ValidationResult(Enum):
    """Validation result codes."""
    APPROVED = "approved"
    REJECTED = "rejected"


@dataclass
class IssuanceContext:
    """
    Point-in-time view of one issuance request.

    Supply and balance are read from the ledger once, before any rule runs,
    so every rule sees the same snapshot.
    """
    holder: str
    quantity: int
    payment: int
    config: CollectionConfig
    current_supply: int
    holder_balance: int

    validation_errors: List[str] = field(default_factory=list)
    validation_warnings: List[str] = field(default_factory=list)
    rule_results: Dict[str, bool] = field(default_factory=dict)

    @property
    def required_payment(self) -> int:
        return self.config.cost(self.quantity)

    def add_error(self, rule_name: str, message: str):
        """Add a validation error."""
        self.validation_errors.append(f"{rule_name}: {message}")
        self.rule_results[rule_name] = False

    def add_warning(self, rule_name: str, message: str):
        """Add a validation warning."""
        self.validation_warnings.append(f"{rule_name}: {message}")

    def mark_rule_passed(self, rule_name: str):
        """Mark a validation rule as passed."""
        self.rule_results[rule_name] = True

    def has_errors(self) -> bool:
        return len(self.validation_errors) > 0

    def get_summary(self) -> Dict[str, Any]:
        """Get validation summary."""
        return {
            "holder": self.holder,
            "quantity": self.quantity,
            "payment": self.payment,
            "required_payment": self.required_payment,
            "current_supply": self.current_supply,
            "holder_balance": self.holder_balance,
            "errors": self.validation_errors,
            "warnings": self.validation_warnings,
            "rules_passed": sum(1 for passed in self.rule_results.values() if passed),
            "rules_total": len(self.rule_results),
            "validation_result": (ValidationResult.REJECTED if self.has_errors()
                                  else ValidationResult.APPROVED).value
        }


class ValidationRule(ABC):
    """
    Abstract base class for issuance constraints.

    A rule returns False and records a message on the context when the
    constraint does not hold; ``violation`` turns that into the rule's
    specific error kind.
    """

    error_class: Type[IssuanceError] = IssuanceError

    def __init__(self, name: str, description: str):
        self.name = name
        self.description = description
        self.logger = logging.getLogger(f"validator.rules.{name}")
        self.stats = {
            "validations_performed": 0,
            "approved": 0,
            "rejected": 0
        }

    @abstractmethod
    def validate(self, context: IssuanceContext) -> bool:
        """
        Validate the issuance context.

        Args:
            context: Validation context containing request and ledger snapshot

        Returns:
            True if validation passes, False otherwise
        """
        pass

    def violation(self, context: IssuanceContext) -> IssuanceError:
        """Build the error raised when this rule rejects context."""
        messages = [e for e in context.validation_errors if e.startswith(f"{self.name}: ")]
        return self.error_class(messages[-1] if messages else None)

    def get_statistics(self) -> Dict[str, Any]:
        return {"name": self.name, **self.stats}


@dataclass
class IssuanceReceipt:
    """Outcome of a successful issuance request."""
    holder: str
    requested: int
    payment: int
    issued_ids: List[int] = field(default_factory=list)
    skipped: int = 0

    @property
    def issued(self) -> int:
        return len(self.issued_ids)

    @property
    def complete(self) -> bool:
        return self.skipped == 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "holder": self.holder,
            "requested": self.requested,
            "issued": self.issued,
            "issued_ids": list(self.issued_ids),
            "skipped": self.skipped,
            "payment": self.payment
        }
