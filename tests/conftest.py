"""
Pytest configuration and fixtures for Gated Mint tests.
"""

import pytest

from ledger.memory import InMemoryLedger, InMemoryTransport, OwnerAccessGuard
from nft.collections import Collection
from registry.schema import CollectionConfig, Deployment
from validator.audit_logger import AuditLogger


OWNER = "owner"


@pytest.fixture
def audit_logger():
    """Isolated audit logger for each test."""
    return AuditLogger({"log_to_logger": False})


@pytest.fixture
def base_config():
    """Open sale: 100 supply, price 10, 10 per holder, 1 per request."""
    return CollectionConfig(
        max_supply=100,
        unit_price=10,
        max_balance_per_holder=10,
        max_per_request=1,
        sale_active=True,
        not_revealed_uri="pending",
        base_uri="ipfs://x/",
        path_extension=".json"
    )


@pytest.fixture
def ledger():
    return InMemoryLedger()


@pytest.fixture
def guard():
    return OwnerAccessGuard(OWNER)


@pytest.fixture
def transport():
    return InMemoryTransport(rejecting=["rejector"])


@pytest.fixture
def collection(base_config, ledger, guard, transport, audit_logger):
    """Collection over in-memory collaborators."""
    return Collection(
        config=base_config,
        ledger=ledger,
        guard=guard,
        transport=transport,
        audit_logger=audit_logger
    )


@pytest.fixture
def sample_deployment(base_config):
    return Deployment(owner=OWNER, collection=base_config, token_uris={3: "special.json"})


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line(
        "markers", "unit: mark test as a unit test"
    )
    config.addinivalue_line(
        "markers", "integration: mark test as an integration test"
    )


def pytest_collection_modifyitems(config, items):
    """Add markers based on test file paths."""
    for item in items:
        if "unit" in str(item.fspath):
            item.add_marker(pytest.mark.unit)
        elif "integration" in str(item.fspath):
            item.add_marker(pytest.mark.integration)
