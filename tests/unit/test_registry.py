"""
Tests for the Configuration Registry

Tests the CollectionConfig and Deployment models and the privileged
ConfigurationStore.
"""

import pytest
from pydantic import ValidationError

from ledger.memory import OwnerAccessGuard
from registry.manager import ConfigurationStore, SETTABLE_FIELDS
from registry.schema import CollectionConfig, Deployment
from validator.audit_logger import AuditEventType, AuditResult
from validator.exceptions import UnauthorizedError


@pytest.fixture
def store(base_config, audit_logger):
    return ConfigurationStore(base_config, OwnerAccessGuard("owner"), audit_logger=audit_logger)


class TestCollectionConfig:
    """Test CollectionConfig model."""

    def test_defaults(self):
        config = CollectionConfig(max_supply=5, max_balance_per_holder=2, max_per_request=1)

        assert config.sale_active is False
        assert config.revealed is False
        assert config.unit_price == 0
        assert config.base_uri == ""
        assert config.not_revealed_uri == ""
        assert config.path_extension == ".json"

    def test_max_supply_is_immutable(self, base_config):
        with pytest.raises(ValidationError):
            base_config.max_supply = 1000

        assert base_config.max_supply == 100

    def test_negative_values_rejected(self):
        with pytest.raises(ValidationError):
            CollectionConfig(max_supply=-1, max_balance_per_holder=1, max_per_request=1)

        config = CollectionConfig(max_supply=1, max_balance_per_holder=1, max_per_request=1)
        with pytest.raises(ValidationError):
            config.unit_price = -5
        assert config.unit_price == 0

    def test_no_cross_field_validation(self):
        """A per-request cap above the holder cap is legal."""
        config = CollectionConfig(max_supply=10, max_balance_per_holder=1, max_per_request=50)
        assert config.max_per_request == 50

    def test_cost(self, base_config):
        assert base_config.cost(3) == 30
        assert base_config.cost(0) == 0


class TestDeployment:
    """Test Deployment document loading and saving."""

    def test_yaml_file(self, sample_deployment, tmp_path):
        path = tmp_path / "drop.yml"
        sample_deployment.to_file(path)

        loaded = Deployment.from_file(path)
        assert loaded.owner == "owner"
        assert loaded.collection.max_supply == 100
        assert loaded.token_uris == {3: "special.json"}

    def test_json_file(self, tmp_path):
        path = tmp_path / "drop.json"
        path.write_text(
            '{"owner": "alice", "collection": {"max_supply": 3, '
            '"max_balance_per_holder": 1, "max_per_request": 1}, '
            '"token_uris": {"0": "zero.json"}}'
        )

        loaded = Deployment.from_file(path)
        assert loaded.collection.max_supply == 3
        assert loaded.token_uris == {0: "zero.json"}

    def test_negative_override_key_rejected(self, base_config):
        with pytest.raises(ValidationError):
            Deployment(owner="alice", collection=base_config, token_uris={-1: "x"})

    def test_owner_required(self, base_config):
        with pytest.raises(ValidationError):
            Deployment(owner="", collection=base_config)


class TestConfigurationStore:
    """Test ConfigurationStore privileged operations."""

    def test_toggles_flip_state(self, store):
        assert store.toggle_sale("owner") is False
        assert store.toggle_sale("owner") is True

        assert store.toggle_reveal("owner") is True
        assert store.config.revealed is True
        assert store.toggle_reveal("owner") is False

    def test_setters_are_idempotent(self, store):
        store.set_unit_price("owner", 25)
        store.set_unit_price("owner", 25)
        store.set_not_revealed_uri("owner", "ipfs://hidden")
        store.set_base_uri("owner", "ipfs://real/")
        store.set_path_extension("owner", "")
        store.set_max_balance_per_holder("owner", 3)
        store.set_max_per_request("owner", 20)

        config = store.config
        assert config.unit_price == 25
        assert config.not_revealed_uri == "ipfs://hidden"
        assert config.base_uri == "ipfs://real/"
        assert config.path_extension == ""
        assert config.max_balance_per_holder == 3
        assert config.max_per_request == 20

    @pytest.mark.parametrize("operation,args", [
        ("toggle_sale", ()),
        ("toggle_reveal", ()),
        ("set_unit_price", (1,)),
        ("set_not_revealed_uri", ("x",)),
        ("set_base_uri", ("x",)),
        ("set_path_extension", ("x",)),
        ("set_max_balance_per_holder", (1,)),
        ("set_max_per_request", (5,)),
        ("set_token_uri", (0, "x")),
    ])
    def test_unprivileged_caller_rejected(self, store, operation, args):
        before = store.snapshot()

        with pytest.raises(UnauthorizedError) as exc_info:
            getattr(store, operation)("mallory", *args)

        assert exc_info.value.code == "Unauthorized"
        assert store.snapshot() == before

    def test_unauthorized_attempt_is_audited(self, store, audit_logger):
        with pytest.raises(UnauthorizedError):
            store.set_unit_price("mallory", 0)

        events = audit_logger.get_events(event_type=AuditEventType.SECURITY_EVENT)
        assert len(events) == 1
        assert events[0].caller == "mallory"
        assert events[0].result == AuditResult.SUSPICIOUS
        assert events[0].error_code == "Unauthorized"

    def test_changes_are_audited(self, store, audit_logger):
        store.set_unit_price("owner", 99)

        events = audit_logger.get_events(event_type=AuditEventType.CONFIGURATION_CHANGE)
        assert events[-1].operation == "set_unit_price"
        assert events[-1].context == {"old_value": 10, "new_value": 99}

    def test_update_by_field_name(self, store):
        assert store.update("owner", "unit_price", "15") == 15
        assert store.config.unit_price == 15

    def test_update_rejects_unknown_or_immutable_fields(self, store):
        assert "max_supply" not in SETTABLE_FIELDS

        with pytest.raises(ValueError):
            store.update("owner", "max_supply", 5)
        with pytest.raises(ValueError):
            store.update("owner", "sale_active", True)

    def test_invalid_value_leaves_config_unchanged(self, store):
        with pytest.raises(ValidationError):
            store.set_max_per_request("owner", -1)

        assert store.config.max_per_request == 1

    def test_token_uri_overrides(self, store):
        assert store.token_uri_override(4) == ""

        store.set_token_uri("owner", 4, "four.json")
        assert store.token_uri_override(4) == "four.json"

        store.set_token_uri("owner", 4, "")
        assert 4 not in store.token_uris

    def test_snapshot_and_deployment(self, store):
        store.set_token_uri("owner", 1, "one.json")
        snapshot = store.snapshot()

        assert snapshot["max_supply"] == 100
        assert snapshot["token_uris"] == {1: "one.json"}

        deployment = store.to_deployment("owner")
        assert deployment.collection.unit_price == 10
        assert deployment.token_uris == {1: "one.json"}

    def test_from_deployment_copies_config(self, sample_deployment, audit_logger):
        store = ConfigurationStore.from_deployment(sample_deployment, OwnerAccessGuard("owner"),
                                                   audit_logger=audit_logger)
        store.set_unit_price("owner", 1)

        assert sample_deployment.collection.unit_price == 10
        assert store.token_uri_override(3) == "special.json"
