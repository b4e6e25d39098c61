"""
Integration tests for the Gated Mint command line interface.
"""

import json
import logging
import os

import pytest
from click.testing import CliRunner

import cli.config as cli_config
from cli.main import cli
from registry.schema import Deployment


@pytest.fixture(autouse=True)
def isolated_config(monkeypatch):
    monkeypatch.setattr(cli_config, "CONFIG_SEARCH_PATHS", [])
    for key in list(os.environ):
        if key.startswith(cli_config.ENV_PREFIX):
            monkeypatch.delenv(key)
    monkeypatch.setenv("GATEDMINT_CLI_CONFIRM_DESTRUCTIVE", "false")


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def drop(tmp_path):
    return str(tmp_path / "drop.yml")


def init_args(path):
    return ["collection", "init", "-d", path, "--owner", "alice", "--max-supply", "100",
            "--max-per-holder", "10", "--max-per-request", "1", "--unit-price", "10",
            "--not-revealed-uri", "pending"]


class TestCollectionCommands:
    """Test collection administration commands."""

    def test_init_and_show(self, runner, drop):
        result = runner.invoke(cli, init_args(drop))
        assert result.exit_code == 0, result.output

        result = runner.invoke(cli, ["-o", "json", "collection", "show", "-d", drop])
        assert result.exit_code == 0, result.output
        data = json.loads(result.output)
        assert data["owner"] == "alice"
        assert data["max_supply"] == 100
        assert data["sale_active"] is False

    def test_init_refuses_overwrite(self, runner, drop):
        runner.invoke(cli, init_args(drop))
        result = runner.invoke(cli, init_args(drop))

        assert result.exit_code != 0
        assert "already exists" in result.output

    def test_set_and_toggle(self, runner, drop):
        runner.invoke(cli, init_args(drop))

        result = runner.invoke(cli, ["collection", "set", "-d", drop,
                                     "unit_price", "25", "--caller", "alice"])
        assert result.exit_code == 0, result.output

        result = runner.invoke(cli, ["collection", "toggle-sale", "-d", drop, "--caller", "alice"])
        assert result.exit_code == 0, result.output
        assert "sale_active = True" in result.output

        saved = Deployment.from_file(drop)
        assert saved.collection.unit_price == 25
        assert saved.collection.sale_active is True

    def test_unauthorized_caller(self, runner, drop):
        runner.invoke(cli, init_args(drop))

        result = runner.invoke(cli, ["collection", "toggle-sale", "-d", drop, "--caller", "mallory"])

        assert result.exit_code == 1
        assert "[Unauthorized]" in result.output
        assert Deployment.from_file(drop).collection.sale_active is False

    def test_invalid_value(self, runner, drop):
        runner.invoke(cli, init_args(drop))

        result = runner.invoke(cli, ["collection", "set", "-d", drop,
                                     "max_per_request", "lots", "--caller", "alice"])

        assert result.exit_code == 1
        assert "Invalid value" in result.output

    def test_missing_deployment(self, runner, tmp_path):
        result = runner.invoke(cli, ["collection", "show", "-d", str(tmp_path / "absent.yml")])
        assert result.exit_code != 0


class TestConfirmation:
    """Test prompting before configuration changes."""

    @pytest.fixture(autouse=True)
    def confirm_changes(self, monkeypatch):
        monkeypatch.setenv("GATEDMINT_CLI_CONFIRM_DESTRUCTIVE", "true")

    def test_declined_toggle_leaves_deployment(self, runner, drop):
        runner.invoke(cli, init_args(drop))

        result = runner.invoke(cli, ["collection", "toggle-sale", "-d", drop, "--caller", "alice"],
                               input="n\n")

        assert result.exit_code == 0, result.output
        assert "Switch sale_active from False to True?" in result.output
        assert Deployment.from_file(drop).collection.sale_active is False

    def test_confirmed_set_is_applied(self, runner, drop):
        runner.invoke(cli, init_args(drop))

        result = runner.invoke(cli, ["collection", "set", "-d", drop, "unit_price", "25",
                                     "--caller", "alice"], input="y\n")

        assert result.exit_code == 0, result.output
        assert "unit_price = 25" in result.output
        assert Deployment.from_file(drop).collection.unit_price == 25

    def test_declined_set_is_not_applied(self, runner, drop):
        runner.invoke(cli, init_args(drop))

        runner.invoke(cli, ["collection", "set", "-d", drop, "unit_price", "25",
                            "--caller", "alice"], input="n\n")

        assert Deployment.from_file(drop).collection.unit_price == 10


class TestMintCommands:
    """Test issuance dry-run commands."""

    def test_check_rejects_in_order(self, runner, drop):
        runner.invoke(cli, init_args(drop))

        result = runner.invoke(cli, ["-o", "json", "mint", "check", "-d", drop,
                                     "--holder", "bob", "--quantity", "1", "--payment", "10"])
        assert result.exit_code == 1
        assert json.loads(result.output)["error"] == "SaleInactive"

        runner.invoke(cli, ["collection", "toggle-sale", "-d", drop, "--caller", "alice"])

        result = runner.invoke(cli, ["-o", "json", "mint", "check", "-d", drop,
                                     "--holder", "bob", "--quantity", "2", "--payment", "20"])
        assert result.exit_code == 1
        assert json.loads(result.output)["error"] == "RequestCapExceeded"

    def test_check_accepts(self, runner, drop):
        runner.invoke(cli, init_args(drop))
        runner.invoke(cli, ["collection", "toggle-sale", "-d", drop, "--caller", "alice"])

        result = runner.invoke(cli, ["-o", "json", "mint", "check", "-d", drop,
                                     "--holder", "bob", "--quantity", "1", "--payment", "10",
                                     "--supply", "42"])
        assert result.exit_code == 0, result.output
        data = json.loads(result.output)
        assert data["result"] == "ok"
        assert data["first_asset_id"] == 42

    def test_check_holder_cap(self, runner, drop):
        runner.invoke(cli, init_args(drop))
        runner.invoke(cli, ["collection", "toggle-sale", "-d", drop, "--caller", "alice"])

        result = runner.invoke(cli, ["-o", "json", "mint", "check", "-d", drop,
                                     "--holder", "bob", "--quantity", "1", "--payment", "10",
                                     "--supply", "20", "--holder-balance", "10"])
        assert json.loads(result.output)["error"] == "HolderCapExceeded"


class TestUriCommands:
    """Test metadata resolution commands."""

    def test_resolve_across_reveal(self, runner, drop):
        runner.invoke(cli, init_args(drop))

        result = runner.invoke(cli, ["uri", "resolve", "-d", drop, "7", "--supply", "10"])
        assert result.exit_code == 0, result.output
        assert result.output.strip() == "pending"

        runner.invoke(cli, ["collection", "set", "-d", drop, "base_uri", "ipfs://x/",
                            "--caller", "alice"])
        runner.invoke(cli, ["collection", "toggle-reveal", "-d", drop, "--caller", "alice"])

        result = runner.invoke(cli, ["uri", "resolve", "-d", drop, "7", "--supply", "10"])
        assert result.output.strip() == "ipfs://x/7.json"

        result = runner.invoke(cli, ["collection", "set-token-uri", "-d", drop, "7",
                                     "seven.json", "--supply", "10", "--caller", "alice"])
        assert result.exit_code == 0, result.output

        result = runner.invoke(cli, ["uri", "resolve", "-d", drop, "7", "--supply", "10"])
        assert result.output.strip() == "ipfs://x/seven.json"

    def test_unknown_asset(self, runner, drop):
        runner.invoke(cli, init_args(drop))

        result = runner.invoke(cli, ["uri", "resolve", "-d", drop, "10", "--supply", "10"])
        assert result.exit_code == 1
        assert "[UnknownAsset]" in result.output


class TestConfigCommands:
    """Test configuration commands."""

    def test_get_and_validate(self, runner):
        result = runner.invoke(cli, ["config", "get", "cli.output_format"])
        assert result.exit_code == 0
        assert result.output.strip() == "table"

        result = runner.invoke(cli, ["config", "validate"])
        assert result.exit_code == 0
        assert "valid" in result.output

    def test_profile_and_sources(self, runner):
        result = runner.invoke(cli, ["-p", "development", "config", "show", "--sources"])
        assert result.exit_code == 0
        assert "profile:development" in result.output

    def test_set_invalid_value(self, runner):
        result = runner.invoke(cli, ["config", "set", "cli.output_format", "xml"])
        assert result.exit_code == 1
        assert "Invalid output format" in result.output

    def test_default_deployment_from_config(self, runner, tmp_path):
        mine = tmp_path / "mine.yml"
        settings = tmp_path / "settings.yml"
        settings.write_text(f"collection:\n  deployment_file: {mine}\n")
        runner.invoke(cli, init_args(str(mine)))

        result = runner.invoke(cli, ["-c", str(settings), "-o", "json", "collection", "show"])
        assert result.exit_code == 0, result.output
        assert json.loads(result.output)["owner"] == "alice"

    def test_audit_export(self, runner, drop, tmp_path):
        audit_path = tmp_path / "audit.json"
        settings = tmp_path / "settings.yml"
        settings.write_text(f"audit:\n  export_path: {audit_path}\n")
        runner.invoke(cli, init_args(drop))

        result = runner.invoke(cli, ["-c", str(settings), "collection", "toggle-sale",
                                     "-d", drop, "--caller", "alice"])
        assert result.exit_code == 0, result.output

        events = json.loads(audit_path.read_text())
        assert events[0]["operation"] == "set_sale_active"


class TestLogging:
    """Test CLI logging setup."""

    def test_verbosity_applies_to_cli_logger_only(self, runner):
        root_level = logging.getLogger().level

        result = runner.invoke(cli, ["-vv", "config", "get", "cli.output_format"])

        assert result.exit_code == 0, result.output
        assert logging.getLogger("gatedmint-cli").level == logging.DEBUG
        assert logging.getLogger().level == root_level
