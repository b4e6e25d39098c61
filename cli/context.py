"""
Shared CLI context, error handling and deployment helpers for Gated Mint.
"""

import functools
import json
import logging
import sys
from pathlib import Path
from typing import Any, Dict, Optional

import click
import yaml
from pydantic import ValidationError

from nft.collections import Collection
from ledger.memory import InMemoryLedger
from registry.schema import Deployment
from validator.audit_logger import AuditLogger
from validator.exceptions import IssuanceError

from .config import ConfigurationManager


class CLIContext:
    """Global CLI context for sharing state across commands."""

    def __init__(self):
        self.config_file: Optional[str] = None
        self.profile: Optional[str] = None
        self.output_format: Optional[str] = None
        self.verbose: int = 0
        self.config_manager: Optional[ConfigurationManager] = None
        self.audit_logger: Optional[AuditLogger] = None
        self.logger = logging.getLogger('gatedmint-cli')

    def setup_logging(self):
        """Configure logging based on verbosity level."""
        log_levels = {
            0: logging.WARNING,
            1: logging.INFO,
            2: logging.DEBUG
        }

        level = log_levels.get(min(self.verbose, 2), logging.DEBUG)

        formatter = logging.Formatter(
            '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
        )
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(formatter)

        # One handler per invocation, bound to the current stderr
        for existing in list(self.logger.handlers):
            self.logger.removeHandler(existing)
        self.logger.setLevel(level)
        self.logger.addHandler(handler)

    def load_config(self):
        """Load hierarchical configuration and apply CLI settings."""
        self.config_manager = ConfigurationManager(self.config_file, self.profile)
        self.config_manager.load()

        if self.output_format is None:
            self.output_format = self.config_manager.get('cli.output_format', 'table')
        if not self.verbose:
            self.verbose = self.config_manager.get('cli.verbose', 0)

        self.audit_logger = AuditLogger({
            'max_events': self.config_manager.get('audit.max_events', 10000),
            'log_to_logger': self.config_manager.get('audit.log_to_logger', True)
        })

    def get_config(self, key: str, default: Any = None) -> Any:
        """Get configuration value with fallback to default."""
        if self.config_manager is None:
            return default
        return self.config_manager.get(key, default)

    def confirm_action(self, message: str) -> bool:
        """Ask before a configuration change unless cli.confirm_destructive is off."""
        if not self.get_config('cli.confirm_destructive', True):
            return True
        return click.confirm(message, default=True)

    def deployment_path(self, deployment: Optional[str]) -> Path:
        return Path(deployment or self.get_config('collection.deployment_file', 'deployment.yml'))

    def load_deployment(self, deployment: Optional[str]) -> Deployment:
        path = self.deployment_path(deployment)
        if not path.exists():
            raise click.FileError(str(path), hint="deployment file not found")
        self.logger.debug(f"Loading deployment from {path}")
        return Deployment.from_file(path)

    def open_collection(self, deployment: Deployment, supply: int = 0,
                        balances: Optional[Dict[str, int]] = None) -> Collection:
        """Collection over an in-memory ledger rebuilt from a supply snapshot."""
        ledger = InMemoryLedger.from_snapshot(supply, balances)
        return Collection.from_deployment(deployment, ledger=ledger, audit_logger=self.audit_logger)

    def export_audit(self):
        export_path = self.get_config('audit.export_path')
        if export_path and self.audit_logger is not None:
            count = self.audit_logger.export_audit_log(export_path)
            self.logger.info(f"Exported {count} audit events to {export_path}")

    def output(self, data: Any, format_override: Optional[str] = None):
        """Output data in specified format."""
        format_type = format_override or self.output_format or 'table'

        if format_type == "json":
            click.echo(json.dumps(data, indent=2, default=str))
        elif format_type == "yaml":
            click.echo(yaml.safe_dump(data, default_flow_style=False, sort_keys=False).rstrip())
        else:
            self._output_table(data)

    def _output_table(self, data: Any):
        """Output data in table format."""
        if isinstance(data, dict):
            for key, value in data.items():
                click.echo(f"{key:24} {value}")
        elif isinstance(data, list) and data:
            if isinstance(data[0], dict):
                headers = list(data[0].keys())
                click.echo(" | ".join(f"{h:15}" for h in headers))
                click.echo("-" * (len(headers) * 17))
                for item in data:
                    values = [str(item.get(h, ""))[:15] for h in headers]
                    click.echo(" | ".join(f"{v:15}" for v in values))
            else:
                for item in data:
                    click.echo(item)
        else:
            click.echo(str(data))


pass_context = click.make_pass_decorator(CLIContext, ensure=True)


def handle_cli_error(func):
    """Turn domain errors into CLI errors with a non-zero exit status."""
    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except IssuanceError as e:
            raise click.ClickException(f"[{e.code}] {e}")
        except ValidationError as e:
            raise click.ClickException(f"Invalid value: {e.errors()[0]['msg']}")
        except ValueError as e:
            raise click.ClickException(str(e))

    return wrapper
