"""
Gated Mint - Registry Schema Models

Pydantic models for the collection configuration record and the deployment
document that seeds it.
"""

import json
from pathlib import Path
from typing import Dict, Union

import yaml
from pydantic import BaseModel, ConfigDict, Field, field_validator


class CollectionConfig(BaseModel):
    """
    Configuration record controlling issuance and metadata resolution.

    Assignments are validated one field at a time. There is deliberately no
    cross-field validation: a per-request cap above the per-holder cap is legal.
    """

    model_config = ConfigDict(validate_assignment=True)

    max_supply: int = Field(..., ge=0, frozen=True, description="Upper bound on issued assets")
    unit_price: int = Field(default=0, ge=0, description="Required payment per asset")
    max_balance_per_holder: int = Field(..., ge=0, description="Upper bound on one holder's assets")
    max_per_request: int = Field(..., ge=0, description="Upper bound on assets per request")
    sale_active: bool = Field(default=False)
    revealed: bool = Field(default=False)
    base_uri: str = Field(default="", description="Prefix for revealed metadata locations")
    not_revealed_uri: str = Field(default="", description="Placeholder metadata location")
    path_extension: str = Field(default=".json", description="Suffix appended to asset ids")

    def cost(self, quantity: int) -> int:
        """Payment required for quantity assets."""
        return quantity * self.unit_price


class Deployment(BaseModel):
    """Deployment document: initial configuration, owner and URI overrides."""

    owner: str = Field(..., min_length=1, description="Privileged identity")
    collection: CollectionConfig
    token_uris: Dict[int, str] = Field(default_factory=dict)

    @field_validator('token_uris')
    @classmethod
    def validate_token_uris(cls, v):
        """Override keys are asset ids and must be non-negative."""
        for asset_id in v:
            if asset_id < 0:
                raise ValueError(f'Asset id {asset_id} must be non-negative')
        return v

    @classmethod
    def from_file(cls, path: Union[str, Path]) -> 'Deployment':
        """Load a deployment from a YAML or JSON file."""
        path = Path(path)
        with open(path, 'r') as f:
            if path.suffix == '.json':
                data = json.load(f)
            else:
                data = yaml.safe_load(f)
        return cls.model_validate(data or {})

    def to_file(self, path: Union[str, Path]) -> None:
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        data = self.model_dump()
        with open(path, 'w') as f:
            if path.suffix == '.json':
                json.dump(data, f, indent=2)
            else:
                yaml.safe_dump(data, f, default_flow_style=False, sort_keys=False)
