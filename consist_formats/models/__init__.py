"""Consist data model, TOML typed tree and table contracts.

- `consist`: the canonical records every reader populates.
- `toml_schema`: pydantic shape of the TOML encoding.
- `schemas`: dataframe contracts for exported tables (checked by `validate`,
  which needs pandas and is imported directly by table code).
"""

from __future__ import annotations

from consist_formats.models.consist import (
    Consist,
    LoadData,
    LoadPosition,
    LoadState,
    MaxVelocity,
    TrainConfig,
    Vehicle,
    validate_vehicle,
)
from consist_formats.models.schemas import CONSIST_SUMMARY, VEHICLES, TableSchema

__all__ = [
    "Consist",
    "LoadData",
    "LoadPosition",
    "LoadState",
    "MaxVelocity",
    "TrainConfig",
    "Vehicle",
    "TableSchema",
    "VEHICLES",
    "CONSIST_SUMMARY",
    "validate_vehicle",
]
