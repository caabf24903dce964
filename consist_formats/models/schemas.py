"""Schema definitions for exported consist tables.

This module contains only:
- `TableSchema` (schema metadata container)
- concrete table schemas (`VEHICLES`, `CONSIST_SUMMARY`)
"""

from __future__ import annotations

from collections.abc import Mapping

from pydantic import BaseModel, Field


class TableSchema(BaseModel):
    """A simple schema for a pandas DataFrame (column-level contract)."""

    name: str
    required_columns: tuple[str, ...] = Field(default_factory=tuple)
    optional_columns: tuple[str, ...] = Field(default_factory=tuple)
    # pandas dtype strings, e.g. "string", "Float64", "boolean"
    dtypes: Mapping[str, str] = Field(default_factory=dict)
    non_null: tuple[str, ...] = Field(default_factory=tuple)

    def allowed_columns(self) -> set[str]:
        return set(self.required_columns) | set(self.optional_columns)


VEHICLES = TableSchema(
    name="vehicles",
    required_columns=("position", "uid", "folder", "name", "is_engine", "is_eot", "flip"),
    optional_columns=("n_loads",),
    dtypes={
        "position": "Int64",
        "uid": "Int64",
        "folder": "string",
        "name": "string",
        "is_engine": "boolean",
        "is_eot": "boolean",
        "flip": "boolean",
        # NA when the vehicle declares no cargo at all
        "n_loads": "Int64",
    },
    non_null=("position", "folder", "name"),
)

CONSIST_SUMMARY = TableSchema(
    name="consist_summary",
    required_columns=("path", "name", "encoding", "n_vehicles"),
    optional_columns=(
        "serial",
        "n_engines",
        "max_velocity_mps",
        "durability",
        "tcs_parameters_file_name",
        "sha256",
    ),
    dtypes={
        "path": "string",
        "name": "string",
        "encoding": "string",
        "n_vehicles": "Int64",
        "serial": "Int64",
        "n_engines": "Int64",
        "max_velocity_mps": "Float64",
        "durability": "Float64",
        "tcs_parameters_file_name": "string",
        "sha256": "string",
    },
    non_null=("path", "encoding"),
)
