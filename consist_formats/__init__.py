"""Load rail consist files (legacy STF `.con` and TOML) into one model."""

from __future__ import annotations

from consist_formats.core.data_loaders import load_consist
from consist_formats.core.exceptions import (
    ConsistError,
    ConsistParseError,
    MalformedFieldError,
    STFError,
    UnsupportedFormatError,
)
from consist_formats.core.units import to_meters_per_second
from consist_formats.models.consist import (
    Consist,
    LoadData,
    LoadPosition,
    LoadState,
    MaxVelocity,
    TrainConfig,
    Vehicle,
)

__all__ = [
    "load_consist",
    "to_meters_per_second",
    "Consist",
    "LoadData",
    "LoadPosition",
    "LoadState",
    "MaxVelocity",
    "TrainConfig",
    "Vehicle",
    "ConsistError",
    "ConsistParseError",
    "MalformedFieldError",
    "STFError",
    "UnsupportedFormatError",
]
