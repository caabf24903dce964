"""Typed tree for the TOML consist encoding.

Unknown keys are ignored at every level and values must already have the
declared TOML type (strict mode; integers are accepted for floats). Missing
optional keys keep the defaults declared here.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from consist_formats.core.config import DEFAULT_DURABILITY, DEFAULT_VEHICLE_TYPE


class SpeedValue(BaseModel):
    model_config = ConfigDict(extra="ignore", strict=True)

    value: float
    unit: str = "m/s"


class TomlVehicleModel(BaseModel):
    model_config = ConfigDict(extra="ignore", strict=True)

    path: str
    type: str = DEFAULT_VEHICLE_TYPE
    flip: bool | None = False


class TomlConsistModel(BaseModel):
    model_config = ConfigDict(extra="ignore", strict=True)

    name: str | None = None
    serial: int | None = None
    durability: float = DEFAULT_DURABILITY
    max_speed: SpeedValue | None = None
    consist: list[TomlVehicleModel] = Field(default_factory=list)
