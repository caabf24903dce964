"""Canonical in-memory consist model.

Both file encodings populate these classes; downstream code never needs to
know which encoding a consist came from.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING

from consist_formats.core.config import (
    DEFAULT_CONSIST_NAME,
    DEFAULT_DURABILITY,
    DEFAULT_SERIAL,
    DEFAULT_VELOCITY_TOLERANCE,
)
from consist_formats.core.exceptions import MalformedFieldError

if TYPE_CHECKING:
    from consist_formats.formats.base import ConsistReader, VehicleReader


class _TokenEnum(Enum):
    """Enum resolvable from a file token, falling back to the first member."""

    @classmethod
    def default(cls):
        return next(iter(cls))

    @classmethod
    def from_token(cls, text: str | None):
        """Resolve an exact member name or a defined integer value; anything else is the default."""
        if text is None:
            return cls.default()
        if text in cls.__members__:
            return cls.__members__[text]
        try:
            return cls(int(text))
        except ValueError:
            return cls.default()


class LoadPosition(_TokenEnum):
    Center = 0
    Front = 1
    Rear = 2
    Above = 3
    Below = 4


class LoadState(_TokenEnum):
    Empty = 0
    Random = 1
    Full = 2


@dataclass(frozen=True)
class MaxVelocity:
    """Speed ceiling in m/s plus a small tolerance band."""

    limit: float
    tolerance: float = DEFAULT_VELOCITY_TOLERANCE


@dataclass
class LoadData:
    name: str
    folder: str
    position: LoadPosition = LoadPosition.Center
    state: LoadState = LoadState.Empty


@dataclass
class Vehicle:
    """One entry of a consist: engine, wagon or end-of-train device.

    `loads` is None when the entry declares no cargo at all; an (even empty)
    list means cargo was declared.
    """

    folder: str | None = None
    name: str | None = None
    uid: int = 0
    is_engine: bool = False
    is_eot: bool = False
    flip: bool = False
    loads: list[LoadData] | None = None

    @classmethod
    def from_reader(cls, reader: VehicleReader) -> Vehicle:
        vehicle = cls()
        reader.parse(vehicle)
        validate_vehicle(vehicle)
        return vehicle


def validate_vehicle(vehicle: Vehicle) -> Vehicle:
    """A finished vehicle must name its asset (folder + name)."""
    missing = [f for f in ("folder", "name") if not getattr(vehicle, f)]
    if missing:
        raise MalformedFieldError(
            f"vehicle uid={vehicle.uid} is missing required field(s): {missing}"
        )
    return vehicle


@dataclass
class TrainConfig:
    name: str = DEFAULT_CONSIST_NAME
    serial: int = DEFAULT_SERIAL
    max_velocity: MaxVelocity | None = None
    durability: float = DEFAULT_DURABILITY
    tcs_parameters_file_name: str = ""
    vehicles: list[Vehicle] = field(default_factory=list)

    @classmethod
    def from_reader(cls, reader: ConsistReader) -> TrainConfig:
        config = cls()
        reader.parse(config)
        return config


@dataclass(frozen=True)
class Consist:
    """A loaded consist file. Created once per load call."""

    name: str
    train_config: TrainConfig
    source_path: str | None = None
    encoding: str | None = None  # "stf" / "toml"

    @property
    def vehicles(self) -> list[Vehicle]:
        return self.train_config.vehicles
