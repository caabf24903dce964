"""Readers for the TOML consist encoding (`.toml`)."""

from __future__ import annotations

import logging
import tomllib

from pydantic import ValidationError

from consist_formats.core.config import DEFAULT_SERIAL
from consist_formats.core.exceptions import ConsistParseError, MalformedFieldError
from consist_formats.core.units import to_meters_per_second
from consist_formats.formats.base import ConsistReader, VehicleReader
from consist_formats.models.consist import MaxVelocity, TrainConfig, Vehicle
from consist_formats.models.toml_schema import TomlConsistModel, TomlVehicleModel

LOGGER = logging.getLogger(__name__)

ENGINE_TYPE = "engine"
PATH_SEPARATOR = "/"


def parse_toml_model(text: str, *, source: str = "<toml>") -> TomlConsistModel:
    """Decode TOML text into the typed consist tree (unknown keys ignored)."""
    try:
        data = tomllib.loads(text)
    except tomllib.TOMLDecodeError as exc:
        raise ConsistParseError(f"{source}: invalid TOML: {exc}") from exc
    try:
        return TomlConsistModel.model_validate(data)
    except ValidationError as exc:
        raise ConsistParseError(f"{source}: TOML consist does not match schema: {exc}") from exc


class TomlConsistReader(ConsistReader):
    def __init__(self, text: str, *, source: str = "<toml>") -> None:
        self.text = text
        self.source = source

    def parse(self, train_config: TrainConfig) -> None:
        model = parse_toml_model(self.text, source=self.source)

        if model.name is not None:
            train_config.name = model.name
        train_config.serial = model.serial if model.serial is not None else DEFAULT_SERIAL
        if model.max_speed is not None:
            train_config.max_velocity = MaxVelocity(
                to_meters_per_second(model.max_speed.value, model.max_speed.unit)
            )
        train_config.durability = model.durability

        for entry in model.consist:
            train_config.vehicles.append(Vehicle.from_reader(TomlVehicleReader(entry)))
        LOGGER.debug("Parsed TOML consist %r with %d vehicles", train_config.name, len(train_config.vehicles))


class TomlVehicleReader(VehicleReader):
    def __init__(self, entry: TomlVehicleModel) -> None:
        self.entry = entry

    def parse(self, vehicle: Vehicle) -> None:
        entry = self.entry
        if entry.flip is not None:
            vehicle.flip = entry.flip

        segments = entry.path.split(PATH_SEPARATOR)
        if len(segments) != 2 or not all(segments):
            raise MalformedFieldError(
                f"vehicle path must look like 'folder/name', got {entry.path!r}"
            )
        vehicle.folder, vehicle.name = segments

        vehicle.is_engine = entry.type == ENGINE_TYPE
