"""Readers for the legacy STF consist encoding (`.con`).

The loader consumes the top-level `Train` token; everything from its opening
`(` onwards is handled here. Unknown tokens are skipped at every level, while
a missing delimiter is a fatal `STFError`.
"""

from __future__ import annotations

import logging

from consist_formats.formats.base import ConsistReader, VehicleReader
from consist_formats.io.stf import CLOSE, OPEN, STFReader, Units
from consist_formats.models.consist import (
    LoadData,
    LoadPosition,
    LoadState,
    MaxVelocity,
    TrainConfig,
    Vehicle,
)

LOGGER = logging.getLogger(__name__)

VEHICLE_TOKENS: tuple[str, ...] = ("wagon", "engine", "ortseot")


class SimisConsistReader(ConsistReader):
    def __init__(self, stf: STFReader) -> None:
        self.stf = stf

    def parse(self, train_config: TrainConfig) -> None:
        stf = self.stf
        stf.must_match(OPEN)
        for token in stf.iter_block():
            if token == "traincfg":
                self._parse_train_cfg(train_config)
            else:
                stf.skip_unknown(token)

    def _parse_train_cfg(self, ctx: TrainConfig) -> None:
        stf = self.stf
        stf.must_match(OPEN)
        # Inline name first; a later `Name ( ... )` block overwrites it.
        ctx.name = stf.read_string()
        for token in stf.iter_block():
            if token == "name":
                ctx.name = stf.read_string_block()
            elif token == "serial":
                ctx.serial = stf.read_int_block()
            elif token == "maxvelocity":
                stf.must_match(OPEN)
                limit = stf.read_float(Units.SPEED)
                if stf.at_close():
                    ctx.max_velocity = MaxVelocity(limit)
                else:
                    ctx.max_velocity = MaxVelocity(limit, stf.read_float(Units.SPEED))
                stf.must_match(CLOSE)
            elif token == "durability":
                ctx.durability = stf.read_float_block(Units.NONE)
            elif token in VEHICLE_TOKENS:
                ctx.vehicles.append(Vehicle.from_reader(SimisVehicleReader(stf)))
            elif token == "ortstraincontrolsystemparameters":
                ctx.tcs_parameters_file_name = stf.read_string_block()
            else:
                stf.skip_unknown(token)
        LOGGER.debug("Parsed traincfg %r with %d vehicles", ctx.name, len(ctx.vehicles))


class SimisVehicleReader(VehicleReader):
    def __init__(self, stf: STFReader) -> None:
        self.stf = stf

    def parse(self, vehicle: Vehicle) -> None:
        stf = self.stf
        stf.must_match(OPEN)
        for token in stf.iter_block():
            if token == "uid":
                vehicle.uid = stf.read_int_block()
            elif token == "flip":
                stf.must_match(OPEN)
                stf.must_match(CLOSE)
                vehicle.flip = True
            elif token == "enginedata":
                self._read_asset(vehicle)
                vehicle.is_engine = True
            elif token == "wagondata":
                self._read_asset(vehicle)
            elif token == "eotdata":
                self._read_asset(vehicle)
                vehicle.is_eot = True
            elif token == "loaddata":
                self._read_load(vehicle)
            else:
                stf.skip_unknown(token)

    def _read_asset(self, vehicle: Vehicle) -> None:
        stf = self.stf
        stf.must_match(OPEN)
        vehicle.name = stf.read_string()
        vehicle.folder = stf.read_string()
        stf.must_match(CLOSE)

    def _read_load(self, vehicle: Vehicle) -> None:
        stf = self.stf
        stf.must_match(OPEN)
        if vehicle.loads is None:
            vehicle.loads = []
        name = stf.read_string()
        folder = stf.read_string()
        position = LoadPosition.from_token(stf.read_string())
        state_item = stf.read_item()
        if state_item == CLOSE:
            # state omitted; the `)` just read closes loaddata
            vehicle.loads.append(LoadData(name, folder, position, LoadState.default()))
            return
        vehicle.loads.append(LoadData(name, folder, position, LoadState.from_token(state_item)))
        stf.must_match(CLOSE)
